"""Solver timing benchmark.

Leads a random walk of chords through each solver and reports the time per
calculation.

Usage:
    python benchmarks/solver_timing.py [--voices N] [--steps N] [--seed N]

Options:
    --voices N          Voices per chord (default: 4)
    --steps N           Chords per solver (default: 2000)
    --seed N            Random seed (default: 1)
"""

import argparse
import logging
import random
import statistics
import time

# Suppress per-calculation warnings during the benchmark.
logging.basicConfig(level=logging.ERROR)

import parsimony.config
import parsimony.session

# ---------------------------------------------------------------------------

STRATEGIES = ["greedy", "bijective", "nonbijective", "orbifold"]


def _run_benchmark (strategy: str, voices: int, steps: int, seed: int) -> list[float]:

	"""Return per-calculation wall times (seconds) for one strategy."""

	rng = random.Random(seed)
	config = parsimony.config.VoiceLeadingConfig(strategy=strategy, max_voices=max(voices, 8))
	session = parsimony.session.VoiceLeadingSession(config)
	session.set_current_chord([48 + 3 * i for i in range(voices)])

	timings: list[float] = []

	for _ in range(steps):

		target = rng.sample(range(12), voices)

		start = time.perf_counter()
		session.set_target_absolute(target)
		timings.append(time.perf_counter() - start)

	return timings


def main () -> None:

	parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("--voices", type=int, default=4)
	parser.add_argument("--steps", type=int, default=2000)
	parser.add_argument("--seed", type=int, default=1)
	args = parser.parse_args()

	print(f"{'strategy':<14}{'mean (us)':>12}{'p99 (us)':>12}{'max (us)':>12}")

	for strategy in STRATEGIES:

		timings = sorted(_run_benchmark(strategy, args.voices, args.steps, args.seed))
		p99 = timings[int(len(timings) * 0.99) - 1]

		print(
			f"{strategy:<14}"
			f"{statistics.mean(timings) * 1e6:>12.1f}"
			f"{p99 * 1e6:>12.1f}"
			f"{timings[-1] * 1e6:>12.1f}"
		)


if __name__ == "__main__":
	main()
