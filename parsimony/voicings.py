"""Candidate voicings for a target chord.

Given an anchor octave and the target intervals, builds a small pool of
concrete pitches for the greedy and orbifold solvers to choose from. Four
fixed strategies each contribute one full copy of the chord:

1. **Close** - every interval in the anchor octave.
2. **Bass drop** - the first interval an octave lower.
3. **Soprano lift** - the last interval an octave higher.
4. **Spread** - bass drop and soprano lift together.

Strategies 2-4 depend on octave headroom and on the candidate cap, so the
pool never grows past ``cap`` pitches (close position is always emitted).

Example:
	```python
	from parsimony.voicings import generate_voicings

	voicing_set = generate_voicings(3, [0, 4, 7], min_octave=2, max_octave=4)
	voicing_set.candidates
	# [36, 40, 43,  24, 40, 43]   close, then bass drop
	```
"""

import dataclasses
import typing

import parsimony.pitch


DEFAULT_CANDIDATE_CAP: int = 8


@dataclasses.dataclass(frozen=True)
class VoicingSet:

	"""
	Candidate pitches produced for one calculation.

	``strategies`` names the strategy that produced each block of
	``len(intervals)`` candidates, in order. ``missing_pcs`` lists required
	pitch classes that no candidate realises.
	"""

	anchor_octave: int
	candidates: typing.Tuple[int, ...]
	strategies: typing.Tuple[str, ...]
	missing_pcs: typing.Tuple[int, ...]


def close_position (anchor_octave: int, intervals: typing.Sequence[int]) -> typing.List[int]:

	"""Place every interval in the anchor octave."""

	base = anchor_octave * 12

	return [base + interval for interval in intervals]


def generate_voicings (
	anchor_octave: int,
	intervals: typing.Sequence[int],
	min_octave: int = 2,
	max_octave: int = 4,
	cap: int = DEFAULT_CANDIDATE_CAP
) -> VoicingSet:

	"""Build the candidate pool for a target chord.

	Parameters:
		anchor_octave: Octave chosen by :func:`parsimony.anchor.select_anchor`.
		intervals: Target pitch classes, in order.
		min_octave: Floor; the bass is only dropped above it.
		max_octave: Ceiling; the soprano is only lifted below it.
		cap: Maximum number of candidates. A strategy is skipped when its
			pitches would not fit.

	Returns:
		A :class:`VoicingSet`. An empty ``intervals`` gives an empty pool.
	"""

	size = len(intervals)

	if size == 0:
		return VoicingSet(anchor_octave, (), (), ())

	close = close_position(anchor_octave, intervals)

	candidates: typing.List[int] = list(close)
	strategies: typing.List[str] = ["close"]

	can_drop = anchor_octave > min_octave
	can_lift = anchor_octave < max_octave

	def fits () -> bool:
		return len(candidates) + size <= cap

	if can_drop and fits():
		candidates.extend([close[0] - 12] + close[1:])
		strategies.append("bass_drop")

	if can_lift and fits():
		candidates.extend(close[:-1] + [close[-1] + 12])
		strategies.append("soprano_lift")

	# A single note would be dropped and lifted back to where it started.
	if can_drop and can_lift and size >= 2 and fits():
		candidates.extend([close[0] - 12] + close[1:-1] + [close[-1] + 12])
		strategies.append("spread")

	available = {parsimony.pitch.reduce(p) for p in candidates}
	required = parsimony.pitch.canonicalize(intervals)
	missing = tuple(pc for pc in required if pc not in available)

	return VoicingSet(
		anchor_octave = anchor_octave,
		candidates = tuple(candidates),
		strategies = tuple(strategies),
		missing_pcs = missing
	)
