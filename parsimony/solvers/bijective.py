"""Bijective voice leading between equal-size pitch-class sets.

Both chords are reduced to sorted pitch classes. Each alignment of the
target against the source gives every voice a path - the shortest signed
step to its partner - and the alignment with the smallest total ``|path|``
wins (first found on a tie). By default only the rotations of the sorted
target are tried, which is enough for sets in normal order; ``search =
"permutations"`` tries every ordering instead, up to a voice-count ceiling.

The paths are then applied to the original pitches, matching each pitch to
the first unused path that starts on its pitch class, so register is kept
and doubled pitch classes are resolved in voice order.

Example:
	```python
	solver = BijectiveSolver()
	solution = solver.solve([48, 52, 55], [2, 6, 9], frozenset({2, 6, 9}))
	solution.output  # [45, 50, 54]  (ties with [50, 54, 57]; the shifted rotation is tried first)
	solution.cost    # 6
	```
"""

import logging
import typing

import parsimony.errors
import parsimony.pitch
import parsimony.solvers


logger = logging.getLogger(__name__)

DEFAULT_MAX_PERMUTATION_VOICES: int = 8


def alignment_cost (source_pcs: typing.Sequence[int], target_pcs: typing.Sequence[int]) -> typing.Tuple[int, typing.List[int]]:

	"""Return ``(total, paths)`` for pairing ``source_pcs[i]`` with ``target_pcs[i]``."""

	paths = [parsimony.pitch.signed_interval_class(s, t) for s, t in zip(source_pcs, target_pcs)]

	return sum(abs(p) for p in paths), paths


class BijectiveSolver (parsimony.solvers.Solver):

	"""One-to-one voice leading that minimises total interval-class movement."""

	name = "bijective"

	def __init__ (self, search: str = "rotations", max_permutation_voices: int = DEFAULT_MAX_PERMUTATION_VOICES) -> None:

		"""
		Parameters:
			search: ``"rotations"`` or ``"permutations"``.
			max_permutation_voices: Largest chord for which a permutation
				search is attempted; larger chords fall back to rotations.
		"""

		if search not in parsimony.solvers.SEARCH_MODES:
			raise ValueError(f"Unknown search mode: {search!r}. Expected one of {parsimony.solvers.SEARCH_MODES}")

		self.search = search
		self.max_permutation_voices = max_permutation_voices


	def solve (
		self,
		current: typing.Sequence[int],
		targets: typing.Sequence[int],
		required_pcs: typing.AbstractSet[int]
	) -> parsimony.solvers.Solution:

		"""Lead ``current`` pitches onto the target pitch classes in ``targets``.

		Raises:
			SizeMismatch: If the two chords differ in size.
		"""

		size = len(current)

		if size != len(targets):
			raise parsimony.errors.SizeMismatch(
				f"Bijective voice leading needs equal sizes (current: {size}, target: {len(targets)})"
			)

		warnings: typing.List[str] = []

		source = sorted(parsimony.pitch.reduce(p) for p in current)

		# Sort the targets but remember where each came from.
		sorted_index = sorted(range(size), key=lambda j: (parsimony.pitch.reduce(targets[j]), j))
		target = [parsimony.pitch.reduce(targets[j]) for j in sorted_index]

		search = self.search

		if search == "permutations" and size > self.max_permutation_voices:
			search = "rotations"
			warnings.append(parsimony.errors.warning_message(
				parsimony.errors.INPUT_TOO_LARGE,
				f"{size} voices exceeds the permutation ceiling of {self.max_permutation_voices}; searching rotations only"
			))

		if search == "permutations":
			orders: typing.Iterable[typing.Tuple[int, ...]] = parsimony.solvers.permutation_orders(size)

		else:
			orders = parsimony.solvers.rotation_orders(size)

		best_cost: typing.Optional[int] = None
		best_paths: typing.List[int] = []
		best_order: typing.Tuple[int, ...] = ()
		tried = 0

		for order in orders:

			tried += 1
			cost, paths = alignment_cost(source, [target[k] for k in order])

			if best_cost is None or cost < best_cost:
				best_cost = cost
				best_paths = paths
				best_order = order

		logger.debug(f"Best of {tried} {search}: cost {best_cost}, paths {best_paths}")

		output: typing.List[int] = []
		assignment: typing.List[typing.Optional[int]] = []
		path_used = [False] * size

		for voice, pitch in enumerate(current):

			pc = parsimony.pitch.reduce(pitch)

			for k in range(size):

				if not path_used[k] and source[k] == pc:
					path_used[k] = True
					output.append(pitch + best_paths[k])
					assignment.append(sorted_index[best_order[k]])
					break

		return parsimony.solvers.Solution(
			output = output,
			cost = best_cost if best_cost is not None else 0,
			assignment = assignment,
			warnings = warnings,
			diagnostics = {
				"search": search,
				"alignments_tried": tried,
				"paths": list(zip(source, best_paths)),
			}
		)
