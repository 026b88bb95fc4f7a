"""Orbifold distance between equal-size chords of concrete pitches.

Compares pitches directly rather than pitch classes. Every permutation of
the target is tried; each voice contributes ``min(d, |d - 12|)`` for a
semitone distance ``d``, so a move of an octave-and-a-bit counts as the bit.
For four voices this is the 24-permutation search over chord space.

:func:`coordinates` gives the position of a chord as the spacing between
its adjacent voices (sorted pitch classes, doublings kept) in octaves,
which for four voices are the three axes of the tetrahedral chord space.
"""

import logging
import typing

import parsimony.errors
import parsimony.pitch
import parsimony.solvers


logger = logging.getLogger(__name__)

DEFAULT_MAX_VOICES: int = 8


def folded_distance (source: int, target: int) -> int:

	"""Semitone distance with a single octave fold: ``min(d, |d - 12|)``."""

	distance = abs(target - source)

	return min(distance, abs(distance - 12))


def orbifold_distance (
	source: typing.Sequence[int],
	target: typing.Sequence[int],
	max_voices: int = DEFAULT_MAX_VOICES
) -> typing.Tuple[int, typing.Tuple[int, ...]]:

	"""Find the permutation of ``target`` closest to ``source``.

	Returns:
		``(distance, mapping)`` where voice ``i`` of ``source`` moves to
		``target[mapping[i]]``. The first permutation (lexicographic order)
		reaching the minimum wins.

	Raises:
		SizeMismatch: If the chords differ in size.
		InputTooLarge: If the chords have more than ``max_voices`` voices.

	Example:
		```python
		orbifold_distance([60, 64, 67], [67, 64, 60])
		# → (0, (2, 1, 0))
		```
	"""

	size = len(source)

	if size != len(target):
		raise parsimony.errors.SizeMismatch(
			f"Orbifold distance needs equal sizes (source: {size}, target: {len(target)})"
		)

	if size > max_voices:
		raise parsimony.errors.InputTooLarge(
			f"Orbifold distance over {size} voices exceeds the permutation ceiling of {max_voices}"
		)

	best_distance: typing.Optional[int] = None
	best_mapping: typing.Tuple[int, ...] = tuple(range(size))

	for mapping in parsimony.solvers.permutation_orders(size):

		total = sum(folded_distance(source[i], target[mapping[i]]) for i in range(size))

		if best_distance is None or total < best_distance:
			best_distance = total
			best_mapping = mapping

	return (best_distance if best_distance is not None else 0), best_mapping


def coordinates (chord: typing.Sequence[int]) -> typing.List[float]:

	"""Spacing between adjacent voices, as sorted pitch classes, in octaves.

	Doubled pitch classes are kept, so an n-voice chord always has n - 1
	coordinates.

	Example:
		```python
		coordinates([60, 64, 67, 70])  # C7 → [0.333.., 0.25, 0.25]
		coordinates([48, 52, 55, 60])  # doubled root → [0.0, 0.333.., 0.25]
		```
	"""

	normalized = sorted(parsimony.pitch.reduce(p) for p in chord)

	return [(b - a) / 12.0 for a, b in zip(normalized, normalized[1:])]


class OrbifoldSolver (parsimony.solvers.Solver):

	"""One-to-one voice leading over concrete pitches with octave folding."""

	name = "orbifold"

	def __init__ (self, max_voices: int = DEFAULT_MAX_VOICES) -> None:

		self.max_voices = max_voices


	def solve (
		self,
		current: typing.Sequence[int],
		targets: typing.Sequence[int],
		required_pcs: typing.AbstractSet[int]
	) -> parsimony.solvers.Solution:

		"""Move voice ``i`` to ``targets[mapping[i]]`` for the closest permutation."""

		distance, mapping = orbifold_distance(current, targets, self.max_voices)

		logger.debug(f"Orbifold distance {distance}, mapping {mapping}")

		return parsimony.solvers.Solution(
			output = [targets[m] for m in mapping],
			cost = distance,
			assignment = list(mapping),
			diagnostics = {
				"mapping": list(mapping),
				"source_coordinates": coordinates(current),
				"target_coordinates": coordinates(targets),
			}
		)
