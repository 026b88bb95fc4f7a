"""Octave anchor selection.

Before a set of pitch classes can be voiced as concrete pitches it needs a
register. The anchor selector tries each octave in a bounded range, places
the target intervals in that octave, and keeps the octave whose centre of
mass lies closest to the reference chord's centre. Ties go to the lowest
octave tried, which keeps results deterministic.

With the ``"fixed"`` policy the reference chord is ignored and the target is
anchored around a constant centre instead (MIDI 60 by default), so a
progression never drifts in register.
"""

import dataclasses
import logging
import typing

import parsimony.errors


logger = logging.getLogger(__name__)

ANCHOR_POLICIES: typing.Tuple[str, ...] = ("nearest", "fixed")
DEFAULT_FIXED_CENTER: int = 60


@dataclasses.dataclass(frozen=True)
class AnchorChoice:

	"""
	The chosen octave and the centres that decided it.
	"""

	octave: int
	reference_center: float
	target_center: float
	displacement: float


def center_of_mass (pitches: typing.Sequence[int]) -> float:

	"""Return the mean pitch. Raises ``MissingData`` for an empty sequence."""

	if not pitches:
		raise parsimony.errors.MissingData("Cannot take the centre of an empty chord")

	return sum(pitches) / len(pitches)


def select_anchor (
	reference: typing.Sequence[int],
	intervals: typing.Sequence[int],
	min_octave: int = 2,
	max_octave: int = 4,
	policy: str = "nearest",
	fixed_center: float = DEFAULT_FIXED_CENTER
) -> AnchorChoice:

	"""Choose the octave that keeps a target closest to a reference register.

	Parameters:
		reference: Pitches of the chord being led from.
		intervals: Target pitch classes (or intervals) to place; each octave
			candidate places them at ``octave * 12 + interval``.
		min_octave: Lowest octave to try (inclusive).
		max_octave: Highest octave to try (inclusive).
		policy: ``"nearest"`` to follow the reference chord, ``"fixed"`` to
			anchor to ``fixed_center``.
		fixed_center: Centre used by the ``"fixed"`` policy.

	Returns:
		An :class:`AnchorChoice`.

	Raises:
		MissingData: If the target is empty, or the reference is empty under
			the ``"nearest"`` policy.
		ValueError: For an unknown policy or an empty octave range.

	Example:
		```python
		# C major in the middle register, target D major
		select_anchor([48, 52, 55, 60], [2, 6, 9]).octave  # → 4
		```
	"""

	if policy not in ANCHOR_POLICIES:
		raise ValueError(f"Unknown anchor policy: {policy!r}. Expected one of {ANCHOR_POLICIES}")

	if min_octave > max_octave:
		raise ValueError(f"Empty octave range: {min_octave}..{max_octave}")

	if not intervals:
		raise parsimony.errors.MissingData("Cannot anchor an empty target")

	if policy == "fixed":
		reference_center = float(fixed_center)

	else:
		reference_center = center_of_mass(reference)

	interval_center = sum(intervals) / len(intervals)

	best: typing.Optional[AnchorChoice] = None

	for test_octave in range(min_octave, max_octave + 1):

		target_center = test_octave * 12 + interval_center
		displacement = abs(target_center - reference_center)

		logger.debug(f"Octave {test_octave}: target centre {target_center:.2f}, displacement {displacement:.2f}")

		# Strict comparison: the first (lowest) octave wins a tie.
		if best is None or displacement < best.displacement:
			best = AnchorChoice(
				octave = test_octave,
				reference_center = reference_center,
				target_center = target_center,
				displacement = displacement
			)

	assert best is not None
	return best
