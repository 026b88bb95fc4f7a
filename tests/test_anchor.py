import pytest

import parsimony.anchor
import parsimony.errors


def test_nearest_octave_follows_reference () -> None:

	"""D major from an open C major lands in octave 4."""

	choice = parsimony.anchor.select_anchor([48, 52, 55, 60], [2, 6, 9])

	assert choice.octave == 4
	assert choice.reference_center == pytest.approx(53.75)
	assert choice.target_center == pytest.approx(53.6666, abs=1e-3)


def test_tie_goes_to_lowest_octave () -> None:

	"""Two equally distant octaves resolve to the lower one."""

	# Reference centre 42: octave 3 (36) and octave 4 (48) are both 6 away.
	choice = parsimony.anchor.select_anchor([42], [0], min_octave=3, max_octave=4)

	assert choice.octave == 3
	assert choice.displacement == pytest.approx(6.0)


def test_single_note_target () -> None:

	"""A one-note target anchors like any other."""

	assert parsimony.anchor.select_anchor([60], [7]).octave == 4


def test_result_stays_in_range () -> None:

	"""A reference far above the range clamps to the top octave."""

	assert parsimony.anchor.select_anchor([100, 104], [0, 4]).octave == 4
	assert parsimony.anchor.select_anchor([0, 4], [0, 4]).octave == 2


def test_fixed_policy_ignores_reference () -> None:

	"""The fixed policy anchors around the fixed centre, not the chord."""

	low = parsimony.anchor.select_anchor([24, 28], [0, 4, 7], max_octave=7, policy="fixed")
	high = parsimony.anchor.select_anchor([96, 100], [0, 4, 7], max_octave=7, policy="fixed")

	assert low.octave == high.octave == 5
	assert low.reference_center == 60.0


def test_fixed_policy_accepts_empty_reference () -> None:

	"""No reference chord is needed when anchoring to a fixed centre."""

	assert parsimony.anchor.select_anchor([], [0, 4, 7], policy="fixed").octave == 4


def test_empty_inputs_raise_missing_data () -> None:

	"""An empty target, or an empty reference with the nearest policy, is missing data."""

	with pytest.raises(parsimony.errors.MissingData):
		parsimony.anchor.select_anchor([60], [])

	with pytest.raises(parsimony.errors.MissingData):
		parsimony.anchor.select_anchor([], [0, 4, 7])


def test_invalid_arguments () -> None:

	"""Unknown policies and inverted ranges are rejected."""

	with pytest.raises(ValueError):
		parsimony.anchor.select_anchor([60], [0], policy="lowest")

	with pytest.raises(ValueError):
		parsimony.anchor.select_anchor([60], [0], min_octave=5, max_octave=4)
