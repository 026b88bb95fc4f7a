import pytest

import parsimony.intervals


def test_get_intervals_returns_copy () -> None:

	"""Mutating the returned list leaves the table untouched."""

	intervals = parsimony.intervals.get_intervals("major")
	intervals.append(11)

	assert parsimony.intervals.get_intervals("major") == [0, 4, 7]


def test_every_chord_starts_on_root () -> None:

	"""All structures are intervals above a root, ascending."""

	for name, intervals in parsimony.intervals.CHORD_INTERVALS.items():
		assert intervals[0] == 0, name
		assert intervals == sorted(intervals), name


def test_unknown_chord_name () -> None:

	"""An unknown name raises ValueError listing the choices."""

	with pytest.raises(ValueError, match="Unknown chord structure"):
		parsimony.intervals.get_intervals("mystery")
