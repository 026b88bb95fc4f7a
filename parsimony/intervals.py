"""Named chord structures.

Intervals are semitones above the chord root. They are combined with a root
pitch class by :func:`parsimony.pitch.resolve_target`, so values of 12 or more
(ninths, elevenths) simply fold back into the octave.
"""

import typing


CHORD_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 4, 7],
	"minor": [0, 3, 7],
	"diminished": [0, 3, 6],
	"augmented": [0, 4, 8],
	"sus2": [0, 2, 7],
	"sus4": [0, 5, 7],
	"power_chord": [0, 7],
	"major_6th": [0, 4, 7, 9],
	"minor_6th": [0, 3, 7, 9],
	"dominant_7th": [0, 4, 7, 10],
	"major_7th": [0, 4, 7, 11],
	"minor_7th": [0, 3, 7, 10],
	"minor_major_7th": [0, 3, 7, 11],
	"half_diminished_7th": [0, 3, 6, 10],
	"diminished_7th": [0, 3, 6, 9],
	"augmented_7th": [0, 4, 8, 10],
	"dominant_9th": [0, 4, 7, 10, 14],
	"major_9th": [0, 4, 7, 11, 14],
	"minor_9th": [0, 3, 7, 10, 14],
	"dominant_11th": [0, 4, 7, 10, 14, 17],
	"dominant_13th": [0, 4, 7, 10, 14, 17, 21],
}


def get_intervals (name: str) -> typing.List[int]:

	"""
	Return a copy of a named chord structure.

	Raises:
		ValueError: If the name is not in ``CHORD_INTERVALS``.
	"""

	if name not in CHORD_INTERVALS:
		raise ValueError(f"Unknown chord structure: {name!r}. Available: {sorted(CHORD_INTERVALS)}")

	return list(CHORD_INTERVALS[name])
