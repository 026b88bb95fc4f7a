"""Semitone distance matrices between two chords.

``cost_matrix`` is the rectangular matrix the greedy solver works on.
``padded_distance_matrix`` squares it off for chords of different sizes,
filling the rows or columns that have no partner with a prohibitive
penalty, so that any square assignment method can read it directly.
"""

import logging
import typing


logger = logging.getLogger(__name__)

MISSING_VOICE_PENALTY: float = 1000.0
MIDI_LOW: int = 0
MIDI_HIGH: int = 127


def cost_matrix (current: typing.Sequence[int], targets: typing.Sequence[int]) -> typing.List[typing.List[int]]:

	"""Return ``cost[i][j] = |current[i] - targets[j]|``."""

	return [[abs(c - t) for t in targets] for c in current]


def padded_distance_matrix (
	current: typing.Sequence[int],
	targets: typing.Sequence[int],
	penalty: float = MISSING_VOICE_PENALTY
) -> typing.List[typing.List[float]]:

	"""Return a square ``n x n`` distance matrix, ``n = max(len(current), len(targets))``.

	Cells outside either chord hold ``penalty``. Notes outside the MIDI range
	are accepted but logged.

	Example:
		```python
		padded_distance_matrix([60, 64], [62])
		# [[2.0, 1000.0],
		#  [2.0, 1000.0]]
		```
	"""

	size = max(len(current), len(targets))

	for note in list(current) + list(targets):
		if note < MIDI_LOW or note > MIDI_HIGH:
			logger.warning(f"Note outside MIDI range: {note}")

	matrix: typing.List[typing.List[float]] = []

	for row in range(size):

		cells: typing.List[float] = []

		for col in range(size):

			if row >= len(current) or col >= len(targets):
				cells.append(penalty)

			else:
				cells.append(float(abs(targets[col] - current[row])))

		matrix.append(cells)

	return matrix
