"""Pitch class utilities and note names.

All voice-leading arithmetic happens either on concrete pitches (signed MIDI
note numbers, C4 = 60) or on pitch classes (0-11). This module converts
between the two and provides the small modular helpers every solver shares.

Module-level constants:
- `NOTE_NAME_TO_PC`: Maps note names (e.g., `"C"`, `"F#"`, `"Bb"`) to pitch classes (0-11)
- `PC_TO_NOTE_NAME`: Maps pitch classes to note names
- `MODULUS` / `HALF_MODULUS`: Size of the octave and the largest signed step
"""

import typing


MODULUS: int = 12
HALF_MODULUS: int = 6


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]


def key_name_to_pc (key_name: str) -> int:

	"""Validate a note name and return its pitch class (0–11).

	Raises:
		ValueError: If the note name is not recognised.

	Example:
		```python
		key_name_to_pc("D")   # → 2
		key_name_to_pc("Bb")  # → 10
		```
	"""

	if key_name not in NOTE_NAME_TO_PC:
		raise ValueError(
			f"Unknown note name: {key_name!r}. Expected e.g. 'C', 'F#', 'Bb'."
		)

	return NOTE_NAME_TO_PC[key_name]


def reduce (pitch: int) -> int:

	"""Return the pitch class (0-11) of a pitch.

	Python's ``%`` already returns a non-negative result for a positive
	modulus, so negative pitches reduce correctly (``reduce(-1) == 11``).
	"""

	return pitch % MODULUS


def octave (pitch: int) -> int:

	"""Return the octave number of a pitch (``floor(pitch / 12)``)."""

	return pitch // MODULUS


def note_name (pitch: int) -> str:

	"""Return a readable name such as ``"C4"`` for MIDI 60."""

	return f"{PC_TO_NOTE_NAME[reduce(pitch)]}{octave(pitch) - 1}"


def canonicalize (pitches: typing.Iterable[int]) -> typing.List[int]:

	"""Reduce pitches to pitch classes, sort ascending and remove duplicates.

	Example:
		```python
		canonicalize([60, 48, 55, 52, 67])  # → [0, 4, 7]
		```
	"""

	return sorted({reduce(p) for p in pitches})


def prime_form (pitches: typing.Iterable[int]) -> typing.List[int]:

	"""Canonicalize and transpose so the set starts at 0.

	A transposition-invariant fingerprint used for diagnostics only. This is
	the simple "normalise to the lowest pitch class" form, not Forte's
	rotation-minimising prime form.

	Example:
		```python
		prime_form([62, 66, 69])  # D major → [0, 4, 7]
		```
	"""

	pcs = canonicalize(pitches)

	if not pcs:
		return []

	base = pcs[0]

	return [(pc - base) % MODULUS for pc in pcs]


def signed_interval_class (source_pc: int, target_pc: int) -> int:

	"""Return the shortest signed step from one pitch class to another.

	The result lies in ``[-5, 6]``; the tritone is always reported as +6.

	Example:
		```python
		signed_interval_class(0, 2)   # → 2
		signed_interval_class(0, 11)  # → -1
		signed_interval_class(0, 6)   # → 6
		```
	"""

	path = (target_pc - source_pc) % MODULUS

	if path > HALF_MODULUS:
		path -= MODULUS

	return path


def pc_distance (a: int, b: int) -> int:

	"""Return the unsigned modular distance between two pitch classes (0-6)."""

	forward = (b - a) % MODULUS
	backward = (a - b) % MODULUS

	return min(forward, backward)


def resolve_target (root: int, intervals: typing.Sequence[int]) -> typing.List[int]:

	"""Combine a root and chord intervals into pitch classes, preserving order.

	Example:
		```python
		resolve_target(2, [0, 4, 7])  # D major → [2, 6, 9]
		resolve_target(7, [0, 4, 7, 10])  # G7 → [7, 11, 2, 5]
		```
	"""

	return [reduce(root + interval) for interval in intervals]
