"""Error kinds raised and reported by the voice-leading engine.

Library functions raise the exception classes below. They all derive from
``ValueError`` so callers that only care about bad input can catch that.
The session never lets them escape: it turns each one into a warning.

Two further kinds are never raised. ``UNASSIGNABLE_VOICE`` and
``INCOMPLETE_COVERAGE`` describe soft failures that still produce a result,
so they only ever appear as warning strings built by :func:`warning_message`.
"""


INPUT_TOO_LARGE = "InputTooLarge"
MISSING_DATA = "MissingData"
SIZE_MISMATCH = "SizeMismatch"
UNASSIGNABLE_VOICE = "UnassignableVoice"
INCOMPLETE_COVERAGE = "IncompleteCoverage"
INVALID_MESSAGE = "InvalidMessage"


class VoiceLeadingError (ValueError):

	"""Base class for rejected voice-leading input."""

	kind = "VoiceLeadingError"


class InputTooLarge (VoiceLeadingError):

	"""A chord or target has more voices than the configured maximum."""

	kind = INPUT_TOO_LARGE


class MissingData (VoiceLeadingError):

	"""A calculation was requested without both a current chord and a target."""

	kind = MISSING_DATA


class SizeMismatch (VoiceLeadingError):

	"""A bijective solver was given chords of different sizes."""

	kind = SIZE_MISMATCH


class InvalidMessage (VoiceLeadingError):

	"""A host message whose arguments could not be understood."""

	kind = INVALID_MESSAGE


def warning_message (kind: str, text: str) -> str:

	"""Format a warning string as ``"<Kind>: <text>"``.

	Example:
		```python
		warning_message(UNASSIGNABLE_VOICE, "voice 3 kept 60")
		# → "UnassignableVoice: voice 3 kept 60"
		```
	"""

	return f"{kind}: {text}"
