import typing

import pytest

import parsimony.config
import parsimony.session


@pytest.fixture
def session () -> parsimony.session.VoiceLeadingSession:

	"""A session with default settings."""

	return parsimony.session.VoiceLeadingSession()


@pytest.fixture
def make_session () -> typing.Callable[..., parsimony.session.VoiceLeadingSession]:

	"""Build a session from config keyword arguments."""

	def _make (**settings: typing.Any) -> parsimony.session.VoiceLeadingSession:
		return parsimony.session.VoiceLeadingSession(parsimony.config.VoiceLeadingConfig(**settings))

	return _make


@pytest.fixture
def c_major_open () -> typing.List[int]:

	"""C major with a doubled root: C3 E3 G3 C4."""

	return [48, 52, 55, 60]
