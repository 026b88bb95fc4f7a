"""Configuration for a voice-leading session.

Every limit the engine uses lives in :class:`VoiceLeadingConfig`: voice
count, octave range, candidate pool size, greedy bonus and the permutation
ceiling.

Configs can be read from YAML::

	voice_leading:
	  max_voices: 4
	  max_octave: 7
	  strategy: greedy
	osc:
	  receive_port: 9000
	  send_port: 9001
"""

import dataclasses
import logging
import os
import typing

import yaml

import parsimony.anchor
import parsimony.solvers
import parsimony.solvers.bijective
import parsimony.solvers.greedy
import parsimony.voicings


logger = logging.getLogger(__name__)

STRATEGIES: typing.Tuple[str, ...] = ("auto", "greedy", "bijective", "nonbijective", "orbifold")


@dataclasses.dataclass
class VoiceLeadingConfig:

	"""Tunable limits and strategy choice for a :class:`~parsimony.session.VoiceLeadingSession`."""

	max_voices: int = 8
	min_octave: int = 2
	max_octave: int = 4
	anchor_policy: str = "nearest"
	fixed_center: int = parsimony.anchor.DEFAULT_FIXED_CENTER
	candidate_cap: int = parsimony.voicings.DEFAULT_CANDIDATE_CAP
	completeness_bonus: int = parsimony.solvers.greedy.DEFAULT_COMPLETENESS_BONUS
	strategy: str = "auto"
	bijective_search: str = "rotations"
	max_permutation_voices: int = parsimony.solvers.bijective.DEFAULT_MAX_PERMUTATION_VOICES
	feedback: bool = True
	debug: bool = False

	def __post_init__ (self) -> None:

		"""Reject inconsistent settings."""

		if self.max_voices < 1:
			raise ValueError("max_voices must be at least 1")

		if self.min_octave > self.max_octave:
			raise ValueError("min_octave must not exceed max_octave")

		if self.anchor_policy not in parsimony.anchor.ANCHOR_POLICIES:
			raise ValueError(f"Unknown anchor policy: {self.anchor_policy!r}")

		if self.candidate_cap < 1:
			raise ValueError("candidate_cap must be at least 1")

		if self.strategy not in STRATEGIES:
			raise ValueError(f"Unknown strategy: {self.strategy!r}. Expected one of {STRATEGIES}")

		if self.bijective_search not in parsimony.solvers.SEARCH_MODES:
			raise ValueError(f"Unknown bijective search: {self.bijective_search!r}")

		if self.max_permutation_voices < 1:
			raise ValueError("max_permutation_voices must be at least 1")


	@classmethod
	def from_dict (cls, data: typing.Optional[typing.Dict[str, typing.Any]]) -> "VoiceLeadingConfig":

		"""Build a config from a mapping, rejecting unknown keys."""

		data = data or {}
		known = {field.name for field in dataclasses.fields(cls)}
		unknown = sorted(set(data) - known)

		if unknown:
			raise ValueError(f"Unknown voice_leading settings: {unknown}")

		return cls(**data)


@dataclasses.dataclass
class OscConfig:

	"""Network settings for :class:`~parsimony.osc.OscBridge`."""

	receive_port: int = 9000
	send_port: int = 9001
	send_host: str = "127.0.0.1"


def load_config (config_path: str = "config.yaml") -> typing.Tuple[VoiceLeadingConfig, OscConfig]:

	"""
	Load voice-leading and OSC settings from a YAML file.

	A missing file is not an error: defaults are returned and a warning logged.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return VoiceLeadingConfig(), OscConfig()

	with open(config_path, "r") as f:
		data = yaml.safe_load(f) or {}

	osc_data = data.get("osc") or {}

	return VoiceLeadingConfig.from_dict(data.get("voice_leading")), OscConfig(**osc_data)
