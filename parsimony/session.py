"""The voice-leading session: state, pipeline, and results.

A :class:`VoiceLeadingSession` holds the chord being led from and the target
harmony, and recomputes the voice leading whenever the target changes or
:meth:`~VoiceLeadingSession.recalculate` is called. It is the Python side of
a host object that receives "current", "root", "chord", "target",
"feedback" and "debug" messages - one method per message.

Each calculation runs the same pipeline:

1. Check there is both a current chord and a target.
2. Resolve the target to pitch classes (applying the root if relative).
3. Choose a strategy. ``"auto"`` uses the bijective solver when the sizes
   match and the non-bijective aligner otherwise.
4. For the greedy and orbifold solvers, pick an anchor octave and build
   concrete candidate pitches.
5. Solve, package a :class:`Result`, and emit it as a ``"result"`` event.
6. With feedback on, the output becomes the next current chord.

Bad input never raises out of the session. It is logged, appended to
:attr:`VoiceLeadingSession.warnings`, and emitted as a ``"warning"`` event,
and the previous state is kept.

Example:
	```python
	session = VoiceLeadingSession()
	session.set_current_chord([48, 52, 55, 60])
	result = session.set_target_relative(2, [0, 4, 7])   # D major
	result.output_chord   # (50, 54, 57, 62)
	result.cost           # 6
	```
"""

import dataclasses
import logging
import typing

import parsimony.anchor
import parsimony.config
import parsimony.distance
import parsimony.errors
import parsimony.event_emitter
import parsimony.pitch
import parsimony.solvers
import parsimony.solvers.bijective
import parsimony.solvers.greedy
import parsimony.solvers.nonbijective
import parsimony.solvers.orbifold
import parsimony.voicings


logger = logging.getLogger(__name__)

ROOT_NOTE_BASE: int = 48


@dataclasses.dataclass(frozen=True)
class TargetSpec:

	"""
	A target harmony: absolute pitch classes, or a root plus intervals.

	``root is None`` means ``intervals`` already are pitch classes.
	"""

	root: typing.Optional[int]
	intervals: typing.Tuple[int, ...]


	def pitch_classes (self) -> typing.List[int]:

		"""Resolve to pitch classes in the original order."""

		return parsimony.pitch.resolve_target(self.root or 0, self.intervals)


	def __len__ (self) -> int:

		return len(self.intervals)


@dataclasses.dataclass(frozen=True)
class Result:

	"""
	Everything one calculation produced.

	``anchor_octave`` is ``None`` for the pitch-class solvers, which never
	place the target in a register.
	"""

	output_chord: typing.Tuple[int, ...]
	cost: float
	anchor_octave: typing.Optional[int]
	candidate_count: int
	voice_count: int
	warnings: typing.Tuple[str, ...]
	strategy: str
	target_pcs: typing.Tuple[int, ...]
	root_note: int
	diagnostics: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)


def make_solver (name: str, config: parsimony.config.VoiceLeadingConfig) -> parsimony.solvers.Solver:

	"""Create a solver instance from a strategy name and config."""

	if name == "greedy":
		return parsimony.solvers.greedy.GreedySolver(bonus = config.completeness_bonus)

	if name == "bijective":
		return parsimony.solvers.bijective.BijectiveSolver(
			search = config.bijective_search,
			max_permutation_voices = config.max_permutation_voices
		)

	if name == "nonbijective":
		return parsimony.solvers.nonbijective.NonBijectiveSolver(max_voices = config.max_voices)

	if name == "orbifold":
		return parsimony.solvers.orbifold.OrbifoldSolver(max_voices = config.max_permutation_voices)

	raise ValueError(f"Unknown solver: {name}")


class VoiceLeadingSession:

	"""Owns the current chord and target and runs the voice-leading pipeline."""

	def __init__ (
		self,
		config: typing.Optional[parsimony.config.VoiceLeadingConfig] = None,
		emitter: typing.Optional[parsimony.event_emitter.EventEmitter] = None
	) -> None:

		"""
		Parameters:
			config: Limits and strategy; defaults to :class:`~parsimony.config.VoiceLeadingConfig()`.
			emitter: Event channel for ``"result"``, ``"warning"`` and
				``"debug"`` events. A private one is created if omitted.
		"""

		self.config = config or parsimony.config.VoiceLeadingConfig()
		self.events = emitter or parsimony.event_emitter.EventEmitter()

		self.current_chord: typing.List[int] = []
		self.target: typing.Optional[TargetSpec] = None
		self.root: int = 0
		self.feedback: bool = self.config.feedback
		self.debug: bool = self.config.debug

		self.warnings: typing.List[str] = []
		self.last_result: typing.Optional[Result] = None


	# Messages

	def set_current_chord (self, pitches: typing.Sequence[int]) -> bool:

		"""Replace the current chord. Returns False (state unchanged) if rejected."""

		chord = [int(p) for p in pitches]

		if not chord:
			self.reject(parsimony.errors.MissingData("Current chord is empty"))
			return False

		if len(chord) > self.config.max_voices:
			self.reject(parsimony.errors.InputTooLarge(
				f"Current chord has {len(chord)} voices (max {self.config.max_voices})"
			))
			return False

		self.current_chord = chord
		self._trace("current", chord=list(chord))

		return True


	def set_target_absolute (self, pitch_classes: typing.Sequence[int]) -> typing.Optional[Result]:

		"""Set the target as explicit pitch classes and recalculate if possible."""

		if not self._accept_target(pitch_classes, "Target"):
			return None

		self.target = TargetSpec(root=None, intervals=tuple(int(pc) for pc in pitch_classes))

		return self._recalculate_if_ready()


	def set_target_relative (self, root: int, intervals: typing.Sequence[int]) -> typing.Optional[Result]:

		"""Set the target as a root plus chord intervals and recalculate if possible."""

		if not self._accept_target(intervals, "Chord structure"):
			return None

		self.root = parsimony.pitch.reduce(int(root))
		self.target = TargetSpec(root=self.root, intervals=tuple(int(i) for i in intervals))

		return self._recalculate_if_ready()


	def set_root (self, root: int) -> None:

		"""Store a root. A relative target is re-rooted but not recalculated."""

		self.root = parsimony.pitch.reduce(int(root))

		if self.target is not None and self.target.root is not None:
			self.target = TargetSpec(root=self.root, intervals=self.target.intervals)

		self._trace("root", root=self.root)


	def set_chord (self, intervals: typing.Sequence[int]) -> typing.Optional[Result]:

		"""Set chord intervals relative to the stored root and recalculate if possible."""

		return self.set_target_relative(self.root, intervals)


	def set_feedback (self, enabled: bool) -> None:

		"""Turn feedback on or off. With feedback, each output becomes the next current chord."""

		self.feedback = bool(enabled)
		logger.info(f"Feedback {'enabled' if self.feedback else 'disabled'}")


	def set_debug (self, enabled: bool) -> None:

		"""Turn per-stage ``"debug"`` events on or off."""

		self.debug = bool(enabled)
		logger.info(f"Debug {'enabled' if self.debug else 'disabled'}")


	def clear (self) -> None:

		"""Forget the current chord, target and last result."""

		self.current_chord = []
		self.target = None
		self.last_result = None
		logger.info("Cleared chord data")


	def distance_matrix (self, target_pitches: typing.Sequence[int]) -> typing.Optional[typing.List[typing.List[float]]]:

		"""Square semitone distance matrix from the current chord to ``target_pitches``."""

		if not self.current_chord or not target_pitches:
			self.reject(parsimony.errors.MissingData("Distance matrix needs a current chord and a target chord"))
			return None

		if len(target_pitches) > self.config.max_voices:
			self.reject(parsimony.errors.InputTooLarge(
				f"Target chord has {len(target_pitches)} voices (max {self.config.max_voices})"
			))
			return None

		return parsimony.distance.padded_distance_matrix(self.current_chord, [int(p) for p in target_pitches])


	# Calculation

	def recalculate (self) -> typing.Optional[Result]:

		"""Run the pipeline against the current state.

		Returns:
			The new :class:`Result`, or ``None`` if the calculation was
			rejected (the reason is in :attr:`warnings`).
		"""

		if not self.current_chord or self.target is None or len(self.target) == 0:
			self.reject(parsimony.errors.MissingData(
				f"Missing chord data (current: {len(self.current_chord)}, target: {len(self.target or ())})"
			))
			return None

		current = list(self.current_chord)
		target_pcs = self.target.pitch_classes()
		required = frozenset(target_pcs)
		strategy = self._choose_strategy(len(current), len(target_pcs))

		self._trace(
			"target",
			strategy = strategy,
			target_pcs = list(target_pcs),
			prime_form = parsimony.pitch.prime_form(target_pcs)
		)

		warnings: typing.List[str] = []
		anchor_octave: typing.Optional[int] = None
		targets: typing.Sequence[int] = target_pcs

		if strategy in ("greedy", "orbifold"):

			choice = parsimony.anchor.select_anchor(
				current,
				target_pcs,
				min_octave = self.config.min_octave,
				max_octave = self.config.max_octave,
				policy = self.config.anchor_policy,
				fixed_center = self.config.fixed_center
			)
			anchor_octave = choice.octave

			self._trace("anchor", **dataclasses.asdict(choice))

			if strategy == "greedy":

				voicing_set = parsimony.voicings.generate_voicings(
					anchor_octave,
					target_pcs,
					min_octave = self.config.min_octave,
					max_octave = self.config.max_octave,
					cap = self.config.candidate_cap
				)
				targets = voicing_set.candidates

				for pc in voicing_set.missing_pcs:
					warnings.append(parsimony.errors.warning_message(
						parsimony.errors.INCOMPLETE_COVERAGE,
						f"no candidate realises pitch class {pc}"
					))

				self._trace("voicings", candidates=list(targets), strategies=list(voicing_set.strategies))

			else:
				targets = parsimony.voicings.close_position(anchor_octave, target_pcs)

		solver = make_solver(strategy, self.config)

		try:
			solution = solver.solve(current, targets, required)

		except parsimony.errors.VoiceLeadingError as e:
			self.reject(e)
			return None

		warnings.extend(solution.warnings)

		self._trace("solution", output=list(solution.output), cost=solution.cost, assignment=list(solution.assignment))

		result = Result(
			output_chord = tuple(solution.output),
			cost = solution.cost,
			anchor_octave = anchor_octave,
			candidate_count = len(targets),
			voice_count = len(current),
			warnings = tuple(warnings),
			strategy = strategy,
			target_pcs = tuple(target_pcs),
			root_note = ROOT_NOTE_BASE + self.root,
			diagnostics = solution.diagnostics
		)

		for message in result.warnings:
			logger.warning(message)

		logger.debug(f"{strategy}: {current} -> {list(result.output_chord)} (cost {result.cost})")

		self.last_result = result
		self.events.emit("result", result)

		if self.feedback:
			self.current_chord = list(result.output_chord)

		return result


	def _choose_strategy (self, current_size: int, target_size: int) -> str:

		"""Resolve ``"auto"`` to a concrete solver name."""

		if self.config.strategy != "auto":
			return self.config.strategy

		if current_size == target_size:
			return "bijective"

		return "nonbijective"


	def _accept_target (self, values: typing.Sequence[int], label: str) -> bool:

		"""Validate a target update, reporting a rejection if needed."""

		if not values:
			self.reject(parsimony.errors.MissingData(f"{label} is empty"))
			return False

		if len(values) > self.config.max_voices:
			self.reject(parsimony.errors.InputTooLarge(
				f"{label} has {len(values)} notes (max {self.config.max_voices})"
			))
			return False

		return True


	def _recalculate_if_ready (self) -> typing.Optional[Result]:

		"""Recalculate after a target change, or wait for a current chord."""

		if not self.current_chord:
			logger.info("Target stored; waiting for a current chord")
			return None

		return self.recalculate()


	def reject (self, error: parsimony.errors.VoiceLeadingError) -> None:

		"""Report a rejected message or calculation.

		The warning is logged, kept in :attr:`warnings` and emitted as a
		``"warning"`` event. Host adapters use this for messages they cannot parse.
		"""

		message = parsimony.errors.warning_message(error.kind, str(error))

		logger.warning(message)
		self.warnings.append(message)
		self.events.emit("warning", message)


	def _trace (self, stage: str, **data: typing.Any) -> None:

		"""Publish a pipeline stage as a ``"debug"`` event when debugging."""

		if not self.debug:
			return

		logger.debug(f"{stage}: {data}")
		self.events.emit("debug", stage, data)
