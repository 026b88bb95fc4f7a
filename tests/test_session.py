import typing

import pytest

import parsimony.config
import parsimony.session


def test_relative_target_leads_smoothly (session: parsimony.session.VoiceLeadingSession, c_major_open: typing.List[int]) -> None:

	"""Open C major to D major moves every voice up a tone."""

	session.set_current_chord(c_major_open)
	result = session.set_target_relative(2, [0, 4, 7])

	assert result is not None
	assert result.output_chord == (50, 54, 57, 62)
	assert result.cost == 6
	assert result.strategy == "nonbijective"
	assert result.target_pcs == (2, 6, 9)
	assert result.root_note == 50
	assert result.anchor_octave is None
	assert result.voice_count == 4
	assert result.candidate_count == 3


def test_auto_uses_bijective_for_equal_sizes (session: parsimony.session.VoiceLeadingSession) -> None:

	"""Equal sizes pick the bijective solver."""

	session.set_current_chord([48, 52, 55])
	result = session.set_target_absolute([2, 6, 9])

	assert result is not None
	assert result.strategy == "bijective"
	assert result.output_chord == (45, 50, 54)


def test_feedback_chains_results (session: parsimony.session.VoiceLeadingSession, c_major_open: typing.List[int]) -> None:

	"""With feedback on, the output becomes the next current chord."""

	session.set_current_chord(c_major_open)
	session.set_target_relative(2, [0, 4, 7])

	assert session.current_chord == [50, 54, 57, 62]

	result = session.set_target_relative(0, [0, 4, 7])

	assert result is not None
	assert result.output_chord == (48, 52, 55, 60)


def test_recalculate_is_idempotent_without_feedback (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession], c_major_open: typing.List[int]) -> None:

	"""Without feedback the same state gives the same result every time."""

	session = make_session(feedback=False)
	session.set_current_chord(c_major_open)

	first = session.set_target_relative(2, [0, 4, 7])
	second = session.recalculate()

	assert first == second
	assert session.current_chord == c_major_open


def test_greedy_strategy (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession], c_major_open: typing.List[int]) -> None:

	"""The greedy path anchors, builds candidates and reports them."""

	session = make_session(strategy="greedy")
	session.set_current_chord(c_major_open)
	result = session.set_target_absolute([0, 4, 7])

	assert result is not None
	assert result.anchor_octave == 4
	assert result.candidate_count == 6
	assert result.output_chord == (48, 52, 55, 55)
	assert result.cost == 5


def test_orbifold_strategy (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession]) -> None:

	"""The orbifold path places the target in close position at the anchor."""

	session = make_session(strategy="orbifold")
	session.set_current_chord([48, 52, 55])
	result = session.set_target_absolute([2, 6, 9])

	assert result is not None
	assert result.anchor_octave == 4
	assert result.output_chord == (50, 54, 57)
	assert result.cost == 6


def test_size_mismatch_is_reported (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession], c_major_open: typing.List[int]) -> None:

	"""Forcing the bijective solver on unequal sizes warns and produces nothing."""

	session = make_session(strategy="bijective")
	session.set_current_chord(c_major_open)

	assert session.set_target_relative(2, [0, 4, 7]) is None
	assert session.warnings[-1].startswith("SizeMismatch")
	assert session.last_result is None
	assert session.current_chord == c_major_open


def test_oversized_target_keeps_state (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession]) -> None:

	"""One note past the limit is rejected and the previous target survives."""

	session = make_session(max_voices=4)
	session.set_current_chord([48, 52, 55, 60])
	session.set_target_absolute([2, 6, 9, 0])

	assert session.set_target_absolute([0, 2, 4, 5, 7]) is None
	assert session.warnings[-1].startswith("InputTooLarge")
	assert session.target is not None
	assert session.target.pitch_classes() == [2, 6, 9, 0]


def test_oversized_current_chord_keeps_state (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession]) -> None:

	"""An oversized current chord is refused."""

	session = make_session(max_voices=4)

	assert session.set_current_chord([48, 52, 55, 60]) is True
	assert session.set_current_chord([48, 52, 55, 60, 64]) is False
	assert session.current_chord == [48, 52, 55, 60]


def test_missing_data (session: parsimony.session.VoiceLeadingSession) -> None:

	"""Recalculating with nothing set warns."""

	assert session.recalculate() is None
	assert session.warnings[-1].startswith("MissingData")

	assert session.set_current_chord([]) is False
	assert session.set_target_absolute([]) is None


def test_target_before_current_waits (session: parsimony.session.VoiceLeadingSession) -> None:

	"""A target without a current chord is stored quietly."""

	assert session.set_target_absolute([2, 6, 9]) is None
	assert session.warnings == []

	session.set_current_chord([48, 52, 55])
	result = session.recalculate()

	assert result is not None
	assert result.output_chord == (45, 50, 54)


def test_set_root_then_chord (session: parsimony.session.VoiceLeadingSession) -> None:

	"""The stored root applies to the next chord message."""

	session.set_current_chord([48, 52, 55])
	session.set_root(14)

	assert session.root == 2
	assert session.last_result is None

	result = session.set_chord([0, 4, 7])

	assert result is not None
	assert result.output_chord == (45, 50, 54)
	assert result.root_note == 50


def test_set_root_rerooted_target_waits_for_recalculate (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession]) -> None:

	"""Changing the root re-roots a relative target without recalculating."""

	session = make_session(feedback=False)
	session.set_current_chord([48, 52, 55])
	first = session.set_target_relative(2, [0, 4, 7])

	session.set_root(7)

	assert session.last_result is first

	result = session.recalculate()

	assert result is not None
	assert result.target_pcs == (7, 11, 2)


def test_clear (session: parsimony.session.VoiceLeadingSession) -> None:

	"""Clearing forgets the chord, target and result."""

	session.set_current_chord([48, 52, 55])
	session.set_target_absolute([2, 6, 9])
	session.clear()

	assert session.current_chord == []
	assert session.target is None
	assert session.last_result is None


def test_events (session: parsimony.session.VoiceLeadingSession) -> None:

	"""Results and warnings are published as events."""

	results: typing.List[parsimony.session.Result] = []
	warnings: typing.List[str] = []

	session.events.on("result", results.append)
	session.events.on("warning", warnings.append)

	session.recalculate()
	session.set_current_chord([48, 52, 55])
	session.set_target_absolute([2, 6, 9])

	assert len(results) == 1
	assert results[0].output_chord == (45, 50, 54)
	assert len(warnings) == 1
	assert warnings[0].startswith("MissingData")


def test_debug_events_only_when_enabled (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession]) -> None:

	"""Pipeline stages are traced only with debug on."""

	session = make_session(strategy="greedy")
	stages: typing.List[str] = []

	session.events.on("debug", lambda stage, data: stages.append(stage))

	session.set_current_chord([48, 52, 55])
	session.set_target_absolute([2, 6, 9])

	assert stages == []

	session.set_debug(True)
	session.recalculate()

	assert stages == ["target", "anchor", "voicings", "solution"]


def test_distance_matrix (session: parsimony.session.VoiceLeadingSession) -> None:

	"""The distance matrix is padded to a square."""

	assert session.distance_matrix([62]) is None
	assert session.warnings[-1].startswith("MissingData")

	session.set_current_chord([60, 64])

	assert session.distance_matrix([62]) == [[2.0, 1000.0], [2.0, 1000.0]]


def test_make_solver_rejects_unknown () -> None:

	"""Only known strategy names produce solvers."""

	with pytest.raises(ValueError):
		parsimony.session.make_solver("random", parsimony.config.VoiceLeadingConfig())


def test_debug_target_stage_carries_prime_form (make_session: typing.Callable[..., parsimony.session.VoiceLeadingSession]) -> None:

	"""The target trace includes the transposition-free shape of the target."""

	session = make_session(debug=True)
	traces: typing.Dict[str, typing.Dict[str, typing.Any]] = {}

	session.events.on("debug", lambda stage, data: traces.setdefault(stage, data))

	session.set_current_chord([48, 52, 55])
	session.set_target_absolute([2, 6, 9])

	assert traces["target"]["prime_form"] == [0, 4, 7]
	assert traces["target"]["strategy"] == "bijective"
