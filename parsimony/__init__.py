"""
Parsimony - minimal-motion voice leading for live chord changes.

Given the chord that is sounding now and the harmony that should come next,
Parsimony chooses concrete pitches for the next chord so that the voices
move as little as possible. It is meant to sit between a chord source
(a sequencer, a patch, a player) and a synth, and it speaks OSC.

Solvers:

- **Greedy.** Anchors the target in the octave nearest the current chord,
  builds a small pool of voicings (close, bass drop, soprano lift, spread)
  and lets each voice grab its nearest candidate, with a bonus for pitch
  classes the chord still needs.
- **Bijective.** Every voice moves to exactly one target pitch class;
  rotations (or, optionally, all permutations) are searched for the
  cheapest signed-interval alignment.
- **Non-bijective.** A dynamic-programming alignment that lets voices
  double or split, so a four-voice chord can lead to a triad and back.
- **Orbifold.** Minimum folded distance over all voice pairings, plus
  normalized prime-form coordinates for each chord.

Quick start::

	import parsimony

	session = parsimony.VoiceLeadingSession()
	session.set_current_chord([48, 52, 55, 60])
	result = session.set_target_relative(2, [0, 4, 7])
	result.output_chord   # (50, 54, 57, 62)

Run ``python -m parsimony config.yaml`` to serve a session over OSC.

Package-level exports: ``VoiceLeadingSession``, ``VoiceLeadingConfig``,
``Result``, ``TargetSpec``, ``VoiceLeadingError``, ``load_config``.
"""

import parsimony.config
import parsimony.errors
import parsimony.session


VoiceLeadingSession = parsimony.session.VoiceLeadingSession
VoiceLeadingConfig = parsimony.config.VoiceLeadingConfig
Result = parsimony.session.Result
TargetSpec = parsimony.session.TargetSpec
VoiceLeadingError = parsimony.errors.VoiceLeadingError
load_config = parsimony.config.load_config
