import logging

import parsimony
import parsimony.intervals
import parsimony.pitch

logging.basicConfig(level=logging.INFO)

# ii - V - I - vi in C, led from an open C major voicing.
PROGRESSION = [
	("D", "minor_7th"),
	("G", "dominant_7th"),
	("C", "major_7th"),
	("A", "minor"),
]

session = parsimony.VoiceLeadingSession(parsimony.VoiceLeadingConfig(max_voices=4))
session.set_current_chord([48, 52, 55, 60])

for root_name, quality in PROGRESSION:

	session.set_root(parsimony.pitch.key_name_to_pc(root_name))
	result = session.set_chord(parsimony.intervals.get_intervals(quality))

	if result is None:
		continue

	names = " ".join(parsimony.pitch.note_name(p) for p in result.output_chord)
	print(f"{root_name} {quality:<14} {names:<20} cost {result.cost} ({result.strategy})")
