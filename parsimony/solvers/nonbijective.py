"""Non-bijective voice leading by dynamic-programming alignment.

Source and target pitch classes are deduplicated and sorted, then aligned
with an edit-distance style matrix over every rotation of the target
(Tymoczko, "The Geometry of Musical Chords", Science 2006). The cheapest
path through the matrix pairs source pitch classes with target pitch
classes; a pitch class may appear in several pairs, which is how notes get
doubled or dropped.

Pairs are then applied to the real pitches:

- Each pair moves the unused voice of its source pitch class that sits
  nearest the target pitch class value.
- A pair whose source pitch class has no unused voice left splits a voice:
  a new voice is appended, derived from the nearest matching voice.
- Voices no pair touched (doublings in the current chord) follow the first
  pair that starts on their pitch class.
"""

import logging
import typing

import parsimony.errors
import parsimony.pitch
import parsimony.solvers


logger = logging.getLogger(__name__)

DEFAULT_MAX_VOICES: int = 8

Matrix = typing.List[typing.List[int]]


def build_matrix (source: typing.Sequence[int], target: typing.Sequence[int]) -> Matrix:

	"""Return the cumulative alignment matrix, rows indexed by target.

	``M[i][j] = pc_distance(source[j], target[i]) + min(M[i-1][j], M[i][j-1], M[i-1][j-1])``
	with the first row and column accumulated along their edge.
	"""

	matrix = [[parsimony.pitch.pc_distance(s, t) for s in source] for t in target]

	for j in range(1, len(source)):
		matrix[0][j] += matrix[0][j - 1]

	for i in range(1, len(target)):
		matrix[i][0] += matrix[i - 1][0]

	for i in range(1, len(target)):
		for j in range(1, len(source)):
			matrix[i][j] += min(matrix[i - 1][j], matrix[i][j - 1], matrix[i - 1][j - 1])

	return matrix


def backtrack (
	matrix: Matrix,
	source: typing.Sequence[int],
	target: typing.Sequence[int]
) -> typing.List[typing.Tuple[int, int]]:

	"""Recover the ``(source_pc, target_pc)`` pairs along the cheapest path.

	Walks back from the last cell. Where several predecessors tie, the
	diagonal is preferred, then the cell above, then the cell to the left.
	"""

	i = len(target) - 1
	j = len(source) - 1

	pairs = [(source[j], target[i])]

	while i > 0 or j > 0:

		if i > 0 and j > 0:

			new_i, new_j = i - 1, j - 1
			lowest = matrix[i - 1][j - 1]

			if matrix[i - 1][j] < lowest:
				lowest = matrix[i - 1][j]
				new_i, new_j = i - 1, j

			if matrix[i][j - 1] < lowest:
				new_i, new_j = i, j - 1

			i, j = new_i, new_j

		elif i > 0:
			i -= 1

		else:
			j -= 1

		pairs.append((source[j], target[i]))

	pairs.reverse()

	return pairs


def align (
	source_pcs: typing.Iterable[int],
	target_pcs: typing.Iterable[int]
) -> typing.Tuple[int, typing.List[typing.Tuple[int, int]], int, Matrix]:

	"""Find the cheapest alignment over every rotation of the target.

	Returns:
		``(cost, pairs, rotation, matrix)`` for the winning rotation. The
		first rotation reaching the lowest cost wins.

	Raises:
		MissingData: If either set is empty.
	"""

	source = parsimony.pitch.canonicalize(source_pcs)
	target = parsimony.pitch.canonicalize(target_pcs)

	if not source or not target:
		raise parsimony.errors.MissingData("Cannot align an empty pitch-class set")

	best: typing.Optional[typing.Tuple[int, typing.List[typing.Tuple[int, int]], int, Matrix]] = None

	for rotation in range(len(target)):

		rotated = target[rotation:] + target[:rotation]
		matrix = build_matrix(source, rotated)
		cost = matrix[-1][-1]

		if best is None or cost < best[0]:
			best = (cost, backtrack(matrix, source, rotated), rotation, matrix)

	assert best is not None
	return best


class NonBijectiveSolver (parsimony.solvers.Solver):

	"""Voice leading between pitch-class sets of any size."""

	name = "nonbijective"

	def __init__ (self, max_voices: int = DEFAULT_MAX_VOICES) -> None:

		"""
		Parameters:
			max_voices: Upper bound on the output size when pairs split voices.
		"""

		self.max_voices = max_voices


	def solve (
		self,
		current: typing.Sequence[int],
		targets: typing.Sequence[int],
		required_pcs: typing.AbstractSet[int]
	) -> parsimony.solvers.Solution:

		"""Lead ``current`` pitches onto the target pitch classes in ``targets``."""

		cost, pairs, rotation, matrix = align(current, targets)

		warnings: typing.List[str] = []
		output = list(current)
		assignment: typing.List[typing.Optional[int]] = [None] * len(current)
		used = [False] * len(current)
		first_path: typing.Dict[int, typing.Tuple[int, int]] = {}

		target_index = {}
		for index, value in enumerate(targets):
			target_index.setdefault(parsimony.pitch.reduce(value), index)

		for pair_number, (source_pc, target_pc) in enumerate(pairs):

			path = parsimony.pitch.signed_interval_class(source_pc, target_pc)
			first_path.setdefault(source_pc, (path, target_pc))

			voice = self._nearest_voice(current, source_pc, target_pc, used)

			if voice is not None:
				used[voice] = True
				output[voice] = current[voice] + path
				assignment[voice] = target_index[target_pc]
				logger.debug(f"Pair {pair_number}: voice {voice} {current[voice]} -> {output[voice]}")
				continue

			# Every voice on this pitch class is taken: split one.
			donor = self._nearest_voice(current, source_pc, target_pc, None)

			if donor is None:
				continue

			if len(output) >= self.max_voices:
				warnings.append(parsimony.errors.warning_message(
					parsimony.errors.INPUT_TOO_LARGE,
					f"cannot add a voice for {source_pc} -> {target_pc}; already at {self.max_voices} voices"
				))
				continue

			output.append(current[donor] + path)
			assignment.append(target_index[target_pc])
			logger.debug(f"Pair {pair_number}: split voice {donor} {current[donor]} -> {output[-1]}")

		for voice, pitch in enumerate(current):

			if used[voice]:
				continue

			pc = parsimony.pitch.reduce(pitch)

			if pc not in first_path:
				warnings.append(parsimony.errors.warning_message(
					parsimony.errors.UNASSIGNABLE_VOICE,
					f"voice {voice} has no pair; keeping {pitch}"
				))
				continue

			path, target_pc = first_path[pc]
			output[voice] = pitch + path
			assignment[voice] = target_index[target_pc]

		for pc in parsimony.solvers.missing_pitch_classes(output, required_pcs):
			warnings.append(parsimony.errors.warning_message(
				parsimony.errors.INCOMPLETE_COVERAGE,
				f"required pitch class {pc} ({parsimony.pitch.PC_TO_NOTE_NAME[pc]}) missing from result"
			))

		return parsimony.solvers.Solution(
			output = output,
			cost = cost,
			assignment = assignment,
			warnings = warnings,
			diagnostics = {
				"pairs": pairs,
				"rotation": rotation,
				"matrix": matrix,
			}
		)


	@staticmethod
	def _nearest_voice (
		current: typing.Sequence[int],
		source_pc: int,
		target_pc: int,
		used: typing.Optional[typing.Sequence[bool]]
	) -> typing.Optional[int]:

		"""Index of the voice on ``source_pc`` nearest ``target_pc``, skipping used voices when given."""

		best_voice: typing.Optional[int] = None
		best_distance = 0

		for voice, pitch in enumerate(current):

			if used is not None and used[voice]:
				continue

			if parsimony.pitch.reduce(pitch) != source_pc:
				continue

			distance = abs(pitch - target_pc)

			if best_voice is None or distance < best_distance:
				best_voice = voice
				best_distance = distance

		return best_voice
