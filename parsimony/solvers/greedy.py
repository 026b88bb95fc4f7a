"""Greedy nearest-candidate assignment with a completeness bonus.

This is not an optimal bipartite assignment. Voices are taken in order and
each grabs the cheapest unused candidate, after subtracting ``bonus`` from
candidates whose pitch class the target requires. The reported cost uses
the unadjusted distances.
"""

import logging
import math
import typing

import parsimony.distance
import parsimony.errors
import parsimony.pitch
import parsimony.solvers


logger = logging.getLogger(__name__)

DEFAULT_COMPLETENESS_BONUS: int = 15


class GreedySolver (parsimony.solvers.Solver):

	"""Nearest-first assignment of voices to candidate pitches."""

	name = "greedy"

	def __init__ (self, bonus: int = DEFAULT_COMPLETENESS_BONUS) -> None:

		"""
		Parameters:
			bonus: Subtracted from a candidate's cost when its pitch class is
				required.
		"""

		self.bonus = bonus


	def solve (
		self,
		current: typing.Sequence[int],
		targets: typing.Sequence[int],
		required_pcs: typing.AbstractSet[int]
	) -> parsimony.solvers.Solution:

		"""Assign each current voice to one of the candidate pitches in ``targets``."""

		costs = parsimony.distance.cost_matrix(current, targets)
		used = [False] * len(targets)

		output: typing.List[int] = []
		assignment: typing.List[typing.Optional[int]] = []
		warnings: typing.List[str] = []
		total = 0

		for voice, pitch in enumerate(current):

			best_j: typing.Optional[int] = None
			best_adjusted = math.inf

			for j, candidate in enumerate(targets):

				if used[j]:
					continue

				adjusted = costs[voice][j]

				if parsimony.pitch.reduce(candidate) in required_pcs:
					adjusted -= self.bonus

				# Strict comparison: the lowest candidate index wins a tie.
				if adjusted < best_adjusted:
					best_adjusted = adjusted
					best_j = j

			if best_j is None:
				output.append(pitch)
				assignment.append(None)
				warnings.append(parsimony.errors.warning_message(
					parsimony.errors.UNASSIGNABLE_VOICE,
					f"voice {voice} has no candidate left; keeping {pitch}"
				))
				continue

			used[best_j] = True
			total += costs[voice][best_j]
			output.append(targets[best_j])
			assignment.append(best_j)

			logger.debug(f"Voice {voice}: {pitch} -> {targets[best_j]} (cost {costs[voice][best_j]})")

		for pc in parsimony.solvers.missing_pitch_classes(output, required_pcs):
			warnings.append(parsimony.errors.warning_message(
				parsimony.errors.INCOMPLETE_COVERAGE,
				f"required pitch class {pc} ({parsimony.pitch.PC_TO_NOTE_NAME[pc]}) missing from result"
			))

		return parsimony.solvers.Solution(
			output = output,
			cost = total,
			assignment = assignment,
			warnings = warnings,
			diagnostics = {
				"candidates": list(targets),
				"cost_matrix": costs,
			}
		)
