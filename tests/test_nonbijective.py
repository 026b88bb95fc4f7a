import pytest

import parsimony.errors
import parsimony.solvers.nonbijective


def test_four_voices_to_triad () -> None:

	"""Open C major to D major: each pitch class moves a tone and the doubled root follows."""

	solver = parsimony.solvers.nonbijective.NonBijectiveSolver()
	solution = solver.solve([48, 52, 55, 60], [2, 6, 9], frozenset({2, 6, 9}))

	assert solution.cost == 6
	assert solution.diagnostics["pairs"] == [(0, 2), (4, 6), (7, 9)]
	assert solution.diagnostics["rotation"] == 0
	assert solution.output == [50, 54, 57, 62]


def test_same_chord_costs_nothing () -> None:

	"""Leading a chord to its own pitch classes leaves it alone."""

	solver = parsimony.solvers.nonbijective.NonBijectiveSolver()
	solution = solver.solve([48, 52, 55, 60], [0, 4, 7], frozenset({0, 4, 7}))

	assert solution.cost == 0
	assert solution.output == [48, 52, 55, 60]
	assert solution.warnings == []


def test_triad_to_seventh_splits_a_voice () -> None:

	"""The root steps down to the seventh and a split voice keeps the root."""

	solver = parsimony.solvers.nonbijective.NonBijectiveSolver()
	solution = solver.solve([60, 64, 67], [0, 4, 7, 10], frozenset({0, 4, 7, 10}))

	assert solution.cost == 2
	assert solution.diagnostics["rotation"] == 3
	assert solution.diagnostics["pairs"] == [(0, 10), (0, 0), (4, 4), (7, 7)]
	assert solution.output == [58, 64, 67, 60]
	assert solution.warnings == []


def test_seventh_to_triad_doubles () -> None:

	"""Dropping a pitch class doubles one of the remaining ones."""

	solver = parsimony.solvers.nonbijective.NonBijectiveSolver()
	solution = solver.solve([60, 64, 67, 70], [0, 4, 7], frozenset({0, 4, 7}))

	assert solution.cost == 3
	assert solution.output == [60, 64, 67, 67]


def test_split_respects_max_voices () -> None:

	"""No voice is added past the limit; a warning is raised instead."""

	solver = parsimony.solvers.nonbijective.NonBijectiveSolver(max_voices=3)
	solution = solver.solve([60, 64, 67], [0, 4, 7, 10], frozenset({0, 4, 7, 10}))

	assert solution.output == [58, 64, 67]
	assert any(w.startswith("InputTooLarge") for w in solution.warnings)
	assert any(w.startswith("IncompleteCoverage") for w in solution.warnings)


def test_path_length_bounds () -> None:

	"""An alignment visits between max(S, T) and S + T - 1 cells."""

	cases = [
		([0, 4, 7], [2, 6, 9]),
		([0, 4, 7, 10], [0, 4, 7]),
		([0], [1, 5, 8]),
		([0, 2, 4, 5, 7, 9, 11], [6]),
		([1, 6], [0, 3, 7, 10]),
	]

	for source, target in cases:
		cost, pairs, rotation, matrix = parsimony.solvers.nonbijective.align(source, target)
		assert max(len(source), len(target)) <= len(pairs) <= len(source) + len(target) - 1


def test_path_is_monotone () -> None:

	"""Source and target indices never decrease along the path."""

	source = [0, 3, 7, 10]
	target = [1, 5, 8]

	matrix = parsimony.solvers.nonbijective.build_matrix(source, target)
	pairs = parsimony.solvers.nonbijective.backtrack(matrix, source, target)

	source_steps = [source.index(s) for s, t in pairs]
	target_steps = [target.index(t) for s, t in pairs]

	assert source_steps == sorted(source_steps)
	assert target_steps == sorted(target_steps)

	costs = [matrix[ti][si] for si, ti in zip(source_steps, target_steps)]

	assert costs == sorted(costs)
	assert costs[-1] == matrix[-1][-1]
	assert pairs[0] == (source[0], target[0])
	assert pairs[-1] == (source[-1], target[-1])


def test_build_matrix_edges_accumulate () -> None:

	"""First row and column are running sums of their edge distances."""

	matrix = parsimony.solvers.nonbijective.build_matrix([0, 4, 7], [2, 6, 9])

	assert matrix == [[2, 4, 9], [8, 4, 5], [11, 9, 6]]


def test_align_rejects_empty () -> None:

	"""Empty sets cannot be aligned."""

	with pytest.raises(parsimony.errors.MissingData):
		parsimony.solvers.nonbijective.align([], [0, 4, 7])
