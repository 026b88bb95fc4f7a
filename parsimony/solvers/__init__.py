"""
Assignment solvers: interchangeable strategies for matching current voices to a target.

Every solver answers the same question - where should each current voice
go? - and returns a :class:`Solution`. They differ in what ``targets``
means and in what they optimise:

- ``greedy`` - concrete candidate pitches, nearest-first with a bonus for
  required pitch classes. Fast, not optimal.
- ``bijective`` - target pitch classes, one voice per target, minimal total
  interval-class movement over rotations or permutations.
- ``nonbijective`` - target pitch classes of any size; doublings and
  omissions allowed. Dynamic-programming alignment.
- ``orbifold`` - concrete target pitches, one voice per target, minimal
  octave-folded pitch distance over all permutations.
"""

import abc
import dataclasses
import itertools
import typing

import parsimony.pitch


@dataclasses.dataclass
class Solution:

	"""
	What a solver decided.

	``output`` has one pitch per current voice, in the original voice order.
	The non-bijective solver may append extra voices after those.
	``assignment[i]`` is the index of the target used by voice ``i``, or
	``None`` when the voice kept its pitch.
	"""

	output: typing.List[int]
	cost: float
	assignment: typing.List[typing.Optional[int]]
	warnings: typing.List[str] = dataclasses.field(default_factory=list)
	diagnostics: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)


class Solver (abc.ABC):

	"""Abstract base for assignment strategies."""

	name: str = ""

	@abc.abstractmethod
	def solve (
		self,
		current: typing.Sequence[int],
		targets: typing.Sequence[int],
		required_pcs: typing.AbstractSet[int]
	) -> Solution:

		"""Map each current voice onto the targets."""

		...


SEARCH_MODES: typing.Tuple[str, ...] = ("rotations", "permutations")


def rotation_orders (size: int) -> typing.List[typing.Tuple[int, ...]]:

	"""Index orders for every rotation of a sequence.

	Rotation ``k`` moves the last ``k`` items to the front. The orders start
	at rotation 1 and end with the identity, so for ``[a, b, c]`` they are
	``[c, a, b]``, ``[b, c, a]``, ``[a, b, c]``. Searches that keep the first
	minimum therefore prefer a shifted alignment over the identity on a tie.
	"""

	return [tuple((i - k) % size for i in range(size)) for k in range(1, size + 1)]


def permutation_orders (size: int) -> typing.Iterator[typing.Tuple[int, ...]]:

	"""Index orders for every permutation, in lexicographic order."""

	return itertools.permutations(range(size))


def missing_pitch_classes (output: typing.Iterable[int], required_pcs: typing.Iterable[int]) -> typing.List[int]:

	"""Return the required pitch classes (sorted) that ``output`` does not contain."""

	present = {parsimony.pitch.reduce(p) for p in output}

	return sorted(pc for pc in set(required_pcs) if pc not in present)
