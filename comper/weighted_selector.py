import random
import typing

import comper.errors


ElementType = typing.TypeVar("ElementType")


class WeightedSelector (typing.Generic[ElementType]):

	"""
	An append-only collection that draws elements in proportion to their integer weights.
	"""

	def __init__ (
		self,
		elements: typing.Optional[typing.Sequence[ElementType]] = None,
		weights: typing.Optional[typing.Sequence[int]] = None,
		rng: typing.Optional[random.Random] = None
	) -> None:

		"""
		Initialize the selector, optionally with parallel element and weight lists.
		"""

		self._elements: typing.List[ElementType] = []
		self._weights: typing.List[int] = []
		self._total_weight = 0
		self.rng = rng or random.Random()

		if elements is not None or weights is not None:
			self.insert_all(elements or [], weights or [])


	def insert (self, element: ElementType, weight: int) -> None:

		"""
		Append one element with its weight.
		"""

		if weight <= 0:
			raise comper.errors.InvalidWeight(f"Weight must be positive, got {weight}")

		self._elements.append(element)
		self._weights.append(weight)
		self._total_weight += weight


	def insert_all (self, elements: typing.Sequence[ElementType], weights: typing.Sequence[int]) -> None:

		"""
		Append parallel lists of elements and weights. Nothing is added if any weight is invalid.
		"""

		if len(elements) != len(weights):
			raise comper.errors.LengthMismatch(
				f"Elements and weights must have the same length ({len(elements)} != {len(weights)})"
			)

		if any(weight <= 0 for weight in weights):
			raise comper.errors.InvalidWeight(f"Weights must be positive, got {list(weights)}")

		self._elements.extend(elements)
		self._weights.extend(weights)
		self._total_weight = sum(self._weights)


	def get_element (self) -> ElementType:

		"""
		Draw one element. Each element's chance is its weight over the total weight.
		"""

		if not self._elements:
			raise comper.errors.EmptyCollection("Cannot draw from an empty weighted selector")

		roll = self.rng.randrange(self._total_weight)

		for element, weight in zip(self._elements, self._weights):
			if roll < weight:
				return element
			roll -= weight

		raise RuntimeError(f"Total weight {self._total_weight} does not match the weights {self._weights}")


	@property
	def total_weight (self) -> int:

		return self._total_weight


	def elements (self) -> typing.List[ElementType]:

		"""
		Return the elements in insertion order.
		"""

		return list(self._elements)


	def weights (self) -> typing.List[int]:

		"""
		Return the weights in insertion order.
		"""

		return list(self._weights)


	def __len__ (self) -> int:

		return len(self._elements)


	def __eq__ (self, other: typing.Any) -> bool:

		if not isinstance(other, WeightedSelector):
			return NotImplemented

		return self._elements == other._elements and self._weights == other._weights
