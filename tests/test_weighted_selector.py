import random
import unittest

import comper.errors
import comper.weighted_selector


class WeightedSelectorTests (unittest.TestCase):

	"""
	Tests for the weighted random selector.
	"""

	def test_single_element_is_always_drawn (self) -> None:

		"""
		A selector with one element can only return that element.
		"""

		selector = comper.weighted_selector.WeightedSelector(["a"], [5], rng=random.Random(1))

		self.assertEqual({selector.get_element() for _ in range(20)}, {"a"})


	def test_draws_follow_the_weights (self) -> None:

		"""
		Over many draws each element appears in proportion to its weight.
		"""

		selector = comper.weighted_selector.WeightedSelector(["a", "b"], [1, 3], rng=random.Random(2))

		draws = [selector.get_element() for _ in range(4000)]
		share = draws.count("b") / len(draws)

		self.assertGreater(share, 0.7)
		self.assertLess(share, 0.8)


	def test_same_seed_repeats (self) -> None:

		first = comper.weighted_selector.WeightedSelector("abc", [1, 2, 3], rng=random.Random(9))
		second = comper.weighted_selector.WeightedSelector("abc", [1, 2, 3], rng=random.Random(9))

		self.assertEqual(
			[first.get_element() for _ in range(30)],
			[second.get_element() for _ in range(30)],
		)


	def test_empty_selector_raises (self) -> None:

		selector = comper.weighted_selector.WeightedSelector()

		with self.assertRaises(comper.errors.EmptyCollection):
			selector.get_element()

		with self.assertRaises(IndexError):
			selector.get_element()


	def test_non_positive_weight_raises (self) -> None:

		selector = comper.weighted_selector.WeightedSelector()

		with self.assertRaises(comper.errors.InvalidWeight):
			selector.insert("a", 0)

		with self.assertRaises(ValueError):
			selector.insert("a", -2)

		self.assertEqual(len(selector), 0)


	def test_insert_all_is_all_or_nothing (self) -> None:

		"""
		A rejected batch leaves the selector unchanged.
		"""

		selector = comper.weighted_selector.WeightedSelector(["a"], [1])

		with self.assertRaises(comper.errors.InvalidWeight):
			selector.insert_all(["b", "c"], [2, 0])

		with self.assertRaises(comper.errors.LengthMismatch):
			selector.insert_all(["b", "c"], [2])

		self.assertEqual(selector.elements(), ["a"])
		self.assertEqual(selector.total_weight, 1)


	def test_accessors (self) -> None:

		selector = comper.weighted_selector.WeightedSelector()
		selector.insert("a", 2)
		selector.insert_all(["b", "c"], [3, 4])

		self.assertEqual(selector.elements(), ["a", "b", "c"])
		self.assertEqual(selector.weights(), [2, 3, 4])
		self.assertEqual(selector.total_weight, 9)
		self.assertEqual(len(selector), 3)
		self.assertEqual(selector, comper.weighted_selector.WeightedSelector(["a", "b", "c"], [2, 3, 4]))


	def test_stale_total_weight_raises (self) -> None:

		"""
		A roll past every weight is an error, not a silent draw of the last element.
		"""

		class LastRoll (random.Random):

			def randrange (self, stop: int) -> int:  # type: ignore[override]
				return stop - 1

		selector = comper.weighted_selector.WeightedSelector(["a", "b"], [1, 2], rng=LastRoll())
		selector._total_weight = 10

		with self.assertRaises(RuntimeError):
			selector.get_element()
