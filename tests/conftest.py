import random
import typing

import pytest

import comper.grammar


def _build_grammar (text: str, seed: int = 1) -> comper.grammar.ProbabilisticGrammar:

	"""Build a validated grammar from rule text with a seeded random source."""

	grammar = comper.grammar.ProbabilisticGrammar(rng=random.Random(seed))
	grammar.from_text(text)
	return grammar


@pytest.fixture
def rng () -> random.Random:

	"""A fixed-seed random source so draws repeat between runs."""

	return random.Random(1)


@pytest.fixture
def make_grammar () -> typing.Callable[..., comper.grammar.ProbabilisticGrammar]:

	"""Factory fixture: build a grammar from rule text."""

	return _build_grammar


@pytest.fixture
def repeating_grammar () -> typing.Callable[[str], comper.grammar.ProbabilisticGrammar]:

	"""Factory fixture: a grammar whose output is ``symbols`` repeated once per expansion step.

	Each step after the first adds one copy of ``symbols``, so generating with
	``n`` steps yields ``n - 1`` copies.
	"""

	def factory (symbols: str) -> comper.grammar.ProbabilisticGrammar:
		return _build_grammar(f"<START> = <R> 1\n<R> = {symbols}<R> 1")

	return factory
