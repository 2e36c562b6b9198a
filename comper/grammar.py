"""Probabilistic context-free grammars for rhythm and direction strings.

Rules are written one per line in a small BNF dialect::

    % everything after a percent sign is a comment
    <START> = aa<1> 10 | bb<2> 20
    <1>     = bcd 1
    <2>     = cde 1 | ` 1

- Nonterminals are ``<NAME>`` where ``NAME`` uses ``A-Z a-z 0-9 _ + -``.
- Terminals are runs of the same characters, written without spaces.
- Every alternative ends with a space and a positive integer weight.
- A lone backtick ```` ` ```` is the empty expansion.
- Alternatives are separated by ``|``. Repeating a rule name adds alternatives.
- The grammar must define ``<START>`` and every nonterminal it references.

Generation expands breadth-first for a fixed number of steps. Each step
rewrites every nonterminal currently in the string once. Nonterminals still
left after the last step are dropped, so a recursive grammar always stops.

Grammar files may hold several grammars, each under a ``[section]`` header::

    [bassPattern]
    <START> = <BAR><BAR> 1
    ...

    [bassDirection]
    <START> = UUDD 1
"""

import collections
import logging
import random
import re
import typing

import comper.errors
import comper.weighted_selector


logger = logging.getLogger(__name__)

START = "<START>"

_NAME = r"[A-Za-z0-9_+\-]+"
_NONTERMINAL = rf"<{_NAME}>"
_SYMBOL_CHAR = r"[A-Za-z0-9_+\-`]"
_WEIGHT = r" +0*[1-9][0-9]*"
_EXPANSION = rf"(?:{_NONTERMINAL}|{_SYMBOL_CHAR})+{_WEIGHT} *"

RULE_PATTERN = re.compile(rf" *({_NONTERMINAL}) *= *{_EXPANSION}(?: *\| *{_EXPANSION})*")

# A backtick glued to any other symbol character.
MISPLACED_BACKTICK_PATTERN = re.compile(r"`[A-Za-z0-9_+\-<>`]+|[A-Za-z0-9_+\-<>`]+`")

SYMBOL_PATTERN = re.compile(rf"{_NONTERMINAL}|[^<]+")

Expansion = typing.Tuple[str, ...]


def is_nonterminal (symbol: str) -> bool:

	return symbol.startswith("<")


def split_expansion (expansion: str) -> Expansion:

	"""Split an expansion into terminal runs and nonterminals.

	Example:
		```python
		split_expansion("aa<1>b<2>")  # → ("aa", "<1>", "b", "<2>")
		split_expansion("`")          # → ()
		```
	"""

	if expansion == "`":
		return ()

	return tuple(SYMBOL_PATTERN.findall(expansion))


class ProbabilisticGrammar:

	"""
	A weighted context-free grammar that generates strings by bounded expansion.
	"""

	def __init__ (self, rng: typing.Optional[random.Random] = None) -> None:

		"""
		Initialize an empty grammar. All weighted draws use ``rng``.
		"""

		self.rng = rng or random.Random()

		self._rules: typing.Dict[str, comper.weighted_selector.WeightedSelector[Expansion]] = {}

		# Nonterminals referenced on a right-hand side with no rule of their own yet.
		self._missing: typing.Set[str] = {START}


	def add_rule (self, rule: str) -> None:

		"""Parse one rule line and add its alternatives.

		Blank and comment-only lines are ignored.

		Raises:
			MalformedRule: If the line does not follow the rule syntax.
		"""

		rule = rule.split("%", 1)[0].strip()

		if not rule:
			return

		match = RULE_PATTERN.fullmatch(rule)

		if match is None or MISPLACED_BACKTICK_PATTERN.search(rule):
			raise comper.errors.MalformedRule(f"Rule {rule!r} is in an incorrect format")

		name = match.group(1)
		self._missing.discard(name)

		expansions: typing.List[Expansion] = []
		weights: typing.List[int] = []

		for alternative in rule.split("=", 1)[1].split("|"):

			text, weight = alternative.split()
			expansion = split_expansion(text)

			for symbol in expansion:
				if is_nonterminal(symbol) and symbol != name and symbol not in self._rules:
					self._missing.add(symbol)

			expansions.append(expansion)
			weights.append(int(weight))

		if name not in self._rules:
			self._rules[name] = comper.weighted_selector.WeightedSelector(rng=self.rng)

		self._rules[name].insert_all(expansions, weights)


	def from_text (self, text: str) -> None:

		"""
		Add every rule in ``text`` and check the grammar is complete.
		"""

		for line in text.splitlines():
			self.add_rule(line)

		self.validate()


	def from_file (self, path: str, section: typing.Optional[str] = None) -> None:

		"""Add the rules from a file and check the grammar is complete.

		Parameters:
			path: Grammar file.
			section: When given, read only the lines after a ``[section]``
				header, up to the next line that starts with ``[``.

		Raises:
			SectionNotFound: If ``section`` has no header in the file.
		"""

		with open(path, "r") as f:
			lines = f.read().splitlines()

		if section is not None:
			lines = _section_lines(lines, section, path)

		for line in lines:
			self.add_rule(line)

		self.validate()

		logger.info(f"Loaded grammar {section or path!r} ({len(self._rules)} rules)")


	def validate (self) -> None:

		"""Check that ``<START>`` and every referenced nonterminal have rules.

		Raises:
			MissingStart: If no ``<START>`` rule exists.
			UndefinedNonterminal: If a nonterminal appears only on right-hand sides.
		"""

		if START not in self._rules:
			raise comper.errors.MissingStart(f"The grammar needs a rule with {START} on the left")

		if self._missing:
			names = ", ".join(sorted(self._missing))
			raise comper.errors.UndefinedNonterminal(f"{names} appear on the right of a rule but never on the left")


	def generate_string (self, steps: int) -> str:

		"""Expand ``<START>`` for ``steps`` rounds and return the terminals.

		In each round every symbol in the working string is visited once:
		nonterminals are replaced by a weighted random expansion and terminals
		stay as they are. Nonterminals left after the last round produce
		nothing.

		Example:
			```python
			grammar = ProbabilisticGrammar(rng=random.Random(1))
			grammar.from_text("<START> = a<1> 1 | b<1> 1\\n<1> = c 1")
			grammar.generate_string(2)  # "ac" or "bc"
			grammar.generate_string(1)  # "a" or "b"
			```
		"""

		if steps < 0:
			raise ValueError("steps cannot be negative")

		self.validate()

		queue: typing.Deque[str] = collections.deque([START])

		for _ in range(steps):
			for _ in range(len(queue)):

				symbol = queue.popleft()

				if is_nonterminal(symbol):
					queue.extend(self._rules[symbol].get_element())

				else:
					queue.append(symbol)

		return "".join(symbol for symbol in queue if not is_nonterminal(symbol))


	def missing_nonterminals (self) -> typing.FrozenSet[str]:

		"""
		Return the nonterminals that are referenced but not yet defined.
		"""

		return frozenset(self._missing)


	def rules (self) -> typing.Dict[str, typing.List[typing.Tuple[Expansion, int]]]:

		"""
		Return each nonterminal's alternatives as ``(expansion, weight)`` pairs.
		"""

		return {
			name: list(zip(selector.elements(), selector.weights()))
			for name, selector in self._rules.items()
		}


def _section_lines (lines: typing.List[str], section: str, path: str) -> typing.List[str]:

	header = f"[{section}]"
	found = False
	selected: typing.List[str] = []

	for line in lines:

		if found and line.startswith("["):
			break

		if found:
			selected.append(line)

		elif line.strip() == header:
			found = True

	if not found:
		raise comper.errors.SectionNotFound(f"Could not find grammar section {header} in {path}")

	return selected


def load_grammar (path: str, section: typing.Optional[str] = None, rng: typing.Optional[random.Random] = None) -> ProbabilisticGrammar:

	"""
	Build a grammar from one section of a grammar file.
	"""

	grammar = ProbabilisticGrammar(rng=rng)
	grammar.from_file(path, section)

	return grammar
