"""Exceptions raised by the comper engines.

Every error is raised at the point the problem is detected and carries a
readable description. Errors that describe a bad argument also derive from
``ValueError`` so callers can catch them the usual way.

- Spelling: ``InvalidName``, ``InvalidChordName``, ``AmbiguousChordName``
- Grammar construction: ``MalformedRule``, ``InvalidWeight``, ``LengthMismatch``,
  ``SectionNotFound``
- Grammar integrity: ``UndefinedNonterminal``, ``MissingStart``
- Generation: ``ShortGeneratedOutput``, ``IllegalPatternSymbol``,
  ``EmptyCollection``, ``InvalidBounds``
- Input files: ``ProgressionError``
"""


class ComperError (Exception):
	pass


class InvalidName (ComperError, ValueError):
	pass


class InvalidChordName (ComperError, ValueError):
	pass


class AmbiguousChordName (InvalidChordName):
	pass


class InvalidWeight (ComperError, ValueError):
	pass


class LengthMismatch (ComperError, ValueError):
	pass


class EmptyCollection (ComperError, IndexError):
	pass


class GrammarError (ComperError):
	pass


class MalformedRule (GrammarError, ValueError):
	pass


class UndefinedNonterminal (GrammarError):
	pass


class MissingStart (GrammarError):
	pass


class SectionNotFound (GrammarError):
	pass


class ShortGeneratedOutput (ComperError):
	pass


class IllegalPatternSymbol (ComperError, ValueError):
	pass


class InvalidBounds (ComperError, ValueError):
	pass


class ProgressionError (ComperError, ValueError):
	pass
