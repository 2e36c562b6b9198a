"""Chord symbol parsing and chord-tone derivation.

A :class:`Chord` turns a symbol such as ``"Cm7"``, ``"F#m7 b5"`` or
``"Bb/D"`` into eight concrete pitches: the sounding bass and the
first through seventh degrees of the chord's scale. Every degree is assumed to
follow the major scale of the root unless the symbol alters it.

Symbol micro-language:

- A root letter ``A``-``G`` with an optional ``#`` or ``b``. A lower-case root
  (``c7``) makes the third minor.
- An optional slash bass (``/E``), either right after the root or closing the
  symbol (``Cm7/G``).
- An optional quality token as the first token: ``m``, ``-``, ``~``, ``min``,
  ``b3`` (minor third), ``dim`` (minor third, flat fifth, diminished seventh)
  or ``hdim`` (minor third, flat fifth).
- Any number of alterations in any order, separated by optional spaces:
  ninth ``b9 #9 b2 #2``, third ``#3``, fourth ``b4 #4 b11 #11``, fifth
  ``#5 + aug b5``, sixth ``b6 #6 b13 #13``, seventh ``7 b7 maj maj7``.

A root accidental written directly against a digit is ambiguous (``Gb4``
could be G with a flat fourth or G-flat with a fourth) and is rejected. Write
``G b4`` instead. For the same reason ``Bb7`` must be written ``Bb 7``.

Each degree is resolved from an ordered rule table of ``(predicate, offset)``
pairs. Rules are evaluated top to bottom and the last matching rule wins, so a
symbol carrying both ``b9`` and ``#9`` gets the sharp ninth.

Example:
	```python
	chord = Chord("Cm7", octave=3)
	chord.third()      # Eb3
	chord.seventh()    # Bb3
	chord.voicing()    # [C3, Eb3, G3, Bb3]

	chord.set_voicing([3, 7, 9])
	chord.voicing()    # [Eb3, Bb3, D4]
	```
"""

import copy
import dataclasses
import re
import typing

import comper.constants.durations
import comper.constants.midi_notes
import comper.constants.velocity
import comper.errors
import comper.pitch


ROOT_PATTERN = re.compile(r"([A-Ga-g])([#b]?)")

DEFAULT_OCTAVE = 3

DEFAULT_VOICING: typing.Tuple[int, ...] = (1, 3, 5, 7)

SCALE_TONES: typing.Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)

CHORD_TONES: typing.Tuple[int, ...] = (1, 3, 5, 7)

QUALITY_TOKENS: typing.FrozenSet[str] = frozenset({"m", "-", "~", "min", "b3", "dim", "hdim"})

ALTERATION_TOKENS: typing.FrozenSet[str] = frozenset({
	"b9", "#9", "b2", "#2",
	"#3",
	"b4", "#4", "b11", "#11",
	"#5", "+", "b5", "aug",
	"b6", "#6", "b13", "#13",
	"b7", "7", "maj", "maj7",
})

# Longest first, so "maj7" wins over "maj" and "m", and "b13" over "b3".
_TOKENS_BY_LENGTH: typing.List[str] = sorted(QUALITY_TOKENS | ALTERATION_TOKENS, key=lambda token: (-len(token), token))


@dataclasses.dataclass(frozen=True)
class ChordSymbol:

	"""
	The tokens of a validated chord symbol.
	"""

	root: str
	bass: typing.Optional[str]
	quality: typing.Optional[str]
	tokens: typing.FrozenSet[str]


	@property
	def lowercase_root (self) -> bool:

		return self.root[0].islower()


def _read_note (symbol: str, position: int, what: str) -> typing.Tuple[str, int]:

	"""Read a letter and optional accidental at ``position``, rejecting accidental-digit runs."""

	match = ROOT_PATTERN.match(symbol, position)

	if match is None:
		raise comper.errors.InvalidChordName(f"Chord symbol {symbol!r} needs a {what} letter A-G at position {position}")

	end = match.end()

	if match.group(2) and end < len(symbol) and symbol[end].isdigit():
		raise comper.errors.AmbiguousChordName(
			f"Chord symbol {symbol!r} is ambiguous: {match.group(0)!r} is followed directly by a digit. "
			f"Separate the {what} from the alteration with a space."
		)

	return match.group(0), end


def parse_symbol (symbol: str) -> ChordSymbol:

	"""Validate a chord symbol and split it into root, bass, quality and alteration tokens.

	Raises:
		InvalidChordName: If the symbol does not follow the chord grammar.
		AmbiguousChordName: If an accidental could belong to either the root or an alteration.

	Example:
		```python
		parse_symbol("Cm7/G")
		# ChordSymbol(root='C', bass='G', quality='m', tokens=frozenset({'m', '7'}))
		```
	"""

	if not isinstance(symbol, str) or not symbol.strip():
		raise comper.errors.InvalidChordName(f"Chord symbol must be a non-empty string, got {symbol!r}")

	text = symbol.strip()

	root, position = _read_note(text, 0, "root")
	bass: typing.Optional[str] = None
	quality: typing.Optional[str] = None
	tokens: typing.List[str] = []

	while position < len(text):

		char = text[position]

		if char == " ":
			position += 1
			continue

		if char == "/":
			if bass is not None:
				raise comper.errors.InvalidChordName(f"Chord symbol {symbol!r} has more than one slash bass")
			bass, position = _read_note(text, position + 1, "bass")
			continue

		token = next((t for t in _TOKENS_BY_LENGTH if text.startswith(t, position)), None)

		if token is None:
			raise comper.errors.InvalidChordName(
				f"Chord symbol {symbol!r} has an unrecognised token at {text[position:]!r}"
			)

		if token in QUALITY_TOKENS:
			if tokens:
				raise comper.errors.InvalidChordName(
					f"Chord symbol {symbol!r}: quality {token!r} must come directly after the root"
				)
			quality = token

		tokens.append(token)
		position += len(token)

	return ChordSymbol(root=root, bass=bass, quality=quality, tokens=frozenset(tokens))


# ─── Degree rules ───────────────────────────────────────────────

DegreePredicate = typing.Callable[[ChordSymbol], bool]


def _has (*names: str) -> DegreePredicate:

	wanted = frozenset(names)

	return lambda parsed: bool(parsed.tokens & wanted)


def _is_minor (parsed: ChordSymbol) -> bool:

	return parsed.quality is not None or parsed.lowercase_root


def _is_major_seventh (parsed: ChordSymbol) -> bool:

	# A symbol ending in an upper-case note: a bare root, or any root over a slash bass.
	bare = not parsed.tokens and (parsed.bass is not None or not parsed.lowercase_root)

	return bare or bool(parsed.tokens & {"maj", "maj7"})


def _is_diminished (parsed: ChordSymbol) -> bool:

	return parsed.quality == "dim"


# (degree name, default semitones above the root, ordered rules - last match wins)
DEGREE_RULES: typing.List[typing.Tuple[str, int, typing.List[typing.Tuple[DegreePredicate, int]]]] = [
	("second", 2, [(_has("b9", "b2"), 1), (_has("#9", "#2"), 3)]),
	("third", 4, [(_is_minor, 3), (_has("#3"), 5)]),
	("fourth", 5, [(_has("b4", "b11"), 4), (_has("#4", "#11"), 6)]),
	("fifth", 7, [(_has("b5", "dim", "hdim"), 6), (_has("#5", "+", "aug"), 8)]),
	("sixth", 9, [(_has("b6", "b13"), 8), (_has("#6", "#13"), 10)]),
	("seventh", 10, [(_is_major_seventh, 11), (_has("b7"), 10), (_is_diminished, 9)]),
]


def degree_offset (parsed: ChordSymbol, default: int, rules: typing.List[typing.Tuple[DegreePredicate, int]]) -> int:

	"""Return the semitone offset chosen by the last matching rule, or ``default``."""

	offset = default

	for predicate, value in rules:
		if predicate(parsed):
			offset = value

	return offset


class Chord:

	"""A chord symbol resolved into a bass, seven scale degrees, and a voicing.

	The eight derived pitches and the voicing are rebuilt from scratch whenever
	the symbol, octave or voicing degrees change. Duration and velocity are
	copied onto every derived pitch and voicing entry.
	"""

	def __init__ (
		self,
		symbol: str,
		octave: int = DEFAULT_OCTAVE,
		duration: int = comper.constants.durations.QUARTER,
		velocity: int = comper.constants.velocity.DEFAULT_VELOCITY,
		voicing: typing.Sequence[int] = DEFAULT_VOICING
	) -> None:

		"""Parse ``symbol`` and derive its tones.

		Parameters:
			symbol: Chord symbol, e.g. ``"Cmaj7"`` or ``"D-7 b5"``.
			octave: Octave of the bass note (the root sits at or above the bass).
			duration: Note length as a denominator, or a beat count while the
				chord sits in a progression.
			velocity: MIDI velocity for every tone. 0 marks a rest.
			voicing: Degrees to sound, bottom to top. ``9``, ``11`` and ``13``
				fold onto ``2``, ``4`` and ``6``. ``0`` is the bass.
		"""

		self._symbol = symbol
		self._parsed = parse_symbol(symbol)
		self._octave = octave
		self._duration = duration
		self._velocity = velocity
		self._voicing_degrees = self._check_degrees(voicing)
		self._tones: typing.List[comper.pitch.Pitch] = []
		self._voicing: typing.List[comper.pitch.Pitch] = []

		self._rebuild()


	@staticmethod
	def _check_degrees (degrees: typing.Sequence[int]) -> typing.List[int]:

		degrees = list(degrees)

		if not degrees:
			raise ValueError("A voicing needs at least one degree")

		if any(degree < 0 for degree in degrees):
			raise ValueError(f"Voicing degrees cannot be negative: {degrees}")

		return degrees


	def _rebuild (self) -> None:

		self._set_tones()
		self._set_voicing()
		self._apply_dynamics()


	def _set_tones (self) -> None:

		"""Derive the bass and the seven degrees, each measured from the root."""

		parsed = self._parsed

		bass = comper.pitch.Pitch(parsed.bass or parsed.root, self._octave)
		root = comper.pitch.Pitch(parsed.root, self._octave)

		# Slash chords keep the root above the bass.
		if root < bass:
			root.octave = bass.octave + 1

		tones = [bass, root]
		previous = root

		for _, default, rules in DEGREE_RULES:

			tone = root + degree_offset(parsed, default, rules)

			if tone < previous:
				tone += comper.constants.midi_notes.NOTES_PER_OCTAVE

			tones.append(tone)
			previous = tone

		self._tones = tones


	def _set_voicing (self) -> None:

		"""Stack the voicing degrees so each pitch sits strictly above the one below."""

		voicing: typing.List[comper.pitch.Pitch] = []

		for degree in self._voicing_degrees:

			tone = self.degree(degree)

			if voicing:
				while tone <= voicing[-1]:
					tone.octave += 1

			voicing.append(tone)

		self._voicing = voicing


	def _apply_dynamics (self) -> None:

		for tone in self._tones + self._voicing:
			tone.duration = self._duration
			tone.velocity = self._velocity


	# ─── Symbol, octave, and dynamics ───────────────────────────

	@property
	def symbol (self) -> str:

		"""The chord symbol. Assigning re-parses it and rebuilds every tone."""

		return self._symbol


	@symbol.setter
	def symbol (self, symbol: str) -> None:

		self._parsed = parse_symbol(symbol)
		self._symbol = symbol
		self._rebuild()


	@property
	def parsed (self) -> ChordSymbol:

		return self._parsed


	@property
	def octave (self) -> int:

		"""The bass octave. Assigning moves every tone by the octave difference."""

		return self._octave


	@octave.setter
	def octave (self, octave: int) -> None:

		self._octave = octave
		self._rebuild()


	@property
	def duration (self) -> int:

		return self._duration


	@duration.setter
	def duration (self, duration: int) -> None:

		self._duration = duration
		self._apply_dynamics()


	@property
	def velocity (self) -> int:

		return self._velocity


	@velocity.setter
	def velocity (self, velocity: int) -> None:

		self._velocity = velocity
		self._apply_dynamics()


	# ─── Voicing ────────────────────────────────────────────────

	@property
	def voicing_degrees (self) -> typing.List[int]:

		return list(self._voicing_degrees)


	def set_voicing (self, degrees: typing.Sequence[int]) -> None:

		"""Choose which degrees sound, bottom to top, and rebuild the voicing.

		Example:
			```python
			chord = Chord("C7")
			chord.set_voicing([3, 7, 9])
			[str(p) for p in chord.voicing()]  # ["E3", "Bb3", "D4"]
			```
		"""

		self._voicing_degrees = self._check_degrees(degrees)
		self._set_voicing()
		self._apply_dynamics()


	def voicing (self) -> typing.List[comper.pitch.Pitch]:

		"""Return copies of the voiced pitches, lowest first."""

		return [tone.copy() for tone in self._voicing]


	# ─── Degrees ────────────────────────────────────────────────

	def degree (self, number: int) -> comper.pitch.Pitch:

		"""Return a copy of a derived pitch by degree number.

		``0`` is the bass and ``1``-``7`` the scale degrees. Numbers above 7
		fold down by sevens, so ``8`` is the root, ``9`` the second, ``11`` the
		fourth and ``13`` the sixth.
		"""

		if number < 0:
			raise ValueError(f"Degree cannot be negative: {number}")

		while number > 7:
			number -= 7

		return self._tones[number].copy()


	def notes (self) -> typing.List[comper.pitch.Pitch]:

		"""Return copies of the bass and the first through seventh degrees."""

		return [tone.copy() for tone in self._tones]


	def bass (self) -> comper.pitch.Pitch:

		return self.degree(0)


	def first (self) -> comper.pitch.Pitch:

		return self.degree(1)


	def second (self) -> comper.pitch.Pitch:

		return self.degree(2)


	def third (self) -> comper.pitch.Pitch:

		return self.degree(3)


	def fourth (self) -> comper.pitch.Pitch:

		return self.degree(4)


	def fifth (self) -> comper.pitch.Pitch:

		return self.degree(5)


	def sixth (self) -> comper.pitch.Pitch:

		return self.degree(6)


	def seventh (self) -> comper.pitch.Pitch:

		return self.degree(7)


	def root (self) -> comper.pitch.Pitch:

		return self.first()


	def ninth (self) -> comper.pitch.Pitch:

		return self.second()


	def eleventh (self) -> comper.pitch.Pitch:

		return self.fourth()


	def thirteenth (self) -> comper.pitch.Pitch:

		return self.sixth()


	def copy (self) -> "Chord":

		"""Return an independent copy, including the current voicing."""

		return copy.deepcopy(self)


	def __eq__ (self, other: typing.Any) -> bool:

		if not isinstance(other, Chord):
			return NotImplemented

		return [t.number for t in self._tones] == [t.number for t in other._tones]


	def __repr__ (self) -> str:

		return f"Chord({self._symbol!r}, octave={self._octave}, duration={self._duration}, velocity={self._velocity}, voicing={self._voicing_degrees})"


	def __str__ (self) -> str:

		return self._symbol
