"""Named pitches with octave, duration, and velocity.

A :class:`Pitch` keeps two representations in step: a spelled name
(``"C"``, ``"F#"``, ``"Bbb"``) with an octave, and an absolute semitone
number on the MIDI scale (C4 = 60). Assigning either side recomputes the
other, so a pitch is never stale.

Pitches built from a number are spelled with the natural name when one
exists, otherwise with the flat of the natural above::

    Pitch.from_number(60).name   # "C"
    Pitch.from_number(61).name   # "Db"

Comparison operators look at the absolute number only, so ``Pitch("C#", 4)``
equals ``Pitch("Db", 4)``.
"""

import copy
import re
import typing

import comper.constants.durations
import comper.constants.midi_notes
import comper.constants.velocity
import comper.errors


NAME_PATTERN = re.compile(r"([A-Ga-g])(##|#|bb|b)?")


def parse_name (name: str) -> typing.Tuple[str, str]:

	"""Split a pitch name into an upper-case letter and an accidental.

	Raises:
		InvalidName: If the name is not a letter A-G (either case) followed by
			an optional single or double sharp or flat.

	Example:
		```python
		parse_name("c#")   # → ("C", "#")
		parse_name("Bbb")  # → ("B", "bb")
		```
	"""

	match = NAME_PATTERN.fullmatch(name) if isinstance(name, str) else None

	if match is None:
		raise comper.errors.InvalidName(
			f"Invalid pitch name: {name!r}. Expected a letter A-G with an optional #, ##, b or bb."
		)

	return match.group(1).upper(), match.group(2) or ""


def name_to_number (name: str, octave: int) -> int:

	"""Return the absolute semitone number of a spelled pitch in an octave."""

	letter, accidental = parse_name(name)

	pitch_class = comper.constants.midi_notes.NATURAL_PITCH_CLASSES[letter]
	offset = comper.constants.midi_notes.ACCIDENTAL_OFFSETS[accidental]

	return comper.constants.midi_notes.NOTES_PER_OCTAVE * (octave + 1) + pitch_class + offset


def number_to_name (number: int) -> str:

	"""Spell an absolute semitone number, preferring naturals and then flats."""

	pitch_class = number % comper.constants.midi_notes.NOTES_PER_OCTAVE
	naturals = comper.constants.midi_notes.PITCH_CLASS_NATURALS

	if pitch_class in naturals:
		return naturals[pitch_class]

	# Every non-natural pitch class sits a semitone below a natural one.
	return naturals[pitch_class + 1] + "b"


def number_to_octave (number: int) -> int:

	"""Return the scientific octave that contains an absolute semitone number."""

	return number // comper.constants.midi_notes.NOTES_PER_OCTAVE - 1


SCIENTIFIC_PATTERN = re.compile(r"([A-Ga-g](?:##|#|bb|b)?)(-?[0-9]+)")


def parse_pitch (text: str) -> "Pitch":

	"""Read a pitch written in scientific notation.

	Raises:
		InvalidName: If the text is not a pitch name followed by an octave number.

	Example:
		```python
		parse_pitch("G4").number    # 67
		parse_pitch("Bb2").number   # 46
		```
	"""

	match = SCIENTIFIC_PATTERN.fullmatch(text.strip()) if isinstance(text, str) else None

	if match is None:
		raise comper.errors.InvalidName(f"Invalid pitch: {text!r}. Expected a name and an octave, e.g. 'C4' or 'Bb2'.")

	return Pitch(match.group(1), int(match.group(2)))


class Pitch:

	"""A spelled pitch with an octave, a duration denominator, and a velocity."""

	def __init__ (
		self,
		name: str = "C",
		octave: int = comper.constants.midi_notes.MIDDLE_OCTAVE,
		duration: int = comper.constants.durations.QUARTER,
		velocity: int = comper.constants.velocity.DEFAULT_VELOCITY
	) -> None:

		"""Create a pitch from its name and octave.

		Parameters:
			name: Letter A-G (either case) with an optional ``#``, ``##``, ``b`` or ``bb``.
			octave: Scientific octave (4 holds Middle C).
			duration: Note length as a denominator (4 = quarter note, 8 = eighth).
			velocity: MIDI velocity 0-127. 0 marks a rest.
		"""

		letter, accidental = parse_name(name)

		self._name = letter + accidental
		self._octave = octave
		self._number = name_to_number(self._name, octave)
		self.duration = duration
		self.velocity = velocity


	@classmethod
	def from_number (
		cls,
		number: int,
		duration: int = comper.constants.durations.QUARTER,
		velocity: int = comper.constants.velocity.DEFAULT_VELOCITY
	) -> "Pitch":

		"""Create a pitch from an absolute semitone number (60 = Middle C)."""

		return cls(number_to_name(number), number_to_octave(number), duration, velocity)


	@property
	def name (self) -> str:

		"""The spelled name, e.g. ``"F#"``. Assigning keeps the octave."""

		return self._name


	@name.setter
	def name (self, name: str) -> None:

		letter, accidental = parse_name(name)

		self._name = letter + accidental
		self._number = name_to_number(self._name, self._octave)


	@property
	def number (self) -> int:

		"""The absolute semitone number. Assigning respells the pitch and moves its octave."""

		return self._number


	@number.setter
	def number (self, number: int) -> None:

		self._number = number
		self._name = number_to_name(number)
		self._octave = number_to_octave(number)


	@property
	def octave (self) -> int:

		"""The octave the name is spelled in. Assigning keeps the name."""

		return self._octave


	@octave.setter
	def octave (self, octave: int) -> None:

		self._octave = octave
		self._number = name_to_number(self._name, octave)


	def copy (self) -> "Pitch":

		"""Return an independent copy of this pitch."""

		return copy.copy(self)


	def distance (self, other: "Pitch") -> int:

		"""Return the absolute number of semitones between two pitches."""

		return abs(other.number - self._number)


	def shortest_distance (self, other: "Pitch") -> int:

		"""Return the distance between the pitch classes, folded onto the shorter arc (0-6).

		Example:
			```python
			Pitch("C", 4).shortest_distance(Pitch("B", 5))   # → 1
			Pitch("C", 4).shortest_distance(Pitch("Bb", 4))  # → 2
			```
		"""

		notes_per_octave = comper.constants.midi_notes.NOTES_PER_OCTAVE
		folded = self.distance(other) % notes_per_octave

		return min(folded, notes_per_octave - folded)


	def closest (self, name: str) -> "Pitch":

		"""Return the pitch spelled ``name`` that lies nearest to this pitch.

		The candidate starts in this pitch's octave and moves one octave
		toward this pitch only if it is more than half an octave away, so a
		tritone keeps the candidate's octave.

		Example:
			```python
			Pitch("C", 4).closest("B")   # → B3
			Pitch("C", 4).closest("G")   # → G3
			Pitch("C", 4).closest("F#")  # → F#4 (a tritone, octave unchanged)
			```
		"""

		half_octave = comper.constants.midi_notes.NOTES_PER_OCTAVE // 2
		candidate = Pitch(name, self._octave, self.duration, self.velocity)

		if candidate.number < self._number - half_octave:
			candidate.octave += 1

		elif candidate.number > self._number + half_octave:
			candidate.octave -= 1

		return candidate


	def __add__ (self, semitones: int) -> "Pitch":

		return Pitch.from_number(self._number + semitones, self.duration, self.velocity)


	def __sub__ (self, semitones: int) -> "Pitch":

		return Pitch.from_number(self._number - semitones, self.duration, self.velocity)


	def _compare_value (self, other: typing.Any) -> typing.Optional[int]:

		if isinstance(other, Pitch):
			return other.number

		if isinstance(other, int) and not isinstance(other, bool):
			return other

		return None


	def __eq__ (self, other: typing.Any) -> bool:

		value = self._compare_value(other)

		if value is None:
			return NotImplemented

		return self._number == value


	def __lt__ (self, other: typing.Any) -> bool:

		value = self._compare_value(other)

		if value is None:
			return NotImplemented

		return self._number < value


	def __le__ (self, other: typing.Any) -> bool:

		value = self._compare_value(other)

		if value is None:
			return NotImplemented

		return self._number <= value


	def __gt__ (self, other: typing.Any) -> bool:

		value = self._compare_value(other)

		if value is None:
			return NotImplemented

		return self._number > value


	def __ge__ (self, other: typing.Any) -> bool:

		value = self._compare_value(other)

		if value is None:
			return NotImplemented

		return self._number >= value


	def __repr__ (self) -> str:

		return f"Pitch({self._name!r}, {self._octave}, duration={self.duration}, velocity={self.velocity})"


	def __str__ (self) -> str:

		return f"{self._name}{self._octave}"
