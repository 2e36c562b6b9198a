"""Directional pitch searches and top-voice voice leading.

These helpers move a line from one pitch to the next while respecting a
requested direction. A direction is a boolean: :data:`UP` (``True``) or
:data:`DOWN` (``False``). Direction strings produced by a grammar use ``U``
for up and any other character for down.

Example:
	```python
	import comper.chords
	import comper.pitch
	import comper.voice_leading as vl

	c4 = comper.pitch.Pitch("C", 4)

	vl.closest_note(comper.pitch.Pitch("A"), c4, vl.UP)     # A4
	vl.closest_note(comper.pitch.Pitch("A"), c4, vl.DOWN)   # A3

	# Walking toward D from C over a C chord: a chromatic approach
	vl.closest_leading_note(c4, comper.pitch.Pitch("D", 4), comper.chords.Chord("C"), vl.UP)  # Db4
	```
"""

import typing

import comper.chords
import comper.constants.midi_notes
import comper.pitch


UP = True
DOWN = False

PERFECT_FIFTH = 7
PERFECT_FOURTH = 5
WHOLE_STEP = 2


def direction_from_char (char: str) -> bool:

	"""Read one character of a direction string: ``U`` is up, anything else down."""

	return char == "U"


def closest_note (target: comper.pitch.Pitch, reference: comper.pitch.Pitch, direction: bool) -> comper.pitch.Pitch:

	"""Return the pitch spelled like ``target`` nearest ``reference`` on the ``direction`` side.

	The nearest same-named pitch is moved one octave when it lies on the
	wrong side of ``reference``. A unison with ``reference`` is returned as is.

	Example:
		```python
		# C4 and D5 going up: the C above D5
		closest_note(Pitch("C", 4), Pitch("D", 5), UP)   # C6
		```
	"""

	result = reference.closest(target.name)

	if result == reference:
		return result

	if (result > reference) != direction:
		result.octave += 1 if direction else -1

	return result


def is_between (pitch: comper.pitch.Pitch, bound_a: comper.pitch.Pitch, bound_b: comper.pitch.Pitch) -> bool:

	"""Return ``True`` if ``pitch`` lies strictly between the two bounds."""

	return min(bound_a.number, bound_b.number) < pitch.number < max(bound_a.number, bound_b.number)


def closest_chord_tone (pitch: comper.pitch.Pitch, chord: comper.chords.Chord, direction: bool) -> comper.pitch.Pitch:

	"""Return the nearest tone of ``chord``'s voicing on the ``direction`` side of ``pitch``.

	Unisons with ``pitch`` are skipped. If every voiced tone is a unison,
	the octave of ``pitch`` in ``direction`` is returned.
	"""

	best: typing.Optional[comper.pitch.Pitch] = None

	for tone in chord.voicing():

		candidate = closest_note(tone, pitch, direction)

		if candidate.number == pitch.number:
			continue

		if best is None or candidate.distance(pitch) < best.distance(pitch):
			best = candidate

	if best is None:
		octave = comper.constants.midi_notes.NOTES_PER_OCTAVE
		best = pitch + octave if direction else pitch - octave

	best.duration = pitch.duration
	best.velocity = pitch.velocity

	return best


def nth_closest_chord_tone (pitch: comper.pitch.Pitch, chord: comper.chords.Chord, direction: bool, n: int) -> comper.pitch.Pitch:

	"""Step ``n`` chord tones away from ``pitch`` in ``direction``."""

	current = pitch.copy()

	for _ in range(n):
		current = closest_chord_tone(current, chord, direction)

	return current


def closest_leading_note (
	current: comper.pitch.Pitch,
	next_pitch: comper.pitch.Pitch,
	chord: comper.chords.Chord,
	direction: bool
) -> comper.pitch.Pitch:

	"""Pick a pitch that leads smoothly from ``current`` into ``next_pitch``.

	``next_pitch`` is first moved to the nearest octave on the ``direction``
	side of ``current`` (its own octave is ignored). Then:

	- If it equals ``current``, return a fifth above or a fourth below.
	- If it is a whole step away, return the chromatic neighbour a semitone
	  before it (below when moving up, above when moving down).
	- Otherwise compare two candidates: a chord tone a fifth above ``next_pitch``
	  (a fourth below counts too) that is not ``current`` itself, and the chord
	  tone nearest ``next_pitch``, preferring tones between the two pitches.
	  The candidate nearer ``current`` wins, the neighbour on a tie.

	The result carries ``current``'s duration and velocity.

	Example:
		```python
		c_major = Chord("C")
		closest_leading_note(Pitch("C", 3), Pitch("D"), c_major, UP)    # Db3
		closest_leading_note(Pitch("E", 3), Pitch("G"), c_major, UP)    # F3
		closest_leading_note(Pitch("C", 3), Pitch("C"), c_major, UP)    # G3
		```
	"""

	target = closest_note(next_pitch, current, direction)

	if target == current:
		result = current + PERFECT_FIFTH if direction else current - PERFECT_FOURTH

	elif current.distance(target) == WHOLE_STEP:
		result = target - 1 if direction else target + 1

	else:
		result = _leading_candidate(current, target, chord, direction)

	result.duration = current.duration
	result.velocity = current.velocity

	return result


def _leading_candidate (
	current: comper.pitch.Pitch,
	target: comper.pitch.Pitch,
	chord: comper.chords.Chord,
	direction: bool
) -> comper.pitch.Pitch:

	fifth: typing.Optional[comper.pitch.Pitch] = None
	neighbour: typing.Optional[comper.pitch.Pitch] = None

	def neighbour_key (tone: comper.pitch.Pitch) -> typing.Tuple[bool, int]:
		return (not is_between(tone, current, target), tone.distance(target))

	for tone in chord.notes():

		tone = closest_note(tone, current, direction)

		if tone.shortest_distance(target) > 0 and tone.shortest_distance(current) > 0:
			if neighbour is None or neighbour_key(tone) < neighbour_key(neighbour):
				neighbour = tone

		if tone.number - target.number in (PERFECT_FIFTH, -PERFECT_FOURTH) and tone.number != current.number:
			fifth = tone

	if neighbour is None:
		return fifth.copy() if fifth is not None else target.copy()

	if fifth is not None and fifth.distance(current) < neighbour.distance(current):
		return fifth

	return neighbour


def voice_lead (
	chord: comper.chords.Chord,
	reference: comper.chords.Chord,
	candidate_voicings: typing.Sequence[typing.Sequence[int]],
	direction: bool
) -> None:

	"""Re-voice ``chord`` in place so its top note moves smoothly from ``reference``'s.

	Each candidate voicing is tried in turn. Its top note is moved to the
	octave nearest ``reference``'s top note, then one octave further if it
	landed on the wrong side of ``direction``. The voicing and octave with the
	smallest top-note distance win; the earliest candidate wins a tie.

	Raises:
		ValueError: If no candidate voicings are given.

	Example:
		```python
		# Cmaj7 voiced C3 E3 G3 B3; lead F major down from B3
		chord = Chord("F")
		voice_lead(chord, Chord("C"), [[1, 3, 5], [3, 5, 8]], DOWN)
		chord.voicing_degrees   # [3, 5, 8]  (top F3, a tritone below B3)
		chord.octave            # 2
		```
	"""

	if not candidate_voicings:
		raise ValueError("voice_lead needs at least one candidate voicing")

	reference_top = reference.voicing()[-1]

	best_distance: typing.Optional[int] = None
	best_voicing: typing.Sequence[int] = candidate_voicings[0]
	best_octave = chord.octave

	for voicing in candidate_voicings:

		chord.set_voicing(voicing)

		top = chord.voicing()[-1]
		aligned = reference_top.closest(top.name)
		chord.octave = chord.octave + aligned.octave - top.octave

		top = chord.voicing()[-1]

		if top != reference_top and (top > reference_top) != direction:
			chord.octave = chord.octave + (1 if direction else -1)

		distance = chord.voicing()[-1].distance(reference_top)

		if best_distance is None or distance < best_distance:
			best_distance = distance
			best_voicing = voicing
			best_octave = chord.octave

	chord.set_voicing(best_voicing)
	chord.octave = best_octave
