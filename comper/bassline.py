"""Grammar-driven walking basslines.

A bassline is one quarter note per beat. For every chord a pattern grammar
supplies one symbol per beat and a direction grammar supplies ``U``/``D``
steps. The last beat of each chord is always a leading tone into the next
chord's bass.

Pattern symbols:

- ``0``-``8``: the chord degree with that number (``0`` is the bass, ``8`` the
  root), taken directly if it is within a whole step, otherwise in the
  current direction.
- ``A`` / ``C``: the next chord tone (1, 3, 5, 7) in the current direction.
- ``F``: the second-next chord tone.
- ``S``: the next scale tone (1-7).
- ``O``: an octave jump.
- ``R``: repeat the previous pitch.
"""

import logging
import typing

import comper.chords
import comper.constants.durations
import comper.constants.midi_notes
import comper.constants.velocity
import comper.errors
import comper.grammar
import comper.pitch
import comper.voice_leading


logger = logging.getLogger(__name__)

DEGREE_SYMBOLS = "012345678"
CHORD_TONE_SYMBOLS = "ACF"

# Direction characters pushed in front of the remaining steps when the line leaves its range.
TURN_DOWN = "DDDD"
TURN_UP = "UUUU"


def gen_simple_walking_bassline (
	progression: typing.Sequence[comper.chords.Chord],
	pattern_grammar: comper.grammar.ProbabilisticGrammar,
	direction_grammar: comper.grammar.ProbabilisticGrammar,
	lowest: comper.pitch.Pitch,
	highest: comper.pitch.Pitch,
	velocity: int = comper.constants.velocity.DEFAULT_VELOCITY
) -> typing.List[comper.pitch.Pitch]:

	"""Generate a walking bassline over a progression.

	Parameters:
		progression: Chords whose ``duration`` is their length in quarter-note beats.
			The chords are copied, never modified.
		pattern_grammar: Produces pattern symbols (see the module docstring).
		direction_grammar: Produces ``U``/``D`` direction strings.
		lowest: Once the line falls below this pitch it turns upward.
		highest: Once the line rises above this pitch it turns downward.
		velocity: Velocity of every note.

	Returns:
		Quarter notes for every beat of the progression, ending with the
		opening pitch restated as a whole note. The line loops: the last chord
		leads back into the first.

	Raises:
		InvalidBounds: If ``lowest`` is above ``highest``.
		ShortGeneratedOutput: If a grammar yields fewer than ``beats - 1`` symbols for a chord.
		IllegalPatternSymbol: If the pattern holds a symbol outside the pattern alphabet.

	Example:
		```python
		bassline = gen_simple_walking_bassline(
			progression, patterns, directions,
			lowest=Pitch("C", 2), highest=Pitch("G", 2),
		)
		```
	"""

	if lowest > highest:
		raise comper.errors.InvalidBounds(f"Lowest bound {lowest} is above highest bound {highest}")

	if not progression:
		raise ValueError("Progression cannot be empty")

	chords = [chord.copy() for chord in progression]

	# Loop back to the first chord so the last one has somewhere to lead.
	chords.append(chords[0].copy())

	bassline: typing.List[comper.pitch.Pitch] = []

	for chord, following in zip(chords, chords[1:]):

		beats = int(chord.duration)

		if beats < 1:
			raise ValueError(f"Chord {chord.symbol} must last at least one beat, got {chord.duration}")

		pattern = pattern_grammar.generate_string(beats)
		directions = direction_grammar.generate_string(beats)

		if len(pattern) < beats - 1 or len(directions) < beats - 1:
			raise comper.errors.ShortGeneratedOutput(
				f"Chord {chord.symbol} lasts {beats} beats but the grammars produced "
				f"{len(pattern)} pattern and {len(directions)} direction symbols"
			)

		logger.debug(f"{chord.symbol}: pattern {pattern!r}, directions {directions!r}")

		for i in range(beats - 1):

			if not bassline:
				bassline.append(_opening_pitch(chord, lowest, highest, velocity))
				continue

			previous = bassline[-1]

			if previous > highest:
				directions = directions[:i] + TURN_DOWN + directions[i:]

			elif previous < lowest:
				directions = directions[:i] + TURN_UP + directions[i:]

			direction = comper.voice_leading.direction_from_char(directions[i])
			step = _next_pitch(pattern[i], previous, chord, direction)

			step.duration = comper.constants.durations.QUARTER
			step.velocity = velocity
			bassline.append(step)

		# A one-beat opening chord has room for the opening pitch only.
		if not bassline:
			bassline.append(_opening_pitch(chord, lowest, highest, velocity))
			continue

		lead_direction = comper.voice_leading.direction_from_char(
			directions[beats - 1] if len(directions) >= beats else directions[-1:]
		)

		leading = comper.voice_leading.closest_leading_note(bassline[-1], following.bass(), chord, lead_direction)
		leading.duration = comper.constants.durations.QUARTER
		leading.velocity = velocity
		bassline.append(leading)

	closing = bassline[0].copy()
	closing.duration = comper.constants.durations.WHOLE
	bassline.append(closing)

	return bassline


def _opening_pitch (
	chord: comper.chords.Chord,
	lowest: comper.pitch.Pitch,
	highest: comper.pitch.Pitch,
	velocity: int
) -> comper.pitch.Pitch:

	"""The first chord's bass, in the octave halfway between the bounds."""

	start = chord.bass()
	start.octave = (lowest.octave + highest.octave) // 2
	start.duration = comper.constants.durations.QUARTER
	start.velocity = velocity

	return start


def _next_pitch (
	symbol: str,
	previous: comper.pitch.Pitch,
	chord: comper.chords.Chord,
	direction: bool
) -> comper.pitch.Pitch:

	"""Interpret one pattern symbol relative to the previous bass pitch."""

	if symbol in DEGREE_SYMBOLS:

		tone = previous.closest(chord.degree(int(symbol)).name)

		# Near enough to step straight there, otherwise honour the direction.
		if tone.distance(previous) <= comper.voice_leading.WHOLE_STEP:
			return tone

		return comper.voice_leading.closest_note(tone, previous, direction)

	if symbol in CHORD_TONE_SYMBOLS:
		chord.set_voicing(comper.chords.CHORD_TONES)
		steps = 2 if symbol == "F" else 1
		return comper.voice_leading.nth_closest_chord_tone(previous, chord, direction, steps)

	if symbol == "S":
		chord.set_voicing(comper.chords.SCALE_TONES)
		return comper.voice_leading.closest_chord_tone(previous, chord, direction)

	if symbol == "O":
		octave = comper.constants.midi_notes.NOTES_PER_OCTAVE
		return previous + octave if direction else previous - octave

	if symbol == "R":
		return previous.copy()

	raise comper.errors.IllegalPatternSymbol(
		f"Illegal bass pattern symbol {symbol!r}. Expected 0-8, A, C, F, S, O or R"
	)
