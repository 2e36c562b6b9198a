"""Grammar-driven chord comping.

Every chord of a progression is re-voiced so its top note moves smoothly
from the previous chord's, then sounded in a rhythm drawn from a grammar.
At the start of every four bars the voicing is led downward from a fixed
reference pitch instead, which stops the top voice drifting out of range.

Rhythm symbols:

- ``1`` / ``2`` / ``4`` / ``8``: a whole, half, quarter or eighth note.
- ``q`` / ``e``: a quarter or eighth rest (letters are rests).
"""

import logging
import typing

import comper.chords
import comper.constants.durations
import comper.constants.velocity
import comper.errors
import comper.grammar
import comper.pitch
import comper.voice_leading


logger = logging.getLogger(__name__)

RHYTHM_DURATIONS: typing.Dict[str, int] = {
	"1": comper.constants.durations.WHOLE,
	"2": comper.constants.durations.HALF,
	"4": comper.constants.durations.QUARTER,
	"q": comper.constants.durations.QUARTER,
	"8": comper.constants.durations.EIGHTH,
	"e": comper.constants.durations.EIGHTH,
}

EIGHTHS_PER_BEAT = 2

# Re-voice from the reference pitch every four 4/4 bars.
RESET_BEATS = 4 * comper.constants.durations.BEATS_PER_BAR


def gen_comping (
	progression: typing.Sequence[comper.chords.Chord],
	rhythm_grammar: comper.grammar.ProbabilisticGrammar,
	direction_grammar: comper.grammar.ProbabilisticGrammar,
	candidate_voicings: typing.Sequence[typing.Sequence[int]],
	reference_pitch: comper.pitch.Pitch,
	velocity: int = comper.constants.velocity.DEFAULT_VELOCITY
) -> typing.List[comper.chords.Chord]:

	"""Generate a comping part over a progression.

	Parameters:
		progression: Chords whose ``duration`` is their length in quarter-note beats.
			The chords are copied, never modified.
		rhythm_grammar: Produces rhythm symbols (see the module docstring).
		direction_grammar: Produces one ``U``/``D`` per chord for voice leading.
		candidate_voicings: Degree lists to choose from, e.g. ``[[3, 6, 7, 9], [7, 9, 3, 5]]``.
		reference_pitch: Top-note anchor used at the start of every four bars.
		velocity: Velocity of every sounded chord. Rests have velocity 0.

	Returns:
		One chord event per rhythm symbol, each with its ``duration`` set to
		the note length, followed by the first chord again as a whole note.

	Raises:
		ShortGeneratedOutput: If a grammar runs out of symbols.
		IllegalPatternSymbol: If the rhythm holds an unknown symbol.
	"""

	if not progression:
		raise ValueError("Progression cannot be empty")

	reference = comper.pitch.Pitch.from_number(reference_pitch.number)
	reference_chord = comper.chords.Chord(reference.name, octave=reference.octave, voicing=[1])

	chords = [chord.copy() for chord in progression]
	total_beats = sum(int(chord.duration) for chord in chords)

	rhythm = rhythm_grammar.generate_string(total_beats + 1)
	directions = direction_grammar.generate_string(total_beats + 1)

	logger.debug(f"Comping rhythm {rhythm!r}, directions {directions!r}")

	if len(directions) < len(chords):
		raise comper.errors.ShortGeneratedOutput(
			f"The direction grammar produced {len(directions)} symbols for {len(chords)} chords"
		)

	events: typing.List[comper.chords.Chord] = []
	rhythm_index = 0
	elapsed_eighths = 0
	elapsed_beats = 0

	for index, chord in enumerate(chords):

		if elapsed_beats % RESET_BEATS == 0:
			comper.voice_leading.voice_lead(chord, reference_chord, candidate_voicings, comper.voice_leading.DOWN)

		else:
			direction = comper.voice_leading.direction_from_char(directions[index])
			comper.voice_leading.voice_lead(chord, chords[index - 1], candidate_voicings, direction)

		chord_eighths = int(chord.duration) * EIGHTHS_PER_BEAT

		while elapsed_eighths < chord_eighths:

			if rhythm_index >= len(rhythm):
				raise comper.errors.ShortGeneratedOutput(
					f"The rhythm grammar ran out after {len(rhythm)} symbols at chord {chord.symbol}"
				)

			symbol = rhythm[rhythm_index]
			rhythm_index += 1

			if symbol not in RHYTHM_DURATIONS:
				raise comper.errors.IllegalPatternSymbol(
					f"Illegal rhythm symbol {symbol!r}. Expected one of {''.join(RHYTHM_DURATIONS)}"
				)

			length = RHYTHM_DURATIONS[symbol]
			elapsed_eighths += comper.constants.durations.EIGHTH // length

			event = chord.copy()
			event.duration = length
			event.velocity = comper.constants.velocity.REST_VELOCITY if symbol.isalpha() else velocity
			events.append(event)

		# Anything played past the chord's end is taken from the next chord's share.
		elapsed_eighths -= chord_eighths
		elapsed_beats += int(chord.duration)

	cadence = chords[0].copy()
	cadence.duration = comper.constants.durations.WHOLE
	cadence.velocity = velocity
	events.append(cadence)

	return events
