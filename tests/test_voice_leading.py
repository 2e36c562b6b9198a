import pytest

import comper.chords
import comper.constants.durations
import comper.pitch
import comper.voice_leading


Pitch = comper.pitch.Pitch
Chord = comper.chords.Chord
UP = comper.voice_leading.UP
DOWN = comper.voice_leading.DOWN


def test_direction_from_char () -> None:

	assert comper.voice_leading.direction_from_char("U") is UP
	assert comper.voice_leading.direction_from_char("D") is DOWN
	assert comper.voice_leading.direction_from_char("x") is DOWN


# ---------------------------------------------------------------------------
# closest_note
# ---------------------------------------------------------------------------

def test_closest_note_respects_direction () -> None:

	c4 = Pitch("C", 4)

	assert comper.voice_leading.closest_note(Pitch("A"), c4, UP).number == 69
	assert comper.voice_leading.closest_note(Pitch("A"), c4, DOWN).number == 57
	assert comper.voice_leading.closest_note(Pitch("D"), c4, UP).number == 62
	assert comper.voice_leading.closest_note(Pitch("D"), c4, DOWN).number == 50


def test_closest_note_ignores_the_target_octave () -> None:

	result = comper.voice_leading.closest_note(Pitch("C", 4), Pitch("D", 5), UP)

	assert result.number == 84


def test_closest_note_unison_is_returned_as_is () -> None:

	assert comper.voice_leading.closest_note(Pitch("C", 1), Pitch("C", 4), UP).number == 60
	assert comper.voice_leading.closest_note(Pitch("C", 1), Pitch("C", 4), DOWN).number == 60


def test_is_between_is_strict () -> None:

	low = Pitch("C", 4)
	high = Pitch("G", 4)

	assert comper.voice_leading.is_between(Pitch("E", 4), low, high)
	assert comper.voice_leading.is_between(Pitch("E", 4), high, low)
	assert not comper.voice_leading.is_between(Pitch("G", 4), low, high)
	assert not comper.voice_leading.is_between(Pitch("A", 4), low, high)


# ---------------------------------------------------------------------------
# closest_chord_tone
# ---------------------------------------------------------------------------

def test_closest_chord_tone_skips_unisons () -> None:

	chord = Chord("Cmaj7")
	c4 = Pitch("C", 4)

	assert comper.voice_leading.closest_chord_tone(c4, chord, UP).number == 64
	assert comper.voice_leading.closest_chord_tone(c4, chord, DOWN).number == 59


def test_closest_chord_tone_falls_back_to_the_octave () -> None:

	chord = Chord("C", voicing=[1])
	c4 = Pitch("C", 4)

	assert comper.voice_leading.closest_chord_tone(c4, chord, UP).number == 72
	assert comper.voice_leading.closest_chord_tone(c4, chord, DOWN).number == 48


def test_closest_chord_tone_keeps_the_input_dynamics () -> None:

	pitch = Pitch("D", 4, duration=comper.constants.durations.EIGHTH, velocity=33)
	result = comper.voice_leading.closest_chord_tone(pitch, Chord("C"), UP)

	assert result.number == 64
	assert result.duration == comper.constants.durations.EIGHTH
	assert result.velocity == 33


def test_nth_closest_chord_tone () -> None:

	chord = Chord("C", voicing=[1, 3, 5])
	c4 = Pitch("C", 4)

	assert comper.voice_leading.nth_closest_chord_tone(c4, chord, UP, 1).number == 64
	assert comper.voice_leading.nth_closest_chord_tone(c4, chord, UP, 2).number == 67
	assert comper.voice_leading.nth_closest_chord_tone(c4, chord, DOWN, 3).number == 48
	assert comper.voice_leading.nth_closest_chord_tone(c4, chord, UP, 0).number == 60


# ---------------------------------------------------------------------------
# closest_leading_note
# ---------------------------------------------------------------------------

def test_leading_note_chromatic_approach_to_a_whole_step () -> None:

	"""A target a whole step away is approached from the semitone before it."""

	c_major = Chord("C")

	assert comper.voice_leading.closest_leading_note(Pitch("C", 3), Pitch("D"), c_major, UP).name == "Db"
	assert comper.voice_leading.closest_leading_note(Pitch("C", 3), Pitch("D"), c_major, UP).number == 49
	assert comper.voice_leading.closest_leading_note(Pitch("E", 3), Pitch("D"), c_major, DOWN).number == 51


def test_leading_note_minor_seventh_is_not_a_whole_step () -> None:

	"""From C3 up to Bb3 the fifth candidate F3 wins, not the chromatic A3."""

	result = comper.voice_leading.closest_leading_note(Pitch("C", 3), Pitch("Bb", 3), Chord("C7"), UP)

	assert result.number != 57
	assert result.number == 53


def test_leading_note_from_a_unison_leaps () -> None:

	c_major = Chord("C")

	assert comper.voice_leading.closest_leading_note(Pitch("C", 3), Pitch("C"), c_major, UP).number == 55
	assert comper.voice_leading.closest_leading_note(Pitch("C", 3), Pitch("C"), c_major, DOWN).number == 43


def test_leading_note_prefers_a_tone_between () -> None:

	"""From E3 toward G, F3 lies between and beats any fifth candidate."""

	result = comper.voice_leading.closest_leading_note(Pitch("E", 3), Pitch("G"), Chord("C"), UP)

	assert result.number == 53


def test_leading_note_takes_a_nearer_fifth () -> None:

	"""From F2 up to C, G2 (a fourth below C3) is nearer than any neighbour."""

	result = comper.voice_leading.closest_leading_note(Pitch("F", 2), Pitch("C"), Chord("F"), UP)

	assert result.number == 43


def test_leading_note_carries_current_dynamics () -> None:

	current = Pitch("C", 3, duration=comper.constants.durations.HALF, velocity=90)
	result = comper.voice_leading.closest_leading_note(current, Pitch("F"), Chord("C"), UP)

	assert result.duration == comper.constants.durations.HALF
	assert result.velocity == 90


# ---------------------------------------------------------------------------
# voice_lead
# ---------------------------------------------------------------------------

def test_voice_lead_picks_the_smoothest_voicing () -> None:

	chord = Chord("F")
	comper.voice_leading.voice_lead(chord, Chord("C"), [[1, 3, 5], [3, 5, 8]], DOWN)

	assert chord.voicing_degrees == [3, 5, 8]
	assert chord.octave == 2
	assert chord.voicing()[-1].number == 53


def test_voice_lead_result_does_not_depend_on_candidate_order () -> None:

	forward = Chord("F")
	backward = Chord("F")

	comper.voice_leading.voice_lead(forward, Chord("C"), [[1, 3, 5], [3, 5, 8]], DOWN)
	comper.voice_leading.voice_lead(backward, Chord("C"), [[3, 5, 8], [1, 3, 5]], DOWN)

	assert forward.voicing_degrees == backward.voicing_degrees
	assert forward.octave == backward.octave


def test_voice_lead_moves_in_the_requested_direction () -> None:

	"""Leading C up from a G top note puts the top C above it."""

	reference = Chord("G", octave=4, voicing=[1])
	chord = Chord("C", voicing=[1, 3, 8])

	comper.voice_leading.voice_lead(chord, reference, [[1, 3, 8]], UP)
	assert chord.voicing()[-1].number == 72

	comper.voice_leading.voice_lead(chord, reference, [[1, 3, 8]], DOWN)
	assert chord.voicing()[-1].number == 60


def test_voice_lead_without_candidates_raises () -> None:

	with pytest.raises(ValueError):
		comper.voice_leading.voice_lead(Chord("C"), Chord("F"), [], UP)


def test_voice_lead_tie_goes_to_the_earliest_candidate () -> None:

	reference = Chord("G", octave=4, voicing=[1])

	first = Chord("C")
	comper.voice_leading.voice_lead(first, reference, [[1, 3, 5], [3, 5]], DOWN)

	second = Chord("C")
	comper.voice_leading.voice_lead(second, reference, [[3, 5], [1, 3, 5]], DOWN)

	assert first.voicing_degrees == [1, 3, 5]
	assert second.voicing_degrees == [3, 5]
	assert first.voicing()[-1].number == second.voicing()[-1].number == 67
