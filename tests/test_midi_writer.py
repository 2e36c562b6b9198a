import pathlib
import typing

import mido
import pytest

import comper.chords
import comper.constants.gm_drums
import comper.midi_writer
import comper.pitch


Pitch = comper.pitch.Pitch


def note_events (track: mido.MidiTrack) -> typing.List[typing.Tuple[str, int, int]]:

	"""(type, note, delta time) for every note message in a track."""

	return [(m.type, m.note, m.time) for m in track if m.type in ("note_on", "note_off")]


def save_and_read (writer: comper.midi_writer.MidiWriter, tmp_path: pathlib.Path) -> mido.MidiFile:

	path = tmp_path / "out.mid"
	writer.save(str(path))
	return mido.MidiFile(str(path))


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

def test_straight_durations () -> None:

	writer = comper.midi_writer.MidiWriter(ticks_per_beat=120)

	assert writer.ticks_for(1) == 480
	assert writer.ticks_for(2) == 240
	assert writer.ticks_for(4) == 120
	assert writer.ticks_for(8) == 60
	assert writer.ticks_for(16) == 30


def test_swung_eighths () -> None:

	"""On-beat eighths take the long share of the beat, off-beat eighths the rest."""

	writer = comper.midi_writer.MidiWriter(ticks_per_beat=120, swing=2 / 3)

	assert writer.ticks_for(8, 0) == 80
	assert writer.ticks_for(8, 80) == 40
	assert writer.ticks_for(8, 240) == 80
	assert writer.ticks_for(4, 80) == 120
	assert writer.ticks_for(16, 0) == 30


@pytest.mark.parametrize("kwargs", [{"bpm": 0}, {"swing": 1.0}, {"swing": 0}, {"ticks_per_beat": 0}])
def test_invalid_settings_raise (kwargs: dict) -> None:

	with pytest.raises(ValueError):
		comper.midi_writer.MidiWriter(**kwargs)


def test_invalid_duration_raises () -> None:

	with pytest.raises(ValueError):
		comper.midi_writer.MidiWriter().ticks_for(0)


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------

def test_note_track_round_trip (tmp_path: pathlib.Path) -> None:

	"""Each track opens with tempo and program, then plays its notes back to back."""

	writer = comper.midi_writer.MidiWriter(bpm=140)
	writer.add_notes([Pitch("C", 4), Pitch("D", 4, duration=8)], instrument=34)

	midi_file = save_and_read(writer, tmp_path)

	assert midi_file.ticks_per_beat == 120
	assert len(midi_file.tracks) == 1

	track = midi_file.tracks[0]

	assert track[0].type == "set_tempo"
	assert track[0].tempo == mido.bpm2tempo(140)
	assert track[1].type == "program_change"
	assert track[1].program == 34
	assert track[1].channel == 0

	assert note_events(track) == [
		("note_on", 60, 0),
		("note_off", 60, 120),
		("note_on", 62, 0),
		("note_off", 62, 60),
	]


def test_rests_advance_time_silently (tmp_path: pathlib.Path) -> None:

	writer = comper.midi_writer.MidiWriter()
	writer.add_notes([Pitch("C", 4), Pitch("E", 4, velocity=0), Pitch("G", 4)], instrument=0)

	midi_file = save_and_read(writer, tmp_path)

	assert note_events(midi_file.tracks[0]) == [
		("note_on", 60, 0),
		("note_off", 60, 120),
		("note_on", 67, 120),
		("note_off", 67, 120),
	]


def test_swing_in_the_written_file (tmp_path: pathlib.Path) -> None:

	writer = comper.midi_writer.MidiWriter(swing=2 / 3)
	writer.add_notes([Pitch("C", 4, duration=8), Pitch("C", 4, duration=8)], instrument=0)

	midi_file = save_and_read(writer, tmp_path)

	assert [time for kind, _, time in note_events(midi_file.tracks[0]) if kind == "note_off"] == [80, 40]


def test_chord_track_sounds_the_voicing (tmp_path: pathlib.Path) -> None:

	chord = comper.chords.Chord("C", voicing=[1, 3, 5], duration=2, velocity=90)

	writer = comper.midi_writer.MidiWriter()
	writer.add_chords([chord, comper.chords.Chord("F", voicing=[1])], instrument=1)

	midi_file = save_and_read(writer, tmp_path)
	notes = [m for m in midi_file.tracks[0] if m.type in ("note_on", "note_off")]

	ons = [m for m in notes if m.type == "note_on"]

	assert [m.note for m in ons] == [48, 52, 55, 53]
	assert all(m.velocity == 90 for m in ons[:3])
	assert sum(m.time for m in notes) == 240 + 120


def test_parts_get_their_own_channels (tmp_path: pathlib.Path) -> None:

	writer = comper.midi_writer.MidiWriter()
	writer.add_notes([Pitch("C", 2)], instrument=34)
	writer.add_notes([Pitch(), Pitch()], instrument=0, drum=True)
	writer.add_chords([comper.chords.Chord("C")], instrument=1)

	midi_file = save_and_read(writer, tmp_path)

	channels = [
		{m.channel for m in track if not m.is_meta}
		for track in midi_file.tracks
	]

	assert channels == [{0}, {comper.constants.gm_drums.DRUM_CHANNEL}, {1}]


def test_melodic_channels_skip_the_drum_channel () -> None:

	assert comper.constants.gm_drums.DRUM_CHANNEL not in comper.midi_writer.MELODIC_CHANNELS
	assert len(comper.midi_writer.MELODIC_CHANNELS) == 15


def test_too_many_parts_raise () -> None:

	writer = comper.midi_writer.MidiWriter()

	for _ in range(15):
		writer.add_notes([Pitch()], instrument=0)

	writer.add_notes([Pitch()], instrument=0, drum=True)

	with pytest.raises(ValueError):
		writer.add_notes([Pitch()], instrument=0)


def test_only_one_drum_part () -> None:

	writer = comper.midi_writer.MidiWriter()
	writer.add_notes([Pitch()], instrument=0, drum=True)

	with pytest.raises(ValueError):
		writer.add_notes([Pitch()], instrument=0, drum=True)
