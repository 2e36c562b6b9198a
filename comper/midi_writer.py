"""Standard MIDI File output for generated parts.

Each part added to a :class:`MidiWriter` becomes its own track on its own
channel. Every track opens with a tempo message and a program change, then
plays its events back to back from tick 0.
"""

import logging
import typing

import mido

import comper.chords
import comper.constants.durations
import comper.constants.gm_drums
import comper.pitch


logger = logging.getLogger(__name__)

MAX_PARTS = 16

# Melodic parts take the channels in order, leaving the drum channel free.
MELODIC_CHANNELS = [channel for channel in range(MAX_PARTS) if channel != comper.constants.gm_drums.DRUM_CHANNEL]

# (start tick, length in ticks, MIDI note numbers, velocity)
TimedEvent = typing.Tuple[int, int, typing.List[int], int]


class MidiWriter:

	"""Collects parts and writes them as a type 1 MIDI file.

	Durations are denominators of a whole note, so a part's note with duration
	``d`` lasts ``4 * ticks_per_beat / d`` ticks. With a swing ratio, eighth
	notes that start on a beat last ``swing * ticks_per_beat`` and the eighths
	after them fill the rest of the beat.

	Example:
		```python
		writer = MidiWriter(bpm=140, swing=2 / 3)
		writer.add_notes(bassline, comper.constants.instruments.ELECTRIC_BASS_PICK)
		writer.add_chords(comping, comper.constants.instruments.BRIGHT_ACOUSTIC_PIANO)
		writer.add_notes(drums, 0, drum=True)
		writer.save("backing.mid")
		```
	"""

	def __init__ (self, bpm: float = 120, swing: typing.Optional[float] = None, ticks_per_beat: int = 120) -> None:

		if bpm <= 0:
			raise ValueError(f"bpm must be positive, got {bpm}")

		if swing is not None and not 0 < swing < 1:
			raise ValueError(f"swing must be between 0 and 1, got {swing}")

		if ticks_per_beat <= 0:
			raise ValueError(f"ticks_per_beat must be positive, got {ticks_per_beat}")

		self.bpm = bpm
		self.swing = swing
		self.ticks_per_beat = ticks_per_beat

		self.midi_file = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)

		self._melodic_parts = 0
		self._drum_part_added = False


	def add_notes (self, pitches: typing.Sequence[comper.pitch.Pitch], instrument: int, drum: bool = False) -> None:

		"""
		Add a single-voice part. Drum parts go on the General MIDI drum channel.
		"""

		channel = self._next_channel(drum)

		events: typing.List[TimedEvent] = []
		tick = 0

		for pitch in pitches:
			length = self.ticks_for(pitch.duration, tick)
			events.append((tick, length, [pitch.number], pitch.velocity))
			tick += length

		self._add_track(events, channel, instrument)


	def add_chords (self, chords: typing.Sequence[comper.chords.Chord], instrument: int) -> None:

		"""
		Add a part that sounds each chord's voicing for the chord's duration.
		"""

		channel = self._next_channel(drum=False)

		events: typing.List[TimedEvent] = []
		tick = 0

		for chord in chords:
			length = self.ticks_for(chord.duration, tick)
			events.append((tick, length, [tone.number for tone in chord.voicing()], chord.velocity))
			tick += length

		self._add_track(events, channel, instrument)


	def ticks_for (self, duration: int, start_tick: int = 0) -> int:

		"""Return the length in ticks of a note with the given duration starting at ``start_tick``.

		Example:
			```python
			writer = MidiWriter(ticks_per_beat=120, swing=2 / 3)
			writer.ticks_for(4)        # 120
			writer.ticks_for(8, 0)     # 80, on the beat
			writer.ticks_for(8, 80)    # 40, the off-beat
			```
		"""

		if duration <= 0:
			raise ValueError(f"Duration must be a positive denominator, got {duration}")

		if self.swing is not None and duration == comper.constants.durations.EIGHTH:

			if start_tick % self.ticks_per_beat == 0:
				return round(self.swing * self.ticks_per_beat)

			return round((1 - self.swing) * self.ticks_per_beat)

		return round(comper.constants.durations.QUARTER * self.ticks_per_beat / duration)


	def save (self, path: str) -> None:

		"""
		Write every added part to a Standard MIDI File.
		"""

		logger.info(f"Saving {len(self.midi_file.tracks)} tracks to {path}")

		self.midi_file.save(path)


	def _next_channel (self, drum: bool) -> int:

		if len(self.midi_file.tracks) >= MAX_PARTS:
			raise ValueError(f"A MIDI file holds at most {MAX_PARTS} parts")

		if drum:
			if self._drum_part_added:
				raise ValueError("Only one drum part can be added")
			self._drum_part_added = True
			return comper.constants.gm_drums.DRUM_CHANNEL

		if self._melodic_parts >= len(MELODIC_CHANNELS):
			raise ValueError(f"A MIDI file holds at most {len(MELODIC_CHANNELS)} melodic parts")

		channel = MELODIC_CHANNELS[self._melodic_parts]
		self._melodic_parts += 1

		return channel


	def _add_track (self, events: typing.List[TimedEvent], channel: int, instrument: int) -> None:

		track = mido.MidiTrack()
		self.midi_file.tracks.append(track)

		track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(self.bpm), time=0))
		track.append(mido.Message("program_change", channel=channel, program=instrument, time=0))

		# (absolute tick, note-offs sort first, message)
		timed: typing.List[typing.Tuple[int, int, mido.Message]] = []

		for start, length, notes, velocity in events:

			# Velocity 0 is a rest: the time passes with nothing sounding.
			if velocity <= 0:
				continue

			for note in notes:
				timed.append((start, 1, mido.Message("note_on", channel=channel, note=note, velocity=velocity)))
				timed.append((start + length, 0, mido.Message("note_off", channel=channel, note=note, velocity=velocity)))

		timed.sort(key=lambda x: (x[0], x[1]))

		last_tick = 0

		for tick, _, message in timed:
			message.time = tick - last_tick
			track.append(message)
			last_tick = tick

		logger.debug(f"Track on channel {channel}: {len(timed) // 2} notes, {last_tick} ticks")
