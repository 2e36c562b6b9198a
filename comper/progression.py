"""Reading chord progressions from text.

One chord per line: the chord symbol, a space, and its length in quarter-note
beats. The symbol may itself contain spaces, so the line is split at its last
space::

    % ii-V-I in C
    D-7 4
    G 7 4
    Cmaj7 8

Blank lines and ``%`` comments are skipped.
"""

import logging
import typing

import comper.chords
import comper.constants.velocity
import comper.errors


logger = logging.getLogger(__name__)


def parse_progression (
	text: str,
	velocity: int = comper.constants.velocity.DEFAULT_VELOCITY,
	octave: int = comper.chords.DEFAULT_OCTAVE
) -> typing.List[comper.chords.Chord]:

	"""Parse progression text into chords whose ``duration`` is their beat count.

	Raises:
		ProgressionError: If a line has no beat count or a non-positive one.
		InvalidChordName: If a chord symbol is not valid.
	"""

	progression: typing.List[comper.chords.Chord] = []

	for line_number, line in enumerate(text.splitlines(), start=1):

		line = line.split("%", 1)[0].strip()

		if not line:
			continue

		symbol, _, beats_text = line.rpartition(" ")

		try:
			beats = int(beats_text)
		except ValueError:
			raise comper.errors.ProgressionError(
				f"Line {line_number}: expected '<chord> <beats>', got {line!r}"
			) from None

		if not symbol.strip() or beats <= 0:
			raise comper.errors.ProgressionError(
				f"Line {line_number}: expected '<chord> <beats>' with a positive beat count, got {line!r}"
			)

		progression.append(comper.chords.Chord(symbol.strip(), octave=octave, duration=beats, velocity=velocity))

	return progression


def load_progression (
	path: str,
	velocity: int = comper.constants.velocity.DEFAULT_VELOCITY,
	octave: int = comper.chords.DEFAULT_OCTAVE
) -> typing.List[comper.chords.Chord]:

	"""
	Read a progression file.
	"""

	with open(path, "r") as f:
		progression = parse_progression(f.read(), velocity=velocity, octave=octave)

	total_beats = sum(chord.duration for chord in progression)
	logger.info(f"Loaded {len(progression)} chords ({total_beats} beats) from {path}")

	return progression
