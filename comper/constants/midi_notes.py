"""Pitch numbering reference points.

Pitches use scientific octave numbering on the MIDI scale: C4 = 60 (Middle C),
so ``number = 12 * (octave + 1) + pitch_class``.
"""

import typing


NOTES_PER_OCTAVE = 12

MIDDLE_C = 60
MIDDLE_OCTAVE = 4

# Pitch class of each natural letter.
NATURAL_PITCH_CLASSES: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

# Letter for each natural pitch class, used to spell pitches built from numbers.
PITCH_CLASS_NATURALS: typing.Dict[int, str] = {pc: letter for letter, pc in NATURAL_PITCH_CLASSES.items()}

ACCIDENTAL_OFFSETS: typing.Dict[str, int] = {
	"": 0,
	"#": 1,
	"##": 2,
	"b": -1,
	"bb": -2,
}
