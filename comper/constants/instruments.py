"""General MIDI program numbers (0-indexed) for the generated parts."""

import typing


ACOUSTIC_GRAND_PIANO = 0
BRIGHT_ACOUSTIC_PIANO = 1
ELECTRIC_PIANO_1 = 4
ACOUSTIC_BASS = 32
ELECTRIC_BASS_FINGER = 33
ELECTRIC_BASS_PICK = 34


GM_PROGRAM_MAP: typing.Dict[str, int] = {
	"acoustic_grand_piano": ACOUSTIC_GRAND_PIANO,
	"bright_acoustic_piano": BRIGHT_ACOUSTIC_PIANO,
	"electric_piano_1": ELECTRIC_PIANO_1,
	"acoustic_bass": ACOUSTIC_BASS,
	"electric_bass_finger": ELECTRIC_BASS_FINGER,
	"electric_bass_pick": ELECTRIC_BASS_PICK,
}
