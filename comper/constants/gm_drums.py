"""General MIDI Level 1 percussion notes used by the drum part.

Standard MIDI percussion assignments for channel 10 (0-indexed channel 9).
"""

import typing


DRUM_CHANNEL = 9

BASS_DRUM_1 = 36
ACOUSTIC_SNARE = 38
CLOSED_HI_HAT = 42
PEDAL_HI_HAT = 44
RIDE_1 = 51
RIDE_BELL = 53


GM_DRUM_MAP: typing.Dict[str, int] = {
	"kick_1": BASS_DRUM_1,
	"snare_1": ACOUSTIC_SNARE,
	"hi_hat_closed": CLOSED_HI_HAT,
	"hi_hat_pedal": PEDAL_HI_HAT,
	"ride_1": RIDE_1,
	"ride_bell": RIDE_BELL,
}
