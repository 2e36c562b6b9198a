"""Constants for comper.

- ``comper.constants.durations`` - Note durations as denominators (4 = quarter note)
- ``comper.constants.velocity`` - MIDI velocity constants
- ``comper.constants.midi_notes`` - Pitch-numbering reference points (C4 = 60, Middle C)
- ``comper.constants.gm_drums`` - General MIDI percussion notes used by the drum part
- ``comper.constants.instruments`` - General MIDI program numbers for the generated parts
"""
