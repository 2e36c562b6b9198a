"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127). A velocity of 0 marks a rest.
"""

DEFAULT_VELOCITY = 100

REST_VELOCITY = 0
