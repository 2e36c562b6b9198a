"""Note durations expressed as denominators of a whole note.

A pitch or chord event with ``duration = QUARTER`` lasts a quarter note,
``duration = EIGHTH`` an eighth note, and so on. A duration of ``d`` lasts
``4 / d`` beats::

    import comper.constants.durations as dur

    pitch.duration = dur.EIGHTH    # half a beat
    pitch.duration = dur.WHOLE     # four beats

Progression chords are the one exception: while they sit in a progression
their ``duration`` counts quarter-note beats (a two-bar chord is ``8``).
"""

WHOLE = 1
HALF = 2
QUARTER = 4
EIGHTH = 8
SIXTEENTH = 16

# Quarter-note beats in one 4/4 bar.
BEATS_PER_BAR = 4
