"""
Comper - generated jazz backing tracks from a chord progression.

Give Comper a list of chord symbols with their lengths and it writes a
walking bassline, a voice-led piano comping part, and a swung ride
cymbal to a Standard MIDI File. Every musical decision is drawn from
small weighted grammars, so the same progression yields a different
performance on each run (or the same one, with a seed).

What it does:

- **Chord symbols.** ``Cmaj7``, ``D-7b5``, ``G7#9/B``, ``Bb 7`` and friends
  are parsed into the eight tones bass, root, 2nd ... 7th, with any
  selection of degrees available as a voicing.
- **Probabilistic grammars.** Weighted context-free rules written in a
  small BNF dialect generate the rhythm, pattern, and direction strings
  that drive the generators.
- **Walking bass.** One quarter note per beat, chord tones, scale tones,
  and chromatic approaches, turning around at configurable bounds.
- **Comping.** Each chord is re-voiced so the top note moves smoothly
  from the last, and played in a grammar-drawn rhythm.
- **MIDI output.** One track per part, swing applied to eighth notes.

Minimal example:

    ```python
    import random

    import comper

    rng = random.Random(1)
    progression = comper.parse_progression("D-7 4\\nG7 4\\nCmaj7 8")

    patterns = comper.load_grammar("grammars.cfg", "bassPattern", rng=rng)
    directions = comper.load_grammar("grammars.cfg", "bassDirection", rng=rng)

    bassline = comper.gen_simple_walking_bassline(
        progression, patterns, directions,
        lowest=comper.Pitch("C", 2), highest=comper.Pitch("G", 2),
    )

    writer = comper.MidiWriter(bpm=140, swing=2 / 3)
    writer.add_notes(bassline, instrument=34)
    writer.save("bass.mid")
    ```

The command line runs the whole pipeline from a YAML config::

    python -m comper config.yaml

Package-level exports: ``Pitch``, ``Chord``, ``ProbabilisticGrammar``,
``load_grammar``, ``parse_progression``, ``load_progression``,
``gen_simple_walking_bassline``, ``gen_comping``,
``gen_simple_drum_swing_pattern``, ``MidiWriter``.
"""

import comper.bassline
import comper.chords
import comper.comping
import comper.drums
import comper.grammar
import comper.midi_writer
import comper.pitch
import comper.progression


Pitch = comper.pitch.Pitch
Chord = comper.chords.Chord
ProbabilisticGrammar = comper.grammar.ProbabilisticGrammar
load_grammar = comper.grammar.load_grammar
parse_progression = comper.progression.parse_progression
load_progression = comper.progression.load_progression
gen_simple_walking_bassline = comper.bassline.gen_simple_walking_bassline
gen_comping = comper.comping.gen_comping
gen_simple_drum_swing_pattern = comper.drums.gen_simple_drum_swing_pattern
MidiWriter = comper.midi_writer.MidiWriter
