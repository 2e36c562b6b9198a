"""Write a short ii-V-I backing track without a config file.

Run from this directory:

    python ii_v_i.py
"""

import logging
import random

import comper
import comper.constants.instruments


logging.basicConfig(level=logging.INFO)

rng = random.Random(7)

progression = comper.parse_progression("""
D-7 4
G7 4
Cmaj7 8
""")

def grammar (section: str) -> comper.ProbabilisticGrammar:
	return comper.load_grammar("grammars.cfg", section, rng=rng)

bassline = comper.gen_simple_walking_bassline(
	progression,
	grammar("bassPattern"),
	grammar("bassDirection"),
	lowest=comper.Pitch("C", 2),
	highest=comper.Pitch("G", 2),
)

comping = comper.gen_comping(
	progression,
	grammar("compingRhythm"),
	grammar("compingDirection"),
	candidate_voicings=[[3, 6, 7, 9], [7, 9, 3, 5]],
	reference_pitch=comper.Pitch("G", 4),
)

drums = comper.gen_simple_drum_swing_pattern(4, velocity=80)

writer = comper.MidiWriter(bpm=160, swing=2 / 3)
writer.add_notes(bassline, comper.constants.instruments.ACOUSTIC_BASS)
writer.add_chords(comping, comper.constants.instruments.ELECTRIC_PIANO_1)
writer.add_notes(drums, 0, drum=True)
writer.save("ii_v_i.mid")
