import logging
import os
import random
import sys
import typing

import yaml

import comper.bassline
import comper.comping
import comper.constants.durations
import comper.constants.gm_drums
import comper.constants.instruments
import comper.constants.velocity
import comper.drums
import comper.grammar
import comper.midi_writer
import comper.pitch
import comper.progression


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


DEFAULT_SECTIONS = {
	"bass_pattern": "bassPattern",
	"bass_direction": "bassDirection",
	"comping_rhythm": "compingRhythm",
	"comping_direction": "compingDirection",
}

DEFAULT_VOICINGS = [[3, 6, 7, 9], [7, 9, 3, 5]]


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def resolve_number (value: typing.Union[int, str], names: typing.Dict[str, int], what: str) -> int:

	"""
	Accept a MIDI number or a name from a General MIDI map.
	"""

	if isinstance(value, int):
		return value

	if value not in names:
		raise ValueError(f"Unknown {what} {value!r}. Expected a number or one of: {', '.join(sorted(names))}")

	return names[value]


def build_backing_track (config: dict, base_dir: str = '.') -> comper.midi_writer.MidiWriter:

	"""Generate the bass, comping, and drum parts described by a config.

	Relative file paths in the config are resolved against ``base_dir``.
	"""

	def resolve (path: str) -> str:
		return path if os.path.isabs(path) else os.path.join(base_dir, path)

	seed = config.get('seed')
	rng = random.Random(seed)

	velocity = config.get('velocity', comper.constants.velocity.DEFAULT_VELOCITY)

	progression = comper.progression.load_progression(resolve(config.get('progression', 'progression.txt')), velocity=velocity)

	grammar_config = config.get('grammar', {})
	grammar_path = resolve(grammar_config.get('path', 'grammars.cfg'))

	grammars: typing.Dict[str, comper.grammar.ProbabilisticGrammar] = {
		key: comper.grammar.load_grammar(grammar_path, grammar_config.get(key, section), rng=rng)
		for key, section in DEFAULT_SECTIONS.items()
	}

	programs = comper.constants.instruments.GM_PROGRAM_MAP

	tempo_config = config.get('tempo', {})
	writer = comper.midi_writer.MidiWriter(bpm=tempo_config.get('bpm', 120), swing=tempo_config.get('swing', 2 / 3))

	bass_config = config.get('bass', {})
	bassline = comper.bassline.gen_simple_walking_bassline(
		progression,
		grammars['bass_pattern'],
		grammars['bass_direction'],
		lowest=comper.pitch.parse_pitch(bass_config.get('lowest', 'C2')),
		highest=comper.pitch.parse_pitch(bass_config.get('highest', 'G2')),
		velocity=velocity,
	)
	writer.add_notes(bassline, resolve_number(bass_config.get('instrument', comper.constants.instruments.ELECTRIC_BASS_PICK), programs, 'instrument'))

	comping_config = config.get('comping', {})
	comping = comper.comping.gen_comping(
		progression,
		grammars['comping_rhythm'],
		grammars['comping_direction'],
		comping_config.get('voicings', DEFAULT_VOICINGS),
		comper.pitch.parse_pitch(comping_config.get('reference', 'G4')),
		velocity=velocity,
	)
	writer.add_chords(comping, resolve_number(comping_config.get('instrument', comper.constants.instruments.BRIGHT_ACOUSTIC_PIANO), programs, 'instrument'))

	drums_config = config.get('drums', {})

	if drums_config.get('enabled', True):
		total_beats = sum(chord.duration for chord in progression)
		measures = total_beats // comper.constants.durations.BEATS_PER_BAR
		cymbal = resolve_number(drums_config.get('note', comper.constants.gm_drums.RIDE_1), comper.constants.gm_drums.GM_DRUM_MAP, 'drum note')
		drums = comper.drums.gen_simple_drum_swing_pattern(measures, velocity=drums_config.get('velocity', velocity), note=cymbal)
		writer.add_notes(drums, drums_config.get('instrument', 0), drum=True)

	logger.info(f"Generated {len(bassline)} bass notes and {len(comping)} comping events over {len(progression)} chords")

	return writer


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point: ``python -m comper [config.yaml]``.
	"""

	args = sys.argv[1:] if argv is None else argv
	config_path = args[0] if args else 'config.yaml'

	logger.info("Comper starting...")

	config = load_config(config_path)
	base_dir = os.path.dirname(os.path.abspath(config_path))

	writer = build_backing_track(config, base_dir)

	output = config.get('output', 'backing.mid')
	writer.save(output if os.path.isabs(output) else os.path.join(base_dir, output))


if __name__ == "__main__":
	main()
