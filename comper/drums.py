"""A swung ride-cymbal pattern to sit under the bass and comping parts."""

import typing

import comper.constants.durations
import comper.constants.gm_drums
import comper.constants.velocity
import comper.pitch


def gen_simple_drum_swing_pattern (
	measure_count: int,
	velocity: int = comper.constants.velocity.DEFAULT_VELOCITY,
	note: int = comper.constants.gm_drums.RIDE_1
) -> typing.List[comper.pitch.Pitch]:

	"""Return the classic "ding, ding-a" ride figure for ``measure_count`` bars of 4/4.

	Each half bar is a quarter note followed by two eighth notes. The eighths
	swing when the part is written with a swing ratio.

	Example:
		```python
		pattern = gen_simple_drum_swing_pattern(1)
		[p.duration for p in pattern]  # [4, 8, 8, 4, 8, 8]
		```
	"""

	if measure_count < 0:
		raise ValueError("measure_count cannot be negative")

	figure = (
		comper.constants.durations.QUARTER,
		comper.constants.durations.EIGHTH,
		comper.constants.durations.EIGHTH,
	)

	pattern: typing.List[comper.pitch.Pitch] = []

	for _ in range(measure_count * 2):
		for duration in figure:
			pattern.append(comper.pitch.Pitch.from_number(note, duration, velocity))

	return pattern
