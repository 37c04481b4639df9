import math
from enum import Enum, IntEnum

"""
Tempo arithmetic for the beat counter.

Everything in here is a pure function of its arguments. The intervals these
functions operate on are owned by the tap state machine.
"""

class Meter(IntEnum):
	BEAT = 1
	DOUBLE = 2
	WALTZ = 3
	COMMON = 4

	@property
	def display_name(self):
		if self is Meter.BEAT:
			return 'Beat'
		return '%d/4' % (self.value)

	"""
	Coerce a meter given as a member, its integer value or its display name.
	"""
	@classmethod
	def parse(cls, value):
		if isinstance(value, cls):
			return value

		if isinstance(value, str):
			for meter in cls:
				if value.strip().lower() in (meter.display_name.lower(), meter.name.lower()):
					return meter
			if value.strip().isdigit():
				value = int(value)

		try:
			return cls(value)
		except (ValueError, TypeError):
			raise BeatCounterError("Unknown meter: %r" % (value,))

class CountMethod(Enum):
	BEAT = 0
	MEASURE = 1

	@property
	def display_name(self):
		return self.name.capitalize()

	@classmethod
	def parse(cls, value):
		if isinstance(value, cls):
			return value

		if isinstance(value, str):
			for method in cls:
				if value.strip().lower() == method.name.lower():
					return method
			if value.strip().isdigit():
				value = int(value)

		try:
			return cls(value)
		except (ValueError, TypeError):
			raise BeatCounterError("Unknown count method: %r" % (value,))

def clicks_per_minute(intervals):
	intervals = list(intervals)
	if not intervals:
		return 0

	average = sum(intervals) / len(intervals)
	if average == 0:
		# taps landing in the same millisecond
		return math.inf
	return 60000 / average

def beats_per_minute(cpm, method, meter):
	if method is CountMethod.BEAT:
		return cpm
	return cpm * meter

def measures_per_minute(cpm, method, meter):
	if method is CountMethod.MEASURE:
		return cpm
	return cpm / meter

"""
Round half up on the millisecond grid. The builtin round() rounds half to
even.
"""
def round_half_up(value):
	return int(math.floor(value + 0.5))

"""
Rescale intervals recorded in one meter into another, keeping the tempo in
beats. Returns the input untouched when the meters match.
"""
def rescale_intervals(intervals, old_meter, new_meter):
	if old_meter == new_meter:
		return list(intervals)

	return [round_half_up(x / old_meter) * new_meter for x in intervals]

"""
Meter pair to rescale through when the counting method changes. Meter.BEAT
is the common unit: going to per-beat counting converts out of the current
meter, going to per-measure counting converts into it.
"""
def method_change_meters(method, meter):
	if method is CountMethod.BEAT:
		return (meter, Meter.BEAT)
	return (Meter.BEAT, meter)

def instruction_label(method, meter):
	if method is CountMethod.BEAT:
		return 'Click on each beat'
	return 'Click on downbeat of %d/4 measure' % (int(meter))

def format_tempo(value):
	return '%.1f' % (value)

class BeatCounterError(Exception):
	message = ''
	def __init__(self, message):
		super(BeatCounterError, self).__init__(message)
		self.message = message
