import logging

from tapcounter.tapper import TapStateMachine, IDLE_TIMEOUT_MS, WINDOW_SIZE
from tapcounter.tempo import (
	Meter,
	CountMethod,
	beats_per_minute,
	clicks_per_minute,
	instruction_label,
	measures_per_minute,
	method_change_meters,
)

log = logging.getLogger(__name__)

"""
Back-end class for one beat counting session: the selected meter and counting
method plus the tap state machine they apply to. Shells call the on_* methods
and render the read-only properties.
"""
class BeatCounter:
	meter = Meter.COMMON
	method = CountMethod.MEASURE
	machine = None

	def __init__(self, timer, meter=Meter.COMMON, method=CountMethod.MEASURE, clock=None,
			window_size=WINDOW_SIZE, idle_timeout_ms=IDLE_TIMEOUT_MS, on_change=None):
		self.meter = Meter.parse(meter)
		self.method = CountMethod.parse(method)
		self.machine = TapStateMachine(timer, clock=clock, window_size=window_size,
			idle_timeout_ms=idle_timeout_ms, on_change=on_change)

	def on_tap(self, now=None):
		self.machine.tap(now)

	"""
	Select a new meter. When counting by measure the intervals are rescaled
	first so the beat tempo stays put.
	"""
	def on_meter_change(self, new_meter):
		new_meter = Meter.parse(new_meter)
		if new_meter == self.meter:
			return

		log.debug("Meter changed from %s to %s", self.meter.display_name, new_meter.display_name)
		if self.method is CountMethod.MEASURE:
			self.machine.rescale(self.meter, new_meter)
		self.meter = new_meter
		self.machine.notify()

	def on_method_change(self, new_method):
		new_method = CountMethod.parse(new_method)
		if new_method is self.method:
			return

		log.debug("Count method changed from %s to %s", self.method.display_name, new_method.display_name)
		old_meter, new_meter = method_change_meters(new_method, self.meter)
		self.machine.rescale(old_meter, new_meter)
		self.method = new_method
		self.machine.notify()

	@property
	def state(self):
		return self.machine.state

	@property
	def intervals(self):
		return self.machine.intervals

	@property
	def cpm(self):
		return clicks_per_minute(self.machine.intervals)

	@property
	def bpm(self):
		return beats_per_minute(self.cpm, self.method, self.meter)

	@property
	def mpm(self):
		return measures_per_minute(self.cpm, self.method, self.meter)

	"""
	Measures per minute and the count method only mean something when the
	meter has more than one beat.
	"""
	@property
	def show_measures(self):
		return self.meter is not Meter.BEAT

	@property
	def label(self):
		if self.machine.is_active:
			return 'Again'
		return instruction_label(self.method, self.meter)
