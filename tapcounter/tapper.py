import logging
import threading
import time
from enum import Enum

from tapcounter.tempo import rescale_intervals

WINDOW_SIZE = 10
IDLE_TIMEOUT_MS = 5000

log = logging.getLogger(__name__)

"""
Tap tracking state.

 - INITIAL: no data, either at startup or after a timeout in FIRST_TAP
 - FIRST_TAP: one tap recorded, no interval yet
 - TAPPING: continuous tapping without ever pausing for the idle timeout
 - PAUSED: the user stopped tapping for the idle timeout; the last tempo stays
   on display
"""
class TapState(Enum):
	INITIAL = 0
	FIRST_TAP = 1
	TAPPING = 2
	PAUSED = 3

	@property
	def is_active(self):
		return self in (TapState.FIRST_TAP, TapState.TAPPING)

"""
Fixed-capacity ring buffer of the most recent inter-tap intervals. Pushing
into a full window overwrites the oldest slot.
"""
class IntervalWindow:
	def __init__(self, capacity=WINDOW_SIZE):
		if capacity < 1:
			raise ValueError("Window capacity must be at least 1")

		self.capacity = capacity
		self._slots = [0] * capacity
		self._start = 0
		self._count = 0

	def push(self, interval):
		if self._count < self.capacity:
			self._slots[(self._start + self._count) % self.capacity] = interval
			self._count += 1
		else:
			self._slots[self._start] = interval
			self._start = (self._start + 1) % self.capacity

	def clear(self):
		self._start = 0
		self._count = 0

	"""
	Replace the contents, keeping only the newest `capacity` values.
	"""
	def replace(self, intervals):
		self.clear()
		for interval in intervals:
			self.push(interval)

	def values(self):
		return list(self)

	def __iter__(self):
		for i in range(self._count):
			yield self._slots[(self._start + i) % self.capacity]

	def __len__(self):
		return self._count

	def __repr__(self):
		return 'IntervalWindow(%r)' % (self.values(),)

def monotonic_ms():
	return int(time.monotonic() * 1000)

"""
The tap state machine. This is the only owner of the tapping state and the
interval window; everything else reads through the properties below.

Transitions are serialized on an RLock so a timer callback arriving from
another thread always sees the latest state. Every armed idle timer carries a
generation number, and a callback from a superseded timer is discarded.
"""
class TapStateMachine:
	on_change = None

	def __init__(self, timer, clock=None, window_size=WINDOW_SIZE,
			idle_timeout_ms=IDLE_TIMEOUT_MS, on_change=None):
		self.timer = timer
		self.clock = clock if clock else monotonic_ms
		self.idle_timeout_ms = idle_timeout_ms
		self.on_change = on_change

		self._lock = threading.RLock()
		self._state = TapState.INITIAL
		self._window = IntervalWindow(window_size)
		self._last_tap = None
		self._generation = 0

	@property
	def state(self):
		with self._lock:
			return self._state

	@property
	def intervals(self):
		with self._lock:
			return self._window.values()

	@property
	def last_tap(self):
		with self._lock:
			return self._last_tap

	@property
	def is_active(self):
		return self.state.is_active

	"""
	Record a tap. `now` is in milliseconds and defaults to the machine's clock.
	"""
	def tap(self, now=None):
		with self._lock:
			# the old timer has to be gone before the transition runs
			self.timer.cancel()
			self._generation += 1
			generation = self._generation

			if now is None:
				now = self.clock()

			if self._state in (TapState.INITIAL, TapState.PAUSED):
				self._window.clear()
				log.debug("Session started at %d", now)
			else:
				delta = now - self._last_tap
				self._window.push(delta)
				log.debug("Recorded interval of %d ms", delta)

			self._last_tap = now
			self._state = TapState.TAPPING

			self.timer.start(self.idle_timeout_ms, lambda: self.idle_timeout(generation))

		self.notify()

	"""
	Handle expiry of the idle timer. Called with the generation the timer was
	armed with; None means "whatever is current".
	"""
	def idle_timeout(self, generation=None):
		with self._lock:
			if generation is not None and generation != self._generation:
				log.debug("Dropping stale idle timeout (generation %d)", generation)
				return

			if self._state in (TapState.INITIAL, TapState.FIRST_TAP):
				self._state = TapState.INITIAL
				self._window.clear()
				self._last_tap = None
				log.debug("Idle timeout, session reset")
			else:
				self._state = TapState.PAUSED
				log.debug("Idle timeout, session paused with %d intervals", len(self._window))

		self.notify()

	"""
	Rescale the stored intervals from one meter to another. The tapping state
	is left alone and no change is announced; the caller does that once its
	own selection is updated.
	"""
	def rescale(self, old_meter, new_meter):
		with self._lock:
			if old_meter == new_meter:
				return
			self._window.replace(rescale_intervals(self._window, old_meter, new_meter))
			log.debug("Rescaled intervals from %s to %s", old_meter.display_name, new_meter.display_name)

	def notify(self):
		if self.on_change:
			self.on_change()
