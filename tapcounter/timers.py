import logging
import threading

"""
One-shot idle timers for the tap state machine.

Every idle timer shares the same small interface (see also QtIdleTimer in
the GUI):

	start(interval_ms, callback)  arm the timer, cancelling any pending one
	cancel()                      disarm the timer if it is pending
	pending                       whether a callback is still due

Only one callback may be pending per timer object. The state machine relies on
start() cancelling the previous timer before arming the new one.
"""

log = logging.getLogger(__name__)

"""
Idle timer backed by a daemon threading.Timer. The callback runs on the timer
thread, so whatever it touches must be guarded by the caller.
"""
class ThreadedIdleTimer:
	timer = None

	def __init__(self):
		self._lock = threading.Lock()

	@property
	def pending(self):
		with self._lock:
			return self.timer is not None

	def start(self, interval_ms, callback):
		with self._lock:
			self._cancel_locked()

			timer = threading.Timer(interval_ms / 1000.0, self._fire, args=(callback,))
			timer.daemon = True
			self.timer = timer
			timer.start()

		log.debug("Idle timer armed for %d ms", interval_ms)

	def cancel(self):
		with self._lock:
			self._cancel_locked()

	def _cancel_locked(self):
		if self.timer is not None:
			self.timer.cancel()
			self.timer = None

	def _fire(self, callback):
		with self._lock:
			if self.timer is not threading.current_thread():
				# superseded between expiry and here
				return
			self.timer = None

		callback()

