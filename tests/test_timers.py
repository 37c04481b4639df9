import threading
import time

from tapcounter.tapper import TapState, TapStateMachine
from tapcounter.timers import ThreadedIdleTimer


def test_fires_once():
	fired = threading.Event()
	timer = ThreadedIdleTimer()
	timer.start(10, fired.set)
	assert fired.wait(2)
	assert not timer.pending


def test_cancel_prevents_fire():
	fired = threading.Event()
	timer = ThreadedIdleTimer()
	timer.start(500, fired.set)
	assert timer.pending
	timer.cancel()
	assert not timer.pending
	assert not fired.wait(0.2)


def test_restart_supersedes_previous():
	calls = []
	done = threading.Event()
	timer = ThreadedIdleTimer()
	timer.start(1000, lambda: calls.append('old'))
	timer.start(10, lambda: (calls.append('new'), done.set()))
	assert done.wait(2)
	time.sleep(0.1)
	assert calls == ['new']


def test_cancel_without_pending_is_harmless():
	timer = ThreadedIdleTimer()
	timer.cancel()
	assert not timer.pending


def test_machine_pauses_on_real_timer():
	paused = threading.Event()
	machine = TapStateMachine(ThreadedIdleTimer(), idle_timeout_ms=200)

	def on_change():
		if machine.state is TapState.PAUSED:
			paused.set()

	machine.on_change = on_change
	machine.tap(0)
	machine.tap(500)
	assert paused.wait(2)
	assert machine.intervals == [500]
