import pytest

from tapcounter.counter import BeatCounter
from tapcounter.tapper import TapStateMachine


"""
Idle timer that only fires when a test tells it to.
"""
class FakeTimer:
	def __init__(self):
		self.callback = None
		self.interval_ms = None
		self.starts = 0
		self.cancels = 0

	@property
	def pending(self):
		return self.callback is not None

	def start(self, interval_ms, callback):
		assert self.callback is None, "previous timer was not cancelled"
		self.callback = callback
		self.interval_ms = interval_ms
		self.starts += 1

	def cancel(self):
		self.cancels += 1
		self.callback = None

	def fire(self):
		callback = self.callback
		self.callback = None
		callback()


@pytest.fixture
def timer():
	return FakeTimer()


@pytest.fixture
def machine(timer):
	return TapStateMachine(timer)


@pytest.fixture
def counter(timer):
	return BeatCounter(timer)
