import sys

from tapcounter.counter import BeatCounter
from tapcounter.midi import MIDITapSource
from tapcounter.tapper import TapState
from tapcounter.tempo import BeatCounterError, CountMethod, Meter, format_tempo
from tapcounter.timers import ThreadedIdleTimer

HELP = """\
Press Enter on each beat (or measure) to count.
  m <meter>    select meter: beat, 2/4, 3/4, 4/4
  c <method>   select counting method: beat, measure
  q            quit
"""

"""
Line based front-end for terminals without a display. An empty line is a tap.
The idle timer and the MIDI source run on their own threads; the state
machine lock keeps their taps and timeouts in order.
"""
class ConsoleUI:
	counter = None
	stdin = None
	stdout = None
	midi = None
	midi_input = None

	def __init__(self, meter=Meter.COMMON, method=CountMethod.MEASURE, stdin=None, stdout=None,
			timer=None, midi_input=None):
		self.stdin = stdin if stdin else sys.stdin
		self.stdout = stdout if stdout else sys.stdout
		self.counter = BeatCounter(timer if timer else ThreadedIdleTimer(), meter=meter,
			method=method, on_change=self._on_change)
		self.midi = MIDITapSource(self.counter.on_tap)
		self.midi_input = midi_input

	def status_line(self):
		counter = self.counter
		parts = []
		if counter.show_measures:
			parts.append("%s MPM" % (format_tempo(counter.mpm)))
		parts.append("%s BPM" % (format_tempo(counter.bpm)))
		return "[%s] %s" % (counter.label, ' | '.join(parts))

	"""
	Handle one line of input. Returns False once the user asked to quit.
	"""
	def handle(self, line):
		line = line.strip()
		if not line:
			self.counter.on_tap()
			return True

		command, _, arg = line.partition(' ')
		command = command.lower()
		try:
			if command == 'q':
				return False
			elif command == 'm':
				self.counter.on_meter_change(arg)
			elif command == 'c':
				self.counter.on_method_change(arg)
			else:
				self._write(HELP)
		except BeatCounterError as e:
			self._write("%s\n" % (e.message))

		return True

	def run(self):
		if self.midi_input:
			self.midi.open(self.midi_input)

		self._write(HELP)
		self._write("%s\n" % (self.status_line()))
		for line in self.stdin:
			if not self.handle(line):
				break

		self.counter.machine.timer.cancel()
		self.midi.close()
		return 0

	def _on_change(self):
		if self.counter.state is TapState.PAUSED:
			self._write("Paused. %s\n" % (self.status_line()))
		else:
			self._write("%s\n" % (self.status_line()))

	def _write(self, text):
		self.stdout.write(text)
		self.stdout.flush()
