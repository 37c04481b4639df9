import logging
import re

import rtmidi

from tapcounter.tempo import BeatCounterError

MSG_NOTE_OFF = 0x80
MSG_NOTE_ON = 0x90

log = logging.getLogger(__name__)

"""
Names of the MIDI input ports on the system. Our own RtMidi client ports are
skipped to avoid listening to ourselves.
"""
def list_input_ports(midi_in=None):
	if not midi_in:
		midi_in = rtmidi.MidiIn()

	names = []
	for i in range(0, midi_in.get_port_count()):
		name = midi_in.get_port_name(i)
		if re.search('^RtMidiOut Client:', name):
			continue
		names.append(name)

	return names

"""
MIDI note based tap source. Every note-on from the chosen input port counts as
one tap; everything else, clock included, is ignored.

The rtmidi callback runs on rtmidi's own thread. Callers that need taps on a
particular thread have to hop there themselves (the GUI does it with a queued
Qt signal).
"""
class MIDITapSource:
	callback = None
	input_port = None
	port_name = None

	def __init__(self, callback):
		self.callback = callback

	def open(self, port_name, midi_in=None):
		if not midi_in:
			midi_in = rtmidi.MidiIn()

		for i in range(0, midi_in.get_port_count()):
			if midi_in.get_port_name(i) == port_name:
				log.info("Opening MIDI input port: %s", port_name)
				midi_in.open_port(i)
				midi_in.set_callback(self.recv_message)
				self.input_port = midi_in
				self.port_name = port_name
				return

		raise BeatCounterError("MIDI input port %r not found" % (port_name,))

	def close(self):
		if not self.input_port:
			return

		self.input_port.cancel_callback()
		self.input_port.close_port()
		log.info("Closed MIDI input port: %s", self.port_name)
		self.input_port = None
		self.port_name = None

	def recv_message(self, result, data=None):
		message, delta_time = result
		if not message:
			return

		status = message[0] & 0xF0
		# note-on with velocity 0 is a note-off by convention
		if status == MSG_NOTE_ON and len(message) > 2 and message[2] > 0:
			self.callback()
