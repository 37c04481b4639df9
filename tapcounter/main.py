import argparse
import logging
import sys

from tapcounter.tempo import BeatCounterError, CountMethod, Meter

def parse_args(argv):
	parser = argparse.ArgumentParser(prog='beatcounter',
		description='Tap along to find the tempo in beats and measures per minute.')
	parser.add_argument('--console', action='store_true',
		help='run in the terminal instead of opening a window')
	parser.add_argument('--meter', default=Meter.COMMON.display_name, type=str.lower,
		choices=[m.display_name.lower() for m in Meter],
		help='initial meter (default: %(default)s)')
	parser.add_argument('--method', default=CountMethod.MEASURE.display_name.lower(), type=str.lower,
		choices=[m.display_name.lower() for m in CountMethod],
		help='count each beat or each measure (default: %(default)s)')
	parser.add_argument('--midi-input', metavar='NAME',
		help='also count note-on messages from this MIDI input port')
	parser.add_argument('--list-midi-inputs', action='store_true',
		help='print the available MIDI input ports and exit')
	parser.add_argument('-v', '--verbose', action='store_true',
		help='log state changes')
	return parser.parse_args(argv)

def main(argv=None):
	args = parse_args(sys.argv[1:] if argv is None else argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
		format='%(asctime)s %(levelname)s %(name)s: %(message)s')

	try:
		meter = Meter.parse(args.meter)
		method = CountMethod.parse(args.method)

		if args.list_midi_inputs:
			from tapcounter.midi import list_input_ports
			for name in list_input_ports():
				print(name)
			return 0

		if args.console:
			from tapcounter.console import ConsoleUI
			return ConsoleUI(meter, method, midi_input=args.midi_input).run()

		from tapcounter.gui import MainUI
		return MainUI(meter, method, args.midi_input).run()
	except BeatCounterError as e:
		print("beatcounter: %s" % (e.message), file=sys.stderr)
		return 1
