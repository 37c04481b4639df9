import logging
import sys

from PyQt5 import QtCore, QtWidgets

from tapcounter.counter import BeatCounter
from tapcounter.midi import MIDITapSource
from tapcounter.tempo import BeatCounterError, CountMethod, Meter, format_tempo

log = logging.getLogger(__name__)

def munge_widget_size(target, pixel_size=20):
	policy = QtWidgets.QSizePolicy()
	policy.setHorizontalPolicy(QtWidgets.QSizePolicy.Expanding)
	policy.setVerticalPolicy(QtWidgets.QSizePolicy.Expanding)
	policy.setHorizontalStretch(1)
	policy.setVerticalStretch(1)

	target.setSizePolicy(policy)
	for c in target.findChildren(QtWidgets.QWidget):
		c.setSizePolicy(policy)

		if isinstance(c, QtWidgets.QPushButton) or isinstance(c, QtWidgets.QLabel):
			font = c.font()
			font.setPixelSize(pixel_size)
			c.setFont(font)

		if isinstance(c, QtWidgets.QLabel):
			c.setAlignment(QtCore.Qt.AlignCenter | QtCore.Qt.AlignVCenter)

"""
Idle timer backed by a single-shot QTimer. The QTimer belongs to the thread
that created it (the UI thread), which is where the callback runs.
"""
class QtIdleTimer:
	timer = None
	callback = None

	def __init__(self, parent=None):
		self.timer = QtCore.QTimer(parent)
		self.timer.setSingleShot(True)
		self.timer.timeout.connect(self._fire)

	@property
	def pending(self):
		return self.timer.isActive()

	def start(self, interval_ms, callback):
		self.timer.stop()
		self.callback = callback
		self.timer.start(int(interval_ms))
		log.debug("Idle timer armed for %d ms", interval_ms)

	def cancel(self):
		self.timer.stop()
		self.callback = None

	def _fire(self):
		callback = self.callback
		self.callback = None
		if callback:
			callback()

"""
Carries MIDI taps from rtmidi's thread onto the UI thread.
"""
class TapBridge(QtCore.QObject):
	tapped = QtCore.pyqtSignal()

	def emit_tap(self):
		self.tapped.emit()

"""
Row of mutually exclusive, checkable buttons. Each button id is the value of
the option it stands for.
"""
class OptionSelector(QtWidgets.QWidget):
	group = None

	def __init__(self, options, callback):
		super(OptionSelector, self).__init__()

		layout = QtWidgets.QHBoxLayout()
		layout.setContentsMargins(25, 0, 25, 0)

		self.group = QtWidgets.QButtonGroup(self)
		self.group.setExclusive(True)
		for value, label in options:
			btn = QtWidgets.QPushButton(label)
			btn.setCheckable(True)
			self.group.addButton(btn, value)
			layout.addWidget(btn)

		self.group.buttonClicked[int].connect(callback)
		self.setLayout(layout)

	def select(self, value):
		btn = self.group.button(value)
		if btn and not btn.isChecked():
			btn.setChecked(True)

"""
Primary widget: the tap button, the tempo cards and the selectors.
"""
class MainWidget(QtWidgets.QWidget):
	counter = None
	midi = None
	bridge = None

	tap_btn = None
	mpm_lbl = None
	bpm_lbl = None
	meter_sel = None
	method_sel = None

	def __init__(self, meter=Meter.COMMON, method=CountMethod.MEASURE):
		super(MainWidget, self).__init__()

		self.setWindowTitle('Beat Counter')
		self.counter = BeatCounter(QtIdleTimer(self), meter=meter, method=method,
			on_change=self._redraw)

		self.bridge = TapBridge(self)
		self.bridge.tapped.connect(self.tap)
		self.midi = MIDITapSource(self.bridge.emit_tap)

		layout = QtWidgets.QVBoxLayout()

		title = QtWidgets.QLabel('Beat Counter')
		layout.addWidget(title)

		self.tap_btn = QtWidgets.QPushButton()
		self.tap_btn.clicked.connect(self.tap)
		layout.addWidget(self.tap_btn)
		layout.setStretchFactor(self.tap_btn, 2)

		self.mpm_lbl = QtWidgets.QLabel()
		layout.addWidget(self.mpm_lbl)
		layout.setStretchFactor(self.mpm_lbl, 2)

		self.bpm_lbl = QtWidgets.QLabel()
		layout.addWidget(self.bpm_lbl)
		layout.setStretchFactor(self.bpm_lbl, 2)

		self.meter_sel = OptionSelector(
			[(m.value, m.display_name) for m in Meter], self.select_meter)
		layout.addWidget(self.meter_sel)

		self.method_sel = OptionSelector(
			[(m.value, m.display_name) for m in CountMethod], self.select_method)
		layout.addWidget(self.method_sel)

		self.setLayout(layout)
		munge_widget_size(self)

		font = self.tap_btn.font()
		font.setPixelSize(35)
		self.tap_btn.setFont(font)
		for lbl in (self.mpm_lbl, self.bpm_lbl):
			font = lbl.font()
			font.setPixelSize(40)
			font.setBold(True)
			lbl.setFont(font)

		self._redraw()

	def open_midi_input(self, port_name):
		try:
			self.midi.open(port_name)
		except BeatCounterError as e:
			self._errmsg(e)

	def shutdown(self):
		self.midi.close()

	def _redraw(self):
		counter = self.counter
		self.tap_btn.setText(counter.label)
		self.mpm_lbl.setText("%s MPM" % (format_tempo(counter.mpm)))
		self.bpm_lbl.setText("%s BPM" % (format_tempo(counter.bpm)))

		self.mpm_lbl.setVisible(counter.show_measures)
		self.method_sel.setVisible(counter.show_measures)

		self.meter_sel.select(counter.meter.value)
		self.method_sel.select(counter.method.value)

	def _errmsg(self, exception):
		mbox = QtWidgets.QMessageBox()
		mbox.setIcon(QtWidgets.QMessageBox.Critical)
		mbox.setText(exception.message)
		mbox.addButton(QtWidgets.QMessageBox.Ok)
		mbox.setDefaultButton(QtWidgets.QMessageBox.Ok)
		mbox.exec_()

	@QtCore.pyqtSlot()
	def tap(self):
		self.counter.on_tap()

	@QtCore.pyqtSlot(int)
	def select_meter(self, value):
		try:
			self.counter.on_meter_change(value)
		except BeatCounterError as e:
			self._errmsg(e)
		self._redraw()

	@QtCore.pyqtSlot(int)
	def select_method(self, value):
		try:
			self.counter.on_method_change(value)
		except BeatCounterError as e:
			self._errmsg(e)
		self._redraw()

"""
Primary class for the application.
"""
class MainUI:
	main_widget = None
	app = None

	def __init__(self, meter=Meter.COMMON, method=CountMethod.MEASURE, midi_input=None):
		self.app = QtWidgets.QApplication(sys.argv)
		self.main_widget = MainWidget(meter, method)
		if midi_input:
			self.main_widget.open_midi_input(midi_input)

	"""
	Run the application.
	"""
	def run(self):
		geom = self.app.desktop().screenGeometry()
		if geom.width() <= 480 and geom.height() <= 320:
			self.main_widget.showFullScreen()
		else:
			self.main_widget.resize(480, 320)
			self.main_widget.show()

		result = self.app.exec_()
		self.main_widget.shutdown()
		return result
