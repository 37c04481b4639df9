import math

import pytest

from tapcounter.tempo import (
	BeatCounterError,
	CountMethod,
	Meter,
	beats_per_minute,
	clicks_per_minute,
	format_tempo,
	instruction_label,
	measures_per_minute,
	method_change_meters,
	rescale_intervals,
	round_half_up,
)


def test_cpm_empty_is_zero():
	assert clicks_per_minute([]) == 0


def test_cpm_with_zero_intervals_is_infinite():
	assert clicks_per_minute([0]) == math.inf
	assert clicks_per_minute([0, 0]) == math.inf
	assert format_tempo(clicks_per_minute([0])) == 'inf'


def test_cpm_from_mean_interval():
	assert clicks_per_minute([500, 500, 500]) == 120
	assert clicks_per_minute([400, 600]) == 120
	assert clicks_per_minute([1000]) == 60


def test_bpm_and_mpm_by_measure():
	assert beats_per_minute(120, CountMethod.MEASURE, Meter.COMMON) == 480
	assert measures_per_minute(120, CountMethod.MEASURE, Meter.COMMON) == 120


def test_bpm_and_mpm_by_beat():
	assert beats_per_minute(120, CountMethod.BEAT, Meter.WALTZ) == 120
	assert measures_per_minute(120, CountMethod.BEAT, Meter.WALTZ) == 40


def test_rescale_changes_meter():
	assert rescale_intervals([400], Meter.COMMON, Meter.WALTZ) == [300]
	assert rescale_intervals([500, 600], Meter.BEAT, Meter.DOUBLE) == [1000, 1200]


def test_rescale_same_meter_is_untouched():
	# 403/4 would round to 404 if the rescale actually ran
	assert rescale_intervals([403], Meter.COMMON, Meter.COMMON) == [403]


def test_rescale_rounds_half_up():
	assert rescale_intervals([250], Meter.COMMON, Meter.BEAT) == [63]
	assert round_half_up(62.5) == 63
	assert round_half_up(2.5) == 3
	assert round_half_up(2.49) == 2


def test_method_change_goes_through_beat():
	assert method_change_meters(CountMethod.BEAT, Meter.WALTZ) == (Meter.WALTZ, Meter.BEAT)
	assert method_change_meters(CountMethod.MEASURE, Meter.WALTZ) == (Meter.BEAT, Meter.WALTZ)


def test_method_round_trip_within_a_millisecond():
	original = [517, 498, 503, 1001, 333]
	for meter in Meter:
		measures = rescale_intervals(original, *method_change_meters(CountMethod.MEASURE, meter))
		beats = rescale_intervals(measures, *method_change_meters(CountMethod.BEAT, meter))
		assert all(abs(a - b) <= 1 for a, b in zip(original, beats))


def test_instruction_label():
	assert instruction_label(CountMethod.BEAT, Meter.COMMON) == 'Click on each beat'
	assert instruction_label(CountMethod.MEASURE, Meter.WALTZ) == 'Click on downbeat of 3/4 measure'


def test_format_tempo():
	assert format_tempo(120) == '120.0'
	assert format_tempo(0) == '0.0'
	assert format_tempo(133.333) == '133.3'


@pytest.mark.parametrize('value, expected', [
	(Meter.DOUBLE, Meter.DOUBLE),
	(3, Meter.WALTZ),
	('4', Meter.COMMON),
	('3/4', Meter.WALTZ),
	('beat', Meter.BEAT),
	('Common', Meter.COMMON),
])
def test_meter_parse(value, expected):
	assert Meter.parse(value) is expected


@pytest.mark.parametrize('value, expected', [
	(CountMethod.BEAT, CountMethod.BEAT),
	(1, CountMethod.MEASURE),
	('measure', CountMethod.MEASURE),
	('Beat', CountMethod.BEAT),
])
def test_method_parse(value, expected):
	assert CountMethod.parse(value) is expected


@pytest.mark.parametrize('value', [0, 5, '5/4', 'waltzing', None])
def test_meter_parse_rejects_unknown(value):
	with pytest.raises(BeatCounterError) as excinfo:
		Meter.parse(value)
	assert 'meter' in excinfo.value.message


def test_method_parse_rejects_unknown():
	with pytest.raises(BeatCounterError):
		CountMethod.parse('bar')


def test_display_names():
	assert [m.display_name for m in Meter] == ['Beat', '2/4', '3/4', '4/4']
	assert [m.display_name for m in CountMethod] == ['Beat', 'Measure']
