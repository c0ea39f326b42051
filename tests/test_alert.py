"""Tests for th10switch.alert."""
import pytest

from th10switch.alert import AlertEvaluator
from th10switch.const import ALARM_HIGH, ALARM_LOW
from th10switch.state import DeviceState


def run(evaluator, state, readings):
    """Feed readings and collect the contact state after each."""
    result = []
    for reading in readings:
        evaluator.evaluate(state, reading)
        result.append(state.contact_sensor_state)
    return result


def test_thresholds_must_not_overlap():
    """A reading must never be able to trip both thresholds."""
    with pytest.raises(ValueError):
        AlertEvaluator(low=10, high=10)
    with pytest.raises(ValueError):
        AlertEvaluator(low=20, high=10)


def test_high_alarm_with_hysteresis():
    """81 raises, 78 holds (above 80 - 3), 76 clears."""
    evaluator = AlertEvaluator(high=80, hysteresis=3, alert_count=1)
    state = DeviceState()

    assert run(evaluator, state, [81]) == [1]
    assert state.alarm_source == ALARM_HIGH
    assert run(evaluator, state, [78]) == [1]
    assert run(evaluator, state, [76]) == [0]
    assert state.alerts == 0
    assert state.alarm_source is None


def test_recovery_exactly_at_margin():
    evaluator = AlertEvaluator(low=-5, high=80, hysteresis=3, alert_count=1)
    state = DeviceState()
    assert run(evaluator, state, [80, 77]) == [1, 0]
    assert run(evaluator, state, [-5, -2]) == [1, 0]


def test_default_alert_count_raises_immediately():
    evaluator = AlertEvaluator()
    state = DeviceState()
    assert evaluator.alert_count == 0
    assert evaluator.evaluate(state, 80) is True
    assert state.contact_sensor_state == 1


def test_alternating_readings_never_reach_count():
    """A single in-range reading resets the consecutive count."""
    evaluator = AlertEvaluator(high=80, alert_count=2)
    state = DeviceState()

    evaluator.evaluate(state, 81)
    assert (state.alerts, state.contact_sensor_state) == (1, 0)
    evaluator.evaluate(state, 79)
    assert (state.alerts, state.contact_sensor_state) == (0, 0)
    evaluator.evaluate(state, 82)
    assert (state.alerts, state.contact_sensor_state) == (1, 0)


def test_consecutive_readings_reach_count():
    evaluator = AlertEvaluator(high=80, alert_count=3)
    state = DeviceState()
    assert run(evaluator, state, [80, 85, 90]) == [0, 0, 1]
    assert state.alerts == 3


def test_low_alarm_with_hysteresis():
    evaluator = AlertEvaluator(low=-5, high=80, hysteresis=3, alert_count=2)
    state = DeviceState()

    assert run(evaluator, state, [-6, -7]) == [0, 1]
    assert state.alarm_source == ALARM_LOW
    # Above the threshold but not by the hysteresis margin.
    assert run(evaluator, state, [-3]) == [1]
    assert run(evaluator, state, [-2]) == [0]


def test_low_alarm_is_not_cleared_by_high_recovery():
    """Only recovering past the threshold that raised the alarm clears it."""
    evaluator = AlertEvaluator(low=-5, high=80, hysteresis=3, alert_count=1)
    state = DeviceState()
    assert run(evaluator, state, [-10, -10, -9]) == [1, 1, 1]


def test_high_and_low_share_the_counter():
    evaluator = AlertEvaluator(low=-5, high=80, alert_count=2)
    state = DeviceState()
    assert run(evaluator, state, [81, -6]) == [0, 1]
    assert state.alarm_source == ALARM_LOW


def test_counter_reset_while_in_alarm():
    """Readings that neither recover nor count reset the counter."""
    evaluator = AlertEvaluator(high=80, hysteresis=3, alert_count=1)
    state = DeviceState()
    evaluator.evaluate(state, 81)
    assert state.alerts == 1
    evaluator.evaluate(state, 85)
    assert state.alerts == 0
    assert state.contact_sensor_state == 1


def test_from_config(config):
    evaluator = AlertEvaluator.from_config(config)
    assert evaluator.low == -5
    assert evaluator.high == 80
    assert evaluator.hysteresis == 3
    assert evaluator.alert_count == 1


def test_recovery_reading_counts_against_other_threshold():
    """A swing from a high alarm straight past the low threshold alarms again."""
    evaluator = AlertEvaluator(low=-5, high=80, hysteresis=3, alert_count=1)
    state = DeviceState()
    assert run(evaluator, state, [81, -10]) == [1, 1]
    assert state.alarm_source == ALARM_LOW
    assert state.alerts == 1


def test_recovery_reading_starts_new_count():
    evaluator = AlertEvaluator(low=-5, high=80, hysteresis=3, alert_count=2)
    state = DeviceState()
    assert run(evaluator, state, [-6, -7, 90]) == [0, 1, 0]
    assert (state.alerts, state.alarm_source) == (1, None)
    assert run(evaluator, state, [91]) == [1]
    assert state.alarm_source == ALARM_HIGH
