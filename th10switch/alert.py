"""High/low temperature alarm with hysteresis and a consecutive-alert count.

The alarm is reported through the ContactSensorState characteristic:
``CONTACT_DETECTED`` (0) while normal, ``CONTACT_NOT_DETECTED`` (1) in alarm.

While normal, every reading at or beyond a threshold counts as an alert.
Once ``alert_count`` consecutive alerts are seen the alarm is raised;
any reading in range resets the count. A raised alarm is only cleared
when the reading has recovered by ``hysteresis`` past the threshold that
raised it.

A reading that clears the alarm is then counted like any other, so a swing
from one threshold straight past the other raises a new alarm.
"""
import logging

from th10switch.const import (
    ALARM_HIGH,
    ALARM_LOW,
    CONTACT_DETECTED,
    CONTACT_NOT_DETECTED,
    DEFAULT_ALERT_COUNT,
    DEFAULT_ALERT_HIGH_TEMPERATURE,
    DEFAULT_ALERT_LOW_TEMPERATURE,
    DEFAULT_HYSTERESIS,
)

logger = logging.getLogger(__name__)


class AlertEvaluator:
    """Updates the alarm fields of a `DeviceState` from temperature readings."""

    def __init__(
        self,
        low=DEFAULT_ALERT_LOW_TEMPERATURE,
        high=DEFAULT_ALERT_HIGH_TEMPERATURE,
        hysteresis=DEFAULT_HYSTERESIS,
        alert_count=DEFAULT_ALERT_COUNT,
    ):
        if low >= high:
            raise ValueError(
                "Low threshold {} must be below high threshold {}".format(low, high)
            )
        self.low = low
        self.high = high
        self.hysteresis = hysteresis
        self.alert_count = alert_count

    @classmethod
    def from_config(cls, config):
        return cls(
            low=config.alert_low_temperature,
            high=config.alert_high_temperature,
            hysteresis=config.hysteresis,
            alert_count=config.alert_count,
        )

    def exceeded(self, temperature):
        """Return which threshold the reading is at or beyond, if any."""
        if temperature >= self.high:
            return ALARM_HIGH
        if temperature <= self.low:
            return ALARM_LOW
        return None

    def recovered(self, source, temperature):
        """Return if the reading clears an alarm raised by ``source``."""
        if source == ALARM_HIGH:
            return temperature <= self.high - self.hysteresis
        if source == ALARM_LOW:
            return temperature >= self.low + self.hysteresis
        return True

    def evaluate(self, state, temperature):
        """Apply one reading to ``state`` and return if the alarm is raised.

        :param state: The state holding the counter and the alarm flag.
        :type state: DeviceState

        :param temperature: The reading, in degrees Celsius.
        :type temperature: float

        :rtype: bool
        """
        if state.contact_sensor_state == CONTACT_NOT_DETECTED:
            if not self.recovered(state.alarm_source, temperature):
                state.alerts = 0
                return state.alarm
            logger.info(
                "Previous alert condition cleared, reported temperature is %s*C",
                temperature,
            )
            state.contact_sensor_state = CONTACT_DETECTED
            state.alarm_source = None
            state.alerts = 0

        source = self.exceeded(temperature)
        if source is not None:
            threshold = self.high if source == ALARM_HIGH else self.low
            state.alerts += 1
            logger.warning(
                "Alert threshold %s*C %s (reading %s*C, alert %d of %d)",
                threshold,
                "exceeded" if source == ALARM_HIGH else "passed",
                temperature,
                state.alerts,
                max(self.alert_count, 1),
            )
            if state.alerts >= self.alert_count:
                logger.warning("Alert count reached; raising alarm")
                state.contact_sensor_state = CONTACT_NOT_DETECTED
                state.alarm_source = source
            return state.alarm

        if state.alerts > 0:
            logger.debug("Temperature %s*C within normal range, clearing alert count", temperature)
            state.alerts = 0
        return state.alarm
