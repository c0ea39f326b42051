"""Module for `DeviceState` class."""
import copy
from typing import Optional

from th10switch.const import CONTACT_DETECTED, CONTACT_NOT_DETECTED


class DeviceState:
    """Last known state of one TH10 accessory.

    Nothing is persisted; the record is rebuilt from the device by polling.
    """

    def __init__(self, *, locked: bool = False):
        self.on: bool = False
        self.in_use: bool = False
        self.locked: bool = locked
        self.temperature: float = 0.0
        self.contact_sensor_state: int = CONTACT_DETECTED
        self.alerts: int = 0
        self.alarm_source: Optional[str] = None

    def __repr__(self):
        return (
            "<DeviceState on={} in_use={} locked={} temperature={} "
            "contact_sensor_state={} alerts={}>".format(
                self.on,
                self.in_use,
                self.locked,
                self.temperature,
                self.contact_sensor_state,
                self.alerts,
            )
        )

    def __eq__(self, other):
        if not isinstance(other, DeviceState):
            return NotImplemented
        return self.__dict__ == other.__dict__

    @property
    def alarm(self) -> bool:
        """Return if the temperature alarm is raised."""
        return self.contact_sensor_state == CONTACT_NOT_DETECTED

    def set_power(self, on: bool) -> None:
        """The relay feeds the outlet, so in-use follows on."""
        self.on = on
        self.in_use = on

    def snapshot(self) -> "DeviceState":
        """Return an independent copy for readers."""
        return copy.copy(self)
