"""Tests for th10switch."""
from th10switch.client import DeviceClient

DEVICE_ADDRESS = "192.168.1.50"


class FakeClient(DeviceClient):
    """A client answering from attributes instead of the network.

    Setting ``temperature`` or ``power`` to an exception makes the matching
    request raise it.
    """

    def __init__(self, temperature=20.0, power=False):
        super().__init__(DEVICE_ADDRESS)
        self.temperature = temperature
        self.power = power
        self.calls = []

    @staticmethod
    def _answer(value):
        if isinstance(value, BaseException):
            raise value
        return value

    async def async_get_temperature(self):
        self.calls.append("status")
        return self._answer(self.temperature)

    async def async_get_power(self):
        self.calls.append("power")
        return self._answer(self.power)

    async def async_set_power(self, on):
        self.calls.append("on" if on else "off")
        self._answer(self.power)
        self.power = on
        return on
