"""The device core: cached state, polling and outlet commands.

Nothing in here knows about HomeKit. `TH10Switch` in ``th10switch.accessory``
binds a `DeviceAccessory` to HAP characteristics.
"""
import asyncio
import logging

from th10switch.alert import AlertEvaluator
from th10switch.client import DeviceClient, DeviceError
from th10switch.poller import RepeatingTask
from th10switch.state import DeviceState

logger = logging.getLogger(__name__)


class OutletLockedError(DeviceError):
    """The outlet is locked; the command was not sent to the device."""


class DeviceAccessory:
    """The operations a host needs from a device.

    `get_state` and `set_outlet` return without waiting on the network.
    """

    def get_state(self):
        """Return a snapshot of the cached `DeviceState`.

        Expected to be overridden.
        """
        raise NotImplementedError

    def set_outlet(self, on):
        """Request the outlet to be switched and return the cached on-state.

        Expected to be overridden.

        :raises OutletLockedError: When the outlet is locked.
        """
        raise NotImplementedError

    def add_listener(self, callback):
        """Call ``callback(snapshot)`` after every state change.

        :return: A function removing the listener again.
        """
        return lambda: None

    async def async_start(self):
        """Called when the host starts. May be overridden."""

    async def async_stop(self):
        """Called when the host stops. May be overridden."""


class Th10Device(DeviceAccessory):
    """A Sonoff TH10/TH16 with a DS18B20 sensor, controlled over HTTP."""

    def __init__(self, config, client=None):
        """
        :param config: The accessory settings.
        :type config: th10switch.config.Config

        :param client: Client used to talk to the device. Defaults to one
            built from ``config``.
        :type client: DeviceClient
        """
        self.config = config
        self.name = config.name
        self.client = client or DeviceClient.from_config(config)
        self.evaluator = AlertEvaluator.from_config(config)
        self.state = DeviceState(locked=config.outlet_locked)
        self.poller = RepeatingTask(
            self.async_poll, config.poll_timer, name="{} poller".format(self.name)
        )
        self._listeners = []
        self._pending = set()

    def __repr__(self):
        return "<Th10Device name='{}' address='{}'>".format(self.name, self.client.address)

    # Listeners

    def add_listener(self, callback):
        self._listeners.append(callback)
        return lambda: self._listeners.remove(callback)

    def _notify(self):
        snapshot = self.state.snapshot()
        for callback in list(self._listeners):
            try:
                callback(snapshot)
            except Exception:  # pylint: disable=broad-except
                logger.exception("%s: Error in state listener %s", self.name, callback)

    # DeviceAccessory

    def get_state(self):
        return self.state.snapshot()

    def set_outlet(self, on):
        if self.state.locked:
            logger.error("%s: Outlet is locked. Command not sent to device.", self.name)
            raise OutletLockedError("Outlet is locked ({})".format(self.name))

        task = asyncio.ensure_future(self._async_command(on))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self.poller.restart()
        return self.state.on

    # Locking

    def lock(self):
        self.state.locked = True
        logger.info("%s: Outlet locked", self.name)

    def unlock(self):
        self.state.locked = False
        logger.info("%s: Outlet unlocked", self.name)

    # Device I/O

    async def async_set_outlet(self, on):
        """Switch the outlet and wait for the device to confirm.

        :return: The power state reported by the device.
        :raises OutletLockedError: When the outlet is locked.
        :raises DeviceError: When the device could not be switched.
        """
        if self.state.locked:
            raise OutletLockedError("Outlet is locked ({})".format(self.name))
        logger.info("%s: Outlet power %s requested", self.name, "on" if on else "off")
        reported = await self.client.async_set_power(on)
        if reported != on:
            logger.warning(
                "%s: Requested power %s but device reports %s",
                self.name,
                "on" if on else "off",
                "on" if reported else "off",
            )
        self.state.set_power(reported)
        logger.debug("%s: Outlet command completed without error", self.name)
        self._notify()
        return reported

    async def _async_command(self, on):
        try:
            await self.async_set_outlet(on)
        except DeviceError as err:
            logger.warning("%s: Outlet command failed: %s", self.name, err)

    async def async_update_temperature(self):
        """Read the temperature and run the alarm evaluation.

        :return: True if the state was updated.
        """
        try:
            temperature = await self.client.async_get_temperature()
        except DeviceError as err:
            logger.warning("%s: Could not collect temperature data: %s", self.name, err)
            return False
        self.state.temperature = temperature
        self.evaluator.evaluate(self.state, temperature)
        self._notify()
        return True

    async def async_update_outlet(self):
        """Read the relay state.

        :return: True if the state was updated.
        """
        try:
            on = await self.client.async_get_power()
        except DeviceError as err:
            logger.warning("%s: Could not collect outlet state: %s", self.name, err)
            return False
        self.state.set_power(on)
        self._notify()
        return True

    async def async_poll(self):
        """One poll cycle: fetch temperature and outlet state concurrently."""
        logger.debug("%s: Polling %s", self.name, self.client.address)
        results = await asyncio.gather(
            self.async_update_temperature(),
            self.async_update_outlet(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error(
                    "%s: Unexpected error while polling", self.name, exc_info=result
                )

    async def async_start(self):
        """Poll until `async_stop` is called."""
        await self.poller.async_run()

    async def async_stop(self):
        self.poller.stop()
