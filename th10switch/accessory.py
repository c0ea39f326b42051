"""HAP-python accessory for a Sonoff TH10/TH16.

One accessory carries three services: an Outlet switching the relay, a
ContactSensor raised on temperature alarms and a TemperatureSensor
reporting the DS18B20 reading.
"""
import logging

from pyhap.accessory import Accessory
from pyhap.const import CATEGORY_OUTLET

from th10switch.const import (
    MANUFACTURER,
    MIN_TEMPERATURE,
    MODEL,
    SERIAL_NUMBER,
    __version__,
)
from th10switch.device import OutletLockedError, Th10Device

logger = logging.getLogger(__name__)


class TH10Switch(Accessory):
    """Binds a `DeviceAccessory` to HAP characteristics.

    Getters read the cached device state; they never wait on the network.
    """

    category = CATEGORY_OUTLET

    def __init__(self, driver, display_name, *, device, aid=None):
        """
        :param device: The device backing this accessory.
        :type device: th10switch.device.DeviceAccessory
        """
        super().__init__(driver, display_name, aid=aid)
        self.device = device
        self.set_info_service(
            firmware_revision=__version__,
            manufacturer=MANUFACTURER,
            model=MODEL,
            serial_number=SERIAL_NUMBER,
        )

        serv_outlet = self.add_preload_service("Outlet")
        self.char_on = serv_outlet.configure_char(
            "On", setter_callback=self.set_outlet, getter_callback=self.get_outlet
        )
        self.char_in_use = serv_outlet.configure_char(
            "OutletInUse", getter_callback=self.get_outlet_in_use
        )

        serv_contact = self.add_preload_service("ContactSensor", chars=["Name"])
        serv_contact.configure_char("Name", value=display_name)
        self.char_contact = serv_contact.configure_char(
            "ContactSensorState", getter_callback=self.get_contact_state
        )

        serv_temp = self.add_preload_service("TemperatureSensor", chars=["Name"])
        serv_temp.configure_char("Name", value="Current Temperature")
        # Report freezer temperatures too.
        self.char_temp = serv_temp.configure_char(
            "CurrentTemperature",
            properties={"minValue": MIN_TEMPERATURE},
            getter_callback=self.get_temperature,
        )

        self.set_primary_service(serv_outlet)
        self._remove_listener = self.device.add_listener(self.update_state)

    @classmethod
    def from_config(cls, driver, config, aid=None):
        """Create the accessory and its `Th10Device` from a `Config`."""
        return cls(driver, config.name, device=Th10Device(config), aid=aid)

    # Getters and setters

    def get_outlet(self):
        state = self.device.get_state()
        logger.debug("%s: Outlet state: %s", self.display_name, state.on)
        return state.on

    def set_outlet(self, value):
        logger.debug("%s: set_outlet: %s", self.display_name, value)
        try:
            self.device.set_outlet(value)
        except OutletLockedError:
            self.char_on.value = self.device.get_state().on
            raise

    def get_outlet_in_use(self):
        state = self.device.get_state()
        logger.debug("%s: Outlet in use: %s", self.display_name, state.in_use)
        return state.in_use

    def get_temperature(self):
        state = self.device.get_state()
        logger.debug("%s: Current temperature: %s", self.display_name, state.temperature)
        return state.temperature

    def get_contact_state(self):
        state = self.device.get_state()
        logger.debug(
            "%s: Contact state (temperature alert flag): %s",
            self.display_name,
            state.contact_sensor_state,
        )
        return state.contact_sensor_state

    def update_state(self, state):
        """Push a new device state to subscribed controllers."""
        self.char_on.set_value(state.on)
        self.char_in_use.set_value(state.in_use)
        self.char_contact.set_value(state.contact_sensor_state)
        self.char_temp.set_value(state.temperature)

    # Lifecycle

    async def run(self):
        await self.device.async_start()

    async def stop(self):
        self._remove_listener()
        await self.device.async_stop()
