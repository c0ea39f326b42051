"""Client for the Tasmota HTTP command API of a Sonoff TH10/TH16."""
import asyncio
import json
import logging
import math

import aiohttp

from th10switch.const import (
    DEFAULT_OFF_LOCATION,
    DEFAULT_ON_LOCATION,
    DEFAULT_OUTLET_STATUS_LOCATION,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_STATUS_LOCATION,
    POWER_KEYS,
    POWER_OFF,
    POWER_ON,
)

logger = logging.getLogger(__name__)


class DeviceError(Exception):
    """Generic exception class for device errors."""


class DeviceConnectionError(DeviceError):
    """The device could not be reached or did not answer with HTTP success."""


class InvalidResponseError(DeviceError):
    """The device answered, but not with the JSON that was expected."""


class DeviceClient:
    """Issues Tasmota commands to a single device.

    Every method performs one GET request and either returns the parsed
    value or raises a `DeviceError`.
    """

    def __init__(
        self,
        address,
        status_location=DEFAULT_STATUS_LOCATION,
        outlet_status_location=DEFAULT_OUTLET_STATUS_LOCATION,
        on_location=DEFAULT_ON_LOCATION,
        off_location=DEFAULT_OFF_LOCATION,
        timeout=DEFAULT_REQUEST_TIMEOUT,
        session=None,
    ):
        """
        :param session: Session to send requests with. When omitted, each
            request opens and closes its own session.
        :type session: aiohttp.ClientSession
        """
        self.address = address
        self.status_location = status_location
        self.outlet_status_location = outlet_status_location
        self.on_location = on_location
        self.off_location = off_location
        self.timeout = timeout
        self.session = session

    @classmethod
    def from_config(cls, config, session=None):
        return cls(
            config.ip_address,
            status_location=config.status_location,
            outlet_status_location=config.outlet_status_location,
            on_location=config.on_location,
            off_location=config.off_location,
            timeout=config.request_timeout,
            session=session,
        )

    def __repr__(self):
        return "<DeviceClient address='{}'>".format(self.address)

    def url(self, location):
        """Return the full URL of the given command location."""
        return "http://" + self.address + location

    async def _async_request(self, url):
        """GET ``url`` and return the status code and the raw body."""
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        if self.session is not None:
            async with self.session.get(url, timeout=timeout) as resp:
                return resp.status, await resp.read()
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as resp:
                return resp.status, await resp.read()

    async def async_get_json(self, location):
        """GET the given location and return the decoded JSON object."""
        url = self.url(location)
        logger.debug("GET %s", url)
        try:
            status, body = await self._async_request(url)
        except asyncio.TimeoutError as err:
            raise DeviceConnectionError(
                "Timed out after {}s requesting {}".format(self.timeout, url)
            ) from err
        except aiohttp.ClientError as err:
            raise DeviceConnectionError(
                "Error communicating with {}: {}".format(url, err)
            ) from err

        logger.debug("%s replied %d: %s", url, status, body)
        if not 200 <= status < 300:
            raise DeviceConnectionError(
                "{} replied with HTTP status {}".format(url, status)
            )

        try:
            reply = json.loads(body)
        except ValueError as err:
            raise InvalidResponseError(
                "Invalid JSON received from {}: {!r}".format(url, body)
            ) from err
        if not isinstance(reply, dict):
            raise InvalidResponseError(
                "Expected a JSON object from {}, got {!r}".format(url, reply)
            )
        return reply

    async def async_get_temperature(self):
        """Return the DS18B20 temperature reported by the status command."""
        reply = await self.async_get_json(self.status_location)
        try:
            raw = reply["StatusSNS"]["DS18B20"]["Temperature"]
        except (KeyError, TypeError) as err:
            raise InvalidResponseError(
                "No StatusSNS.DS18B20.Temperature in reply: {}".format(reply)
            ) from err

        if isinstance(raw, bool):
            raise InvalidResponseError("Could not convert data to number ({!r})".format(raw))
        try:
            temperature = float(raw)
        except (TypeError, ValueError) as err:
            raise InvalidResponseError(
                "Could not convert data to number ({!r})".format(raw)
            ) from err
        if not math.isfinite(temperature):
            raise InvalidResponseError("Temperature is not finite ({!r})".format(raw))
        return temperature

    async def async_get_power(self):
        """Return True if the relay reports it is on."""
        return self._parse_power(await self.async_get_json(self.outlet_status_location))

    async def async_set_power(self, on):
        """Switch the relay and return the power state the device reports."""
        location = self.on_location if on else self.off_location
        return self._parse_power(await self.async_get_json(location))

    @staticmethod
    def _parse_power(reply):
        power = next((reply[key] for key in POWER_KEYS if key in reply), None)
        if not isinstance(power, str):
            raise InvalidResponseError(
                'Device did not return expected status ("Power":"ON" or "Power":"OFF"): '
                "{}".format(reply)
            )
        if power.upper() == POWER_ON:
            return True
        if power.upper() != POWER_OFF:
            logger.debug("Treating unexpected power state %r as off", power)
        return False
