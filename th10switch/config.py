"""Module for `Config` class."""
import json
import logging
import math

from th10switch.const import (
    ACCESSORY_NAME,
    CONF_ACCESSORIES,
    CONF_ACCESSORY,
    CONF_ALERT_COUNT,
    CONF_ALERT_HIGH_TEMPERATURE,
    CONF_ALERT_LOW_TEMPERATURE,
    CONF_HYSTERESIS,
    CONF_IP_ADDRESS,
    CONF_NAME,
    CONF_OFF_LOCATION,
    CONF_ON_LOCATION,
    CONF_OUTLET_LOCKED,
    CONF_OUTLET_STATUS_LOCATION,
    CONF_POLL_TIMER,
    CONF_REQUEST_TIMEOUT,
    CONF_STATUS_LOCATION,
    DEFAULT_ALERT_COUNT,
    DEFAULT_ALERT_HIGH_TEMPERATURE,
    DEFAULT_ALERT_LOW_TEMPERATURE,
    DEFAULT_HYSTERESIS,
    DEFAULT_NAME,
    DEFAULT_OFF_LOCATION,
    DEFAULT_ON_LOCATION,
    DEFAULT_OUTLET_STATUS_LOCATION,
    DEFAULT_POLL_TIMER,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_STATUS_LOCATION,
)

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when an accessory configuration is invalid."""


def _get(config, key, default):
    value = config.get(key)
    return default if value is None else value


def _check_number(key, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError("{} must be a number, got {!r}".format(key, value))
    if not math.isfinite(value):
        raise ConfigError("{} must be finite, got {!r}".format(key, value))
    return value


def _check_location(key, value):
    if not isinstance(value, str) or not value.startswith("/"):
        raise ConfigError("{} must be a path starting with '/', got {!r}".format(key, value))
    return value


class Config:
    """Settings of one TH10 accessory.

    Built from the same keys a Homebridge ``config.json`` accessory entry
    uses. Missing keys (or ``null``) take their defaults.
    """

    def __init__(
        self,
        *,
        ip_address,
        name=DEFAULT_NAME,
        status_location=DEFAULT_STATUS_LOCATION,
        outlet_status_location=DEFAULT_OUTLET_STATUS_LOCATION,
        on_location=DEFAULT_ON_LOCATION,
        off_location=DEFAULT_OFF_LOCATION,
        poll_timer=DEFAULT_POLL_TIMER,
        alert_count=DEFAULT_ALERT_COUNT,
        alert_low_temperature=DEFAULT_ALERT_LOW_TEMPERATURE,
        alert_high_temperature=DEFAULT_ALERT_HIGH_TEMPERATURE,
        hysteresis=DEFAULT_HYSTERESIS,
        outlet_locked=False,
        request_timeout=DEFAULT_REQUEST_TIMEOUT
    ):
        """Initialize and validate. Must be called with keyword arguments."""
        self.ip_address = ip_address
        self.name = name
        self.status_location = status_location
        self.outlet_status_location = outlet_status_location
        self.on_location = on_location
        self.off_location = off_location
        self.poll_timer = poll_timer
        self.alert_count = alert_count
        self.alert_low_temperature = alert_low_temperature
        self.alert_high_temperature = alert_high_temperature
        self.hysteresis = hysteresis
        self.outlet_locked = outlet_locked
        self.request_timeout = request_timeout
        self.validate()

    def __repr__(self):
        return "<config name='{}' ip_address='{}'>".format(self.name, self.ip_address)

    def validate(self):
        """Raise `ConfigError` if any value is out of range."""
        if not isinstance(self.ip_address, str) or not self.ip_address.strip():
            raise ConfigError("{} is required".format(CONF_IP_ADDRESS))
        if "/" in self.ip_address:
            raise ConfigError(
                "{} must be a host or host:port, got {!r}".format(
                    CONF_IP_ADDRESS, self.ip_address
                )
            )
        if not isinstance(self.name, str) or not self.name:
            raise ConfigError("{} must be a non-empty string".format(CONF_NAME))
        for key, value in (
            (CONF_STATUS_LOCATION, self.status_location),
            (CONF_OUTLET_STATUS_LOCATION, self.outlet_status_location),
            (CONF_ON_LOCATION, self.on_location),
            (CONF_OFF_LOCATION, self.off_location),
        ):
            _check_location(key, value)
        for key, value in (
            (CONF_POLL_TIMER, self.poll_timer),
            (CONF_REQUEST_TIMEOUT, self.request_timeout),
            (CONF_ALERT_COUNT, self.alert_count),
            (CONF_ALERT_LOW_TEMPERATURE, self.alert_low_temperature),
            (CONF_ALERT_HIGH_TEMPERATURE, self.alert_high_temperature),
            (CONF_HYSTERESIS, self.hysteresis),
        ):
            _check_number(key, value)
        if not isinstance(self.outlet_locked, bool):
            raise ConfigError("{} must be true or false".format(CONF_OUTLET_LOCKED))
        if self.poll_timer <= 0:
            raise ConfigError("{} must be greater than 0".format(CONF_POLL_TIMER))
        if self.request_timeout <= 0:
            raise ConfigError("{} must be greater than 0".format(CONF_REQUEST_TIMEOUT))
        if self.alert_count < 0 or int(self.alert_count) != self.alert_count:
            raise ConfigError("{} must be a whole number >= 0".format(CONF_ALERT_COUNT))
        self.alert_count = int(self.alert_count)
        if self.hysteresis < 0:
            raise ConfigError("{} must be >= 0".format(CONF_HYSTERESIS))
        # A single reading must never be both a high and a low exceedance.
        if self.alert_low_temperature >= self.alert_high_temperature:
            raise ConfigError(
                "{} ({}) must be lower than {} ({})".format(
                    CONF_ALERT_LOW_TEMPERATURE,
                    self.alert_low_temperature,
                    CONF_ALERT_HIGH_TEMPERATURE,
                    self.alert_high_temperature,
                )
            )

    @classmethod
    def from_dict(cls, config):
        """Create a `Config` from a Homebridge-style accessory dict."""
        if not isinstance(config, dict):
            raise ConfigError("Accessory config must be an object, got {!r}".format(config))
        return cls(
            ip_address=config.get(CONF_IP_ADDRESS),
            name=_get(config, CONF_NAME, DEFAULT_NAME),
            status_location=_get(config, CONF_STATUS_LOCATION, DEFAULT_STATUS_LOCATION),
            outlet_status_location=_get(
                config, CONF_OUTLET_STATUS_LOCATION, DEFAULT_OUTLET_STATUS_LOCATION
            ),
            on_location=_get(config, CONF_ON_LOCATION, DEFAULT_ON_LOCATION),
            off_location=_get(config, CONF_OFF_LOCATION, DEFAULT_OFF_LOCATION),
            poll_timer=_get(config, CONF_POLL_TIMER, DEFAULT_POLL_TIMER),
            alert_count=_get(config, CONF_ALERT_COUNT, DEFAULT_ALERT_COUNT),
            alert_low_temperature=_get(
                config, CONF_ALERT_LOW_TEMPERATURE, DEFAULT_ALERT_LOW_TEMPERATURE
            ),
            alert_high_temperature=_get(
                config, CONF_ALERT_HIGH_TEMPERATURE, DEFAULT_ALERT_HIGH_TEMPERATURE
            ),
            hysteresis=_get(config, CONF_HYSTERESIS, DEFAULT_HYSTERESIS),
            outlet_locked=_get(config, CONF_OUTLET_LOCKED, False),
            request_timeout=_get(config, CONF_REQUEST_TIMEOUT, DEFAULT_REQUEST_TIMEOUT),
        )


def _accessory_entries(data):
    if isinstance(data, dict) and CONF_ACCESSORIES in data:
        data = data[CONF_ACCESSORIES]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ConfigError("Expected an accessory object or a list of them")
    return [
        entry
        for entry in data
        if not isinstance(entry, dict)
        or entry.get(CONF_ACCESSORY, ACCESSORY_NAME) == ACCESSORY_NAME
    ]


def load_config_file(path):
    """Read accessory configs from a JSON file.

    The file may hold a single accessory object, a list of them, or a whole
    Homebridge ``config.json``; in the latter case only ``accessories``
    entries registered as ``TH10Switch`` are used.

    :rtype: list[Config]
    """
    with open(path, "r", encoding="utf8") as file:
        try:
            data = json.load(file)
        except ValueError as err:
            raise ConfigError("{} is not valid JSON: {}".format(path, err)) from err

    configs = [Config.from_dict(entry) for entry in _accessory_entries(data)]
    if not configs:
        raise ConfigError("No {} accessories found in {}".format(ACCESSORY_NAME, path))
    logger.debug("Loaded %d accessory config(s) from %s", len(configs), path)
    return configs
