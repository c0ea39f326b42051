"""This module contains constants used by other modules."""
MAJOR_VERSION = 1
MINOR_VERSION = 0
PATCH_VERSION = 0
__short_version__ = "{}.{}".format(MAJOR_VERSION, MINOR_VERSION)
__version__ = "{}.{}".format(__short_version__, PATCH_VERSION)
REQUIRED_PYTHON_VER = (3, 8)

ACCESSORY_NAME = "TH10Switch"

# ### Accessory information ###
MANUFACTURER = "Sonoff"
MODEL = "TH10/TH16 WiFi Switch"
SERIAL_NUMBER = "N/A"

# ### Config keys ###
CONF_ACCESSORY = "accessory"
CONF_ACCESSORIES = "accessories"
CONF_NAME = "name"
CONF_IP_ADDRESS = "th10IpAddress"
CONF_STATUS_LOCATION = "th10StatusLocation"
CONF_OUTLET_STATUS_LOCATION = "th10OutletStatusLocation"
CONF_ON_LOCATION = "th10OnLocation"
CONF_OFF_LOCATION = "th10OffLocation"
CONF_POLL_TIMER = "pollTimer"
CONF_ALERT_COUNT = "alertCount"
CONF_ALERT_LOW_TEMPERATURE = "alertLowTemperature"
CONF_ALERT_HIGH_TEMPERATURE = "alertHighTemperature"
CONF_HYSTERESIS = "hysteresis"
CONF_OUTLET_LOCKED = "outletLocked"
CONF_REQUEST_TIMEOUT = "requestTimeout"

# ### Defaults ###
DEFAULT_NAME = "My Appliance"
DEFAULT_STATUS_LOCATION = "/cm?cmnd=status%208"
DEFAULT_OUTLET_STATUS_LOCATION = "/cm?cmnd=power"
DEFAULT_ON_LOCATION = "/cm?cmnd=power%20on"
DEFAULT_OFF_LOCATION = "/cm?cmnd=power%20off"
DEFAULT_POLL_TIMER = 60
DEFAULT_ALERT_COUNT = 0
DEFAULT_ALERT_LOW_TEMPERATURE = -5
DEFAULT_ALERT_HIGH_TEMPERATURE = 80
DEFAULT_HYSTERESIS = 3
DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_PORT = 51826
DEFAULT_PERSIST_FILE = "th10switch.state"

# ### Tasmota replies ###
POWER_KEYS = ("Power", "POWER")
POWER_ON = "ON"
POWER_OFF = "OFF"

# ### Temperature ###
MIN_TEMPERATURE = -50

# ### Contact sensor ###
CONTACT_DETECTED = 0  # normal
CONTACT_NOT_DETECTED = 1  # alarm

ALARM_HIGH = "high"
ALARM_LOW = "low"
