"""Constants for the webdriver support primitives."""

DEFAULT_TIMEOUT = 5.0
DEFAULT_INTERVAL = 0.5

CONF_TIMEOUT = "timeout"
CONF_INTERVAL = "interval"
