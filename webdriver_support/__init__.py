"""Asynchronous Lock and polling Clock for browser automation code."""
from .clock import Clock, FakeClock, default_clock, sleep, wait_for
from .const import DEFAULT_INTERVAL, DEFAULT_TIMEOUT
from .errors import AlreadyHeldError, IllegalStateError, WaitTimeoutError
from .lock import Lock
from .matcher import default_matcher

__all__ = [
    "Lock",
    "Clock",
    "FakeClock",
    "default_clock",
    "wait_for",
    "sleep",
    "default_matcher",
    "DEFAULT_INTERVAL",
    "DEFAULT_TIMEOUT",
    "IllegalStateError",
    "AlreadyHeldError",
    "WaitTimeoutError",
]
