import asyncio
import inspect
import logging
import math
import time

import voluptuous as vol

from .const import CONF_INTERVAL, CONF_TIMEOUT, DEFAULT_INTERVAL, DEFAULT_TIMEOUT
from .errors import WaitTimeoutError
from .matcher import wrap_matcher

_LOGGER = logging.getLogger(__name__)

MICROSECONDS_PER_SECOND = 1_000_000


def _finite(value):
    if not math.isfinite(value):
        raise vol.Invalid(f"expected a finite number of seconds, got {value}")
    return value


_NON_NEGATIVE_SECONDS = vol.All(vol.Coerce(float), _finite, vol.Range(min=0))

WAIT_FOR_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): _NON_NEGATIVE_SECONDS,
        vol.Optional(CONF_INTERVAL, default=DEFAULT_INTERVAL): _NON_NEGATIVE_SECONDS,
    }
)


class Clock:
    """Source of time for polling code.

    Timing knobs (for tests / tuning):
    - sleep_func: injectable sleep coroutine (defaults to asyncio.sleep)

    Tests usually substitute FakeClock rather than patching sleep_func.
    """

    def __init__(self, *, sleep_func=asyncio.sleep):
        self._sleep = sleep_func

    @property
    def now(self) -> float:
        """Current time in seconds, monotonic."""
        return time.monotonic()

    def deadline_after(self, seconds: float) -> float:
        """Value of ``now`` once ``seconds`` have passed."""
        return self.now + seconds

    async def sleep(self, seconds: float = DEFAULT_INTERVAL):
        await self._sleep(seconds)

    async def wait_for(self, probe, matcher=None, timeout=None, interval=None):
        """Poll ``probe`` until its value satisfies ``matcher``.

        ``probe`` is called with no arguments and may return a value or an
        awaitable. Exceptions raised by the probe (or by the matcher) are
        remembered and the probe is retried every ``interval`` seconds. Once
        ``timeout`` seconds have passed on this clock the most recent
        exception is re-raised; if the probe never raised, WaitTimeoutError
        is raised carrying the last value that did not match.
        """
        options = WAIT_FOR_SCHEMA(
            {
                key: value
                for key, value in ((CONF_TIMEOUT, timeout), (CONF_INTERVAL, interval))
                if value is not None
            }
        )
        timeout = options[CONF_TIMEOUT]
        interval = options[CONF_INTERVAL]
        predicate = wrap_matcher(matcher)

        deadline = self.deadline_after(timeout)
        last_error = None
        last_value = None
        polls = 0

        while True:
            polls += 1
            try:
                value = probe()
                if inspect.isawaitable(value):
                    value = await value
                if predicate(value):
                    _LOGGER.info("wait_for matched after %d poll(s): %r", polls, value)
                    return value
                last_value = value
            except asyncio.CancelledError:
                raise
            except Exception as ex:  # noqa: BLE001
                _LOGGER.debug("wait_for poll %d raised %s", polls, repr(ex))
                last_error = ex
            else:
                _LOGGER.debug("wait_for poll %d did not match: %r", polls, value)

            if self.now >= deadline:
                if last_error is not None:
                    _LOGGER.warning(
                        "wait_for gave up after %d poll(s) (%.3fs), re-raising %s",
                        polls,
                        timeout,
                        repr(last_error),
                    )
                    raise last_error
                _LOGGER.warning(
                    "wait_for gave up after %d poll(s) (%.3fs), last value: %r",
                    polls,
                    timeout,
                    last_value,
                )
                raise WaitTimeoutError(
                    f"condition not satisfied within {timeout}s, last value: {last_value!r}",
                    last_value,
                )

            await self.sleep(interval)


class FakeClock(Clock):
    """Virtual clock: sleeping advances ``now`` and returns at once.

    Time is kept in whole microseconds so repeated sleeps land exactly on
    deadlines computed by deadline_after().
    """

    def __init__(self, start: float = 0.0):
        super().__init__()
        self._micros = _to_micros(start)

    @property
    def now(self) -> float:
        return self._micros / MICROSECONDS_PER_SECOND

    def deadline_after(self, seconds: float) -> float:
        return (self._micros + _to_micros(seconds)) / MICROSECONDS_PER_SECOND

    def advance(self, seconds: float):
        micros = _to_micros(seconds)
        if micros < 0:
            raise ValueError("cannot move a clock backwards")
        self._micros += micros

    async def sleep(self, seconds: float = DEFAULT_INTERVAL):
        self.advance(seconds)


def _to_micros(seconds: float) -> int:
    return round(seconds * MICROSECONDS_PER_SECOND)


default_clock = Clock()


async def wait_for(probe, matcher=None, timeout=None, interval=None):
    """Clock.wait_for on the process-wide real clock."""
    return await default_clock.wait_for(
        probe, matcher=matcher, timeout=timeout, interval=interval
    )


async def sleep(seconds: float = DEFAULT_INTERVAL):
    await default_clock.sleep(seconds)
