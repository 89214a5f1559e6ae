import asyncio
import contextlib
import logging
from collections import deque

from .errors import AlreadyHeldError, IllegalStateError

_LOGGER = logging.getLogger(__name__)


class Lock:
    """Asynchronous mutual exclusion for tasks on one event loop.

    Waiters are woken strictly in the order they called acquire(). With
    ``await_checking`` set, acquiring a held lock fails with
    AlreadyHeldError instead of waiting, which turns an accidental
    re-acquire into a loud error rather than a hang.
    """

    def __init__(self, await_checking: bool = False):
        self._await_checking = await_checking
        self._held = False
        self._waiters = deque()

    @property
    def await_checking(self) -> bool:
        return self._await_checking

    @property
    def is_held(self) -> bool:
        return self._held

    async def acquire(self):
        if not self._held:
            self._held = True
            return

        if self._await_checking:
            raise AlreadyHeldError("lock is already held")

        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        _LOGGER.debug("Lock held, queued waiter (%d waiting)", len(self._waiters))
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # ownership was handed over before the cancellation landed
                self.release()
            else:
                with contextlib.suppress(ValueError):
                    self._waiters.remove(waiter)
            raise

    def release(self):
        if not self._held:
            raise IllegalStateError("lock is not held")

        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                _LOGGER.debug("Lock handed over (%d still waiting)", len(self._waiters))
                waiter.set_result(True)
                return

        self._held = False

    async def __aenter__(self):
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.release()

    def __repr__(self):
        state = "held" if self._held else "free"
        return f"<Lock {state} waiters={len(self._waiters)}>"
