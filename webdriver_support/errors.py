"""Errors raised by Lock and Clock.wait_for."""


class IllegalStateError(RuntimeError):
    """Operation is not valid for the current state of the lock."""


class AlreadyHeldError(IllegalStateError):
    """acquire() on a held lock created with await_checking=True."""


class WaitTimeoutError(TimeoutError):
    """wait_for reached its deadline without a matching value.

    ``last_value`` is the most recent value the probe returned that did not
    match, or ``None`` if the probe never returned one.
    """

    def __init__(self, message, last_value=None):
        super().__init__(message)
        self.last_value = last_value
