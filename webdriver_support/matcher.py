"""Matcher normalisation for Clock.wait_for."""
from __future__ import annotations

from typing import Any, Callable


def default_matcher(value: Any) -> bool:
    """Match anything except ``None`` and ``False``."""
    return value is not None and value is not False


def wrap_matcher(matcher) -> Callable[[Any], bool]:
    """Turn the ``matcher`` argument of wait_for into a predicate.

    - ``None`` selects :func:`default_matcher`
    - objects with a ``matches`` method (hamcrest style) are asked directly
    - other callables are used as the predicate
    - anything else is a literal compared by equality, where booleans
      only match the identical boolean
    """
    if matcher is None:
        return default_matcher
    if hasattr(matcher, "matches") and callable(matcher.matches):
        return lambda value: bool(matcher.matches(value))
    if callable(matcher):
        return lambda value: bool(matcher(value))
    return lambda value: _literal_equals(value, matcher)


def _literal_equals(value, expected) -> bool:
    # booleans only equal booleans, so False never matches 0
    if isinstance(value, bool) or isinstance(expected, bool):
        return value is expected
    return value == expected
