"""
Decorator cursors.

Each decorator owns exactly one upstream cursor and pulls from it on demand.
Derived values are cached until the next advance() so that caller-supplied
functions run at most once per element, whatever the number of peeks.
"""

import logging
from typing import Any, Callable, Optional

from .cursor import Cursor, T, U

logger = logging.getLogger(__name__)


class SkipCursor(Cursor[T]):
    """Discards the first ``count`` upstream elements, once, on first access."""

    def __init__(self, upstream: Cursor[T], count: int):
        self._upstream = upstream
        self._remaining = max(0, int(count))
        logger.debug(f"drop({self._remaining}) over {upstream!r}")

    def _discard(self):
        while self._remaining > 0 and self._upstream.has_current():
            self._upstream.advance()
            self._remaining -= 1
        self._remaining = 0

    def has_current(self) -> bool:
        self._discard()
        return self._upstream.has_current()

    def current(self) -> T:
        if not self.has_current():
            raise self._exhausted()
        return self._upstream.current()

    def advance(self) -> None:
        self._discard()
        self._upstream.advance()


class LimitCursor(Cursor[T]):
    """
    Exposes at most ``count`` upstream elements.

    Once the budget is spent the cursor stays exhausted even if upstream has
    more, and upstream is not advanced past the last element handed out.
    """

    def __init__(self, upstream: Cursor[T], count: int):
        self._upstream = upstream
        self._budget = max(0, int(count))
        self._finished = self._budget == 0
        logger.debug(f"take({self._budget}) over {upstream!r}")

    def has_current(self) -> bool:
        # budget first: take(0) must never touch upstream
        return not self._finished and self._upstream.has_current()

    def current(self) -> T:
        if not self.has_current():
            raise self._exhausted()
        return self._upstream.current()

    def advance(self) -> None:
        if not self.has_current():
            return
        self._budget -= 1
        if self._budget == 0:
            self._finished = True
        else:
            self._upstream.advance()


class MapCursor(Cursor[U]):
    """Applies ``func`` (then ``into``, if given) at most once per position."""

    def __init__(self, upstream: Cursor[T], func: Callable[[T], Any],
                 into: Optional[Callable[[Any], U]] = None):
        self._upstream = upstream
        self._func = func
        self._into = into
        self._value = None
        self._cached = False
        logger.debug(f"map({getattr(func, '__name__', func)!s}) over {upstream!r}")

    def has_current(self) -> bool:
        return self._upstream.has_current()

    def current(self) -> U:
        if not self._cached:
            if not self._upstream.has_current():
                raise self._exhausted()
            value = self._func(self._upstream.current())
            if self._into is not None:
                value = self._into(value)
            self._value = value
            self._cached = True
        return self._value

    def advance(self) -> None:
        self._upstream.advance()
        self._value = None
        self._cached = False


class UntilCursor(Cursor[T]):
    """
    Stops before the first upstream element for which ``predicate`` holds.

    Looks one element ahead on construction and after every advance. The
    predicate is never evaluated on a missing element, and once the stop
    condition is met upstream is left untouched for good.
    """

    def __init__(self, upstream: Cursor[T], predicate: Callable[[T], bool]):
        self._upstream = upstream
        self._predicate = predicate
        self._value = None
        self._finished = False
        logger.debug(f"until({getattr(predicate, '__name__', predicate)!s}) over {upstream!r}")
        self._look_ahead()

    def _look_ahead(self):
        # stays finished if the predicate raises
        self._finish()
        if not self._upstream.has_current():
            return
        value = self._upstream.current()
        if self._predicate(value):
            return
        self._value = value
        self._finished = False

    def _finish(self):
        self._finished = True
        self._value = None

    def has_current(self) -> bool:
        return not self._finished

    def current(self) -> T:
        if self._finished:
            raise self._exhausted()
        return self._value

    def advance(self) -> None:
        if self._finished:
            return
        self._upstream.advance()
        self._look_ahead()


class FilterCursor(Cursor[T]):
    """
    Keeps only upstream elements satisfying ``predicate``.

    Skips ahead to the next qualifying element on construction and after
    every advance, evaluating the predicate once per visited element.
    """

    def __init__(self, upstream: Cursor[T], predicate: Callable[[T], bool]):
        self._upstream = upstream
        self._predicate = predicate
        self._value = None
        self._found = False
        logger.debug(f"filter({getattr(predicate, '__name__', predicate)!s}) over {upstream!r}")
        self._seek()

    def _seek(self):
        self._found = False
        self._value = None
        while self._upstream.has_current():
            value = self._upstream.current()
            if self._predicate(value):
                self._value = value
                self._found = True
                return
            self._upstream.advance()

    def has_current(self) -> bool:
        return self._found

    def current(self) -> T:
        if not self._found:
            raise self._exhausted()
        return self._value

    def advance(self) -> None:
        if not self._found:
            return
        self._upstream.advance()
        self._seek()
