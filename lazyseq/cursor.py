"""
Cursor contract and the fluent composition layer.

Every stage of a pipeline is a ``Cursor``: a forward-only position over a
sequence exposing ``has_current()``, ``current()`` and ``advance()``.
Decorators (drop, take, map, until, filter) wrap exactly one upstream cursor
and pull from it on demand; materializers drain the chain.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
U = TypeVar('U')


class IllegalStateError(Exception):
    """Raised when current() is read from a cursor with no current element."""
    pass


class Cursor(ABC, Generic[T]):
    """
    Abstract pull-based cursor.

    Contract:
        has_current() -- repeatable, no logical side effect
        current()     -- idempotent until the next advance(); raises
                         IllegalStateError when has_current() is false
        advance()     -- moves one element forward; no-op when exhausted

    Wrapping a cursor hands it over to the new decorator. Keep only the
    outermost cursor and consume it once.
    """

    @abstractmethod
    def has_current(self) -> bool:
        ...

    @abstractmethod
    def current(self) -> T:
        ...

    @abstractmethod
    def advance(self) -> None:
        ...

    def _exhausted(self) -> IllegalStateError:
        return IllegalStateError(f"{type(self).__name__} has no current element")

    # --------- decorators (lazy) ----------
    def drop(self, count: int) -> 'Cursor[T]':
        """Skip the first ``count`` elements."""
        from .decorators import SkipCursor
        return SkipCursor(self, count)

    def take(self, count: int) -> 'Cursor[T]':
        """Expose at most ``count`` elements."""
        from .decorators import LimitCursor
        return LimitCursor(self, count)

    def map(self, func: Callable[[T], U], into: Optional[Callable[[Any], U]] = None) -> 'Cursor[U]':
        """Transform each element; ``into`` converts the result to an explicit target type."""
        from .decorators import MapCursor
        return MapCursor(self, func, into)

    def until(self, predicate: Callable[[T], bool]) -> 'Cursor[T]':
        """Stop before the first element satisfying ``predicate``."""
        from .decorators import UntilCursor
        return UntilCursor(self, predicate)

    def until_eq(self, value: T) -> 'Cursor[T]':
        return self.until(lambda x: x == value)

    def until_neq(self, value: T) -> 'Cursor[T]':
        return self.until(lambda x: x != value)

    def take_while(self, predicate: Callable[[T], bool]) -> 'Cursor[T]':
        """Keep the leading run of elements satisfying ``predicate``."""
        return self.until(lambda x: not predicate(x))

    def take_while_eq(self, value: T) -> 'Cursor[T]':
        return self.until_neq(value)

    def take_while_neq(self, value: T) -> 'Cursor[T]':
        return self.until_eq(value)

    def filter(self, predicate: Callable[[T], bool]) -> 'Cursor[T]':
        """Keep only elements satisfying ``predicate``."""
        from .decorators import FilterCursor
        return FilterCursor(self, predicate)

    def filter_eq(self, value: T) -> 'Cursor[T]':
        return self.filter(lambda x: x == value)

    def filter_neq(self, value: T) -> 'Cursor[T]':
        return self.filter(lambda x: x != value)

    # Names used by the query-style API
    skip = drop
    select = map
    where = filter
    where_eq = filter_eq
    where_neq = filter_neq

    # --------- materializers (terminal) ----------
    def to_collection(self) -> List[T]:
        """Drain the cursor into a new list."""
        result = []
        while self.has_current():
            result.append(self.current())
            self.advance()
        logger.debug(f"{type(self).__name__} drained {len(result)} elements")
        return result

    to_list = to_collection

    def copy_to(self, sink) -> int:
        """
        Drain the cursor into ``sink`` and return how many values were written.

        ``sink`` is a callable taking one value, a list-like object with
        ``append``, or a text stream with ``write`` (values are written with
        ``str()`` followed by a newline).
        """
        if callable(sink):
            put = sink
        elif hasattr(sink, 'append'):
            put = sink.append
        elif hasattr(sink, 'write'):
            return self.write_to(sink)
        else:
            raise TypeError(f"Unsupported sink type: {type(sink).__name__}")

        written = 0
        while self.has_current():
            put(self.current())
            written += 1
            self.advance()
        logger.debug(f"{type(self).__name__} copied {written} elements")
        return written

    def write_to(self, stream, sep: str = "\n") -> int:
        """Drain the cursor into a text stream, each value followed by ``sep``."""
        written = 0
        while self.has_current():
            stream.write(f"{self.current()}{sep}")
            written += 1
            self.advance()
        return written

    def count(self) -> int:
        """Drain the cursor and return the number of elements."""
        total = 0
        while self.has_current():
            total += 1
            self.advance()
        return total

    def first(self, default=None):
        """
        Return the first element, or default if empty.

        Advances the cursor by one position; a filter or until upstream may
        look further ahead to find its next element.
        """
        if not self.has_current():
            return default
        value = self.current()
        self.advance()
        return value

    # --------- iterator protocol ----------
    def __iter__(self) -> Iterator[T]:
        while self.has_current():
            value = self.current()
            self.advance()
            yield value
