"""Source cursors: the only stage that touches the underlying sequence."""

from collections.abc import Sequence
from typing import Callable, Iterable, Iterator, Optional, TextIO

from .cursor import Cursor, T


class RangeCursor(Cursor[T]):
    """
    Half-open ``[begin, end)`` window over an indexable sequence.

    Bounds are absolute positions: negative values are rejected, an ``end``
    past the sequence is clamped to its length and a ``begin`` past ``end``
    gives an empty window.
    """

    def __init__(self, sequence, begin: int = 0, end: Optional[int] = None):
        if begin < 0 or (end is not None and end < 0):
            raise ValueError(f"Range bounds must be >= 0, got begin={begin}, end={end}")
        size = len(sequence)
        end = size if end is None else end
        self._sequence = sequence
        self._end = min(end, size)
        self._begin = min(begin, self._end)

    def has_current(self) -> bool:
        return self._begin != self._end

    def current(self) -> T:
        if self._begin == self._end:
            raise self._exhausted()
        return self._sequence[self._begin]

    def advance(self) -> None:
        if self._begin != self._end:
            self._begin += 1

    def __repr__(self):
        return f"RangeCursor(begin={self._begin}, end={self._end})"


class IteratorCursor(Cursor[T]):
    """
    Single-pass cursor over any iterator.

    Holds at most one element. Pulling happens lazily: nothing is read from
    the iterator until has_current() or current() is asked after
    construction or an advance().
    """

    def __init__(self, iterable: Iterable[T]):
        self._iterator = iter(iterable)
        self._value = None
        self._loaded = False
        self._done = False

    def _load(self):
        if self._loaded or self._done:
            return
        try:
            self._value = next(self._iterator)
            self._loaded = True
        except StopIteration:
            self._done = True

    def has_current(self) -> bool:
        self._load()
        return self._loaded

    def current(self) -> T:
        if not self.has_current():
            raise self._exhausted()
        return self._value

    def advance(self) -> None:
        if self.has_current():
            self._value = None
            self._loaded = False

    def __repr__(self):
        state = "done" if self._done else ("loaded" if self._loaded else "pending")
        return f"IteratorCursor({state})"


def from_range(sequence, begin: int = 0, end: Optional[int] = None) -> RangeCursor:
    """Cursor over positions ``[begin, end)`` of ``sequence`` without copying it."""
    return RangeCursor(sequence, begin, end)


def from_iterable(iterable: Iterable[T]) -> IteratorCursor:
    """Single-pass cursor over any iterable (generators, file tokens, ...)."""
    return IteratorCursor(iterable)


def source(iterable, begin: int = 0, end: Optional[int] = None) -> Cursor:
    """
    Build a source cursor.

    Sized, indexable sequences (list, tuple, range, str) get a RangeCursor
    over ``[begin, end)``; anything else is treated as a single-pass
    iterable, for which a window is not supported.
    """
    if isinstance(iterable, Sequence):
        return RangeCursor(iterable, begin, end)
    if begin != 0 or end is not None:
        raise TypeError(f"begin/end require a sequence, got {type(iterable).__name__}")
    return IteratorCursor(iterable)


def read_tokens(stream: TextIO, convert: Callable[[str], T] = str) -> Iterator[T]:
    """
    Lazily yield whitespace-separated tokens from a text stream.

    Reads one character at a time so that the stream is never consumed past
    the delimiter following the last token pulled.
    """
    token = []
    while True:
        char = stream.read(1)
        if not char:
            break
        if char.isspace():
            if token:
                yield convert("".join(token))
                token = []
            continue
        token.append(char)
    if token:
        yield convert("".join(token))
