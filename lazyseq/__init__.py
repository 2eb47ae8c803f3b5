"""
lazyseq - lazy, pull-based cursor pipelines.

    >>> from lazyseq import source
    >>> (source([1, 2, 3, 4, 5])
    ...     .map(lambda x: x * x)
    ...     .filter_neq(25)
    ...     .filter(lambda x: x > 3)
    ...     .drop(2)
    ...     .to_collection())
    [16]
"""

from .cursor import Cursor, IllegalStateError
from .decorators import FilterCursor, LimitCursor, MapCursor, SkipCursor, UntilCursor
from .sources import IteratorCursor, RangeCursor, from_iterable, from_range, read_tokens, source

__all__ = [
    "Cursor",
    "IllegalStateError",
    "RangeCursor",
    "IteratorCursor",
    "SkipCursor",
    "LimitCursor",
    "MapCursor",
    "UntilCursor",
    "FilterCursor",
    "source",
    "from_range",
    "from_iterable",
    "read_tokens",
]

__version__ = "1.0.0"
