"""
Configuration for pytest: import path setup and shared fixtures.
"""

import sys
from pathlib import Path
from typing import Any, Callable, List

import pytest

# Add the project root to Python path so the package imports without installation
parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir))

# Import after path setup
from lazyseq import Cursor, source


class SpyCursor(Cursor):
    """Wraps a cursor and counts every contract call made on it."""

    def __init__(self, inner: Cursor):
        self.inner = inner
        self.has_current_calls = 0
        self.current_calls = 0
        self.advance_calls = 0

    def has_current(self) -> bool:
        self.has_current_calls += 1
        return self.inner.has_current()

    def current(self):
        self.current_calls += 1
        return self.inner.current()

    def advance(self) -> None:
        self.advance_calls += 1
        self.inner.advance()


class CallRecorder:
    """Wraps a function and records every argument it was called with."""

    def __init__(self, func: Callable[[Any], Any]):
        self.func = func
        self.calls: List[Any] = []

    def __call__(self, value):
        self.calls.append(value)
        return self.func(value)

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def spy():
    """Factory fixture: spy(data) returns a SpyCursor over source(data)."""
    def _make(data):
        return SpyCursor(source(data))
    return _make


@pytest.fixture
def recorder():
    """Factory fixture: recorder(func) returns a CallRecorder around func."""
    return CallRecorder
