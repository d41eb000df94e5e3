"""Test utilities for switchexpr.

Provides a recording case function for tests and examples that need to
check which case ran and what it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RecordingFunction[R]:
    """Callable that returns ``result`` and records every argument.

    >>> from switchexpr import Switch
    >>> from switchexpr.testing import RecordingFunction
    >>> fallback = RecordingFunction("other")
    >>> Switch.of(5).default_case(fallback).resolve()
    'other'
    >>> fallback.calls
    [5]
    """

    result: R
    calls: list[Any] = field(default_factory=list)

    def __call__(self, value: Any, /) -> R:
        self.calls.append(value)
        return self.result

    @property
    def called(self) -> bool:
        return bool(self.calls)


@dataclass(slots=True)
class RecordingPredicate:
    """Predicate with a fixed answer that records every argument."""

    answer: bool
    calls: list[Any] = field(default_factory=list)

    def __call__(self, value: Any, /) -> bool:
        self.calls.append(value)
        return self.answer

    @property
    def called(self) -> bool:
        return bool(self.calls)
