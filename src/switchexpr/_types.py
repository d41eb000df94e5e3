"""Type aliases shared across switchexpr.

- CaseFunction maps the tested value to a result
- Test is any boolean check over the tested value
"""

from __future__ import annotations

from collections.abc import Callable

type CaseFunction[T, R] = Callable[[T], R]

type Test[T] = Callable[[T], bool]
