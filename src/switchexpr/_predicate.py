"""Predicate composition — Boolean logic over plain test callables.

And, Or, Not wrap any ``Callable[[T], bool]`` (lambdas, functions, the
built-in value matchers) and are callable themselves, so a composed
predicate registers like any other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from switchexpr._types import Test


@dataclass(frozen=True, slots=True)
class And[T]:
    """All predicates must hold (logical AND).

    Short-circuits on the first False. Empty And returns True (vacuous truth).
    """

    predicates: tuple[Test[T], ...]

    def __call__(self, value: T, /) -> bool:
        return all(p(value) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Or[T]:
    """Any predicate must hold (logical OR).

    Short-circuits on the first True. Empty Or returns False.
    """

    predicates: tuple[Test[T], ...]

    def __call__(self, value: T, /) -> bool:
        return any(p(value) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Not[T]:
    """Inverts the inner predicate (logical NOT)."""

    predicate: Test[T]

    def __call__(self, value: T, /) -> bool:
        return not self.predicate(value)


def always(value: Any, /) -> bool:
    return True


def never(value: Any, /) -> bool:
    return False


def all_of[T](*predicates: Test[T]) -> Test[T]:
    """Compose predicates with AND semantics.

    - None -> always
    - One -> returned unwrapped
    - Several -> And(predicates)
    """
    if not predicates:
        return always
    if len(predicates) == 1:
        return predicates[0]
    return And(predicates)


def any_of[T](*predicates: Test[T]) -> Test[T]:
    """Compose predicates with OR semantics.

    - None -> never
    - One -> returned unwrapped
    - Several -> Or(predicates)
    """
    if not predicates:
        return never
    if len(predicates) == 1:
        return predicates[0]
    return Or(predicates)


def negate[T](predicate: Test[T]) -> Test[T]:
    return Not(predicate)
