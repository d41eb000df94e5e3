"""Switch — value-returning switch expression built through method chaining.

One Switch instance plays three roles, narrowed by the stage protocols:
- SwitchDefaultCase: only the default case can be registered
- SwitchStep: single and predicate cases, build, resolve
- SwitchExpression: resolution only (resolve, apply, call)

Resolution order:
- Exact single-case lookup by equality always wins
- Predicate cases in registration order (first-match-wins)
- Default case otherwise
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from switchexpr._types import CaseFunction, Test


class SwitchError(Exception):
    """Errors from switch configuration and resolution."""


class MissingDefaultCaseError(SwitchError):
    """Resolution was attempted before a default case was registered."""


class ValueNotSetError(SwitchError):
    """resolve() was called without a stored test value."""


_UNSET: Any = object()


class SwitchExpression[T, R](Protocol):
    """Resolution-only view of a configured switch."""

    def resolve(self, value: T = ..., /) -> R: ...

    def apply(self, value: T, /) -> R: ...

    def __call__(self, value: T, /) -> R: ...


class SwitchStep[T, R](SwitchExpression[T, R], Protocol):
    """Case registration stage, reachable once the default case is set."""

    def single(self, key: T, function: CaseFunction[T, R]) -> SwitchStep[T, R]: ...

    def predicate(
        self, predicate: Test[T], function: CaseFunction[T, R]
    ) -> SwitchStep[T, R]: ...

    def with_value(self, value: T) -> SwitchStep[T, R]: ...

    def build(self) -> SwitchExpression[T, R]: ...


class SwitchDefaultCase[T, R](Protocol):
    """Entry stage: the default case must be registered first."""

    def default_case(self, function: CaseFunction[T, R]) -> SwitchStep[T, R]: ...


class Switch[T, R]:
    """Builder and evaluator for a switch expression.

    Use :meth:`of` or :meth:`start` to create one; both are typed as the
    default-case stage so the fallback is always registered first::

        grade = (
            Switch.start()
            .default_case(lambda _: "other")
            .single(1, lambda _: "one")
            .predicate(lambda x: x > 10, lambda _: "big")
            .build()
        )
        list(map(grade, [1, 20, 5]))  # ["one", "big", "other"]

    Registration is not thread-safe. ``resolve(value)`` never writes to the
    instance, so a built expression may be shared for value resolution.
    """

    __slots__ = ("_default", "_predicates", "_singles", "_value")

    def __init__(self) -> None:
        self._default: CaseFunction[T, R] | None = None
        self._value: T = _UNSET
        self._singles: dict[T, CaseFunction[T, R]] = {}
        self._predicates: list[tuple[Test[T], CaseFunction[T, R]]] = []

    @classmethod
    def of(cls, value: T) -> SwitchDefaultCase[T, R]:
        """Start a switch with the value to test already stored."""
        switch: Switch[T, R] = cls()
        switch._value = value
        return switch

    @classmethod
    def start(cls) -> SwitchDefaultCase[T, R]:
        """Start a switch without a stored value.

        The value is supplied later through ``resolve(value)``, a call, or
        ``with_value``.
        """
        return cls()

    # ── Registration ────────────────────────────────────────────────────────

    def default_case(self, function: CaseFunction[T, R]) -> SwitchStep[T, R]:
        """Register the fallback function. A later call replaces it."""
        self._default = function
        return self

    def single(self, key: T, function: CaseFunction[T, R]) -> SwitchStep[T, R]:
        """Register an exact-match case. Re-registering a key replaces it."""
        self._singles[key] = function
        return self

    def predicate(self, predicate: Test[T], function: CaseFunction[T, R]) -> SwitchStep[T, R]:
        """Append a predicate case. Earlier predicates take priority."""
        self._predicates.append((predicate, function))
        return self

    def with_value(self, value: T) -> SwitchStep[T, R]:
        """Store the value used by the no-argument ``resolve()``."""
        self._value = value
        return self

    def build(self) -> SwitchExpression[T, R]:
        """Narrow to the resolution view. No copy, no validation."""
        return self

    # ── Resolution ──────────────────────────────────────────────────────────

    def resolve(self, value: T = _UNSET, /) -> R:
        """Resolve against ``value``, or the stored value when omitted.

        Raises:
            ValueNotSetError: If no value is given and none is stored.
            MissingDefaultCaseError: If no default case was registered.
        """
        if value is _UNSET:
            value = self._value
            if value is _UNSET:
                msg = "no test value: pass one to resolve() or use of()/with_value()"
                raise ValueNotSetError(msg)
        return self._evaluate(value)

    def apply(self, value: T, /) -> R:
        return self._evaluate(value)

    def __call__(self, value: T, /) -> R:
        return self._evaluate(value)

    def _evaluate(self, value: T) -> R:
        default = self._default
        if default is None:
            msg = "switch has no default case; call default_case() before resolving"
            raise MissingDefaultCaseError(msg)

        # Values that cannot be hashed can never equal a registered key.
        try:
            function = self._singles.get(value)
        except TypeError:
            function = None
        if function is not None:
            return function(value)

        for predicate, function in self._predicates:
            if predicate(value):
                return function(value)

        return default(value)

    def __repr__(self) -> str:
        value = "<unset>" if self._value is _UNSET else repr(self._value)
        return (
            f"Switch(value={value}, singles={list(self._singles)!r}, "
            f"predicates={len(self._predicates)}, "
            f"default={'set' if self._default is not None else 'unset'})"
        )


def create[T, R](value: T) -> SwitchDefaultCase[T, R]:
    """Begin a switch with ``value`` stored. Same as :meth:`Switch.of`."""
    return Switch.of(value)


def start[T, R]() -> SwitchDefaultCase[T, R]:
    """Begin a switch without a stored value. Same as :meth:`Switch.start`."""
    return Switch.start()
