"""switchexpr — value-returning switch expressions built by method chaining.

All public types are exported from this module for flat imports:

    from switchexpr import Switch, all_of, negate
"""

__version__ = "0.1.0"

# Predicates
from switchexpr._predicate import (
    And,
    Not,
    Or,
    all_of,
    always,
    any_of,
    negate,
    never,
)

# Switch and its stages
from switchexpr._switch import (
    MissingDefaultCaseError,
    Switch,
    SwitchDefaultCase,
    SwitchError,
    SwitchExpression,
    SwitchStep,
    ValueNotSetError,
    create,
    start,
)
from switchexpr._types import CaseFunction, Test

__all__ = [
    # Type aliases
    "CaseFunction",
    "Test",
    # Switch
    "Switch",
    "SwitchDefaultCase",
    "SwitchStep",
    "SwitchExpression",
    "SwitchError",
    "MissingDefaultCaseError",
    "ValueNotSetError",
    "create",
    "start",
    # Predicates
    "And",
    "Or",
    "Not",
    "all_of",
    "any_of",
    "negate",
    "always",
    "never",
]
