"""Conformance fixture loader for switchexpr.

Loads YAML fixtures from spec/tests/ and turns each document into a Switch
built through the public fluent API. Predicates are referenced by name from
PREDICATES; a list of names under ``all_of``/``any_of`` or a single name
under ``not`` composes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

import switchexpr
from switchexpr import Switch, all_of, any_of, negate

SPEC_DIR = Path(__file__).resolve().parent.parent / "spec" / "tests"


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


PREDICATES: dict[str, switchexpr.Test[Any]] = {
    "always": switchexpr.always,
    "never": switchexpr.never,
    "is_int": _is_int,
    "is_str": lambda x: isinstance(x, str),
    "is_list": lambda x: isinstance(x, list),
    "positive": lambda x: _is_int(x) and x > 0,
    "even": lambda x: _is_int(x) and x % 2 == 0,
    "greater_than_10": lambda x: _is_int(x) and x > 10,
    "equals_1": lambda x: x == 1,
    "starts_with_api": lambda x: isinstance(x, str) and x.startswith("/api"),
}


@dataclass
class FixtureCase:
    """A single resolution from a conformance fixture."""

    fixture_name: str
    case_name: str
    switch: dict[str, Any]
    case: dict[str, Any]

    def build(self) -> Any:
        return build_switch(self.switch)

    def resolve(self, expr: Any) -> Any:
        return resolve_case(expr, self.case)

    @property
    def expected_error(self) -> type[Exception] | None:
        name = self.case.get("raises")
        return error_type(name) if name else None


def load_fixtures() -> list[dict[str, Any]]:
    """Load all fixture documents from every YAML file under SPEC_DIR."""
    fixtures: list[dict[str, Any]] = []
    if not SPEC_DIR.exists():
        return fixtures

    for yaml_file in sorted(SPEC_DIR.glob("*.yaml")):
        with yaml_file.open() as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                doc["_source"] = yaml_file.name
                fixtures.append(doc)

    return fixtures


def fixture_id(fixture: dict[str, Any]) -> str:
    """Generate a readable test ID from a fixture."""
    source = fixture.get("_source", "unknown")
    name = fixture.get("name", "unnamed")
    return f"{source}::{name}"


def fixture_cases(fixtures: list[dict[str, Any]]) -> list[FixtureCase]:
    """Flatten fixtures into one FixtureCase per resolution."""
    return [
        FixtureCase(
            fixture_name=fixture_id(fixture),
            case_name=case["name"],
            switch=fixture["switch"],
            case=case,
        )
        for fixture in fixtures
        for case in fixture.get("cases", [])
    ]


# ─── YAML → Switch ──────────────────────────────────────────────────────────


def _returns(result: Any) -> switchexpr.CaseFunction[Any, Any]:
    """Case function for a fixture result; ``{echo: true}`` returns the value."""
    if isinstance(result, dict) and result.get("echo"):
        return lambda value: value
    return lambda _value: result


def parse_test(ref: Any) -> switchexpr.Test[Any]:
    """Resolve a predicate reference: a name, or all_of/any_of/not over names."""
    if isinstance(ref, str):
        return PREDICATES[ref]
    if "all_of" in ref:
        return all_of(*(parse_test(s) for s in ref["all_of"]))
    if "any_of" in ref:
        return any_of(*(parse_test(s) for s in ref["any_of"]))
    if "not" in ref:
        return negate(parse_test(ref["not"]))
    msg = f"Unknown predicate reference: {ref}"
    raise ValueError(msg)


def build_switch(doc: dict[str, Any]) -> Any:
    """Build a Switch from a fixture's ``switch`` section.

    Registration order follows the document: default (when present),
    then singles in order, then predicates in order.
    """
    switch: Any = Switch.of(doc["of"]) if "of" in doc else Switch.start()
    if "default" in doc:
        switch.default_case(_returns(doc["default"]))
    for single in doc.get("single", []):
        switch.single(_key(single["key"]), _returns(single["result"]))
    for pred in doc.get("predicates", []):
        switch.predicate(parse_test(pred["test"]), _returns(pred["result"]))
    return switch.build()


def _key(key: Any) -> Any:
    # YAML sequences become lists; keys need to be hashable.
    return tuple(key) if isinstance(key, list) else key


def resolve_case(expr: Any, case: dict[str, Any]) -> Any:
    """Resolve a case: with its ``value`` if given, else the stored value."""
    if "value" in case:
        return expr.resolve(case["value"])
    return expr.resolve()


def error_type(name: str) -> type[Exception]:
    """Look up an exception class exported by switchexpr."""
    error = getattr(switchexpr, name)
    assert issubclass(error, Exception), name
    return error


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Parametrize ``fixture_case`` from the YAML fixtures."""
    if "fixture_case" in metafunc.fixturenames:
        cases = fixture_cases(load_fixtures())
        metafunc.parametrize(
            "fixture_case", cases, ids=[f"{c.fixture_name}::{c.case_name}" for c in cases]
        )
