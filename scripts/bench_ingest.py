#!/usr/bin/env python3
"""Record switchexpr benchmark timings in a local DuckDB file.

Typical loop:
    pytest tests/bench --benchmark-only --benchmark-json bench/raw/cpython-3.12.json
    python scripts/bench_ingest.py --label "after predicate fast path"

Every ``*.json`` report in the input directory is read. The report's file
stem names the series (one per interpreter or machine), and each benchmark
name ``test_bench_<scenario>_<phase>`` is split into scenario and phase.
One invocation produces one row in ``snapshots`` and one ``timings`` row per
benchmark.
"""

from __future__ import annotations

import json
import platform
import subprocess
import sys
from dataclasses import astuple, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click
import duckdb

DEFAULT_DB = Path("bench/switchexpr.duckdb")
DEFAULT_REPORTS = Path("bench/raw")
PHASES = ("build", "resolve")
NANOS_PER_SECOND = 1e9

TABLES = """
CREATE SEQUENCE IF NOT EXISTS snapshot_ids START 1;

CREATE TABLE IF NOT EXISTS snapshots (
    id          INTEGER PRIMARY KEY DEFAULT nextval('snapshot_ids'),
    taken_at    TIMESTAMPTZ NOT NULL,
    revision    VARCHAR NOT NULL,
    host        VARCHAR,
    interpreter VARCHAR,
    label       VARCHAR
);

CREATE TABLE IF NOT EXISTS timings (
    snapshot_id INTEGER NOT NULL REFERENCES snapshots(id),
    series      VARCHAR NOT NULL,
    scenario    VARCHAR NOT NULL,
    phase       VARCHAR NOT NULL,
    mean_ns     DOUBLE NOT NULL,
    median_ns   DOUBLE,
    stddev_ns   DOUBLE,
    rounds      BIGINT,
    PRIMARY KEY (snapshot_id, series, scenario, phase)
);
"""


@dataclass(frozen=True, slots=True)
class Timing:
    series: str
    scenario: str
    phase: str
    mean_ns: float
    median_ns: float | None
    stddev_ns: float | None
    rounds: int | None


def current_revision() -> str:
    """Short git revision of the working tree, or "untracked" outside git."""
    proc = subprocess.run(
        ["git", "rev-parse", "--short", "HEAD"],
        capture_output=True,
        text=True,
        check=False,
    )
    return proc.stdout.strip() or "untracked"


def scenario_and_phase(test_name: str) -> tuple[str, str]:
    """``test_bench_single_hit_resolve`` -> ("single_hit", "resolve")."""
    stem = test_name.removeprefix("test_bench_")
    for phase in PHASES:
        suffix = f"_{phase}"
        if stem.endswith(suffix):
            return stem.removesuffix(suffix), phase
    return stem, "resolve"


def _ns(seconds: float | None) -> float | None:
    return None if seconds is None else seconds * NANOS_PER_SECOND


def read_report(path: Path) -> list[Timing]:
    """Timings from one pytest-benchmark JSON report."""
    report: dict[str, Any] = json.loads(path.read_text())
    timings = []
    for entry in report.get("benchmarks", []):
        scenario, phase = scenario_and_phase(entry["name"])
        stats = entry["stats"]
        timings.append(
            Timing(
                series=path.stem,
                scenario=scenario,
                phase=phase,
                mean_ns=stats["mean"] * NANOS_PER_SECOND,
                median_ns=_ns(stats.get("median")),
                stddev_ns=_ns(stats.get("stddev")),
                rounds=stats.get("rounds"),
            )
        )
    return timings


def open_snapshot(con: duckdb.DuckDBPyConnection, label: str | None) -> int:
    """Create the tables if needed and insert a snapshot row; return its id."""
    con.execute(TABLES)
    row = con.execute(
        "INSERT INTO snapshots (taken_at, revision, host, interpreter, label) "
        "VALUES (?, ?, ?, ?, ?) RETURNING id",
        [
            datetime.now(timezone.utc),
            current_revision(),
            f"{platform.node()} ({platform.machine()})",
            f"{platform.python_implementation()} {platform.python_version()}",
            label,
        ],
    ).fetchone()
    return row[0]


@click.command()
@click.option("--db", "db_path", type=click.Path(path_type=Path), default=DEFAULT_DB,
              show_default=True, help="DuckDB file to append to.")
@click.option("--reports", "reports_dir", type=click.Path(path_type=Path),
              default=DEFAULT_REPORTS, show_default=True,
              help="Directory of pytest-benchmark JSON reports.")
@click.option("--label", default=None, help="Free-form note stored with the snapshot.")
def main(db_path: Path, reports_dir: Path, label: str | None) -> None:
    """Append benchmark reports to the timing database."""
    reports = sorted(reports_dir.glob("*.json"))
    if not reports:
        click.echo(f"nothing to ingest: no *.json under {reports_dir}", err=True)
        sys.exit(1)

    db_path.parent.mkdir(parents=True, exist_ok=True)
    with duckdb.connect(str(db_path)) as con:
        snapshot_id = open_snapshot(con, label)
        for report in reports:
            timings = read_report(report)
            if not timings:
                click.echo(f"{report.name}: no benchmarks, skipped")
                continue
            con.executemany(
                "INSERT INTO timings VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                [(snapshot_id, *astuple(t)) for t in timings],
            )
            click.echo(f"{report.name}: {len(timings)} timings")

    click.echo(f"snapshot {snapshot_id} written to {db_path}")


if __name__ == "__main__":
    main()
