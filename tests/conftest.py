"""Pytest configuration, shared job fixtures & custom summary hook.

Also ensures the project root is on sys.path so 'prodsched' and 'main'
import without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'import prodsched.*' works
_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from prodsched.models import Job  # noqa: E402


def make_jobs(*times: tuple) -> list[Job]:
    """Jobs J1..Jn from per-job processing-time tuples."""
    return [Job(id=i + 1, name=f"J{i + 1}", processing_times=t) for i, t in enumerate(times)]


@pytest.fixture
def johnson_jobs() -> list[Job]:
    # classic 3-job two-machine example
    return make_jobs((3, 5), (6, 2), (1, 4))


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        "Collected: "
        f"{collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
