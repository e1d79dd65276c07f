"""Sequential suite execution and result aggregation."""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING, Callable, Mapping, Sequence

from ..core.errors import ScriptError
from ..core.logging import log_event
from ..scope import describe_mode
from .model import RunConfiguration, RunReport, SuiteOutcome
from .names import SuiteName
from .registry import CheckProcedure

if TYPE_CHECKING:
    from ..core.context import RunContext


def run_one(name: SuiteName, procedure: CheckProcedure, ctx: RunContext | None = None) -> SuiteOutcome:
    started = time.perf_counter()
    try:
        status, message = procedure()
    except ScriptError as exc:
        status, message = "fail", f"{exc.kind}: {exc.message}"
        sys.stderr.write(f"{name.value}: {message}\n")
    except OSError as exc:
        status, message = "fail", str(exc)
        sys.stderr.write(f"{name.value}: {message}\n")
    duration_ms = int((time.perf_counter() - started) * 1000)
    log_event(ctx, "info" if status != "fail" else "error", "suite", "finish", suite=name.value, status=status, duration_ms=duration_ms)
    return SuiteOutcome(name=name, status=status, duration_ms=duration_ms, message=message)


def run_suites(
    suites: Sequence[SuiteName],
    registry: Mapping[SuiteName, CheckProcedure],
    ctx: RunContext | None = None,
    announce: Callable[[SuiteName], None] | None = None,
) -> RunReport:
    """Run every requested suite in order; a failure never stops the ones after it."""
    report = RunReport()
    for name in suites:
        if announce is not None:
            announce(name)
        log_event(ctx, "info", "suite", "start", suite=name.value)
        report.record(run_one(name, registry[name], ctx))
    return report


def report_payload(report: RunReport, run: RunConfiguration, run_id: str) -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": "suitectl",
        "run_id": run_id,
        "status": "ok" if report.ok else "fail",
        "selection": describe_mode(run.selection),
        "fix": run.fix,
        "coverage": run.coverage,
        "suites": [
            {
                "name": row.name.value,
                "status": row.status,
                "duration_ms": row.duration_ms,
                "message": row.message,
            }
            for row in report.outcomes
        ],
        "failed": [name.value for name in report.failed],
    }


__all__ = ["report_payload", "run_one", "run_suites"]
