"""CLI text rendering helpers."""

from __future__ import annotations

from ..scope import SelectionMode, describe_mode
from ..suite.model import RunReport
from ..suite.names import SuiteName


def announce_line(name: SuiteName) -> str:
    return f"Running {name.value}..."


def summary_line(report: RunReport) -> str:
    if report.ok:
        return "Passed!"
    return "FAILED: " + " ".join(name.value for name in report.failed)


def render_plan(mode: SelectionMode, suites: tuple[SuiteName, ...]) -> str:
    described = describe_mode(mode)
    scope = described["mode"] if described["ref"] is None else f"{described['mode']} {described['ref']}"
    return "\n".join([f"scope: {scope}", *(name.value for name in suites)])


__all__ = ["announce_line", "render_plan", "summary_line"]
