"""Suite name to check procedure table."""

from __future__ import annotations

from typing import Callable

from .names import ALL_SUITES, SuiteName
from .runner import CheckResult, SuiteRunner

CheckProcedure = Callable[[], CheckResult]


def build_registry(runner: SuiteRunner) -> dict[SuiteName, CheckProcedure]:
    registry: dict[SuiteName, CheckProcedure] = {
        SuiteName.ANDROID: runner.run_android,
        SuiteName.FLOW: runner.run_flow,
        SuiteName.LINT: runner.run_lint,
        SuiteName.JEST: runner.run_jest,
        SuiteName.PRETTIER: runner.run_prettier,
        SuiteName.DEPS: runner.run_deps,
        SuiteName.SPELL: runner.run_spell,
    }
    missing = [name.value for name in ALL_SUITES if name not in registry]
    if missing:
        raise RuntimeError(f"suite registry incomplete: {', '.join(missing)}")
    return registry


__all__ = ["CheckProcedure", "build_registry"]
