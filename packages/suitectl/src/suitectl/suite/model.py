from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..scope import SelectionMode
from .names import SuiteName

SuiteStatus = Literal["pass", "fail", "skip"]


@dataclass(frozen=True)
class RunConfiguration:
    selection: SelectionMode
    suites: tuple[SuiteName, ...]
    fix: bool = False
    coverage: bool = False


@dataclass(frozen=True)
class SuiteOutcome:
    name: SuiteName
    status: SuiteStatus
    duration_ms: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status != "fail"


@dataclass
class RunReport:
    outcomes: list[SuiteOutcome] = field(default_factory=list)

    def record(self, outcome: SuiteOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def failed(self) -> list[SuiteName]:
        return [row.name for row in self.outcomes if not row.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


__all__ = ["RunConfiguration", "RunReport", "SuiteOutcome", "SuiteStatus"]
