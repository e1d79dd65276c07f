from __future__ import annotations

from enum import Enum

from ..core.errors import UsageError


class SuiteName(str, Enum):
    ANDROID = "android"
    FLOW = "flow"
    LINT = "lint"
    JEST = "jest"
    PRETTIER = "prettier"
    DEPS = "deps"
    SPELL = "spell"


# Declaration order above is the execution order.
ALL_SUITES: tuple[SuiteName, ...] = tuple(SuiteName)
DEFAULT_SUITES: tuple[SuiteName, ...] = tuple(name for name in ALL_SUITES if name is not SuiteName.SPELL)


def parse_suite_names(raw: list[str]) -> tuple[SuiteName, ...]:
    """Resolve CLI suite tokens, keeping first-seen order and dropping repeats."""
    if not raw:
        return DEFAULT_SUITES
    known = {name.value: name for name in ALL_SUITES}
    out: list[SuiteName] = []
    for token in raw:
        name = known.get(token)
        if name is None:
            raise UsageError(f"unknown suite `{token}` (choose from: {', '.join(known)})")
        if name not in out:
            out.append(name)
    return tuple(out)


__all__ = ["ALL_SUITES", "DEFAULT_SUITES", "SuiteName", "parse_suite_names"]
