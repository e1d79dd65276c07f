from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONFIG, ERR_SUITE, ERR_USAGE


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class UsageError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_USAGE, "usage_error")


class ConfigError(ScriptError):
    def __init__(self, message: str, kind: str = "config_error") -> None:
        super().__init__(message, ERR_CONFIG, kind)


class ScopeError(ScriptError):
    """A version-control query needed to resolve the file scope failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_SUITE, "scope_error")


class PreconditionError(ScriptError):
    """A suite's runtime prerequisite is not met on this machine."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_SUITE, "precondition_error")


__all__ = ["ConfigError", "PreconditionError", "ScopeError", "ScriptError", "UsageError"]
