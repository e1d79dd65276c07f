"""Centralized subprocess execution helpers."""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()


def run_command(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    ctx: RunContext | None = None,
    encoding: str | None = None,
) -> CommandResult:
    """Run `cmd` to completion, capturing its output."""
    started = time.monotonic()
    proc = subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        text=True,
        encoding=encoding,
        errors="surrogateescape" if encoding else None,
        capture_output=True,
        check=False,
    )
    result = CommandResult(
        code=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    log_event(
        ctx,
        "info",
        "process",
        "run-command",
        command=" ".join(cmd),
        cwd=str(cwd),
        code=result.code,
        duration_ms=result.duration_ms,
    )
    return result


def run_streaming(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    ctx: RunContext | None = None,
) -> int:
    """Run `cmd` with stdout/stderr inherited; the tool's own output is the diagnostic channel."""
    started = time.monotonic()
    proc = subprocess.run(cmd, cwd=cwd, env=env, check=False)
    log_event(
        ctx,
        "info",
        "process",
        "run-tool",
        command=" ".join(cmd),
        cwd=str(cwd),
        code=proc.returncode,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    return proc.returncode


__all__ = ["CommandResult", "run_command", "run_streaming"]
