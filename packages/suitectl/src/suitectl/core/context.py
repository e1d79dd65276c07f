from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .env import getenv
from .repo_root import find_repo_root


@dataclass(frozen=True)
class RunContext:
    run_id: str
    repo_root: Path
    verbose: bool
    quiet: bool
    log_json: bool

    @classmethod
    def from_args(
        cls,
        cwd: str | None = None,
        run_id: str | None = None,
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        repo_root = find_repo_root(Path(cwd) if cwd else None)
        default_run = f"suite-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}-{os.getpid()}"
        return cls(
            run_id=run_id or getenv("RUN_ID") or default_run,
            repo_root=repo_root,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
