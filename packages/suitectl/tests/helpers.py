from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from suitectl.core.config import ProjectConfig
from suitectl.core.process import CommandResult
from suitectl.scope import ScopeResolver, SelectionMode
from suitectl.suite.model import RunConfiguration
from suitectl.suite.names import DEFAULT_SUITES
from suitectl.suite.runner import SuiteRunner
from suitectl.suite.tools import ToolEnv

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"

_GIT_IDENTITY = [
    "-c", "user.name=suitectl tests",
    "-c", "user.email=tests@suitectl.invalid",
    "-c", "commit.gpgsign=false",
]


@dataclass
class FakeQueries:
    """In-memory stand-in for `GitQueries`."""

    changed: list[str] = field(default_factory=list)
    diffs: dict[str, list[str]] = field(default_factory=dict)
    touched: dict[str, set[str]] = field(default_factory=dict)
    upstream: str = "upstream/main"
    base: str = "base-sha"
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def upstream_ref(self) -> str:
        self.calls.append(("upstream_ref",))
        return self.upstream

    def base_commit(self) -> str:
        self.calls.append(("base_commit",))
        return self.base

    def changed_files(self) -> list[str]:
        self.calls.append(("changed_files",))
        return list(self.changed)

    def diff_names(self, ref: str, paths: Sequence[str] = ()) -> list[str]:
        self.calls.append(("diff_names", ref))
        return list(self.diffs.get(ref, []))

    def differs(self, ref: str, paths: Sequence[str]) -> bool:
        self.calls.append(("differs", ref, *paths))
        return bool(self.touched.get(ref, set()).intersection(paths))


@dataclass
class RecordingExecutor:
    codes: list[int] = field(default_factory=list)
    calls: list[tuple[list[str], Path]] = field(default_factory=list)

    def __call__(self, cmd: list[str], cwd: Path) -> int:
        self.calls.append((list(cmd), cwd))
        return self.codes.pop(0) if self.codes else 0

    @property
    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _cwd in self.calls]


def make_runner(
    mode: SelectionMode,
    queries: FakeQueries | None = None,
    *,
    fix: bool = False,
    coverage: bool = False,
    project: ProjectConfig | None = None,
    executor: RecordingExecutor | None = None,
    node_version: str = "v18.19.0\n",
    node_code: int = 0,
    root: Path = Path("/repo"),
) -> tuple[SuiteRunner, RecordingExecutor]:
    project = project or ProjectConfig()
    queries = queries or FakeQueries()
    executor = executor or RecordingExecutor()
    run = RunConfiguration(selection=mode, suites=DEFAULT_SUITES, fix=fix, coverage=coverage)
    runner = SuiteRunner(
        run,
        ScopeResolver(mode, queries, project),
        project,
        ToolEnv.for_project(root, project, base_env={"PATH": "/usr/bin"}),
        execute=executor,
        capture=lambda cmd, cwd: CommandResult(code=node_code, stdout=node_version, stderr="", duration_ms=0),
    )
    return runner, executor


def git(repo: Path, *args: str) -> str:
    proc = subprocess.run(["git", *_GIT_IDENTITY, *args], cwd=repo, text=True, capture_output=True, check=True)
    return proc.stdout


def write(repo: Path, rel: str, text: str = "x\n") -> None:
    path = repo / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def commit_all(repo: Path, message: str) -> None:
    git(repo, "add", "-A")
    git(repo, "commit", "-q", "-m", message)


def init_repo(repo: Path) -> Path:
    repo.mkdir(parents=True)
    git(repo, "init", "-q")
    write(repo, "src/app.js", "export const app = 1;\n")
    write(repo, "src/old.js", "export const old = 1;\n")
    write(repo, "package.json", "{}\n")
    write(repo, "yarn.lock", "\n")
    write(repo, "android/build.gradle", "\n")
    commit_all(repo, "initial")
    git(repo, "branch", "upstream-main")
    return repo


def install_fake_tools(repo: Path, codes: dict[str, int]) -> Path:
    """Put shell shims for each tool under node_modules/.bin; each appends its argv to a log."""
    bin_dir = repo / "node_modules/.bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    log = repo.parent / "tool-calls.log"
    for name, code in codes.items():
        shim = bin_dir / name
        shim.write_text(f'#!/bin/sh\necho "{name} $*" >> "{log}"\nexit {code}\n', encoding="utf-8")
        shim.chmod(0o755)
    return log


def run_suitectl(*args: str, cwd: Path, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    full_env = os.environ.copy()
    full_env.pop("SUITECTL_CONFIG", None)
    full_env.pop("SUITECTL_UPSTREAM", None)
    full_env["PYTHONPATH"] = str(SRC_ROOT)
    full_env.update(env or {})
    return subprocess.run(
        [sys.executable, "-m", "suitectl", *args],
        cwd=cwd,
        env=full_env,
        text=True,
        capture_output=True,
        check=False,
    )
