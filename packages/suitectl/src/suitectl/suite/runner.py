from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from ..core.config import ProjectConfig
from ..core.errors import PreconditionError
from ..core.logging import log_event
from ..core.process import CommandResult, run_command, run_streaming
from ..scope import Branch, Diff, Full, ScopeResolver
from .model import RunConfiguration, SuiteStatus
from .tools import ToolEnv

if TYPE_CHECKING:
    from ..core.context import RunContext

Execute = Callable[[list[str], Path], int]
Capture = Callable[[list[str], Path], CommandResult]
CheckResult = tuple[SuiteStatus, str]

_NODE_VERSION_RE = re.compile(r"^v?(\d+)\.")


def _verdict(code: int) -> CheckResult:
    return ("pass", "") if code == 0 else ("fail", f"exit code {code}")


def parse_node_major(text: str) -> int | None:
    match = _NODE_VERSION_RE.match(text.strip())
    return int(match.group(1)) if match else None


class SuiteRunner:
    """Check procedures for each suite, bound to one run's configuration and scope."""

    def __init__(
        self,
        run: RunConfiguration,
        resolver: ScopeResolver,
        project: ProjectConfig,
        tools: ToolEnv,
        ctx: RunContext | None = None,
        execute: Execute | None = None,
        capture: Capture | None = None,
    ) -> None:
        self.run = run
        self.resolver = resolver
        self.project = project
        self.tools = tools
        self.ctx = ctx
        self._execute = execute or (lambda cmd, cwd: run_streaming(cmd, cwd, env=tools.env(), ctx=ctx))
        self._capture = capture or (lambda cmd, cwd: run_command(cmd, cwd, env=tools.env(), ctx=ctx))

    def _tool(self, cmd: list[str], subdir: str = "") -> int:
        return self._execute(cmd, self.tools.cwd(subdir))

    def _files(self, suite: str) -> list[str]:
        files = self.resolver.relevant_files()
        log_event(self.ctx, "info", "scope", "relevant-files", suite=suite, mode=self.run.selection.name, count=len(files))
        return files

    def _file_list_suite(self, suite: str, cmd: list[str]) -> CheckResult:
        files = self._files(suite)
        if not files:
            return "skip", "no relevant files"
        return _verdict(self._tool([*cmd, *files]))

    def require_node_major(self) -> None:
        wanted = self.project.node_major
        if wanted is None:
            return
        res = self._capture(["node", "--version"], self.tools.cwd())
        found = parse_node_major(res.stdout) if res.code == 0 else None
        if found is None:
            raise PreconditionError(f"jest: Node.js {wanted}.x is required but `node --version` failed")
        if found != wanted:
            raise PreconditionError(f"jest: Node.js {wanted}.x is required, found {res.stdout.strip()}")

    def run_android(self) -> CheckResult:
        native = self.project.native_dir
        if not self.resolver.intersects([native]):
            return "skip", f"no changes under {native}"
        gradle = ["./gradlew", ":app:testDebugUnitTest"]
        if self._tool([gradle[0], "-q", *gradle[1:]], native) == 0:
            return "pass", ""
        # Quiet gradle output is unreadable on failure; rerun verbosely and keep that verdict.
        return _verdict(self._tool(gradle, native))

    def run_flow(self) -> CheckResult:
        if isinstance(self.run.selection, Full):
            return _verdict(self._tool(["flow", "check"]))
        return self._file_list_suite("flow", ["flow", "focus-check"])

    def run_lint(self) -> CheckResult:
        cmd = ["eslint", "--max-warnings=0"]
        if self.run.fix:
            cmd.append("--fix")
        return self._file_list_suite("lint", cmd)

    def run_jest(self) -> CheckResult:
        selection = self.run.selection
        args: list[str] = []
        if isinstance(selection, Full):
            if self.run.coverage:
                args.append("--coverage")
        elif isinstance(selection, Branch):
            args += ["--changedSince", self.resolver.queries.upstream_ref()]
        elif isinstance(selection, Diff):
            files = self._files("jest")
            if not files:
                return "skip", "no relevant files"
            args += ["--findRelatedTests", *files]
        self.require_node_major()
        return _verdict(self._tool(["jest", *args]))

    def run_prettier(self) -> CheckResult:
        return self._file_list_suite("prettier", ["prettier", "--write" if self.run.fix else "--check"])

    def run_deps(self) -> CheckResult:
        manifests = list(self.project.dependency_manifests)
        if not self.resolver.intersects(manifests):
            return "skip", f"no changes to {', '.join(manifests)}"
        return _verdict(self._tool(["yarn-deduplicate", "--list", "--fail"]))

    def run_spell(self) -> CheckResult:
        return self._file_list_suite("spell", ["cspell", "--no-progress", "--no-summary"])


__all__ = ["CheckResult", "SuiteRunner", "parse_node_major"]
