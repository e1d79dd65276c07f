from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..core.config import load_project_config
from ..core.context import RunContext
from ..core.errors import ConfigError, ScriptError, UsageError
from ..core.exit_codes import ERR_SUITE, OK
from ..core.git import GitQueries
from ..core.logging import log_event
from ..core.serialize import dumps_json
from ..scope import Branch, Diff, Full, ScopeResolver, describe_mode
from ..suite.model import RunConfiguration
from ..suite.names import ALL_SUITES, DEFAULT_SUITES, SuiteName, parse_suite_names
from ..suite.registry import build_registry
from ..suite.run import report_payload, run_suites
from ..suite.runner import SuiteRunner
from ..suite.tools import ToolEnv
from .output import announce_line, render_plan, summary_line

_DESCRIPTION = f"""Run our test suites.

By default, run only on files changed in this branch, relative to the
commit where it diverged from upstream.

By default, run all suites except spell-checking.
Suites: {' '.join(name.value for name in ALL_SUITES)}
Default: {' '.join(name.value for name in DEFAULT_SUITES)}
"""


def _diff_ref(raw: str) -> Diff:
    if not raw.strip():
        raise argparse.ArgumentTypeError("--diff needs a non-empty commit")
    return Diff(raw.strip())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="suitectl",
        usage="%(prog)s [--full | --diff COMMIT] [--coverage] [--fix] [SUITE...]",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"suitectl {__version__}")
    p.add_argument("--full", dest="selection", action="store_const", const=Full(), help="run on all files, not only changed files")
    p.add_argument("--diff", dest="selection", type=_diff_ref, metavar="COMMIT", help="run on files changed since COMMIT")
    p.add_argument("--coverage", action="store_true", help="collect test coverage (only with --full)")
    p.add_argument("--fix", action="store_true", help="fix issues found, where possible")
    p.add_argument("--list", action="store_true", help="print the resolved scope and suites, run nothing")
    p.add_argument("--report-file", help="write a JSON run report to this path")
    p.add_argument("--cwd", help="repository directory to run in")
    p.add_argument("--log-json", action="store_true", help="emit verbose logs as JSON lines")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="log scope and process diagnostics to stderr")
    vg.add_argument("--quiet", action="store_true", help="omit per-suite announcements")
    p.add_argument("suites", nargs="*", metavar="SUITE", help="suites to run")
    p.set_defaults(selection=Branch())
    return p


def parse_run_configuration(parser: argparse.ArgumentParser, argv: list[str] | None) -> tuple[argparse.Namespace, RunConfiguration]:
    ns = parser.parse_intermixed_args(argv)
    try:
        suites = parse_suite_names(list(ns.suites))
    except UsageError as exc:
        parser.error(str(exc))
    run = RunConfiguration(selection=ns.selection, suites=suites, fix=bool(ns.fix), coverage=bool(ns.coverage))
    return ns, run


def _write_report(path: Path, payload: dict[str, object]) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_json(payload, pretty=True) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot write report to {path}: {exc}", kind="report_error") from exc


def execute(ctx: RunContext, run: RunConfiguration, report_file: str | None = None) -> int:
    project = load_project_config(ctx.repo_root)
    log_event(ctx, "info", "cli", "start", selection=describe_mode(run.selection), suites=",".join(s.value for s in run.suites))
    queries = GitQueries(ctx.repo_root, project.upstream_ref, ctx=ctx)
    resolver = ScopeResolver(run.selection, queries, project)
    runner = SuiteRunner(run, resolver, project, ToolEnv.for_project(ctx.repo_root, project), ctx=ctx)

    def _announce(name: SuiteName) -> None:
        if not ctx.quiet:
            print(announce_line(name), flush=True)

    report = run_suites(run.suites, build_registry(runner), ctx=ctx, announce=_announce)
    print(summary_line(report), flush=True)
    if report_file:
        target = Path(report_file)
        _write_report(target if target.is_absolute() else ctx.repo_root / target, report_payload(report, run, ctx.run_id))
    return OK if report.ok else ERR_SUITE


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns, run = parse_run_configuration(parser, argv)
    if ns.list:
        print(render_plan(run.selection, run.suites))
        return OK
    try:
        ctx = RunContext.from_args(cwd=ns.cwd, verbose=bool(ns.verbose), quiet=bool(ns.quiet), log_json=bool(ns.log_json))
        return execute(ctx, run, report_file=ns.report_file)
    except ScriptError as exc:
        sys.stderr.write(f"suitectl: {exc.kind}: {exc.message}\n")
        return exc.code


if __name__ == "__main__":
    raise SystemExit(main())
