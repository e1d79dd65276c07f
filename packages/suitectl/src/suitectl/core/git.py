"""Version-control queries used to resolve the file scope.

All queries run `git` in the repository root and never modify the work tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from .errors import ScopeError
from .process import run_command

if TYPE_CHECKING:
    from .context import RunContext


def _nul_split(text: str) -> list[str]:
    # `-z` output: paths are NUL-terminated and never quoted or escaped.
    return [path for path in text.split("\0") if path]


@dataclass(frozen=True)
class GitQueries:
    repo_root: Path
    upstream: str
    ctx: RunContext | None = None

    def _git(self, *args: str):  # noqa: ANN202
        return run_command(["git", *args], self.repo_root, ctx=self.ctx, encoding="utf-8")

    def upstream_ref(self) -> str:
        return self.upstream

    def base_commit(self) -> str:
        res = self._git("merge-base", "HEAD", self.upstream)
        sha = res.stdout.strip()
        if res.code != 0 or not sha:
            raise ScopeError(f"cannot compute base commit against `{self.upstream}`: {res.combined_output or 'no merge base'}")
        return sha

    def diff_names(self, ref: str, paths: Sequence[str] = ()) -> list[str]:
        args = ["diff", "-z", "--name-only", "--diff-filter=d", ref]
        if paths:
            args += ["--", *paths]
        res = self._git(*args)
        if res.code != 0:
            raise ScopeError(f"git diff against `{ref}` failed: {res.combined_output}")
        return _nul_split(res.stdout)

    def changed_files(self) -> list[str]:
        return self.diff_names(self.base_commit())

    def differs(self, ref: str, paths: Sequence[str]) -> bool:
        res = self._git("diff", "--quiet", "--diff-filter=d", ref, "--", *paths)
        if res.code == 0:
            return False
        if res.code == 1:
            return True
        raise ScopeError(f"git diff --quiet against `{ref}` failed: {res.combined_output}")


__all__ = ["GitQueries"]
