"""File scope selection.

A run looks at one of three scopes: the whole source tree, the files this branch changed relative
to its base commit, or the files that differ from an arbitrary commit. `ScopeResolver` answers the
two questions suites ask of a scope: which source files should a file-oriented tool be given, and
did anything under a fixed set of paths change at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from .core.config import ProjectConfig


@dataclass(frozen=True)
class Full:
    name = "full"


@dataclass(frozen=True)
class Branch:
    name = "branch"


@dataclass(frozen=True)
class Diff:
    ref: str
    name = "diff"


SelectionMode = Full | Branch | Diff


def describe_mode(mode: SelectionMode) -> dict[str, str | None]:
    return {"mode": mode.name, "ref": mode.ref if isinstance(mode, Diff) else None}


class ScopeQueries(Protocol):
    def upstream_ref(self) -> str: ...

    def base_commit(self) -> str: ...

    def changed_files(self) -> list[str]: ...

    def diff_names(self, ref: str, paths: Sequence[str] = ()) -> list[str]: ...

    def differs(self, ref: str, paths: Sequence[str]) -> bool: ...


class ScopeResolver:
    def __init__(self, mode: SelectionMode, queries: ScopeQueries, config: ProjectConfig) -> None:
        self.mode = mode
        self.queries = queries
        self.config = config

    def relevant_files(self) -> list[str]:
        """Source files to hand to a file-list tool.

        Under `Full` this is the single source-root marker and the tool expands it itself.
        """
        if isinstance(self.mode, Full):
            return [self.config.source_root]
        if isinstance(self.mode, Branch):
            candidates = self.queries.changed_files()
        else:
            candidates = self.queries.diff_names(self.mode.ref)
        return [path for path in candidates if self.config.is_source_file(path)]

    def intersects(self, paths: Sequence[str]) -> bool:
        if isinstance(self.mode, Full):
            return True
        ref = self.mode.ref if isinstance(self.mode, Diff) else self.queries.base_commit()
        return self.queries.differs(ref, list(paths))


__all__ = ["Branch", "Diff", "Full", "ScopeQueries", "ScopeResolver", "SelectionMode", "describe_mode"]
