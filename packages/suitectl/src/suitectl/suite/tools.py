"""Process environment handed to every external tool."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..core.config import ProjectConfig
from ..core.env import environ_copy


@dataclass(frozen=True)
class ToolEnv:
    root: Path
    bin_dir: Path
    base_env: tuple[tuple[str, str], ...] = ()

    @classmethod
    def for_project(cls, root: Path, config: ProjectConfig, base_env: dict[str, str] | None = None) -> "ToolEnv":
        source = environ_copy() if base_env is None else base_env
        return cls(root=root, bin_dir=root / config.tool_bin_dir, base_env=tuple(sorted(source.items())))

    def env(self) -> dict[str, str]:
        env = dict(self.base_env)
        current = env.get("PATH", "")
        env["PATH"] = str(self.bin_dir) if not current else f"{self.bin_dir}{os.pathsep}{current}"
        return env

    def cwd(self, subdir: str = "") -> Path:
        return self.root / subdir if subdir else self.root


__all__ = ["ToolEnv"]
