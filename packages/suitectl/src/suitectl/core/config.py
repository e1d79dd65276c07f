"""Project layout configuration.

Defaults describe the usual React Native app layout; a repository can override any of them with a
`suitectl.yaml` file at its root (or the file named by `SUITECTL_CONFIG`).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from .env import getenv
from .errors import ConfigError

CONFIG_FILENAME = "suitectl.yaml"


@dataclass(frozen=True)
class ProjectConfig:
    source_root: str = "src/"
    source_suffixes: tuple[str, ...] = (".js",)
    native_dir: str = "android/"
    dependency_manifests: tuple[str, ...] = ("package.json", "yarn.lock")
    tool_bin_dir: str = "node_modules/.bin"
    upstream_ref: str = "upstream/main"
    node_major: int | None = None

    def is_source_file(self, path: str) -> bool:
        root = self.source_root.rstrip("/") + "/"
        return path.startswith(root) and path.endswith(self.source_suffixes)


def load_yaml(path: Path) -> Any:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def load_schema(name: str) -> dict[str, Any]:
    text = (resources.files("suitectl") / "schemas" / name).read_text(encoding="utf-8")
    return json.loads(text)


def config_path(repo_root: Path) -> Path:
    raw = getenv("SUITECTL_CONFIG")
    if raw:
        path = Path(raw)
        return path if path.is_absolute() else repo_root / path
    return repo_root / CONFIG_FILENAME


def parse_config(payload: Any, source: str = CONFIG_FILENAME) -> ProjectConfig:
    if payload is None:
        payload = {}
    try:
        jsonschema.validate(payload, load_schema("config.schema.json"))
    except jsonschema.ValidationError as exc:
        where = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise ConfigError(f"{source}: invalid config at {where}: {exc.message}") from exc
    known = {f.name for f in fields(ProjectConfig)}
    values: dict[str, Any] = {}
    for key, value in payload.items():
        if key not in known:
            continue
        values[key] = tuple(value) if isinstance(value, list) else value
    return ProjectConfig(**values)


def load_project_config(repo_root: Path) -> ProjectConfig:
    path = config_path(repo_root)
    if path.exists():
        try:
            payload = load_yaml(path)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: unreadable YAML: {exc}") from exc
        config = parse_config(payload, source=str(path))
    elif getenv("SUITECTL_CONFIG"):
        raise ConfigError(f"config file not found: {path}")
    else:
        config = ProjectConfig()
    upstream = getenv("SUITECTL_UPSTREAM")
    if upstream:
        config = replace(config, upstream_ref=upstream)
    return config


__all__ = ["CONFIG_FILENAME", "ProjectConfig", "load_project_config", "load_schema", "parse_config"]
