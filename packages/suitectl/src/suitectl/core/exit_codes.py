"""Process exit codes shared by every suitectl entrypoint."""

from __future__ import annotations

OK = 0
ERR_SUITE = 1
ERR_USAGE = 2
ERR_CONFIG = 3

__all__ = ["ERR_CONFIG", "ERR_SUITE", "ERR_USAGE", "OK"]
