"""Locate and read edgy's TOML configuration.

Two file shapes are accepted, checked per directory while walking up
from the start directory (like git looking for ``.git/``):

- ``edgy.toml`` with top-level ``[database]`` / ``[traversal]`` tables;
- ``pyproject.toml`` carrying the same tables under ``[tool.edgy]``.

``EDGY_CONFIG`` names a file explicitly and disables the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from edgy.errors import InvalidArgument

CONFIG_FILENAME = "edgy.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "EDGY_CONFIG"


def _tool_table(data: dict[str, Any]) -> dict[str, Any] | None:
    table = data.get("tool", {}).get("edgy")
    return table if isinstance(table, dict) else None


def _pyproject_has_edgy(path: Path) -> bool:
    try:
        return _tool_table(tomllib.loads(path.read_text(encoding="utf-8"))) is not None
    except tomllib.TOMLDecodeError:
        # A broken pyproject belonging to someone else is not ours to report
        return False


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = candidate_dir / PYPROJECT_FILENAME
        if pyproject.is_file() and _pyproject_has_edgy(pyproject):
            return pyproject
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* into settings data.

    Raises:
        InvalidArgument: the file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise InvalidArgument(f"Invalid TOML in {path}: {exc}") from exc
    if path.name == PYPROJECT_FILENAME:
        return _tool_table(data) or {}
    return data
