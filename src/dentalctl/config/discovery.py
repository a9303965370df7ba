"""Locate dentalctl.toml.

Resolution order: the ``DENTALCTL_CONFIG`` env var (must name an existing
file), then the nearest ``dentalctl.toml`` in the start directory or any
of its parents.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "dentalctl.toml"
CONFIG_ENV_VAR = "DENTALCTL_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
