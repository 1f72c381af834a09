"""Locate ``handlerbus.toml`` for :class:`HandlerbusSettings`.

``HANDLERBUS_CONFIG`` names the file explicitly; otherwise the nearest
``handlerbus.toml`` in the start directory or one of its parents wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "handlerbus.toml"
CONFIG_ENV_VAR = "HANDLERBUS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    An ``HANDLERBUS_CONFIG`` that points at no file disables the walk-up.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
