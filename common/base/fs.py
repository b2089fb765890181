"""Filesystem helper utilities shared across common modules."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple


HIDDEN_PREFIX = "."


def ensure_dir(path: Path | str) -> Path:
    p = Path(path).expanduser()
    p.mkdir(parents=True, exist_ok=True)
    return p


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def split_entry_path(path: str) -> Tuple[str, str]:
    """Split ``path`` into (parent directory, base name).

    Trailing separators are ignored and a bare name resolves to the current
    directory, matching POSIX ``dirname``/``basename``.
    """
    trimmed = path.rstrip(os.sep) or path
    parent, name = os.path.split(trimmed)
    return parent or os.curdir, name
