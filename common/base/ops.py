"""
common.base.ops

Filesystem rename primitives for sanitize-fs.

 - No-replace renames, optionally relative to an open directory descriptor
 - Dry-run notice formatting and emission
"""

from __future__ import annotations

import os
import sys
from contextlib import nullcontext
from typing import ContextManager, Optional, TextIO

from .logging import get_logger

log = get_logger(__name__)


# ----------------------------------------------------------------------
# DIRECTORY HANDLES
# ----------------------------------------------------------------------

DIR_OPEN_FLAGS = os.O_RDONLY | getattr(os, "O_DIRECTORY", 0) | getattr(os, "O_CLOEXEC", 0)


def open_dir(path: str) -> int:
    """Open ``path`` as a directory descriptor. Raises OSError on failure."""
    return os.open(path, DIR_OPEN_FLAGS)


def lexists(name: str, dir_fd: Optional[int] = None) -> bool:
    """True when ``name`` exists without following a final symlink."""
    try:
        os.stat(name, dir_fd=dir_fd, follow_symlinks=False)
    except FileNotFoundError:
        return False
    return True


# ----------------------------------------------------------------------
# RENAME
# ----------------------------------------------------------------------

def rename_noreplace(
    src: str,
    dst: str,
    *,
    dir_fd: Optional[int] = None,
    lock: Optional[ContextManager] = None,
) -> bool:
    """
    Rename ``src`` to ``dst`` only if nothing named ``dst`` exists yet.

    Both names are resolved relative to ``dir_fd`` when given. The existence
    check and the rename run under ``lock`` so concurrent callers sharing it
    can never replace each other's targets.

    Returns:
        True if renamed, False if the target name was already taken.

    Raises:
        OSError: Any other failure of the underlying rename.
    """
    with lock if lock is not None else nullcontext():
        if lexists(dst, dir_fd=dir_fd):
            log.debug(f"Target exists, leaving {src} as is: {dst}")
            return False
        os.rename(src, dst, src_dir_fd=dir_fd, dst_dir_fd=dir_fd)
    log.debug(f"Renamed {src} → {dst}")
    return True


# ----------------------------------------------------------------------
# DRY-RUN OUTPUT
# ----------------------------------------------------------------------

def format_notice(path: str, new_name: str) -> str:
    return f'"{path}" --> "{new_name}"'


def emit_notice(path: str, new_name: str, stream: Optional[TextIO] = None) -> None:
    """Write one dry-run block: the notice line followed by a blank line."""
    out = stream if stream is not None else sys.stdout
    out.write(f"{format_notice(path, new_name)}\n\n")
