"""Per-entry rename decision shared by the worker pool and the root pass."""

from __future__ import annotations

from typing import Optional

from common.base.logging import get_logger
from common.base.ops import rename_noreplace

from .types import DRY_RUN, EXISTS, RENAMED, SKIPPED, UNCHANGED, RenameContext, RenameOutcome

log = get_logger(__name__)


def apply_rename(
    context: RenameContext,
    *,
    path: str,
    depth: int,
    name: str,
    new_name: str,
    src: str,
    dst: str,
    dir_fd: Optional[int] = None,
    index: int = -1,
) -> RenameOutcome:
    """
    Rename ``src`` to ``dst`` (or only report it in dry-run mode).

    ``path`` is the path shown to the user; ``src``/``dst`` are what the
    filesystem call receives, relative to ``dir_fd`` when one is given.
    Failures are logged at debug level and reported as a skipped outcome.
    """

    def outcome(status: str) -> RenameOutcome:
        return RenameOutcome(
            path=path,
            depth=depth,
            status=status,
            name=name,
            new_name=new_name,
            index=index,
        )

    if not new_name:
        log.debug(f"Nothing left of {path} after sanitizing, skipping")
        return outcome(SKIPPED)
    if new_name == name:
        return outcome(UNCHANGED)
    if context.dry_run:
        return outcome(DRY_RUN)

    try:
        renamed = rename_noreplace(src, dst, dir_fd=dir_fd, lock=context.rename_lock)
    except OSError as exc:
        log.debug(f"Rename failed for {path}: {exc}")
        return outcome(SKIPPED)
    return outcome(RENAMED if renamed else EXISTS)
