"""
sanitize.engine

Run a complete sanitize pass over a set of path arguments: collect the trees
below every directory argument, rename them deepest first with the worker
pool, then rename the arguments themselves.
"""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from common.base.logging import get_logger

from .collector import collect
from .finalizer import finalize_roots
from .scheduler import NoticeEmitter, RenameScheduler
from .types import STATUSES, RenameOutcome, RenameContext

log = get_logger(__name__)


@dataclass
class SanitizeReport:
    dry_run: bool
    workers: int
    entries: int = 0
    max_depth: int = 0
    tree_outcomes: List[RenameOutcome] = field(default_factory=list)
    root_outcomes: List[RenameOutcome] = field(default_factory=list)

    @property
    def outcomes(self) -> List[RenameOutcome]:
        return self.tree_outcomes + self.root_outcomes

    def counts(self) -> Dict[str, int]:
        tally = Counter(outcome.status for outcome in self.outcomes)
        return {status: tally.get(status, 0) for status in STATUSES}


def _is_directory(path: str) -> bool:
    return os.path.isdir(path) and not os.path.islink(path)


def sanitize_paths(
    paths: Iterable[str],
    *,
    dry_run: bool = False,
    workers: Optional[int] = None,
    include_progress: bool = False,
    emit: Optional[NoticeEmitter] = None,
) -> SanitizeReport:
    """
    Sanitize every entry below the given paths, then the paths themselves.

    Args:
        paths: Path arguments. Directories are traversed; every argument is
            renamed itself at the end regardless of type.
        dry_run: Report intended renames through ``emit`` without touching disk.
        workers: Worker pool size (defaults to the number of CPUs).
        include_progress: Show a progress bar while scanning.
        emit: Receives ``(path, new_name)`` per dry-run notice; prints by default.

    Returns:
        SanitizeReport with one outcome per processed entry and root.
    """
    roots = [str(path) for path in paths]
    context = RenameContext(dry_run=dry_run)
    scheduler = RenameScheduler(context, workers=workers, emit=emit)

    for root in roots:
        if _is_directory(root):
            collect(root, context, include_progress=include_progress)
        else:
            log.debug(f"Not a directory, only the argument itself is renamed: {root}")

    report = SanitizeReport(
        dry_run=dry_run,
        workers=scheduler.workers,
        entries=len(context.entries),
        max_depth=context.max_depth,
    )
    log.info(f"🔍 Collected {report.entries} entries from {len(roots)} path(s), max depth {report.max_depth}")

    report.tree_outcomes = scheduler.run()
    context.release_entries()
    report.root_outcomes = finalize_roots(roots, context, emit=emit)

    counts = report.counts()
    log.info(
        "✅ Done: "
        + ", ".join(f"{status}={count}" for status, count in counts.items() if count)
        + (" [DRY-RUN]" if dry_run else "")
    )
    return report
