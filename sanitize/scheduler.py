"""
sanitize.scheduler

Fixed worker pool that renames collected entries layer by layer, deepest
first. Entries keep the paths recorded at collection time, so a directory may
only be renamed once everything below it has been handled; the depth barrier
holds every worker at the end of a layer until the whole pool is done with it.
"""

from __future__ import annotations

import os
import stat
import threading
from typing import Callable, List, Optional

from common.base.fs import split_entry_path
from common.base.logging import get_logger
from common.base.ops import emit_notice, open_dir

from .actions import apply_rename
from .barrier import DepthBarrier
from .names import sanitize_name
from .types import DRY_RUN, SKIPPED, Entry, RenameContext, RenameOutcome

log = get_logger(__name__)

NoticeEmitter = Callable[[str, str], None]


def default_workers() -> int:
    return os.cpu_count() or 1


def partition(count: int, workers: int) -> List[range]:
    """
    Split ``[0, count)`` into ``workers`` contiguous ranges.

    Every range spans ``ceil(count / workers)`` indices except the last, which
    takes whatever remains. Trailing ranges are empty when there are fewer
    entries than workers.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")

    chunk = -(-count // workers)
    ranges: List[range] = []
    for worker in range(workers):
        start = min(worker * chunk, count)
        end = count if worker == workers - 1 else min(start + chunk, count)
        ranges.append(range(start, end))
    return ranges


def process_entry(context: RenameContext, entry: Entry, index: int = -1) -> RenameOutcome:
    """Sanitize one collected entry inside its parent directory."""
    parent, name = split_entry_path(entry.path)

    try:
        dir_fd = open_dir(parent)
    except OSError as exc:
        log.debug(f"Cannot open parent of {entry.path}: {exc}")
        return RenameOutcome(entry.path, entry.depth, SKIPPED, name=name, index=index)

    try:
        try:
            st = os.stat(name, dir_fd=dir_fd, follow_symlinks=False)
        except OSError as exc:
            log.debug(f"Cannot stat {entry.path}: {exc}")
            return RenameOutcome(entry.path, entry.depth, SKIPPED, name=name, index=index)

        new_name = sanitize_name(name, stat.S_ISREG(st.st_mode))
        return apply_rename(
            context,
            path=entry.path,
            depth=entry.depth,
            name=name,
            new_name=new_name,
            src=name,
            dst=new_name,
            dir_fd=dir_fd,
            index=index,
        )
    finally:
        os.close(dir_fd)


class RenameScheduler:
    """
    Run the deepest-first rename pass over ``context.entries``.

    Args:
        context: Shared run state; its entry list must be fully collected.
        workers: Pool size (defaults to the number of CPUs).
        emit: Callback receiving ``(path, new_name)`` for each dry-run notice.
    """

    def __init__(
        self,
        context: RenameContext,
        workers: Optional[int] = None,
        emit: Optional[NoticeEmitter] = None,
    ) -> None:
        self.context = context
        self.workers = workers if workers is not None else default_workers()
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        self.barrier = DepthBarrier(self.workers, lock=context.lock)
        self._emit = emit or emit_notice

    def run(self) -> List[RenameOutcome]:
        entries = self.context.entries
        max_depth = self.context.max_depth
        ranges = partition(len(entries), self.workers)
        log.info(
            f"🚀 Renaming {len(entries)} entries across {max_depth + 1} depth levels "
            f"with {self.workers} workers"
        )

        threads = [
            threading.Thread(
                target=self._work,
                args=(span, max_depth),
                name=f"sanitize-worker-{worker}",
                daemon=True,
            )
            for worker, span in enumerate(ranges)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        outcomes = sorted(
            (outcome for outcome in self.context.outcomes_by_status() if outcome.index >= 0),
            key=lambda outcome: (-outcome.depth, outcome.index),
        )
        if self.context.dry_run:
            for outcome in outcomes:
                if outcome.status == DRY_RUN:
                    self._emit(outcome.path, outcome.new_name)
        return outcomes

    def _work(self, span: range, max_depth: int) -> None:
        entries = self.context.entries
        for depth in range(max_depth, -1, -1):
            for index in span:
                entry = entries[index]
                if entry.depth != depth:
                    continue
                try:
                    outcome = process_entry(self.context, entry, index)
                except Exception:
                    # Every worker must reach the barrier once per depth.
                    log.error(f"Unexpected error while processing {entry.path}", exc_info=True)
                    outcome = RenameOutcome(entry.path, entry.depth, SKIPPED, index=index)
                self.context.add_outcome(outcome)
            self.barrier.arrive()
