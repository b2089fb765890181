"""Shared data model for a sanitize run."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

# Outcome statuses
RENAMED = "renamed"
UNCHANGED = "unchanged"
EXISTS = "exists"
SKIPPED = "skipped"
DRY_RUN = "dry_run"

STATUSES = (RENAMED, UNCHANGED, EXISTS, SKIPPED, DRY_RUN)

# Depth reported for the root arguments themselves
ROOT_DEPTH = -1


@dataclass(frozen=True)
class Entry:
    """One collected file or directory below a root argument."""

    path: str
    depth: int


@dataclass(frozen=True)
class RenameOutcome:
    path: str
    depth: int
    status: str
    name: str = ""
    new_name: str = ""
    index: int = -1
    completed_at: float = field(default_factory=time.perf_counter)


@dataclass
class RenameContext:
    """
    State shared by the collector, the worker pool and the root pass.

    ``lock`` guards appends to ``entries``/``outcomes`` and backs the depth
    barrier's condition. ``rename_lock`` serializes no-replace renames.
    """

    dry_run: bool = False
    entries: List[Entry] = field(default_factory=list)
    max_depth: int = 0
    outcomes: List[RenameOutcome] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)
    rename_lock: threading.Lock = field(default_factory=threading.Lock)

    def record(self, path: str, depth: int) -> Entry:
        entry = Entry(path=path, depth=depth)
        with self.lock:
            self.entries.append(entry)
            if depth > self.max_depth:
                self.max_depth = depth
        return entry

    def add_outcome(self, outcome: RenameOutcome) -> None:
        with self.lock:
            self.outcomes.append(outcome)

    def release_entries(self) -> None:
        with self.lock:
            self.entries = []
            self.max_depth = 0

    def outcomes_by_status(self, status: Optional[str] = None) -> List[RenameOutcome]:
        with self.lock:
            if status is None:
                return list(self.outcomes)
            return [outcome for outcome in self.outcomes if outcome.status == status]
