"""Reusable barrier that holds the worker pool between depth layers."""

from __future__ import annotations

import threading
from typing import Optional


class DepthBarrier:
    """
    Cyclic barrier for a fixed number of parties.

    Each phase ends when ``parties`` calls to :meth:`arrive` have been made;
    the last caller resets the counter and wakes everybody. There is no
    timeout: a party that never arrives blocks the others forever.

    Args:
        parties: Number of participants per phase (at least 1).
        lock: Optional lock to build the condition on, so the barrier can share
            a mutex with other state.
    """

    def __init__(self, parties: int, lock: Optional[threading.Lock] = None) -> None:
        if parties < 1:
            raise ValueError(f"parties must be at least 1, got {parties}")
        self.parties = parties
        self._cond = threading.Condition(lock)
        self._arrived = 0
        self._generation = 0

    @property
    def arrived(self) -> int:
        with self._cond:
            return self._arrived

    @property
    def generation(self) -> int:
        """Number of completed phases."""
        with self._cond:
            return self._generation

    def arrive(self) -> int:
        """Block until every party has arrived; returns the phase just completed."""
        with self._cond:
            generation = self._generation
            self._arrived += 1
            if self._arrived == self.parties:
                self._arrived = 0
                self._generation += 1
                self._cond.notify_all()
                return generation
            while generation == self._generation:
                self._cond.wait()
            return generation
