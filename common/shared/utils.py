"""
common.shared.utils

Progress reporting helpers shared across sanitize-fs modules.
"""

from __future__ import annotations

import sys
from typing import Any, Iterable, Iterator

from tqdm import tqdm


class Progress:
    """
    Simple wrapper for tqdm progress bars that automatically closes
    on completion or interruption.

    Bars are written to stderr and cleared when done so stdout stays clean.
    """

    def __init__(self, iterable: Iterable[Any], desc: str = "Processing", unit: str = "it"):
        self._tqdm = tqdm(
            iterable,
            desc=desc,
            unit=unit,
            leave=False,
            dynamic_ncols=True,
            file=sys.stderr,
        )

    def __iter__(self) -> Iterator[Any]:
        try:
            for item in self._tqdm:
                yield item
        finally:
            self._tqdm.close()

    def update(self, n: int = 1) -> None:
        self._tqdm.update(n)

    def close(self) -> None:
        self._tqdm.close()

    def write(self, message: str) -> None:
        """Print a message above the progress bar on its own line."""
        self._tqdm.write(message, file=sys.stderr)
