"""
sanitize.collector

Depth-first traversal that records every visible file and directory below a
root into the shared entry list.
"""

from __future__ import annotations

import os
from typing import Iterable, Iterator, List, Tuple

from common.base.fs import is_hidden
from common.base.logging import get_logger
from common.shared.utils import Progress

from .types import RenameContext

log = get_logger(__name__)


def _list_dir(path: str) -> List[os.DirEntry]:
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda item: item.name)
    except OSError as exc:
        log.debug(f"Cannot list {path}: {exc}")
        return []


def iter_tree(root: str) -> Iterator[Tuple[str, int]]:
    """
    Yield ``(path, depth)`` for every visible directory and regular file
    below ``root``, in depth-first pre-order.

    A directory is yielded before anything inside it, and its whole subtree
    before its next sibling. Names starting with ``.`` are skipped along with
    everything beneath them. Symlinks and special files are ignored and never
    followed. Siblings are visited in name order.
    """
    stack: List[Tuple[Iterator[os.DirEntry], int]] = [(iter(_list_dir(root)), 0)]
    while stack:
        children, depth = stack[-1]
        item = next(children, None)
        if item is None:
            stack.pop()
            continue
        if is_hidden(item.name):
            continue
        try:
            is_dir = item.is_dir(follow_symlinks=False)
            is_file = not is_dir and item.is_file(follow_symlinks=False)
        except OSError as exc:
            log.debug(f"Cannot stat {item.path}: {exc}")
            continue
        if is_dir:
            yield item.path, depth
            stack.append((iter(_list_dir(item.path)), depth + 1))
        elif is_file:
            yield item.path, depth


def collect(root: str, context: RenameContext, *, include_progress: bool = False) -> int:
    """Record every entry below ``root`` in ``context``; returns how many were added."""
    iterator: Iterable[Tuple[str, int]] = iter_tree(root)
    if include_progress:
        iterator = Progress(iterator, desc=f"Scanning {os.path.basename(root.rstrip(os.sep)) or root}", unit="entry")

    count = 0
    for path, depth in iterator:
        context.record(path, depth)
        count += 1

    log.debug(f"Collected {count} entries under {root}")
    return count
