"""Recursive, depth-synchronized renaming of files and directories to safe names."""

from .barrier import DepthBarrier  # noqa: F401
from .collector import collect, iter_tree  # noqa: F401
from .engine import SanitizeReport, sanitize_paths  # noqa: F401
from .finalizer import finalize_roots  # noqa: F401
from .names import sanitize_name  # noqa: F401
from .scheduler import RenameScheduler, partition  # noqa: F401
from .types import Entry, RenameContext, RenameOutcome  # noqa: F401

__all__ = [
    "DepthBarrier",
    "Entry",
    "RenameContext",
    "RenameOutcome",
    "RenameScheduler",
    "SanitizeReport",
    "collect",
    "finalize_roots",
    "iter_tree",
    "partition",
    "sanitize_name",
    "sanitize_paths",
]
