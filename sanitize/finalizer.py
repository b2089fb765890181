"""Rename the root arguments themselves once the tree below them is done."""

from __future__ import annotations

import os
import stat
from typing import Iterable, List, Optional

from common.base.fs import split_entry_path
from common.base.logging import get_logger
from common.base.ops import emit_notice

from .actions import apply_rename
from .names import sanitize_name
from .scheduler import NoticeEmitter
from .types import DRY_RUN, ROOT_DEPTH, RenameContext, RenameOutcome

log = get_logger(__name__)


def finalize_root(context: RenameContext, root: str) -> Optional[RenameOutcome]:
    absolute = os.path.realpath(root)
    try:
        st = os.lstat(absolute)
    except OSError as exc:
        log.debug(f"Cannot stat root {root}: {exc}")
        return None

    parent, name = split_entry_path(absolute)
    new_name = sanitize_name(name, stat.S_ISREG(st.st_mode))
    return apply_rename(
        context,
        path=absolute,
        depth=ROOT_DEPTH,
        name=name,
        new_name=new_name,
        src=absolute,
        dst=os.path.join(parent, new_name),
    )


def finalize_roots(
    roots: Iterable[str],
    context: RenameContext,
    emit: Optional[NoticeEmitter] = None,
) -> List[RenameOutcome]:
    """
    Sanitize each root argument in place, one at a time.

    Roots are resolved to absolute paths and renamed inside their own parent
    directory, whatever their type. Roots that no longer exist are skipped.
    """
    emitter = emit or emit_notice
    outcomes: List[RenameOutcome] = []
    for root in roots:
        outcome = finalize_root(context, root)
        if outcome is None:
            continue
        context.add_outcome(outcome)
        outcomes.append(outcome)
        if outcome.status == DRY_RUN:
            emitter(outcome.path, outcome.new_name)
    return outcomes
