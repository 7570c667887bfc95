"""
Collapse a contiguous run of selected rows into one row.

The merged row takes the label the user types; the original task labels are
discarded.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from Timetable.engine.document import Document
from Timetable.engine.session import PendingMerge, Session
from Timetable.errors import ValidationError
from Timetable.models import Entry

log = logging.getLogger(__name__)


def selected_indices(document: Document, session: Session) -> List[int]:
    return sorted(i for i, e in enumerate(document) if e.id in session.selection)


def can_merge(document: Document, session: Session) -> bool:
    return len(selected_indices(document, session)) >= 2


def open_merge(document: Document, session: Session) -> bool:
    """Open the merge dialog. No-op (False) with fewer than two rows selected."""
    if not can_merge(document, session):
        log.debug("Merge unavailable: fewer than two rows selected")
        return False
    session.merge = PendingMerge()
    return True


def cancel_merge(session: Session) -> None:
    session.merge = None


def confirm_merge(document: Document, session: Session, task_name: Optional[str] = None) -> Entry:
    pending = session.merge
    if pending is None:
        pending = PendingMerge()
        session.merge = pending
    if task_name is not None:
        pending.task_name = task_name

    try:
        if not pending.task_name or not pending.task_name.strip():
            raise ValidationError("task name required")
        indices = selected_indices(document, session)
        if len(indices) < 2:
            raise ValidationError("select at least two rows")
        if indices[-1] - indices[0] != len(indices) - 1:
            raise ValidationError("selection must be contiguous")
    except ValidationError as e:
        pending.error = e.message
        log.info(f"Merge rejected: {e.message}")
        raise

    first, last = indices[0], indices[-1]
    merged = Entry(
        start=document[first].start,
        end=document[last].end,
        task=pending.task_name,
    )
    removed = [document[i].id for i in indices]
    document.replace_range(first, last, [merged])
    for entry_id in removed:
        session.forget(entry_id)
    session.merge = None

    document.propagate_start(first + 1, merged.end)
    log.info(f"Merged rows {first}-{last} into '{merged.task}'")
    return merged
