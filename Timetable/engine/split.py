"""
Split one row into two adjacent rows at an interior time.

The pending split lives on the session so the dialog can show the bounds, keep
the user's scratch input and display the last error. The document is only
touched once every check has passed.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from Timetable.engine.document import Document
from Timetable.engine.session import PendingSplit, Session
from Timetable.errors import NotFoundError, ValidationError
from Timetable.models import Entry
from Timetable.timeofday import format_time, parse_time

log = logging.getLogger(__name__)


def open_split(document: Document, session: Session, entry_id: str, zero_pad_hours: bool = False) -> PendingSplit:
    entry = document.get(entry_id)
    session.split = PendingSplit(
        entry_id=entry_id,
        lower_bound=format_time(entry.start, zero_pad_hours),
        upper_bound=format_time(entry.end, zero_pad_hours),
    )
    log.debug(f"Opened split for row {document.index_of(entry_id)} ({session.split.lower_bound}-{session.split.upper_bound})")
    return session.split


def cancel_split(session: Session) -> None:
    session.split = None


def _validate(entry: Entry, split_input: str, zero_pad_hours: bool) -> int:
    if not split_input or not split_input.strip():
        raise ValidationError("split time required")
    if entry.start is None or entry.end is None:
        raise ValidationError("row bounds invalid")
    try:
        split_at = parse_time(split_input)
    except ValueError:
        raise ValidationError("invalid time format")
    if not (entry.start < split_at < entry.end):
        lo = format_time(entry.start, zero_pad_hours)
        hi = format_time(entry.end, zero_pad_hours)
        raise ValidationError(f"split time out of range: must be after {lo} and before {hi}")
    return split_at


def confirm_split(
    document: Document,
    session: Session,
    split_time_input: Optional[str] = None,
    zero_pad_hours: bool = False,
) -> Tuple[Entry, Entry]:
    """
    Replace the pending split's row with (start, split, task) and (split, end, task).

    `split_time_input` defaults to the scratch value on the pending split. On a
    ValidationError the message is stored on the pending split, which stays open.
    """
    pending = session.split
    if pending is None:
        raise NotFoundError("no split in progress")
    if split_time_input is not None:
        pending.split_time = split_time_input

    idx = document.index_of(pending.entry_id)
    entry = document[idx]
    try:
        split_at = _validate(entry, pending.split_time, zero_pad_hours)
    except ValidationError as e:
        pending.error = e.message
        log.info(f"Split of row {idx} rejected: {e.message}")
        raise

    first = Entry(start=entry.start, end=split_at, task=entry.task)
    second = Entry(start=split_at, end=entry.end, task=entry.task)
    document.replace_range(idx, idx, [first, second])
    session.forget(entry.id)
    session.split = None

    document.propagate_start(idx + 2, second.end)
    log.info(f"Split row {idx} at {format_time(split_at, zero_pad_hours)}")
    return first, second
