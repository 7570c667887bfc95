from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set, Tuple

from pydantic import ValidationError as PydanticValidationError

from Timetable.errors import ParseError
from Timetable.models import Entry, SerializedEntry, TimetableFile
from Timetable.timeofday import format_time, parse_time

log = logging.getLogger(__name__)


def to_serialized(entries: Iterable[Entry], selection: Set[str], zero_pad_hours: bool = False) -> TimetableFile:
    return TimetableFile([
        SerializedEntry(
            start_time=format_time(e.start, zero_pad_hours),
            end_time=format_time(e.end, zero_pad_hours),
            task=e.task,
            is_selected=e.id in selection,
        )
        for e in entries
    ])


def dumps(entries: Iterable[Entry], selection: Set[str], zero_pad_hours: bool = False, indent: Optional[int] = None) -> str:
    """Serialize rows to the JSON array format (StartTime, EndTime, Task, IsSelected)."""
    return to_serialized(entries, selection, zero_pad_hours).model_dump_json(by_alias=True, indent=indent)


def loads(text: str) -> Tuple[List[Entry], Set[str]]:
    """
    Parse an exported document.

    Returns fresh entries plus the ids of the rows that were selected. Raises
    ParseError for anything that is not a JSON array of well-formed rows; the
    caller's document is never touched here.
    """
    if text is None or not text.strip():
        raise ParseError("timetable file is empty")
    try:
        parsed = TimetableFile.model_validate_json(text)
    except PydanticValidationError as e:
        log.error(f"Failed to parse/validate timetable JSON: {e.error_count()} error(s)")
        log.debug(f"Problematic JSON snippet: {text[:500]}...")
        first = e.errors()[0]
        raise ParseError(f"invalid timetable file: {first.get('msg', 'malformed payload')}") from e

    entries: List[Entry] = []
    selection: Set[str] = set()
    for row in parsed:
        entry = Entry(start=parse_time(row.start_time), end=parse_time(row.end_time), task=row.task)
        entries.append(entry)
        if row.is_selected:
            selection.add(entry.id)
    log.debug(f"Parsed {len(entries)} rows ({len(selection)} selected)")
    return entries, selection
