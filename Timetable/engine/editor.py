"""
The timetable editing engine.

`TimetableEngine` owns exactly one `Document` and one `Session`. Rows are
referenced by their `Entry.id`; every neighbour lookup goes through the
document's positions. Validation always runs before mutation, so a raised
`ValidationError` means nothing changed.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from Timetable.config import Settings
from Timetable.engine import merge as merge_op
from Timetable.engine import split as split_op
from Timetable.engine.document import Document
from Timetable.engine.session import Backup, EditSession, PendingSplit, Session
from Timetable.errors import NotFoundError, ValidationError
from Timetable.models import Entry
from Timetable import serialization
from Timetable.timeofday import format_time, parse_time

log = logging.getLogger(__name__)


class TimetableEngine:
    def __init__(self, settings: Optional[Settings] = None, entries: Optional[Iterable[Entry]] = None) -> None:
        self.settings = settings or Settings()
        self.session = Session()
        if entries is not None:
            self.document = Document(entries)
        else:
            self.document = Document(self._seed())

    def _seed(self) -> List[Entry]:
        if not self.settings.seed_default_entry:
            return []
        return [Entry(
            start=parse_time(self.settings.default_start),
            end=parse_time(self.settings.default_end),
            task=self.settings.default_task,
        )]

    def fmt(self, minutes: Optional[int]) -> str:
        return format_time(minutes, self.settings.zero_pad_hours)

    # --------------- read access ------------------------------------------
    @property
    def entries(self) -> List[Entry]:
        return self.document.entries

    def is_selected(self, entry_id: str) -> bool:
        return entry_id in self.session.selection

    def is_editing(self, entry_id: Optional[str] = None) -> bool:
        if entry_id is None:
            return self.session.is_editing
        return self.session.is_editing_entry(entry_id)

    # --------------- add / edit -------------------------------------------
    def add_row(self) -> Optional[Entry]:
        """Append an empty row starting where the last one ends, and open it for editing."""
        if self.session.is_editing:
            log.warning("add_row ignored: another row is being edited")
            return None
        last = self.document.last()
        entry = Entry(start=last.end if last is not None else None, end=None, task="")
        idx = self.document.append(entry)
        self._open_edit(entry, is_new=True)
        log.debug(f"Added row {idx}")
        return entry

    def begin_edit(self, entry_id: str) -> bool:
        """Open `entry_id` for editing. Silent no-op (False) if an edit is already open."""
        if self.session.is_editing:
            log.debug(f"begin_edit({entry_id}) ignored: edit already in progress")
            return False
        self._open_edit(self.document.get(entry_id), is_new=False)
        return True

    def _open_edit(self, entry: Entry, is_new: bool) -> None:
        self.session.edit = EditSession(
            entry_id=entry.id,
            backup=Backup(start=entry.start, end=entry.end, task=entry.task),
            is_new=is_new,
            synced_start=entry.start,
            draft_start=self.fmt(entry.start),
            draft_end=self.fmt(entry.end),
            draft_task=entry.task,
        )

    def update_draft(self, start: Optional[str] = None, end: Optional[str] = None, task: Optional[str] = None) -> EditSession:
        edit = self._require_edit()
        self._sync_draft()
        if start is not None:
            edit.draft_start = start
        if end is not None:
            edit.draft_end = end
        if task is not None:
            edit.draft_task = task
        return edit

    def _sync_draft(self) -> None:
        """
        Follow a start that moved under an open edit.

        Another row's delete, split or merge can propagate onto the row being
        edited. An untouched draft start picks up the new value; a start the
        user already typed wins.
        """
        edit = self.session.edit
        if edit is None or not self.document.contains(edit.entry_id):
            return
        live = self.document.get(edit.entry_id).start
        if live == edit.synced_start:
            return
        if edit.draft_start == self.fmt(edit.synced_start):
            edit.draft_start = self.fmt(live)
        edit.synced_start = live

    def commit_edit(self, new_start: Optional[str] = None, new_end: Optional[str] = None, new_task: Optional[str] = None) -> Entry:
        """
        Validate and write start/end/task onto the row under edit.

        Arguments default to the current draft. On success the following row,
        if any, gets its start set to the committed end; nothing further down
        is touched.
        """
        edit = self.update_draft(new_start, new_end, new_task)
        idx = self.document.index_of(edit.entry_id)
        try:
            start, end = self._validate_interval(edit.draft_start, edit.draft_end)
        except ValidationError as e:
            edit.error = e.message
            log.info(f"Edit of row {idx} rejected: {e.message}")
            raise

        entry = self.document[idx]
        entry.start = start
        entry.end = end
        entry.task = edit.draft_task
        self.session.edit = None
        self.document.propagate_start(idx + 1, end)
        log.debug(f"Committed row {idx}: {self.fmt(start)}-{self.fmt(end)} '{entry.task}'")
        return entry

    @staticmethod
    def _validate_interval(start_text: str, end_text: str) -> Tuple[int, int]:
        try:
            start = parse_time(start_text)
            end = parse_time(end_text)
        except ValueError:
            raise ValidationError("invalid time format")
        if start is None or end is None:
            raise ValidationError("invalid time format")
        if start >= end:
            raise ValidationError("start must precede end")
        return start, end

    def cancel_edit(self) -> None:
        """Drop a new row, or restore an existing one from its backup. Never fails."""
        edit = self.session.edit
        self.session.edit = None
        if edit is None or not self.document.contains(edit.entry_id):
            return
        idx = self.document.index_of(edit.entry_id)
        if edit.is_new:
            self.document.remove_at(idx)
            self.session.forget(edit.entry_id)
            log.debug(f"Cancelled new row {idx}; removed")
            return
        entry = self.document[idx]
        entry.start = edit.backup.start
        entry.end = edit.backup.end
        entry.task = edit.backup.task
        log.debug(f"Cancelled edit of row {idx}; restored")

    def _require_edit(self) -> EditSession:
        if self.session.edit is None:
            raise NotFoundError("no edit in progress")
        return self.session.edit

    # --------------- delete / select --------------------------------------
    def delete_row(self, entry_id: str) -> Entry:
        """Remove a row; a middle row's gap is closed by pulling the successor's start back."""
        idx = self.document.index_of(entry_id)
        if 0 < idx < len(self.document) - 1:
            self.document.propagate_start(idx + 1, self.document[idx - 1].end)
        removed = self.document.remove_at(idx)
        self.session.forget(entry_id)
        log.debug(f"Deleted row {idx}")
        self._sync_draft()
        return removed

    def toggle_selection(self, entry_id: str) -> bool:
        """Flip selection of a row; rows being edited cannot be toggled. Returns the new state."""
        if not self.document.contains(entry_id):
            raise NotFoundError(f"entry {entry_id} not found")
        if self.session.is_editing_entry(entry_id):
            return entry_id in self.session.selection
        if entry_id in self.session.selection:
            self.session.selection.discard(entry_id)
            return False
        self.session.selection.add(entry_id)
        return True

    def clear_selection(self) -> None:
        self.session.selection.clear()

    # --------------- split ------------------------------------------------
    def open_split(self, entry_id: str) -> PendingSplit:
        return split_op.open_split(self.document, self.session, entry_id, self.settings.zero_pad_hours)

    def confirm_split(self, split_time_input: Optional[str] = None) -> Tuple[Entry, Entry]:
        result = split_op.confirm_split(self.document, self.session, split_time_input, self.settings.zero_pad_hours)
        self._sync_draft()
        return result

    def cancel_split(self) -> None:
        split_op.cancel_split(self.session)

    def split_row(self, entry_id: str, split_time_input: str) -> Tuple[Entry, Entry]:
        """One-shot split: open, confirm, and leave nothing pending on failure."""
        self.open_split(entry_id)
        try:
            return self.confirm_split(split_time_input)
        finally:
            self.session.split = None

    # --------------- merge ------------------------------------------------
    @property
    def can_merge(self) -> bool:
        return merge_op.can_merge(self.document, self.session)

    def open_merge(self) -> bool:
        return merge_op.open_merge(self.document, self.session)

    def confirm_merge(self, task_name: Optional[str] = None) -> Entry:
        merged = merge_op.confirm_merge(self.document, self.session, task_name)
        self._sync_draft()
        return merged

    def cancel_merge(self) -> None:
        merge_op.cancel_merge(self.session)

    # --------------- import / export --------------------------------------
    def export_json(self) -> str:
        return serialization.dumps(
            self.document,
            self.session.selection,
            zero_pad_hours=self.settings.zero_pad_hours,
            indent=self.settings.export_indent,
        )

    def import_json(self, text: str) -> int:
        """Replace the whole document. On ParseError nothing changes."""
        entries, selection = serialization.loads(text)
        self.document.replace_all(entries)
        self.session.reset()
        self.session.selection.update(selection)
        log.info(f"Imported {len(entries)} rows")
        return len(entries)
