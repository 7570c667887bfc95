from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Set

# Ephemeral, per-session UI state. None of this is exported.

@dataclass(frozen=True)
class Backup:
    start: Optional[int]
    end: Optional[int]
    task: str

@dataclass
class EditSession:
    entry_id: str
    backup: Backup
    is_new: bool
    synced_start: Optional[int] = None  # live start the draft was last filled from
    draft_start: str = ""
    draft_end: str = ""
    draft_task: str = ""
    error: str = ""

@dataclass
class PendingSplit:
    entry_id: str
    lower_bound: str  # formatted, for the dialog
    upper_bound: str
    split_time: str = ""
    error: str = ""

@dataclass
class PendingMerge:
    task_name: str = ""
    error: str = ""

@dataclass
class Session:
    selection: Set[str] = field(default_factory=set)
    edit: Optional[EditSession] = None
    split: Optional[PendingSplit] = None
    merge: Optional[PendingMerge] = None

    @property
    def is_editing(self) -> bool:
        return self.edit is not None

    def is_editing_entry(self, entry_id: str) -> bool:
        return self.edit is not None and self.edit.entry_id == entry_id

    def forget(self, entry_id: str) -> None:
        """Drop every reference to an entry that has left the document."""
        self.selection.discard(entry_id)
        if self.edit is not None and self.edit.entry_id == entry_id:
            self.edit = None
        if self.split is not None and self.split.entry_id == entry_id:
            self.split = None

    def reset(self) -> None:
        self.selection.clear()
        self.edit = None
        self.split = None
        self.merge = None
