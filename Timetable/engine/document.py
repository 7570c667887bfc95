from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from Timetable.errors import NotFoundError
from Timetable.models import Entry

log = logging.getLogger(__name__)


class Document:
    """
    Ordered, chronological sequence of entries.

    Neighbours are always found by position. Nothing in here enforces
    contiguity; `propagate_start` is the single place a boundary is copied
    from one row onto the next.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None) -> None:
        self._entries: List[Entry] = list(entries or [])

    # --------------- read access ------------------------------------------
    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    @property
    def entries(self) -> List[Entry]:
        """A copy; mutate through the document, not the list."""
        return list(self._entries)

    def last(self) -> Optional[Entry]:
        return self._entries[-1] if self._entries else None

    def index_of(self, entry_id: str) -> int:
        for idx, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return idx
        raise NotFoundError(f"entry {entry_id} not found")

    def get(self, entry_id: str) -> Entry:
        return self._entries[self.index_of(entry_id)]

    def contains(self, entry_id: str) -> bool:
        return any(e.id == entry_id for e in self._entries)

    def gaps(self) -> List[int]:
        """Positions i where entries[i].end != entries[i+1].start."""
        return [
            i for i in range(len(self._entries) - 1)
            if self._entries[i].end != self._entries[i + 1].start
        ]

    # --------------- mutation ---------------------------------------------
    def append(self, entry: Entry) -> int:
        self._entries.append(entry)
        return len(self._entries) - 1

    def remove_at(self, index: int) -> Entry:
        return self._entries.pop(index)

    def replace_range(self, first: int, last: int, replacements: List[Entry]) -> None:
        """Replace entries[first..last] (inclusive) with `replacements`, in place."""
        self._entries[first:last + 1] = replacements

    def propagate_start(self, index: int, value: Optional[int]) -> bool:
        """
        Set entries[index].start to `value` if that row exists.

        Returns True when a row was updated. Only this one row is touched.
        """
        if 0 <= index < len(self._entries):
            self._entries[index].start = value
            log.debug(f"Propagated start={value} onto row {index}")
            return True
        return False

    def replace_all(self, entries: Iterable[Entry]) -> None:
        self._entries = list(entries)
