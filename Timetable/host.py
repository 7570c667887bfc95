"""
Boundary between the engine and its host environment.

The host (a browser page, a terminal, a test) supplies the collaborators below.
`TimetableShell` makes the round trips: it awaits a collaborator, then applies
the result to the engine in one step, so an import either replaces the whole
document or leaves it alone.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Tuple

from Timetable.engine.editor import TimetableEngine
from Timetable.errors import ParseError, TimetableError
from Timetable.models import Entry

log = logging.getLogger(__name__)


class DownloadService(Protocol):
    async def request_download(self, filename: str, content: str) -> None: ...


class TextPromptService(Protocol):
    async def request_text(self, message: str, default: Optional[str] = None) -> Optional[str]:
        """Return the user's text, or None if they cancelled."""
        ...


class PrintService(Protocol):
    async def request_print(self) -> None: ...


class FileImportSource(Protocol):
    async def read_selected_file(self) -> Optional[str]:
        """Full text of the one file the user picked, or None if they picked nothing."""
        ...


def ensure_suffix(filename: str, suffix: str = ".json") -> str:
    name = filename.strip()
    if not name.lower().endswith(suffix.lower()):
        name += suffix
    return name


class TimetableShell:
    def __init__(
        self,
        engine: TimetableEngine,
        *,
        prompt: Optional[TextPromptService] = None,
        download: Optional[DownloadService] = None,
        printer: Optional[PrintService] = None,
        import_source: Optional[FileImportSource] = None,
    ) -> None:
        self.engine = engine
        self.prompt = prompt
        self.download = download
        self.printer = printer
        self.import_source = import_source
        self.last_error: str = ""

    # --------------- export -----------------------------------------------
    async def export(self) -> Optional[str]:
        """
        Ask for a file name and hand the serialized document to the download service.

        Returns the file name used, or None when the user cancelled.
        """
        settings = self.engine.settings
        name = await self._require(self.prompt, "prompt").request_text(
            "Enter file name (without extension):", settings.default_export_name
        )
        if name is None or not name.strip():
            log.debug("Export cancelled at file-name prompt")
            return None
        filename = ensure_suffix(name, settings.export_suffix)
        content = self.engine.export_json()
        await self._require(self.download, "download").request_download(filename, content)
        log.info(f"Exported {len(self.engine.document)} rows to {filename}")
        return filename

    # --------------- import -----------------------------------------------
    async def import_selected_file(self) -> Optional[str]:
        """
        Read the picked file and replace the document with it.

        Returns None on success (or when nothing was picked) and the error
        message when the file could not be parsed; the old document is kept.
        """
        text = await self._require(self.import_source, "import_source").read_selected_file()
        if text is None:
            log.debug("Import cancelled: no file selected")
            return None
        try:
            self.engine.import_json(text)
        except ParseError as e:
            log.error(f"Error parsing timetable file: {e.message}")
            self.last_error = e.message
            return e.message
        self.last_error = ""
        return None

    # --------------- print ------------------------------------------------
    async def print_timetable(self) -> None:
        await self._require(self.printer, "printer").request_print()

    # --------------- prompt-driven split ----------------------------------
    async def prompt_split(self, entry_id: str) -> Optional[Tuple[Entry, Entry]]:
        """
        Split a row at a time typed into a plain text prompt.

        Blank or cancelled input aborts without error. A rejected time is
        logged and reported through `last_error`.
        """
        pending = self.engine.open_split(entry_id)
        try:
            answer = await self._require(self.prompt, "prompt").request_text(
                f"Enter split time between {pending.lower_bound} and {pending.upper_bound}"
            )
            if answer is None or not answer.strip():
                return None
            try:
                result = self.engine.confirm_split(answer)
            except TimetableError as e:
                self.last_error = e.message
                return None
            self.last_error = ""
            return result
        finally:
            self.engine.cancel_split()

    @staticmethod
    def _require(collaborator, name: str):
        if collaborator is None:
            raise RuntimeError(f"No {name} collaborator configured")
        return collaborator
