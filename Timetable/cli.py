# Timetable/cli.py

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
load_dotenv()

from Timetable.config import Settings
from Timetable.engine.editor import TimetableEngine
from Timetable.errors import NotFoundError, TimetableError
from Timetable.host import TimetableShell

logging.basicConfig(
    format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-25s | %(message)s",
    level=logging.WARNING,
)
log = logging.getLogger("Timetable.cli")


# --- Terminal collaborators ---
class ConsolePrompt:
    async def request_text(self, message: str, default: Optional[str] = None) -> Optional[str]:
        suffix = f" [{default}]" if default else ""
        try:
            answer = input(f"{message}{suffix} ")
        except EOFError:
            return None
        return answer if answer.strip() else default


class DirectoryDownload:
    def __init__(self, out_dir: Path):
        self.out_dir = out_dir

    async def request_download(self, filename: str, content: str) -> None:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        target = self.out_dir / filename
        target.write_text(content, encoding="utf-8")
        log.info(f"Wrote {target}")


class ConsolePrinter:
    def __init__(self, engine: TimetableEngine):
        self.engine = engine

    async def request_print(self) -> None:
        print(render_table(self.engine))


class PathImportSource:
    def __init__(self, path: Path):
        self.path = path

    async def read_selected_file(self) -> Optional[str]:
        if not self.path.exists():
            log.warning(f"Import file {self.path} does not exist")
            return None
        return self.path.read_text(encoding="utf-8")


# --- Helpers ---
def render_table(engine: TimetableEngine) -> str:
    rows = engine.entries
    if not rows:
        return "(empty timetable)"
    gaps = set(engine.document.gaps())
    lines = [f"{'#':>3}  {'Start':>5}  {'End':>5}  Sel  Task"]
    for i, e in enumerate(rows):
        sel = " * " if engine.is_selected(e.id) else "   "
        lines.append(f"{i + 1:>3}  {engine.fmt(e.start):>5}  {engine.fmt(e.end):>5}  {sel}  {e.task}")
        if i in gaps:
            lines.append("     ! not contiguous with the next row")
    return "\n".join(lines)


def load_engine(path: Path, settings: Settings) -> TimetableEngine:
    if not path.exists():
        log.info(f"{path} not found; starting a new timetable")
        return TimetableEngine(settings)
    engine = TimetableEngine(settings, entries=[])
    engine.import_json(path.read_text(encoding="utf-8"))
    return engine


def save_engine(engine: TimetableEngine, path: Path) -> None:
    path.write_text(engine.export_json(), encoding="utf-8")
    log.debug(f"Saved {len(engine.document)} rows to {path}")


def row_id(engine: TimetableEngine, position: int) -> str:
    """Translate a 1-based row number from the command line into an entry id."""
    if not 1 <= position <= len(engine.document):
        raise NotFoundError(f"row {position} does not exist")
    return engine.document[position - 1].id


def main(argv: Optional[List[str]] = None):
    settings = Settings()

    parser = argparse.ArgumentParser(
        prog="timetable",
        description="Timetable: edit a day of contiguous time blocks"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging for all Timetable modules.")
    parser.add_argument("--file", type=Path, default=None, help=f"Timetable JSON file (default: {settings.document_path}).")
    subparsers = parser.add_subparsers(dest="command", title="Available Commands", required=True)

    # --- init ---
    parser_init = subparsers.add_parser("init", help="Create a new timetable file.")
    parser_init.add_argument("--empty", action="store_true", help="Start without the example row.")
    parser_init.add_argument("--force", action="store_true", help="Overwrite an existing file.")
    def handle_init(args_ns, path: Path, current_settings: Settings):
        if path.exists() and not args_ns.force:
            raise TimetableError(f"{path} already exists (use --force to overwrite)")
        if args_ns.empty:
            current_settings.seed_default_entry = False
        save_engine(TimetableEngine(current_settings), path)
        print(f"Created {path}")
    parser_init.set_defaults(func=handle_init, mutates=False)

    # --- show ---
    parser_show = subparsers.add_parser("show", help="Print the timetable.")
    def handle_show(args_ns, engine: TimetableEngine):
        print(render_table(engine))
    parser_show.set_defaults(func=handle_show, mutates=False)

    # --- add ---
    parser_add = subparsers.add_parser("add", help="Append a row starting where the last one ends.")
    parser_add.add_argument("--end", required=True, help="End time, e.g. 7:30.")
    parser_add.add_argument("--task", default="", help="Task label.")
    parser_add.add_argument("--start", default=None, help="Start time (default: end of the last row).")
    def handle_add(args_ns, engine: TimetableEngine):
        engine.add_row()
        try:
            engine.commit_edit(args_ns.start, args_ns.end, args_ns.task)
        except TimetableError:
            engine.cancel_edit()
            raise
    parser_add.set_defaults(func=handle_add, mutates=True)

    # --- edit ---
    parser_edit = subparsers.add_parser("edit", help="Change a row's times or task.")
    parser_edit.add_argument("row", type=int, help="Row number (1-based).")
    parser_edit.add_argument("--start", default=None)
    parser_edit.add_argument("--end", default=None)
    parser_edit.add_argument("--task", default=None)
    def handle_edit(args_ns, engine: TimetableEngine):
        engine.begin_edit(row_id(engine, args_ns.row))
        try:
            engine.commit_edit(args_ns.start, args_ns.end, args_ns.task)
        except TimetableError:
            engine.cancel_edit()
            raise
    parser_edit.set_defaults(func=handle_edit, mutates=True)

    # --- delete ---
    parser_delete = subparsers.add_parser("delete", help="Delete a row, closing the gap it leaves.")
    parser_delete.add_argument("row", type=int)
    def handle_delete(args_ns, engine: TimetableEngine):
        engine.delete_row(row_id(engine, args_ns.row))
    parser_delete.set_defaults(func=handle_delete, mutates=True)

    # --- split ---
    parser_split = subparsers.add_parser("split", help="Split a row in two at an interior time.")
    parser_split.add_argument("row", type=int)
    parser_split.add_argument("time", nargs="?", default=None, help="Split time (prompted for when omitted).")
    def handle_split(args_ns, engine: TimetableEngine):
        entry_id = row_id(engine, args_ns.row)
        if args_ns.time is not None:
            engine.split_row(entry_id, args_ns.time)
            return
        shell = TimetableShell(engine, prompt=ConsolePrompt())
        asyncio.run(shell.prompt_split(entry_id))
        if shell.last_error:
            raise TimetableError(shell.last_error)
    parser_split.set_defaults(func=handle_split, mutates=True)

    # --- select ---
    parser_select = subparsers.add_parser("select", help="Toggle selection of rows (used by merge).")
    parser_select.add_argument("rows", type=int, nargs="*")
    parser_select.add_argument("--clear", action="store_true", help="Clear the selection first.")
    def handle_select(args_ns, engine: TimetableEngine):
        if args_ns.clear:
            engine.clear_selection()
        for entry_id in [row_id(engine, r) for r in args_ns.rows]:
            engine.toggle_selection(entry_id)
    parser_select.set_defaults(func=handle_select, mutates=True)

    # --- merge ---
    parser_merge = subparsers.add_parser("merge", help="Merge the selected (or listed) contiguous rows into one.")
    parser_merge.add_argument("rows", type=int, nargs="*", help="Rows to merge; replaces the saved selection.")
    parser_merge.add_argument("--task", required=True, help="Label for the merged row.")
    def handle_merge(args_ns, engine: TimetableEngine):
        if args_ns.rows:
            ids = [row_id(engine, r) for r in args_ns.rows]
            engine.clear_selection()
            for entry_id in ids:
                engine.toggle_selection(entry_id)
        engine.open_merge()
        engine.confirm_merge(args_ns.task)
    parser_merge.set_defaults(func=handle_merge, mutates=True)

    # --- export ---
    parser_export = subparsers.add_parser("export", help="Export the timetable to a named JSON file.")
    parser_export.add_argument("--out-dir", type=Path, default=Path("."), help="Directory to write into.")
    def handle_export(args_ns, engine: TimetableEngine):
        shell = TimetableShell(engine, prompt=ConsolePrompt(), download=DirectoryDownload(args_ns.out_dir))
        filename = asyncio.run(shell.export())
        if filename:
            print(f"Exported to {args_ns.out_dir / filename}")
    parser_export.set_defaults(func=handle_export, mutates=False)

    # --- import ---
    parser_import = subparsers.add_parser("import", help="Replace the timetable with an exported file.")
    parser_import.add_argument("source", type=Path)
    def handle_import(args_ns, engine: TimetableEngine):
        shell = TimetableShell(engine, import_source=PathImportSource(args_ns.source))
        error = asyncio.run(shell.import_selected_file())
        if error:
            raise TimetableError(error)
    parser_import.set_defaults(func=handle_import, mutates=True)

    # --- print ---
    parser_print = subparsers.add_parser("print", help="Send the timetable to the printer (stdout).")
    def handle_print(args_ns, engine: TimetableEngine):
        shell = TimetableShell(engine, printer=ConsolePrinter(engine))
        asyncio.run(shell.print_timetable())
    parser_print.set_defaults(func=handle_print, mutates=False)

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.getLogger("Timetable").setLevel(level)
    if args.debug:
        log.debug("Debug logging enabled via CLI.")

    path = args.file or settings.document_path
    try:
        if args.command == "init":
            args.func(args, path, settings)
            return 0
        engine = load_engine(path, settings)
        args.func(args, engine)
        if args.mutates:
            save_engine(engine, path)
    except TimetableError as e:
        log.error(f"{args.command} failed: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    return 0

if __name__ == "__main__":
    main()
