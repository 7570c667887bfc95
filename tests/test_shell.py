import json
from unittest.mock import AsyncMock

import pytest

from Timetable.host import TimetableShell, ensure_suffix


@pytest.mark.parametrize("name, expected", [
    ("timetable", "timetable.json"),
    ("week.JSON", "week.JSON"),
    (" monday ", "monday.json"),
    ("plan.txt", "plan.txt.json"),
])
def test_ensure_suffix(name, expected):
    assert ensure_suffix(name) == expected


@pytest.mark.asyncio
async def test_export_prompts_and_downloads(day):
    prompt = AsyncMock()
    prompt.request_text.return_value = "monday"
    download = AsyncMock()
    shell = TimetableShell(day, prompt=prompt, download=download)

    filename = await shell.export()

    assert filename == "monday.json"
    prompt.request_text.assert_awaited_once_with("Enter file name (without extension):", "timetable")
    name, content = download.request_download.await_args.args
    assert name == "monday.json"
    assert len(json.loads(content)) == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("answer", [None, "", "   "])
async def test_export_cancelled(day, answer):
    prompt = AsyncMock()
    prompt.request_text.return_value = answer
    download = AsyncMock()
    shell = TimetableShell(day, prompt=prompt, download=download)
    assert await shell.export() is None
    download.request_download.assert_not_awaited()


@pytest.mark.asyncio
async def test_import_replaces_document(day):
    source = AsyncMock()
    source.read_selected_file.return_value = '[{"StartTime": "9:00", "EndTime": "10:00", "Task": "Standup", "IsSelected": false}]'
    shell = TimetableShell(day, import_source=source)
    assert await shell.import_selected_file() is None
    assert [e.task for e in day.entries] == ["Standup"]


@pytest.mark.asyncio
async def test_import_failure_is_reported_not_raised(day):
    before = day.export_json()
    source = AsyncMock()
    source.read_selected_file.return_value = "{oops"
    shell = TimetableShell(day, import_source=source)
    error = await shell.import_selected_file()
    assert error
    assert shell.last_error == error
    assert day.export_json() == before


@pytest.mark.asyncio
async def test_import_with_no_file_selected(day):
    source = AsyncMock()
    source.read_selected_file.return_value = None
    shell = TimetableShell(day, import_source=source)
    assert await shell.import_selected_file() is None
    assert len(day.entries) == 5


@pytest.mark.asyncio
async def test_print_delegates(day):
    printer = AsyncMock()
    await TimetableShell(day, printer=printer).print_timetable()
    printer.request_print.assert_awaited_once()


@pytest.mark.asyncio
async def test_prompt_split(day, spans):
    prompt = AsyncMock()
    prompt.request_text.return_value = "6:00"
    shell = TimetableShell(day, prompt=prompt)
    result = await shell.prompt_split(day.entries[0].id)
    assert result is not None
    prompt.request_text.assert_awaited_once_with("Enter split time between 5:45 and 6:25")
    assert spans(day)[:2] == [("5:45", "6:00", "Wake up & freshen up"), ("6:00", "6:25", "Wake up & freshen up")]
    assert day.session.split is None


@pytest.mark.asyncio
async def test_prompt_split_rejected_time(day):
    prompt = AsyncMock()
    prompt.request_text.return_value = "7:00"
    shell = TimetableShell(day, prompt=prompt)
    assert await shell.prompt_split(day.entries[0].id) is None
    assert shell.last_error.startswith("split time out of range")
    assert len(day.entries) == 5
    assert day.session.split is None


@pytest.mark.asyncio
async def test_missing_collaborator(day):
    with pytest.raises(RuntimeError):
        await TimetableShell(day).print_timetable()
