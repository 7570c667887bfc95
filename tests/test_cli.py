import json

import pytest

from Timetable.cli import main


def rows(path):
    return [(r["StartTime"], r["EndTime"], r["Task"]) for r in json.loads(path.read_text())]


@pytest.fixture
def doc(tmp_path):
    path = tmp_path / "day.json"
    main(["--file", str(path), "init"])
    return path


def test_init_creates_seeded_file(doc):
    assert rows(doc) == [("5:45", "6:25", "Wake up & freshen up")]


def test_init_refuses_to_overwrite(doc, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--file", str(doc), "init"])
    assert exc.value.code == 1
    assert "already exists" in capsys.readouterr().err


def test_add_edit_split_merge_delete(doc):
    main(["--file", str(doc), "add", "--end", "7:00", "--task", "Exercise"])
    main(["--file", str(doc), "add", "--end", "7:30", "--task", "Breakfast"])
    assert rows(doc)[1:] == [("6:25", "7:00", "Exercise"), ("7:00", "7:30", "Breakfast")]

    main(["--file", str(doc), "edit", "2", "--end", "7:10"])
    assert rows(doc)[1:] == [("6:25", "7:10", "Exercise"), ("7:10", "7:30", "Breakfast")]

    main(["--file", str(doc), "split", "1", "6:00"])
    assert rows(doc)[:2] == [("5:45", "6:00", "Wake up & freshen up"), ("6:00", "6:25", "Wake up & freshen up")]

    main(["--file", str(doc), "merge", "1", "2", "--task", "Wake up"])
    assert rows(doc)[0] == ("5:45", "6:25", "Wake up")

    main(["--file", str(doc), "delete", "2"])
    assert rows(doc) == [("5:45", "6:25", "Wake up"), ("6:25", "7:30", "Breakfast")]


def test_rejected_edit_leaves_file_alone(doc, capsys):
    before = doc.read_text()
    with pytest.raises(SystemExit):
        main(["--file", str(doc), "edit", "1", "--end", "5:00"])
    assert "start must precede end" in capsys.readouterr().err
    assert doc.read_text() == before


def test_rejected_add_does_not_leave_a_blank_row(doc):
    with pytest.raises(SystemExit):
        main(["--file", str(doc), "add", "--end", "soon"])
    assert len(rows(doc)) == 1


def test_select_then_merge_non_contiguous(doc, capsys):
    main(["--file", str(doc), "add", "--end", "7:00", "--task", "b"])
    main(["--file", str(doc), "add", "--end", "8:00", "--task", "c"])
    main(["--file", str(doc), "select", "1", "3"])
    selected = [r["IsSelected"] for r in json.loads(doc.read_text())]
    assert selected == [True, False, True]
    with pytest.raises(SystemExit):
        main(["--file", str(doc), "merge", "--task", "x"])
    assert "selection must be contiguous" in capsys.readouterr().err


def test_unknown_row(doc, capsys):
    with pytest.raises(SystemExit):
        main(["--file", str(doc), "delete", "9"])
    assert "row 9 does not exist" in capsys.readouterr().err


def test_show(doc, capsys):
    main(["--file", str(doc), "show"])
    out = capsys.readouterr().out
    assert "Wake up & freshen up" in out
    assert "5:45" in out


def test_export_and_import(doc, tmp_path, monkeypatch):
    out_dir = tmp_path / "exports"
    monkeypatch.setattr("builtins.input", lambda prompt: "backup")
    main(["--file", str(doc), "export", "--out-dir", str(out_dir)])
    exported = out_dir / "backup.json"
    assert rows(exported) == rows(doc)

    other = tmp_path / "other.json"
    main(["--file", str(other), "init", "--empty"])
    assert rows(other) == []
    main(["--file", str(other), "import", str(exported)])
    assert rows(other) == rows(doc)


def test_import_bad_file_keeps_document(doc, tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    before = doc.read_text()
    with pytest.raises(SystemExit):
        main(["--file", str(doc), "import", str(bad)])
    assert doc.read_text() == before
    assert "invalid timetable file" in capsys.readouterr().err


def test_split_prompts_when_time_omitted(doc, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "6:05")
    main(["--file", str(doc), "split", "1"])
    assert rows(doc) == [("5:45", "6:05", "Wake up & freshen up"), ("6:05", "6:25", "Wake up & freshen up")]


def test_print(doc, capsys):
    main(["--file", str(doc), "print"])
    assert "Wake up & freshen up" in capsys.readouterr().out
