import pytest

from Timetable.config import Settings
from Timetable.engine.editor import TimetableEngine
from Timetable.models import Entry
from Timetable.timeofday import parse_time


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def make_engine(settings):
    def _make(*rows):
        entries = [Entry(start=parse_time(s), end=parse_time(e), task=t) for s, e, t in rows]
        return TimetableEngine(settings, entries=entries)
    return _make


@pytest.fixture
def day(make_engine):
    """Five contiguous rows, 5:45 to 9:00."""
    return make_engine(
        ("5:45", "6:25", "Wake up & freshen up"),
        ("6:25", "7:00", "Exercise"),
        ("7:00", "7:30", "Breakfast"),
        ("7:30", "8:00", "Commute"),
        ("8:00", "9:00", "Email"),
    )


def _spans(engine):
    return [(engine.fmt(e.start), engine.fmt(e.end), e.task) for e in engine.entries]


@pytest.fixture
def spans():
    """(start, end, task) display tuples for every row, in order."""
    return _spans
