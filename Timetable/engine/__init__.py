from Timetable.engine.document import Document
from Timetable.engine.editor import TimetableEngine
from Timetable.engine.session import Session

__all__ = ["Document", "Session", "TimetableEngine"]
