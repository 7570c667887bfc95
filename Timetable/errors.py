"""
Error taxonomy for the timetable engine.

Every operation either fully succeeds or raises one of these before touching
the document.
"""


class TimetableError(Exception):
    """Base class for all timetable errors. `message` is safe to show to a user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TimetableError):
    """Bad, missing or out-of-range user input. Always recoverable."""


class NotFoundError(TimetableError):
    """A referenced entry (or edit) is no longer present. Callers treat it as a no-op."""


class ParseError(TimetableError):
    """An imported document could not be parsed. The current document is kept."""
