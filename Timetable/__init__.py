"""
Timetable package.

An editing engine for an ordered sequence of contiguous time intervals, each
carrying a task label, plus the thin shell and CLI that drive it.
"""
import logging

# Applications using this package should configure their own logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

VERSION = "0.1.0"
