from __future__ import annotations

import re
from typing import Optional

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def parse_time(value: Optional[str]) -> Optional[int]:
    """
    Parse a time-of-day string into minutes since midnight.

    Accepts "H:mm", "HH:mm" and "HH:mm:ss". Resolution is one minute, so the
    seconds must be 00. "24:00" is allowed as the end of the day. Blank input
    returns None; anything else that does not parse raises ValueError.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    m = _TIME_RE.match(text)
    if not m:
        raise ValueError(f"Invalid time of day: {value!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    ss = int(m.group(3)) if m.group(3) is not None else 0
    if hh == 24 and mm == 0 and ss == 0:
        return MINUTES_PER_DAY
    if not (0 <= hh <= 23 and 0 <= mm <= 59 and ss == 0):
        raise ValueError(f"Invalid time of day: {value!r}")
    return hh * 60 + mm


def format_time(minutes: Optional[int], zero_pad_hours: bool = False) -> str:
    """Inverse of parse_time. None formats as an empty string."""
    if minutes is None:
        return ""
    hh, mm = divmod(int(minutes), 60)
    if zero_pad_hours:
        return f"{hh:02d}:{mm:02d}"
    return f"{hh}:{mm:02d}"
