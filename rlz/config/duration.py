from __future__ import annotations

import re
from datetime import timedelta

from rlz.core.result import Err, Ok, Result

_TERM_RE = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*")

_UNIT_SECONDS: dict[str, float] = {
    "ms": 0.001,
    "msec": 0.001,
    "millisecond": 0.001,
    "milliseconds": 0.001,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}


def parse_duration(text: str) -> Result[timedelta, str]:
    """Parse a human-readable duration such as ``"30m"``, ``"1h 30m"`` or ``"90"``.

    A number without unit is a number of seconds. Terms are summed.
    """
    if not text.strip():
        return Err("empty duration")

    total = 0.0
    pos = 0
    while pos < len(text):
        m = _TERM_RE.match(text, pos)
        if m is None or m.end() == pos:
            return Err(f"unexpected input at `{text[pos:]}`")
        number, unit = m.group(1), m.group(2).lower()
        if unit == "":
            unit = "s"
        factor = _UNIT_SECONDS.get(unit)
        if factor is None:
            return Err(f"unknown time unit `{m.group(2)}`")
        total += float(number) * factor
        pos = m.end()

    try:
        return Ok(timedelta(seconds=total))
    except OverflowError:
        return Err(f"duration out of range: `{text}`")
