"""Human readable duration parsing ("3 days", "12h", "90 min")."""

import re
from datetime import datetime, timedelta

_SECOND = 1000
_MINUTE = _SECOND * 60
_HOUR = _MINUTE * 60
_DAY = _HOUR * 24
_WEEK = _DAY * 7
_YEAR = _DAY * 365.25

# Milliseconds per unit
_UNITS = {
    "years": _YEAR, "year": _YEAR, "yrs": _YEAR, "yr": _YEAR, "y": _YEAR,
    "weeks": _WEEK, "week": _WEEK, "w": _WEEK,
    "days": _DAY, "day": _DAY, "d": _DAY,
    "hours": _HOUR, "hour": _HOUR, "hrs": _HOUR, "hr": _HOUR, "h": _HOUR,
    "minutes": _MINUTE, "minute": _MINUTE, "mins": _MINUTE, "min": _MINUTE, "m": _MINUTE,
    "seconds": _SECOND, "second": _SECOND, "secs": _SECOND, "sec": _SECOND, "s": _SECOND,
    "milliseconds": 1, "millisecond": 1, "msecs": 1, "msec": 1, "ms": 1,
}  # fmt: skip

_DURATION_RE = re.compile(
    r"^(?P<value>-?(?:\d+)?\.?\d+) *(?P<unit>[a-z]+)?$", re.IGNORECASE
)


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as "3 days" or "1.5h".

    A bare number is read as milliseconds.

    Parameters
    ----------
    text : str
        Duration string.

    Returns
    -------
    timedelta
        Parsed duration.

    Raises
    ------
    ValueError
        If the string is not a valid duration.

    """
    match = _DURATION_RE.match(str(text).strip()) if len(str(text)) <= 100 else None
    if not match:
        raise ValueError(f"Invalid duration format: {text!r}")

    unit = (match.group("unit") or "ms").lower()
    if unit not in _UNITS:
        raise ValueError(f"Invalid duration unit {unit!r} in {text!r}")

    return timedelta(milliseconds=float(match.group("value")) * _UNITS[unit])


def is_past_due(last_activity: datetime | None, timeout: str, now: datetime) -> bool:
    """Check whether the timeout has elapsed since the last activity.

    A missing last activity date counts as past due.

    Raises
    ------
    ValueError
        If timeout is not a valid duration.

    """
    offset = parse_duration(timeout)
    if last_activity is None:
        return True
    return now > last_activity + offset
