import re

_HH_MM_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")
_AM_PM_RE = re.compile(r"^([0-9]{1,2})(?::([0-9]{2}))?\s*(am|pm)$", re.I)


def normalize_time(time: str) -> str:
    """
    Normalize a clock-time token to 24-hour ``HH:MM``.

    Never fails: anything that is not a recognised time comes back lower-cased
    and trimmed.

    >>> normalize_time("2:30 pm")
    '14:30'
    >>> normalize_time("12:00 am")
    '00:00'
    >>> normalize_time("Noon")
    'noon'
    """
    t = (time or "").lower().strip()

    m = _HH_MM_RE.match(t)
    if m:
        return f"{m.group(1).zfill(2)}:{m.group(2)}"

    m = _AM_PM_RE.match(t)
    if m:
        hour = int(m.group(1))
        minutes = m.group(2) or "00"
        period = m.group(3).lower()
        if period == "pm" and hour < 12:
            hour += 12
        elif period == "am" and hour == 12:
            hour = 0
        return f"{hour:02d}:{minutes}"

    return t
