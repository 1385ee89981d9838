"""
Per-day certificate serial numbers: YYYYMMDD of "yesterday" + "00".

Yesterday is computed with a fixed rule: day-1 in the same month, or day 30
of the previous month when today is the 1st. The literal 30 is kept even for
months that have no 30th (March 1 gives February 30); consumers depend on
the exact digit sequence.
"""
import datetime
from typing import Optional


def yesterday_parts(today: datetime.date):
    """Return (year, month, day) of the rule's "yesterday"."""
    if today.day > 1:
        return today.year, today.month, today.day - 1
    if today.month == 1:
        return today.year - 1, 12, 30
    return today.year, today.month - 1, 30


def current(today: Optional[datetime.date] = None) -> str:
    """Return the serial for today's local date (or the given date)."""
    if today is None:
        today = datetime.date.today()
    year, month, day = yesterday_parts(today)
    return f"{year:04d}{month:02d}{day:02d}00"
