"""Helper signatures: now_utc, add_one_year, sha256_hex."""

import datetime
import hashlib


def now_utc() -> datetime.datetime:
    """Return the current UTC time truncated to whole seconds."""
    return datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0)


def add_one_year(moment: datetime.datetime) -> datetime.datetime:
    """
    Shift a timestamp forward by one calendar year.
    Feb 29 has no counterpart in the next year and rolls over to Mar 1.
    """
    try:
        return moment.replace(year=moment.year + 1)
    except ValueError:
        return moment.replace(year=moment.year + 1, month=3, day=1)


def sha256_hex(data: bytes) -> str:
    """Return SHA-256 hex digest of bytes."""
    return hashlib.sha256(data).hexdigest()
