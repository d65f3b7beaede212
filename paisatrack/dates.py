from datetime import date
from typing import Tuple

from paisatrack.errors import DateParseError

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_date(value: str) -> date:
    """Parse a ``DD/MM/YYYY`` string.

    Anything that is not three digit-only parts, with a four-digit year,
    forming a real calendar date
    raises DateParseError instead of producing an unsortable value.
    """
    if not isinstance(value, str):
        raise DateParseError(f"Expected a DD/MM/YYYY string, got {value!r}")
    parts = value.strip().split("/")
    if len(parts) != 3:
        raise DateParseError(f"Invalid date {value!r}: expected DD/MM/YYYY")
    if not all(p.isascii() and p.isdigit() for p in parts):
        raise DateParseError(f"Invalid date {value!r}: non-numeric part")
    if len(parts[2]) != 4:
        raise DateParseError(f"Invalid date {value!r}: year must have four digits")
    day, month, year = (int(p) for p in parts)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise DateParseError(f"Invalid date {value!r}: {e}") from None


def format_date(d: date) -> str:
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def parse_month(value: str) -> Tuple[int, int]:
    """Return (year, month) for a ``YYYY-MM`` token."""
    parts = value.split("-") if isinstance(value, str) else []
    if len(parts) != 2 or len(parts[0]) != 4 or len(parts[1]) != 2:
        raise DateParseError(f"Invalid month {value!r}: expected YYYY-MM")
    try:
        year, month = int(parts[0]), int(parts[1])
    except ValueError:
        raise DateParseError(f"Invalid month {value!r}: non-numeric part") from None
    if not 1 <= month <= 12:
        raise DateParseError(f"Invalid month {value!r}: month out of range")
    return year, month


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = month - 1 + delta
    return year + index // 12, index % 12 + 1


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"
