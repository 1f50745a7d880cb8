"""Calendar dates as stored in the circulation records."""

from __future__ import annotations

import re
from dataclasses import dataclass

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_DASHED = re.compile(r"\s*([+-]?\d+)-\s*([+-]?\d+)-\s*([+-]?\d+)")
_SPACED = re.compile(r"\s*([+-]?\d+)\s+([+-]?\d+)\s+([+-]?\d+)")


@dataclass(frozen=True)
class Date:
    """A day, month and year triple."""

    day: int
    month: int
    year: int

    def __str__(self) -> str:
        return f"{self.day:02d}-{self.month:02d}-{self.year:04d}"


def is_leap_year(year: int) -> bool:
    """Return True for Gregorian leap years."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def is_valid_date(day: int, month: int, year: int) -> bool:
    """Return True if the triple names a real calendar day."""
    if year < 1 or not 1 <= month <= 12 or day < 1:
        return False
    limit = 29 if month == 2 and is_leap_year(year) else _MONTH_DAYS[month - 1]
    return day <= limit


def parse_date(text: str) -> Date:
    """Parse ``DD-MM-YYYY`` or ``DD MM YYYY``; two-digit years mean 20xx."""
    match = _DASHED.match(text) or _SPACED.match(text)
    if match is None:
        raise ValueError(f"not a date: {text!r}")
    day, month, year = (int(group) for group in match.groups())
    if year < 100:
        year += 2000
    return Date(day, month, year)


def format_date(date: Date) -> str:
    """Render a date as ``DD-MM-YYYY``."""
    return str(date)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def date_to_days(date: Date) -> int:
    """Return a day count suitable for subtracting two dates."""
    if not 1 <= date.month <= 12:
        raise ValueError(f"month out of range: {date.month}")
    years = date.year - 1 if date.month <= 2 else date.year
    leaps = _trunc_div(years, 4) - _trunc_div(years, 100) + _trunc_div(years, 400)
    return date.year * 365 + date.day + sum(_MONTH_DAYS[: date.month - 1]) + leaps


def days_between(start: Date, end: Date) -> int:
    """Number of days from ``start`` to ``end`` (negative if end is earlier)."""
    return date_to_days(end) - date_to_days(start)