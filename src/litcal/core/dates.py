"""
litcal.core.dates
-----------------
Gregorian date helpers shared by the rule evaluator and the year builder.

All week arithmetic is Sunday-based: a week runs Sunday..Saturday.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator, Optional

ONE_DAY = timedelta(days=1)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_ROMAN = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


def make_date(y: int, m: int, d: int) -> Optional[date]:
    """date(y, m, d) or None when the triple is not a calendar day."""
    try:
        return date(y, m, d)
    except ValueError:
        return None


def is_leap_year(y: int) -> bool:
    return (y % 4 == 0 and y % 100 != 0) or (y % 400 == 0)


def easter(year: int) -> date:
    """Gregorian Easter Sunday (anonymous Gregorian algorithm)."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return date(year, month, day)


def days_from_sunday(d: date) -> int:
    # Monday=0 .. Sunday=6 in the stdlib
    return (d.weekday() + 1) % 7


def is_sunday(d: date) -> bool:
    return d.weekday() == 6


def is_saturday(d: date) -> bool:
    return d.weekday() == 5


def preceding_sunday(d: date) -> date:
    """The Sunday on or before d."""
    return d - timedelta(days=days_from_sunday(d))


def following_sunday(d: date) -> date:
    """The Sunday on or after d."""
    return d + timedelta(days=(7 - days_from_sunday(d)) % 7)


def sundays_inclusive(d: date, sunday: date) -> int:
    """Ordinal of `sunday` counting the Sunday on/before d as 1 (0 if before it)."""
    if not is_sunday(sunday):
        raise ValueError(f"{sunday} is not a Sunday")
    n = (sunday - preceding_sunday(d)).days // 7 + 1
    return max(n, 0)


def weeks_after(d: date, other: date) -> int:
    """Week ordinal of `other` where the (partial) week containing d is week 1."""
    if other < d:
        return 0
    dfs = days_from_sunday(d)
    if other < d + timedelta(days=7 - dfs):
        return 1
    return (other - (d - timedelta(days=dfs))).days // 7 + 1


def count_sundays(start: date, end: date) -> int:
    """Number of Sundays in the closed range [start, end]."""
    if end < start:
        return 0
    first = following_sunday(start)
    if first > end:
        return 0
    return (end - first).days // 7 + 1


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every day of the closed range [start, end]."""
    d = start
    while d <= end:
        yield d
        d += ONE_DAY


def to_roman(n: int) -> str:
    if n <= 0:
        raise ValueError(f"Roman numerals need a positive integer, got {n}")
    out = []
    for value, sym in _ROMAN:
        while n >= value:
            out.append(sym)
            n -= value
    return "".join(out)


def month_name(m: int) -> str:
    return MONTH_NAMES[m - 1]
