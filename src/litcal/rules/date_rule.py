"""
litcal.rules.date_rule
----------------------
Algebraic date rules.

A rule is an immutable expression tree evaluated against a year:

    OffsetSundays(PreviousYear(Fixed(12, 25)), -4).evaluate(2025)  # first Sunday of Advent 2024

Evaluation is pure and returns None whenever an inner date does not exist
in the requested year (e.g. Feb 29 re-anchored to a common year).
Every rule prints in a canonical notation that `litcal.rules.notation.parse`
reads back into an equal rule.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from litcal.core.dates import (
    count_sundays,
    days_from_sunday,
    easter,
    following_sunday,
    is_leap_year,
    is_sunday,
    make_date,
    preceding_sunday,
)


class DateRule:
    """Base class of all date rule nodes."""

    def evaluate(self, year: int) -> Optional[date]:
        raise NotImplementedError


def evaluate(rule: DateRule, year: int) -> Optional[date]:
    return rule.evaluate(year)


@dataclass(frozen=True)
class Easter(DateRule):
    def evaluate(self, year: int) -> Optional[date]:
        return easter(year)

    def __str__(self) -> str:
        return "Easter"


@dataclass(frozen=True)
class Fixed(DateRule):
    month: int
    day: int

    def __post_init__(self) -> None:
        if not (1 <= self.month <= 12):
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not (1 <= self.day <= 31):
            raise ValueError(f"day must be in 1..31, got {self.day}")

    def evaluate(self, year: int) -> Optional[date]:
        return make_date(year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.month}/{self.day}"


@dataclass(frozen=True)
class OffsetDays(DateRule):
    rule: DateRule
    offset: int

    def evaluate(self, year: int) -> Optional[date]:
        d = self.rule.evaluate(year)
        if d is None:
            return None
        return d + timedelta(days=self.offset)

    def __str__(self) -> str:
        return f"({self.rule}) + {self.offset} days"


@dataclass(frozen=True)
class OffsetSundays(DateRule):
    """
    Shift by whole weeks from a Sunday anchor.

    For offset >= 0 the anchor is the Sunday on or before the base date,
    for offset < 0 it is the Sunday on or after it.
    """
    rule: DateRule
    offset: int

    def evaluate(self, year: int) -> Optional[date]:
        d = self.rule.evaluate(year)
        if d is None:
            return None
        anchor = preceding_sunday(d) if self.offset >= 0 else following_sunday(d)
        return anchor + timedelta(weeks=self.offset)

    def __str__(self) -> str:
        return f"({self.rule}) + {self.offset} Sundays"


@dataclass(frozen=True)
class PreviousYear(DateRule):
    rule: DateRule

    def evaluate(self, year: int) -> Optional[date]:
        d = self.rule.evaluate(year)
        if d is None:
            return None
        return make_date(year - 1, d.month, d.day)

    def __str__(self) -> str:
        return f"({self.rule}) previous year"


@dataclass(frozen=True)
class NextYear(DateRule):
    rule: DateRule

    def evaluate(self, year: int) -> Optional[date]:
        d = self.rule.evaluate(year)
        if d is None:
            return None
        return make_date(year + 1, d.month, d.day)

    def __str__(self) -> str:
        return f"({self.rule}) next year"


@dataclass(frozen=True)
class SundayBetweenOrFallback(DateRule):
    """First Sunday strictly after `start` if it is not after `end`, else `fallback`."""
    start: DateRule
    end: DateRule
    fallback: DateRule

    def evaluate(self, year: int) -> Optional[date]:
        s = self.start.evaluate(year)
        e = self.end.evaluate(year)
        if s is None or e is None:
            return None
        sunday = s + timedelta(days=7 - days_from_sunday(s))
        if sunday <= e:
            return sunday
        return self.fallback.evaluate(year)

    def __str__(self) -> str:
        return f"Sunday Between ({self.start}) and ({self.end}) or ({self.fallback})"


@dataclass(frozen=True)
class LeapYearConditional(DateRule):
    leap_year_rule: DateRule
    non_leap_year_rule: DateRule

    def evaluate(self, year: int) -> Optional[date]:
        if is_leap_year(year):
            return self.leap_year_rule.evaluate(year)
        return self.non_leap_year_rule.evaluate(year)

    def __str__(self) -> str:
        return f"({self.leap_year_rule}) in leap year else ({self.non_leap_year_rule})"


@dataclass(frozen=True)
class AvoidSunday(DateRule):
    rule: DateRule

    def evaluate(self, year: int) -> Optional[date]:
        d = self.rule.evaluate(year)
        if d is None:
            return None
        return d + timedelta(days=1) if is_sunday(d) else d

    def __str__(self) -> str:
        return f"({self.rule}) (transfered on sundays)"


# Most Sundays after Epiphany a year can need.
_MAX_EPIPHANY_SUNDAYS = 6


@dataclass(frozen=True)
class DivinoAfflatuAnticipation(DateRule):
    """
    Saturday before Septuagesima, when it must absorb an Epiphany Sunday
    that has no room before Septuagesima and none after Pentecost either.
    """

    def evaluate(self, year: int) -> Optional[date]:
        septuagesima = easter(year) - timedelta(days=63)
        candidate = septuagesima - timedelta(days=1)

        advent = ADVENT_SUNDAY.evaluate(year)
        nov_start = date(year, 11, 1)
        # Sundays from Nov 1 to the eve of the Advent that opens this liturgical year
        nov_count = count_sundays(nov_start, advent - timedelta(days=1)) if advent else 0

        epiphany_count = count_sundays(date(year, 1, 14), septuagesima - timedelta(days=1))
        surplus = max(0, _MAX_EPIPHANY_SUNDAYS - epiphany_count)

        if surplus > 0 and nov_count < surplus:
            return candidate
        return None

    def __str__(self) -> str:
        return "(DivinoAfflatuAnticipation)"


ADVENT_SUNDAY = OffsetSundays(PreviousYear(Fixed(12, 25)), -4)
