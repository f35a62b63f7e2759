# tests/test_date_rule.py
from datetime import date

import pytest

from litcal.rules.date_rule import (
    ADVENT_SUNDAY,
    AvoidSunday,
    DivinoAfflatuAnticipation,
    Easter,
    Fixed,
    LeapYearConditional,
    NextYear,
    OffsetDays,
    OffsetSundays,
    PreviousYear,
    SundayBetweenOrFallback,
    evaluate,
)


def test_first_sunday_of_advent():
    assert ADVENT_SUNDAY.evaluate(2024) == date(2023, 12, 3)
    assert ADVENT_SUNDAY.evaluate(2025) == date(2024, 12, 1)
    assert ADVENT_SUNDAY.evaluate(2026) == date(2025, 11, 30)


def test_easter_offsets():
    assert evaluate(Easter(), 2024) == date(2024, 3, 31)
    # Ash Wednesday and Pentecost
    assert OffsetDays(Easter(), -46).evaluate(2024) == date(2024, 2, 14)
    assert OffsetDays(Easter(), 49).evaluate(2025) == date(2025, 6, 8)


def test_offset_sundays_anchor():
    # positive offsets anchor on the Sunday on/before, negative on/after
    assert OffsetSundays(Fixed(10, 31), 0).evaluate(2024) == date(2024, 10, 27)
    assert OffsetSundays(Fixed(12, 25), -5).evaluate(2024) == date(2024, 11, 24)
    assert OffsetSundays(Fixed(9, 21), 0).evaluate(2025) == date(2025, 9, 21)


def test_fixed_range_checked():
    with pytest.raises(ValueError):
        Fixed(13, 1)
    with pytest.raises(ValueError):
        Fixed(2, 0)


def test_missing_dates_propagate_none():
    assert Fixed(2, 29).evaluate(2023) is None
    assert PreviousYear(Fixed(2, 29)).evaluate(2024) is None
    assert OffsetDays(Fixed(2, 29), 1).evaluate(2025) is None
    assert AvoidSunday(Fixed(2, 29)).evaluate(2025) is None
    assert NextYear(Fixed(2, 29)).evaluate(2024) is None


def test_previous_and_next_year():
    assert PreviousYear(Fixed(12, 25)).evaluate(2025) == date(2024, 12, 25)
    assert NextYear(Fixed(1, 1)).evaluate(2024) == date(2025, 1, 1)


def test_sunday_between_or_fallback():
    rule = SundayBetweenOrFallback(Fixed(1, 6), Fixed(1, 13), Fixed(1, 13))
    assert rule.evaluate(2024) == date(2024, 1, 7)
    # start itself is never taken, even on a Sunday
    assert rule.evaluate(2019) == date(2019, 1, 13)

    holy_name = SundayBetweenOrFallback(Fixed(1, 1), Fixed(1, 6), Fixed(1, 2))
    assert holy_name.evaluate(2025) == date(2025, 1, 5)
    assert holy_name.evaluate(2024) == date(2024, 1, 2)


def test_leap_year_conditional():
    matthias = LeapYearConditional(Fixed(2, 25), Fixed(2, 24))
    assert matthias.evaluate(2024) == date(2024, 2, 25)
    assert matthias.evaluate(2025) == date(2025, 2, 24)


def test_avoid_sunday():
    assert AvoidSunday(Fixed(3, 19)).evaluate(2023) == date(2023, 3, 20)
    assert AvoidSunday(Fixed(3, 19)).evaluate(2024) == date(2024, 3, 19)


def test_divino_afflatu_anticipation():
    # Septuagesima 2024 is 2024-01-28; only two Sundays after Jan 14 fit before it
    d = DivinoAfflatuAnticipation().evaluate(2024)
    assert d == date(2024, 1, 27)
    assert d.weekday() == 5


def test_display_notation():
    assert str(Easter()) == "Easter"
    assert str(Fixed(3, 19)) == "3/19"
    assert str(ADVENT_SUNDAY) == "((12/25) previous year) + -4 Sundays"
    assert str(OffsetDays(Easter(), 39)) == "(Easter) + 39 days"
    assert str(SundayBetweenOrFallback(Fixed(1, 6), Fixed(1, 13), Fixed(1, 13))) == \
        "Sunday Between (1/6) and (1/13) or (1/13)"
    assert str(LeapYearConditional(Fixed(2, 25), Fixed(2, 24))) == "(2/25) in leap year else (2/24)"
    assert str(AvoidSunday(Fixed(3, 19))) == "(3/19) (transfered on sundays)"
    assert str(NextYear(Fixed(1, 1))) == "(1/1) next year"


def test_rules_are_values():
    assert OffsetDays(Easter(), 1) == OffsetDays(Easter(), 1)
    assert OffsetDays(Easter(), 1) != OffsetSundays(Easter(), 1)
    assert len({Fixed(1, 1), Fixed(1, 1), Fixed(1, 2)}) == 2
