# tests/test_notation.py
from datetime import date

import pytest

from litcal.core.errors import DateRuleParseError
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
)
from litcal.rules.notation import parse


def test_atoms():
    assert parse("Easter") == Easter()
    assert parse("  3/19 ") == Fixed(3, 19)
    assert parse("(12/25)") == Fixed(12, 25)
    assert parse("DivinoAfflatuAnticipation") == DivinoAfflatuAnticipation()


def test_display_form():
    assert parse("((12/25) previous year) + -4 Sundays") == ADVENT_SUNDAY
    assert parse("(Easter) + -46 days") == OffsetDays(Easter(), -46)
    assert parse("(1/1) next year") == NextYear(Fixed(1, 1))
    assert parse("(2/25) in leap year else (2/24)") == LeapYearConditional(Fixed(2, 25), Fixed(2, 24))
    assert parse("(3/19) (transfered on sundays)") == AvoidSunday(Fixed(3, 19))
    assert parse("(3/19) (transferred on sundays)") == AvoidSunday(Fixed(3, 19))


def test_constructor_aliases():
    assert parse("OffsetSundays(PreviousYear(Fixed(12, 25)), -4)") == ADVENT_SUNDAY
    assert parse("OffsetDays(Easter, 39)") == OffsetDays(Easter(), 39)
    assert parse("SundayBetweenOrFallback(Fixed(1,6), Fixed(1,13), Fixed(1,13))") == \
        SundayBetweenOrFallback(Fixed(1, 6), Fixed(1, 13), Fixed(1, 13))
    assert parse("LeapYearConditional(2/25, 2/24)") == LeapYearConditional(Fixed(2, 25), Fixed(2, 24))
    assert parse("AvoidSunday(Fixed(3, 19))") == AvoidSunday(Fixed(3, 19))
    assert parse("NextYear(1/1)") == NextYear(Fixed(1, 1))


def test_mixed_spellings():
    assert parse("PreviousYear((12/25) + 0 Sundays)") == PreviousYear(OffsetSundays(Fixed(12, 25), 0))


def test_display_form_reads_back():
    rules = [
        ADVENT_SUNDAY,
        OffsetSundays(OffsetDays(Easter(), 49), 1),
        SundayBetweenOrFallback(Fixed(1, 8), Fixed(1, 13), OffsetDays(Fixed(1, 7), 1)),
        PreviousYear(AvoidSunday(Fixed(12, 8))),
    ]
    for rule in rules:
        assert parse(str(rule)) == rule


def test_nested_sunday_between():
    baptism_us = parse(
        "Sunday Between (1/8) and (1/13) or "
        "((Sunday Between (1/1) and (1/8) or (1/8)) + 1 days)"
    )
    assert baptism_us.evaluate(2024) == date(2024, 1, 8)
    assert baptism_us.evaluate(2025) == date(2025, 1, 12)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "(Easter",
        "Easter)",
        "13/1",
        "2/32",
        "Bogus",
        "Bogus(1, 2)",
        "Fixed(1)",
        "OffsetDays(Easter)",
        "(Easter) + 3 weeks",
        "Fixed(1, 1) extra",
        "Sunday Between (1/6) and (1/13)",
        "Fixed(a, 1)",
    ],
)
def test_parse_errors(text):
    with pytest.raises(DateRuleParseError):
        parse(text)


def test_parse_error_names_fragment():
    with pytest.raises(DateRuleParseError) as exc:
        parse("Bogus(1, 2)")
    assert exc.value.fragment == "Bogus"
    assert "Bogus" in str(exc.value)

    with pytest.raises(DateRuleParseError) as exc:
        parse("(Easter) + 3 weeks")
    assert exc.value.fragment == "+ 3 weeks"


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse("13/1")
