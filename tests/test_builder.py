# tests/test_builder.py
from datetime import date

from litcal.calendar.builder import YearCalendarBuilder


def test_descriptor(mini_of):
    b = YearCalendarBuilder.from_definition(mini_of, 2025)
    assert b.descriptor(date(2024, 12, 1)) == "Dominica I of Advent"
    assert b.descriptor(date(2024, 12, 2)) == "Feria II week I of Advent"
    assert b.descriptor(date(2024, 12, 14)) == "Sabbato week II of Advent"
    assert b.descriptor(date(2025, 1, 5)) == "Dominica III of Rest of the Year"
    assert b.descriptor(date(2025, 1, 8)) == "Feria IV week III of Rest of the Year"


def test_year_spans_advent_to_advent(mini_of):
    cal = mini_of.generate(2025)
    assert cal.first_day == date(2024, 12, 1)
    assert cal.last_day == date(2025, 11, 29)
    assert len(cal) == 364
    assert cal.edition == "OrdinaryForm"


def test_solemnity_on_sunday_is_transferred(mini_of):
    cal = mini_of.generate(2025)

    sunday = cal.get_day(date(2024, 12, 8))
    assert sunday.day.desc == "Dominica II of Advent"
    assert sunday.day_rank == "Major Sunday"

    # Dec 9 holds a feast, which keeps the transferred solemnity off it
    feast_b = cal.get_day(date(2024, 12, 9))
    assert feast_b.day.desc == "Feast B, Martyr"
    assert feast_b.day.color == "red"

    moved = cal.get_day(date(2024, 12, 10))
    assert moved.day.desc == "Solemnity A (transferred)"
    assert moved.day_rank == "Solemnity"
    assert moved.day_in_season == "Feria III week II of Advent"


def test_saturday_office_commemorated_in_ordinary_form(mini_of):
    day = mini_of.generate(2025).get_day(date(2025, 1, 11))
    assert day.day.desc == "Sabbato week III of Rest of the Year"
    assert day.commemorations[-1].desc == "BVM on Saturday"
    assert day.commemorations[-1].rank == "Optional Memorial"


def test_saturday_office_takes_the_day_in_1962(mini_62):
    cal = mini_62.generate(2025)
    assert cal.edition == "1962"
    day = cal.get_day(date(2025, 1, 11))
    assert day.day.desc == "BVM on Saturday"
    assert day.day_in_season == "Sabbato week III of Rest of the Year"
    assert day.day_rank == "IV"


def test_step_hands_back_the_slot(mini_of):
    b = YearCalendarBuilder.from_definition(mini_of, 2025)
    day, slot = b.step(date(2024, 12, 8), None)
    assert slot is not None
    assert slot[1].desc == "Solemnity A (transferred)"

    day, slot = b.step(date(2024, 12, 9), slot)
    assert day.day.desc == "Feast B, Martyr"
    assert slot is not None

    day, slot = b.step(date(2024, 12, 10), slot)
    assert day.day.desc == "Solemnity A (transferred)"
    assert slot is None
