# tests/test_year_calendar.py
import json
from datetime import date, timedelta

import pytest

import litcal
from litcal.calendar.year import CSV_HEADER
from litcal.core.dates import easter

CALENDARS = ["54", "ef", "of", "of-us"]
YEARS = range(2020, 2031)


@pytest.mark.parametrize("name", CALENDARS)
@pytest.mark.parametrize("year", YEARS)
def test_every_year_generates(name, year):
    cal = litcal.generate_year(year, calendar=name)
    first, nxt = litcal.get_calendar(name).bounds(year)

    assert cal.first_day == first
    assert cal.last_day == nxt - timedelta(days=1)
    assert len(cal) == (nxt - first).days
    assert cal.first_day.weekday() == 6

    prev = None
    for day in cal:
        if prev is not None:
            assert day.date == prev + timedelta(days=1)
        assert day.day.desc
        assert day.day_in_season
        assert day.day_rank
        prev = day.date

    assert cal.get_day(date(year - 1, 12, 25)).day.desc.startswith("Nativity of")
    assert cal.get_day(easter(year)).day.desc.startswith("Easter Sunday")


def test_csv_export():
    cal = litcal.generate_year(2025, calendar="of")
    lines = cal.to_csv().splitlines()
    assert lines[0] == CSV_HEADER
    assert len(lines) == len(cal) + 1
    assert lines[1].startswith("2024-12-01|Dominica I of Advent|")
    assert all(line.count("|") == 4 for line in lines)


def test_json_export():
    cal = litcal.generate_year(2025, calendar="ef")
    payload = json.loads(cal.to_json())
    assert payload["name"] == "1962 Roman Calendar"
    assert payload["edition"] == "1962"
    assert payload["lit_year"] == 2025
    assert len(payload["days"]) == len(cal)
    assert payload["days"][0]["date"] == "2024-12-01"


def test_contains_and_get_day():
    cal = litcal.generate_year(2025, calendar="of")
    assert cal.contains(date(2025, 6, 1))
    assert not cal.contains(date(2025, 11, 30))
    assert cal.get_day(date(2025, 11, 30)) is None


def test_annunciation_in_holy_week_moves_past_easter_octave():
    cal = litcal.generate_year(2024, calendar="of")
    assert cal.get_day(date(2024, 3, 25)).day_in_season.startswith("Feria II")
    moved = cal.get_day(date(2024, 4, 8))
    assert moved.day.desc == "Annunciation of the Lord (transferred)"
    assert moved.day_rank == "Solemnity"
    for d in range(25, 32):
        assert "Annunciation" not in cal.get_day(date(2024, 3, d)).day.desc


def test_ordinary_time_numbering():
    cal = litcal.generate_year(2025, calendar="of")
    assert cal.get_day(date(2025, 3, 2)).day_in_season == "Dominica VIII in Ordinary Time"
    assert cal.get_day(date(2025, 6, 9)).day_in_season == "Feria II week X in Ordinary Time"
    assert cal.get_day(date(2025, 6, 15)).day_in_season == "Dominica XI in Ordinary Time"
    christ_king = cal.get_day(date(2025, 11, 23))
    assert christ_king.day_in_season == "Dominica XXXIV in Ordinary Time"
    assert christ_king.day.desc.startswith("Our Lord Jesus Christ, King of the Universe")


def test_memorial_in_lent_is_commemorated():
    day = litcal.generate_year(2025, calendar="of").get_day(date(2025, 3, 7))
    assert day.day.desc == day.day_in_season
    assert day.day_rank == "Feria"
    assert [c.desc for c in day.commemorations] == ["Saints Perpetua and Felicity, Martyrs"]


def test_immaculate_conception_on_advent_sunday_1962():
    day = litcal.generate_year(2025, calendar="ef").get_day(date(2024, 12, 8))
    assert day.day.desc.startswith("Immaculate Conception")
    assert day.day_rank == "I"
    assert [c.desc for c in day.commemorations] == [day.day_in_season]


def test_1954_ranks():
    cal = litcal.generate_year(2025, calendar="54")
    assert cal.get_day(date(2025, 4, 20)).day_rank == "First Class Double"
    assert cal.get_day(date(2025, 4, 15)).day_rank == "Greater Privileged Feria of Lent"
    assert cal.get_day(date(2025, 9, 6)).day.desc == "BVM on Saturday"


def test_us_extensions():
    us = litcal.generate_year(2025, calendar="of-us")
    general = litcal.generate_year(2025, calendar="of")

    assert us.get_day(date(2025, 1, 5)).day.desc.startswith("Epiphany of the Lord")
    assert general.get_day(date(2025, 1, 6)).day.desc.startswith("Epiphany of the Lord")

    assert us.get_day(date(2025, 6, 22)).day.desc.startswith("Most Holy Body and Blood of Christ")
    assert general.get_day(date(2025, 6, 19)).day.desc.startswith("Most Holy Body and Blood of Christ")

    thanksgiving = us.get_day(date(2025, 11, 27))
    assert "Thanksgiving Day" in [c.desc for c in thanksgiving.commemorations]
    assert "Thanksgiving Day" not in general.get_day(date(2025, 11, 27)).to_row()
