# tests/test_api.py
from datetime import date

import pytest

import litcal
from litcal.bootstrap import build_registry
from litcal.core.registry import CalendarRegistry, CalendarSource


def test_builtin_calendars():
    assert set(litcal.list_calendars()) >= {"54", "ef", "of", "of-us"}


def test_calendar_info():
    info = litcal.calendar_info("of-us")
    assert info["name"] == "of-us"
    assert info["display_name"] == "Ordinary Form of the Roman Calendar with USA Extensions"
    assert info["edition"] == "OrdinaryForm"
    assert info["commemoration_interpretation"] == "Optional Memorial"
    assert info["feasts"] > litcal.calendar_info("of")["feasts"]

    assert litcal.calendar_info("54")["edition"] == "1954"
    assert litcal.calendar_info("ef")["edition"] == "1962"


def test_default_calendar_is_1962():
    assert litcal.get_calendar().name == "1962 Roman Calendar"
    assert litcal.generate_year(2025).edition == "1962"


def test_unknown_calendar():
    with pytest.raises(litcal.UnknownCalendarError):
        litcal.generate_year(2025, calendar="nope")
    with pytest.raises(litcal.LitcalError):
        litcal.calendar_info("nope")


def test_years_are_cached():
    assert litcal.generate_year(2025, calendar="ef") is litcal.generate_year(2025, calendar="ef")


def test_day_info_looks_in_the_next_year():
    day = litcal.day_info(date(2025, 12, 25), calendar="of")
    assert day.date == date(2025, 12, 25)
    assert day.day.desc.startswith("Nativity of the Lord")

    day = litcal.day_info(date(2025, 6, 29), calendar="ef")
    assert day.day.desc.startswith("Saints Peter and Paul")


def test_feast_info():
    feast, rank = litcal.feast_info("saint joseph", calendar="ef")
    assert feast.name == "Saint Joseph"
    assert rank == "I"

    with pytest.raises(litcal.FeastNotFoundError) as exc:
        litcal.feast_info("Saint Josef", calendar="ef")
    assert "Saint Joseph" in exc.value.suggestions


def test_search_feasts():
    hits = litcal.search_feasts("joseph", calendar="of", limit=3)
    assert 0 < len(hits) <= 3
    assert set(hits[0]) == {"name", "description", "date", "rank", "score", "color"}
    assert hits[0]["name"].startswith("Saint Joseph")
    assert hits[0]["score"] >= hits[-1]["score"]


def test_register_and_load(tmp_path, mini_toml):
    path = tmp_path / "mini.toml"
    path.write_text(mini_toml, encoding="utf-8")
    cal = litcal.load_calendar(path)
    litcal.register_calendar("test-mini", cal, overwrite=True)
    assert "test-mini" in litcal.list_calendars()
    assert len(litcal.generate_year(2025, calendar="test-mini")) == 364

    with pytest.raises(KeyError):
        litcal.register_calendar("test-mini", cal)


def test_registry_sources(tmp_path, mini_toml):
    path = tmp_path / "mini.toml"
    path.write_text(mini_toml, encoding="utf-8")

    reg = CalendarRegistry(cache_size=0)
    reg.register("mini", CalendarSource(str(path)))
    reg.register("missing", CalendarSource(str(tmp_path / "missing.toml")))
    assert reg.list() == ["mini", "missing"]
    assert reg.get("mini").name == "Test Calendar"
    # nothing is cached with cache_size=0
    assert reg.year("mini", 2025) is not reg.year("mini", 2025)
    with pytest.raises(litcal.UnknownCalendarError):
        reg.get("missing")
    with pytest.raises(litcal.UnknownCalendarError):
        reg.get("other")


def test_registry_cache_is_bounded(tmp_path, mini_toml):
    path = tmp_path / "mini.toml"
    path.write_text(mini_toml, encoding="utf-8")
    reg = CalendarRegistry(cache_size=1)
    reg.register("mini", CalendarSource(str(path)))
    first = reg.year("mini", 2025)
    assert reg.year("mini", 2025) is first
    reg.year("mini", 2026)
    assert reg.year("mini", 2025) is not first


def test_data_dir_calendars(tmp_path, mini_toml):
    (tmp_path / "mini.toml").write_text(mini_toml, encoding="utf-8")
    reg = build_registry(data_dir=str(tmp_path))
    assert "mini" in reg.list()
    assert "ef" in reg.list()
    assert reg.get("mini").name == "Test Calendar"
    assert reg.get("ef").name == "1962 Roman Calendar"
