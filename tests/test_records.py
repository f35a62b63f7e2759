# tests/test_records.py
from datetime import date

import pytest

import litcal
from litcal.core.errors import LitcalError
from litcal.export.records import (
    DayRecord,
    feast_names,
    filter_by_rank,
    filter_by_season,
    load_records,
    read_records,
    records_from_year,
    statistics,
    write_csv,
)


@pytest.fixture
def year_2025():
    return litcal.generate_year(2025, calendar="of")


def test_csv_reads_back(year_2025):
    from_csv = read_records(year_2025.to_csv())
    direct = records_from_year(year_2025)
    assert len(from_csv) == len(year_2025)
    for a, b in zip(from_csv, direct):
        assert (a.date, a.day_in_season, a.rank, a.feast, a.commemorations) == \
            (b.date, b.day_in_season, b.rank, b.feast, b.commemorations)


def test_write_and_load(tmp_path, year_2025):
    path = tmp_path / "of-2025.csv"
    write_csv(year_2025, path)
    records = load_records(path)
    assert records[0].date == date(2024, 12, 1)
    assert records[-1].date == date(2025, 11, 29)


def test_bad_rows():
    with pytest.raises(LitcalError):
        read_records("2025-01-01|a|b|c\n")
    with pytest.raises(LitcalError):
        read_records("2025-13-01|a|b|c|\n")
    assert read_records("") == []


def test_record_properties():
    ferial = DayRecord(date(2025, 7, 1), "Feria III week XIII in Ordinary Time", "Feria",
                       "Feria III week XIII in Ordinary Time", color="green/white")
    feast = DayRecord(date(2025, 7, 3), "Feria V week XIII in Ordinary Time", "Feast", "Saint Thomas, Apostle")
    assert ferial.feast_name is None
    assert not ferial.is_feast()
    assert ferial.primary_color == "green"
    assert feast.feast_name == "Saint Thomas, Apostle"
    assert feast.in_season("Ordinary Time")


def test_filters(year_2025):
    records = records_from_year(year_2025)
    solemnities = filter_by_rank(records, "Solemnity")
    assert any(r.feast.startswith("Easter Sunday") for r in solemnities)
    assert all(r.rank == "Solemnity" for r in solemnities)

    lent = filter_by_season(records, "Lent")
    assert lent[0].date == date(2025, 3, 5)
    assert all(r.season == "Lent" for r in lent)

    names = feast_names(records)
    assert names == sorted(names)
    assert any(n.startswith("Saint Joseph") for n in names)
    assert not any(n.startswith("Feria") for n in names)


def test_statistics(year_2025):
    records = records_from_year(year_2025)
    stats = statistics(records)
    assert stats["total_days"] == len(year_2025)
    assert stats["feast_days"] + stats["ferial_days"] == stats["total_days"]
    assert sum(stats["season_counts"].values()) == stats["total_days"]
    assert sum(stats["rank_counts"].values()) == stats["total_days"]
    assert stats["color_counts"]["green"] > stats["color_counts"]["violet"]
    assert stats["commemoration_days"] > 0
