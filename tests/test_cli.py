# tests/test_cli.py
import json

from litcal.calendar.year import CSV_HEADER
from litcal.cli import main


def test_list(capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    for name in ("54", "ef", "of", "of-us"):
        assert f"{name} " in out
    assert "1962 Roman Calendar" in out


def test_year_csv(capsys):
    assert main(["year", "of", "2025"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == CSV_HEADER
    assert len(lines) == 365


def test_year_json_to_file(tmp_path, capsys):
    path = tmp_path / "ef-2025.json"
    assert main(["year", "ef", "2025", "--format", "json", "-o", str(path)]) == 0
    assert "Wrote" in capsys.readouterr().out
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["edition"] == "1962"
    assert payload["days"][0]["date"] == "2024-12-01"


def test_day(capsys):
    assert main(["day", "of", "2025-12-25"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("2025-12-25")
    assert "Nativity of the Lord" in out


def test_feast(capsys):
    assert main(["feast", "ef", "saint", "joseph"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Saint Joseph, Spouse of the Blessed Virgin Mary")
    assert "date:  3/19" in out
    assert "rank:  I" in out


def test_search(capsys):
    assert main(["search", "of", "joseph", "--limit", "2"]) == 0
    out = capsys.readouterr().out
    assert "Saint Joseph" in out
    assert len(out.splitlines()) <= 2

    assert main(["search", "of", "qqqqzzzz"]) == 0
    assert "No matches." in capsys.readouterr().out


def test_errors_return_one(capsys):
    assert main(["year", "nope", "2025"]) == 1
    assert "error:" in capsys.readouterr().err

    assert main(["day", "of", "2025-02-30"]) == 1
    assert "Invalid date" in capsys.readouterr().err

    assert main(["feast", "ef", "Saint", "Nobody"]) == 1
    assert "not found" in capsys.readouterr().err
