# tests/test_web.py
import pytest
from fastapi.testclient import TestClient

from litcal.calendar.year import CSV_HEADER
from litcal.web.app import create_app


@pytest.fixture(scope="module")
def client():
    return TestClient(create_app())


def test_list_calendars(client):
    body = client.get("/api/calendars").json()
    assert body["success"] is True
    names = {c["name"] for c in body["data"]}
    assert {"54", "ef", "of", "of-us"} <= names


def test_get_calendar(client):
    body = client.get("/api/calendars/ef").json()
    assert body["data"]["display_name"] == "1962 Roman Calendar"
    assert body["data"]["edition"] == "1962"

    body = client.get("/api/calendars/nope").json()
    assert body["success"] is False
    assert "not found" in body["error"]


def test_year(client):
    body = client.get("/api/calendars/of/year/2025").json()
    assert body["success"] is True
    assert body["data"]["total_days"] == 364
    assert body["data"]["csv_data"].startswith(CSV_HEADER)


def test_day(client):
    body = client.get("/api/calendars/of/day/2025/12/25").json()
    assert body["success"] is True
    assert body["data"]["date"] == "2025-12-25"
    assert body["data"]["day"]["desc"].startswith("Nativity of the Lord")

    body = client.get("/api/calendars/of/day/2025/2/30").json()
    assert body["success"] is False
    assert body["error"] == "Invalid date: 2025-2-30"


def test_search(client):
    body = client.get("/api/calendars/of/search", params={"q": "joseph"}).json()
    assert body["success"] is True
    assert body["data"][0]["name"].startswith("Saint Joseph")
    assert client.get("/api/calendars/of/search").status_code == 422


def test_generate(client):
    body = client.post("/api/calendars/of/generate", params={"year": 2025, "format": "json"}).json()
    assert body["success"] is True
    assert len(body["data"]) == 364

    body = client.post("/api/calendars/of/generate", params={"year": 2025}).json()
    assert body["data"].startswith(CSV_HEADER)

    body = client.post("/api/calendars/of/generate", params={"year": 2025, "format": "xml"}).json()
    assert body["success"] is False
    assert body["error"] == "Unsupported format: xml"


def test_stats(client):
    body = client.get("/api/calendars/ef/stats/2025").json()
    assert body["success"] is True
    data = body["data"]
    assert data["total_days"] == 364
    assert sum(s["days"] for s in data["seasons"]) == 364
    advent = next(s for s in data["seasons"] if s["name"] == "Advent")
    assert advent["color"] == "violet"
