"""HTTP API for browsing generated calendars.

All endpoints answer with an `ApiResponse` envelope; failures are reported in
the envelope (`success=false`) rather than as HTTP error statuses.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from fastapi import APIRouter, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from litcal import api
from litcal.core.errors import LitcalError
from litcal.core.logger import setup_logger
from litcal.core.settings import settings
from litcal.export.records import records_from_year, statistics
from litcal.web.schemas import ApiResponse, CalendarInfo, CalendarStats, SearchResult, SeasonStats, YearCalendarData

router = APIRouter(prefix="/api", tags=["calendars"])


def _guarded(fn: Callable[[], object]) -> ApiResponse:
    try:
        return ApiResponse.ok(fn())
    except LitcalError as e:
        logger.warning(f"API request failed: {e}")
        return ApiResponse.fail(str(e))


def _calendar_info(name: str) -> CalendarInfo:
    info = api.calendar_info(name)
    return CalendarInfo(
        name=info["name"],
        display_name=info["display_name"],
        description=info["description"],
        edition=info["edition"],
        commemoration_interpretation=info["commemoration_interpretation"],
        seasons=info["seasons"],
        feasts=info["feasts"],
    )


@router.get("/calendars")
def list_calendars() -> ApiResponse:
    """List every registered calendar."""
    return _guarded(lambda: [_calendar_info(n) for n in api.list_calendars()])


@router.get("/calendars/{name}")
def get_calendar(name: str) -> ApiResponse:
    return _guarded(lambda: _calendar_info(name))


@router.get("/calendars/{name}/year/{year}")
def get_year(name: str, year: int) -> ApiResponse:
    """Full liturgical year as pipe-separated CSV."""

    def build() -> YearCalendarData:
        cal = api.generate_year(year, calendar=name)
        return YearCalendarData(calendar_name=name, year=year, csv_data=cal.to_csv(), total_days=len(cal))

    return _guarded(build)


@router.get("/calendars/{name}/day/{year}/{month}/{day}")
def get_day(name: str, year: int, month: int, day: int) -> ApiResponse:
    """One civil date, looked up in liturgical year `year` and then `year + 1`."""
    try:
        d = date(year, month, day)
    except ValueError:
        return ApiResponse.fail(f"Invalid date: {year}-{month}-{day}")

    def lookup() -> dict:
        found = api.day_info(d, calendar=name)
        if found is None:
            raise LitcalError(f"No data for date: {d.isoformat()}")
        return found.to_dict()

    return _guarded(lookup)


@router.get("/calendars/{name}/search")
def search_feasts(name: str, q: str = Query(..., description="Free-text feast name")) -> ApiResponse:
    return _guarded(lambda: [SearchResult(**hit) for hit in api.search_feasts(q, calendar=name, limit=6)])


@router.post("/calendars/{name}/generate")
def generate(
    name: str,
    year: int | None = Query(None, description="Liturgical year; defaults to the current civil year"),
    format: str = Query("csv", description="csv or json"),
) -> ApiResponse:
    """Generate a liturgical year and return it as CSV text or as a list of day objects."""
    if format not in ("csv", "json"):
        return ApiResponse.fail(f"Unsupported format: {format}")
    lit_year = year if year is not None else date.today().year

    def build() -> object:
        cal = api.generate_year(lit_year, calendar=name)
        return cal.to_csv() if format == "csv" else cal.to_dicts()

    return _guarded(build)


@router.get("/calendars/{name}/stats/{year}")
def get_stats(name: str, year: int) -> ApiResponse:
    def build() -> CalendarStats:
        cal = api.generate_year(year, calendar=name)
        stats = statistics(records_from_year(cal))
        colors = {s.name: s.color for s in api.get_calendar(name).instantiate(year)[0]}

        seasons: dict[str, SeasonStats] = {}
        for day in cal:
            s = seasons.get(day.season)
            if s is None:
                seasons[day.season] = SeasonStats(name=day.season, days=1, color=colors.get(day.season, ""))
            else:
                s.days += 1

        return CalendarStats(
            year=year,
            total_days=stats["total_days"],
            feast_days=stats["feast_days"],
            seasons=list(seasons.values()),
            rank_counts=stats["rank_counts"],
        )

    return _guarded(build)


def create_app() -> FastAPI:
    setup_logger(level=settings.log_level, log_file=settings.log_file)
    app = FastAPI(title="litcal", description="Roman liturgical calendars")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    logger.info("FastAPI application initialized")
    return app
