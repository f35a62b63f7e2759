"""Response models for the calendar HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    """Envelope wrapping every API response."""

    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any) -> "ApiResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse":
        return cls(success=False, error=message)


class CalendarInfo(BaseModel):
    name: str = Field(..., description="Registry key, e.g. 'ef'")
    display_name: str = Field(..., description="Name declared in the calendar file")
    description: str
    edition: str
    commemoration_interpretation: str
    seasons: int = Field(0, description="Number of season rules")
    feasts: int = Field(0, description="Number of feast rules")


class YearCalendarData(BaseModel):
    calendar_name: str
    year: int
    csv_data: str = Field(..., description="Pipe-separated export including the header line")
    total_days: int


class SearchResult(BaseModel):
    name: str
    description: str = Field(..., description="Feast name with its titles")
    date: str = Field(..., description="Date rule in display notation")
    rank: str
    score: float
    color: str


class SeasonStats(BaseModel):
    name: str
    days: int
    color: str


class CalendarStats(BaseModel):
    year: int
    total_days: int
    feast_days: int
    seasons: list[SeasonStats] = Field(default_factory=list)
    rank_counts: dict[str, int] = Field(default_factory=dict)
