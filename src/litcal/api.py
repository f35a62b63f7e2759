from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .calendar.definition import CalendarDefinition
from .calendar.feast import FeastRule
from .calendar.year import YearCalendar
from .core.registry import CalendarRegistry, CalendarSource
from .core.settings import settings
from .core.types import DayResult

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def _name(calendar: Optional[str]) -> str:
    return calendar if calendar is not None else settings.default_calendar

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: Optional[str] = None) -> Dict[str, Any]:
    return _reg().info(_name(calendar))

def get_calendar(calendar: Optional[str] = None) -> CalendarDefinition:
    return _reg().get(_name(calendar))

def load_calendar(path: Union[str, Path], extensions: Sequence[Union[str, Path]] = ()) -> CalendarDefinition:
    return CalendarDefinition.from_files(path, extensions)

def register_calendar(
    name: str,
    calendar: Union[CalendarDefinition, CalendarSource],
    *,
    overwrite: bool = False,
) -> None:
    if isinstance(calendar, CalendarDefinition):
        _reg().register_definition(name, calendar, overwrite=overwrite)
    else:
        _reg().register(name, calendar, overwrite=overwrite)

def generate_year(lit_year: int, *, calendar: Optional[str] = None) -> YearCalendar:
    return _reg().year(_name(calendar), lit_year)

def day_info(d: date, *, calendar: Optional[str] = None) -> Optional[DayResult]:
    """The generated day for a civil date.

    Liturgical year Y ends before the first Sunday of Advent of civil year Y,
    so December dates usually belong to Y+1.
    """
    for lit_year in (d.year, d.year + 1):
        day = generate_year(lit_year, calendar=calendar).get_day(d)
        if day is not None:
            return day
    return None

def feast_info(feast: str, *, calendar: Optional[str] = None) -> Tuple[FeastRule, str]:
    return get_calendar(calendar).feast_info(feast)

def search_feasts(query: str, *, calendar: Optional[str] = None, limit: int = 6) -> List[Dict[str, Any]]:
    cal = get_calendar(calendar)
    out = []
    for feast, score in cal.search_feasts(query, limit=limit):
        out.append({
            "name": feast.name,
            "description": str(feast),
            "date": str(feast.date_rule),
            "rank": cal.feast_rank_string(feast),
            "score": round(score, 4),
            "color": feast.color,
        })
    return out
