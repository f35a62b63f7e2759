"""litcal public API.

Liturgical calendars of the Roman Rite (1954, 1962 and the Ordinary Form),
generated day by day from TOML calendar definitions.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    calendar_info,
    get_calendar,
    load_calendar,
    register_calendar,
    generate_year,
    day_info,
    feast_info,
    search_feasts,
)
from .calendar.definition import CalendarDefinition
from .calendar.year import YearCalendar
from .core.errors import (
    LitcalError,
    CalendarDefinitionError,
    DateRuleParseError,
    FeastNotFoundError,
    RankConstructionError,
    ResolutionError,
    UnknownCalendarError,
)
from .core.types import DayResult, LiturgicalUnit

__version__ = "0.1.0"

__all__ = [
    "list_calendars",
    "calendar_info",
    "get_calendar",
    "load_calendar",
    "register_calendar",
    "generate_year",
    "day_info",
    "feast_info",
    "search_feasts",
    "CalendarDefinition",
    "YearCalendar",
    "DayResult",
    "LiturgicalUnit",
    "LitcalError",
    "CalendarDefinitionError",
    "DateRuleParseError",
    "FeastNotFoundError",
    "RankConstructionError",
    "ResolutionError",
    "UnknownCalendarError",
]
