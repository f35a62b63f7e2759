from __future__ import annotations

from typing import Any, Sequence


class LitcalError(Exception):
    """Base error."""


class DateRuleParseError(LitcalError, ValueError):
    """Raised when a textual date rule cannot be parsed."""

    def __init__(self, message: str, fragment: str):
        super().__init__(f"{message}: {fragment!r}")
        self.fragment = fragment


class RankConstructionError(LitcalError, ValueError):
    """Raised when a rank code is not valid for a day kind."""


class ResolutionError(LitcalError):
    """Raised when two observances cannot be ordered by the occurrence table."""

    def __init__(self, message: str, first: Any = None, second: Any = None):
        if first is not None or second is not None:
            message = f"{message}: {first!r} vs {second!r}"
        super().__init__(message)
        self.first = first
        self.second = second


class CalendarDefinitionError(LitcalError, ValueError):
    """Raised when a calendar definition is malformed or cannot be instantiated."""


class UnknownCalendarError(LitcalError, LookupError):
    """Raised when a calendar name is not registered."""


class FeastNotFoundError(LitcalError, LookupError):
    """Raised when a feast lookup by name fails."""

    def __init__(self, name: str, suggestions: Sequence[str] = ()):
        msg = f"Feast '{name}' not found."
        if suggestions:
            msg += f" Did you mean: {', '.join(suggestions)}?"
        super().__init__(msg)
        self.name = name
        self.suggestions = tuple(suggestions)
