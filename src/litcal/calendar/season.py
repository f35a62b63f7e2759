"""
litcal.calendar.season
----------------------
Season rules and their instantiation for one liturgical year.

A `SeasonRule` holds date rules; `SeasonRule.instantiate(year)` turns it into a
`Season` with concrete dates. `instantiate_seasons` also flattens the
parent/child hierarchy: a child inherits whatever it leaves unset.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, List, Optional, Sequence, Set, Tuple

from loguru import logger

from litcal.core.errors import CalendarDefinitionError
from litcal.rules.date_rule import DateRule

DEFAULT_FERIAL_RANK = "IV"
DEFAULT_SUNDAY_RANK = "II"

_LENTEN_MARKERS = ("lent", "passion", "holy week")


def _eval(rule: DateRule, year: int, what: str) -> date:
    d = rule.evaluate(year)
    if d is None:
        raise CalendarDefinitionError(f"{what}: rule '{rule}' gives no date in {year}")
    return d


def _eval_opt(rule: Optional[DateRule], year: int, what: str) -> Optional[date]:
    return None if rule is None else _eval(rule, year, what)


# ============================================================
# Resolved (dated) season
# ============================================================

@dataclass(frozen=True)
class FerialRange:
    name: str
    begin: date
    end: date
    rank: str

    def contains(self, d: date) -> bool:
        return self.begin <= d <= self.end

    @property
    def span(self) -> int:
        return (self.end - self.begin).days


@dataclass(frozen=True)
class Season:
    name: str
    begin: date
    end: date
    color: str = "green"
    sunday_rank: Optional[str] = None
    ferial_rules: Tuple[FerialRange, ...] = ()
    count_sundays_suffix: Optional[str] = None
    count_ferias_suffix: Optional[str] = None
    count_sundays_from: Optional[date] = None
    count_ferias_from: Optional[date] = None
    continue_counting_from_season: Optional[str] = None
    append_week_of_month: Optional[date] = None
    dont_show_week_of_season: bool = False
    is_octave: bool = False
    octave_rank: Optional[str] = None
    parent_season: Optional[str] = None

    def contains(self, d: date) -> bool:
        return self.begin <= d <= self.end

    @property
    def span(self) -> int:
        return (self.end - self.begin).days

    @property
    def is_of_lent(self) -> bool:
        n = self.name.lower()
        return any(m in n for m in _LENTEN_MARKERS)

    @property
    def sunday_rank_code(self) -> str:
        return self.sunday_rank or DEFAULT_SUNDAY_RANK

    def ferial_rank(self, d: date) -> str:
        """Rank code of a weekday: the first (narrowest) ferial rule covering d."""
        if not self.contains(d):
            raise ValueError(f"{d} is outside season '{self.name}' ({self.begin}..{self.end})")
        for fr in self.ferial_rules:
            if fr.contains(d):
                return fr.rank
        return DEFAULT_FERIAL_RANK

    def inherit(self, parent: "Season") -> "Season":
        """Fill unset properties from the parent and merge its ferial rules."""
        color = parent.color if self.color in ("green", "") else self.color
        rules = sorted(parent.ferial_rules + self.ferial_rules, key=lambda r: r.span)
        return replace(
            self,
            color=color,
            sunday_rank=self.sunday_rank or parent.sunday_rank,
            count_sundays_suffix=self.count_sundays_suffix or parent.count_sundays_suffix,
            count_ferias_suffix=self.count_ferias_suffix or parent.count_ferias_suffix,
            count_sundays_from=self.count_sundays_from or parent.count_sundays_from,
            count_ferias_from=self.count_ferias_from or parent.count_ferias_from,
            ferial_rules=tuple(rules),
            parent_season=None,
        )


# ============================================================
# Rules
# ============================================================

@dataclass(frozen=True)
class FerialRule:
    name: str
    begin: DateRule
    end: DateRule
    rank: str

    def instantiate(self, year: int) -> FerialRange:
        what = f"Ferial rule '{self.name}'"
        return FerialRange(
            name=self.name,
            begin=_eval(self.begin, year, what),
            end=_eval(self.end, year, what),
            rank=self.rank,
        )


@dataclass(frozen=True)
class SeasonRule:
    name: str
    begin: DateRule
    end: DateRule
    color: str = "green"
    sunday_rank: Optional[str] = None
    ferial_rules: Tuple[FerialRule, ...] = ()
    count_sundays_suffix: Optional[str] = None
    count_ferias_suffix: Optional[str] = None
    count_sundays_from: Optional[DateRule] = None
    count_ferias_from: Optional[DateRule] = None
    continue_counting_from_season: Optional[str] = None
    append_week_of_month: Optional[DateRule] = None
    dont_show_week_of_season: bool = False
    is_octave: bool = False
    octave_rank: Optional[str] = None
    parent_season: Optional[str] = None

    def instantiate(self, year: int) -> Season:
        what = f"Season '{self.name}'"
        rules = sorted((r.instantiate(year) for r in self.ferial_rules), key=lambda r: r.span)
        return Season(
            name=self.name,
            begin=_eval(self.begin, year, what),
            end=_eval(self.end, year, what),
            color=self.color,
            sunday_rank=self.sunday_rank,
            ferial_rules=tuple(rules),
            count_sundays_suffix=self.count_sundays_suffix,
            count_ferias_suffix=self.count_ferias_suffix,
            count_sundays_from=_eval_opt(self.count_sundays_from, year, what),
            count_ferias_from=_eval_opt(self.count_ferias_from, year, what),
            continue_counting_from_season=self.continue_counting_from_season,
            append_week_of_month=_eval_opt(self.append_week_of_month, year, what),
            dont_show_week_of_season=self.dont_show_week_of_season,
            is_octave=self.is_octave,
            octave_rank=self.octave_rank,
            parent_season=self.parent_season,
        )


def _instantiate(rule: SeasonRule, by_name: Dict[str, SeasonRule], year: int, visited: Set[str]) -> Season:
    season = rule.instantiate(year)
    parent_name = rule.parent_season
    if parent_name is None:
        return season
    if parent_name in visited or parent_name == rule.name:
        logger.warning(f"Season '{rule.name}': parent cycle through '{parent_name}', ignoring parent")
        return replace(season, parent_season=None)
    parent_rule = by_name.get(parent_name)
    if parent_rule is None:
        logger.warning(f"Season '{rule.name}': parent season '{parent_name}' not found")
        return replace(season, parent_season=None)
    parent = _instantiate(parent_rule, by_name, year, visited | {rule.name})
    return season.inherit(parent)


def instantiate_seasons(rules: Sequence[SeasonRule], year: int) -> List[Season]:
    """All seasons of liturgical year `year`, with the hierarchy flattened."""
    by_name = {r.name: r for r in rules}
    return [_instantiate(r, by_name, year, set()) for r in rules]


def season_for(seasons: Sequence[Season], d: date) -> Season:
    """The narrowest season containing d (the first season if none does)."""
    best: Optional[Season] = None
    for s in seasons:
        if s.contains(d) and (best is None or s.span < best.span):
            best = s
    if best is None:
        if not seasons:
            raise CalendarDefinitionError("Calendar defines no seasons")
        logger.warning(f"No season contains {d}; falling back to '{seasons[0].name}'")
        return seasons[0]
    return best


def find_season(seasons: Sequence[Season], name: str) -> Optional[Season]:
    for s in seasons:
        if s.name == name:
            return s
    return None
