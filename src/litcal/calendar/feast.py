"""
litcal.calendar.feast
---------------------
Feast rules and their placement within one liturgical year.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple, Type

from loguru import logger

from litcal.core.types import DayKind, LiturgicalContext, LiturgicalUnit
from litcal.ranks.interfaces import RankModel
from litcal.rules.date_rule import DateRule, Fixed

DEFAULT_FEAST_RANK = "III"


@dataclass(frozen=True)
class FeastRule:
    name: str
    date_rule: DateRule
    rank: str = DEFAULT_FEAST_RANK
    of_our_lord: bool = False
    day_type: DayKind = "feast"
    color: str = "white"
    titles: Tuple[str, ...] = ()
    movable: bool = False

    def __str__(self) -> str:
        if not self.titles:
            return self.name
        return f"{self.name}, {' and '.join(self.titles)}"

    @property
    def context(self) -> LiturgicalContext:
        ctx = LiturgicalContext().with_feast(self.name)
        if self.movable:
            ctx = ctx.as_movable()
        if self.of_our_lord:
            ctx = ctx.as_of_our_lord()
        return ctx

    def rank_model(self, model: Type[RankModel]) -> RankModel:
        return model.construct(self.rank, self.day_type, self.context)

    def rank_string(self, model: Type[RankModel]) -> str:
        return self.rank_model(model).rank_string

    def to_unit(self, model: Type[RankModel], d: date) -> LiturgicalUnit:
        return LiturgicalUnit(desc=str(self), rank=self.rank_string(model), date=d, color=self.color)


@dataclass(frozen=True)
class DatedFeast:
    """A feast rule pinned to its date within one liturgical year."""
    rule: FeastRule
    date: date

    def competitor(self, model: Type[RankModel]) -> Tuple[RankModel, LiturgicalUnit]:
        rank = self.rule.rank_model(model)
        unit = LiturgicalUnit(desc=str(self.rule), rank=rank.rank_string, date=self.date, color=self.rule.color)
        return rank, unit


def place_feast(rule: FeastRule, lit_year: int, next_first_advent: date) -> Optional[DatedFeast]:
    """
    Date of a feast in liturgical year `lit_year`.

    Fixed-date feasts falling on or after the next first Sunday of Advent
    belong to the previous calendar year. Every other rule is evaluated at
    `lit_year` and marks the feast movable.
    """
    if isinstance(rule.date_rule, Fixed):
        d = rule.date_rule.evaluate(lit_year)
        if d is not None and d >= next_first_advent:
            d = rule.date_rule.evaluate(lit_year - 1)
        placed = replace(rule, movable=False)
    else:
        d = rule.date_rule.evaluate(lit_year)
        placed = replace(rule, movable=True)
    if d is None:
        logger.debug(f"Feast '{rule.name}' has no date in liturgical year {lit_year}")
        return None
    return DatedFeast(rule=placed, date=d)


def feasts_by_date(rules: Sequence[FeastRule], lit_year: int, next_first_advent: date) -> Dict[date, List[DatedFeast]]:
    out: Dict[date, List[DatedFeast]] = {}
    for rule in rules:
        placed = place_feast(rule, lit_year, next_first_advent)
        if placed is not None:
            out.setdefault(placed.date, []).append(placed)
    return out
