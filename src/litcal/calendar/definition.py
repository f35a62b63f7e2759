"""
litcal.calendar.definition
--------------------------
A calendar definition: named seasons and feasts, loaded from TOML.

The definition is year-independent. `CalendarDefinition.generate(lit_year)`
dates every rule for one liturgical year and runs the year builder with the
rank model of the definition's edition.

TOML layout:

    name = "Roman Calendar 1962"
    commemoration_interpretation = "Commemoration"

    [[seasons]]
    name = "Advent"
    begin = "((12/25) previous year) + -4 Sundays"
    end = "(12/24) previous year"
    color = "violet"
    ...

    [[feasts]]
    name = "Saint Andrew, Apostle"
    date_rule = "11/30"
    rank = "II"
    color = "red"
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from loguru import logger

from litcal.core.errors import CalendarDefinitionError, DateRuleParseError, FeastNotFoundError, RankConstructionError
from litcal.core.types import Edition, parse_day_kind
from litcal.ranks.factory import edition_from_name, make_rank_model
from litcal.ranks.interfaces import RankModel
from litcal.rules.date_rule import DateRule
from litcal.rules.notation import parse as parse_rule
from litcal.search import suggest

from .builder import YearCalendarBuilder
from .feast import DatedFeast, FeastRule, feasts_by_date
from .season import FerialRule, Season, SeasonRule, instantiate_seasons
from .year import YearCalendar

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DEFAULT_COMMEMORATION_INTERPRETATION = "Commemoration"


# ============================================================
# TOML -> rule objects
# ============================================================

_SEASON_KEYS = {
    "name", "begin", "end", "color", "sunday_rank", "ferial_rules",
    "count_sundays_suffix", "count_ferias_suffix", "count_sundays_from", "count_ferias_from",
    "continue_counting_from_season", "append_week_of_month", "dont_show_week_of_season",
    "is_octave", "octave_rank", "parent_season",
}

_FEAST_KEYS = {"name", "date_rule", "rank", "of_our_lord", "day_type", "color", "titles", "movable"}


def _rule(raw: Any, where: str) -> DateRule:
    if not isinstance(raw, str):
        raise CalendarDefinitionError(f"{where}: date rule must be a string, got {raw!r}")
    try:
        return parse_rule(raw)
    except DateRuleParseError as e:
        raise CalendarDefinitionError(f"{where}: {e}") from e


def _opt_rule(raw: Any, where: str) -> Optional[DateRule]:
    return None if raw is None else _rule(raw, where)


def _require(table: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in table:
        raise CalendarDefinitionError(f"{where}: missing required key '{key}'")
    return table[key]


def _warn_unknown(table: Mapping[str, Any], known: set, where: str) -> None:
    extra = sorted(set(table) - known)
    if extra:
        logger.warning(f"{where}: ignoring unknown keys {extra}")


def season_from_dict(table: Mapping[str, Any]) -> SeasonRule:
    name = str(_require(table, "name", "season"))
    where = f"season '{name}'"
    _warn_unknown(table, _SEASON_KEYS, where)

    ferial_rules = []
    for fr in table.get("ferial_rules", []):
        fr_name = str(_require(fr, "name", f"{where} ferial rule"))
        fr_where = f"{where} ferial rule '{fr_name}'"
        ferial_rules.append(FerialRule(
            name=fr_name,
            begin=_rule(_require(fr, "begin", fr_where), fr_where),
            end=_rule(_require(fr, "end", fr_where), fr_where),
            rank=str(_require(fr, "rank", fr_where)),
        ))

    return SeasonRule(
        name=name,
        begin=_rule(_require(table, "begin", where), f"{where} begin"),
        end=_rule(_require(table, "end", where), f"{where} end"),
        color=str(table.get("color", "green")),
        sunday_rank=table.get("sunday_rank"),
        ferial_rules=tuple(ferial_rules),
        count_sundays_suffix=table.get("count_sundays_suffix"),
        count_ferias_suffix=table.get("count_ferias_suffix"),
        count_sundays_from=_opt_rule(table.get("count_sundays_from"), f"{where} count_sundays_from"),
        count_ferias_from=_opt_rule(table.get("count_ferias_from"), f"{where} count_ferias_from"),
        continue_counting_from_season=table.get("continue_counting_from_season"),
        append_week_of_month=_opt_rule(table.get("append_week_of_month"), f"{where} append_week_of_month"),
        dont_show_week_of_season=bool(table.get("dont_show_week_of_season", False)),
        is_octave=bool(table.get("is_octave", False)),
        octave_rank=table.get("octave_rank"),
        parent_season=table.get("parent_season"),
    )


def feast_from_dict(table: Mapping[str, Any]) -> FeastRule:
    name = str(_require(table, "name", "feast"))
    where = f"feast '{name}'"
    _warn_unknown(table, _FEAST_KEYS, where)
    try:
        day_type = parse_day_kind(str(table.get("day_type", "feast")))
    except ValueError as e:
        raise CalendarDefinitionError(f"{where}: {e}") from e
    return FeastRule(
        name=name,
        date_rule=_rule(_require(table, "date_rule", where), where),
        rank=str(table.get("rank", "III")),
        of_our_lord=bool(table.get("of_our_lord", False)),
        day_type=day_type,
        color=str(table.get("color", "white")),
        titles=tuple(str(t) for t in table.get("titles", [])),
        movable=bool(table.get("movable", False)),
    )


# ============================================================
# Definition
# ============================================================

@dataclass
class CalendarDefinition:
    name: str = ""
    commemoration_interpretation: str = DEFAULT_COMMEMORATION_INTERPRETATION
    seasons: List[SeasonRule] = field(default_factory=list)
    feasts: List[FeastRule] = field(default_factory=list)

    # ---------- loading ----------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CalendarDefinition":
        if "feasts" not in data:
            raise CalendarDefinitionError("calendar: missing required key 'feasts'")
        return cls(
            name=str(data.get("name", "")),
            commemoration_interpretation=str(
                data.get("commemoration_interpretation", DEFAULT_COMMEMORATION_INTERPRETATION)
            ),
            seasons=[season_from_dict(s) for s in data.get("seasons", [])],
            feasts=[feast_from_dict(f) for f in data["feasts"]],
        )

    @classmethod
    def from_toml_str(cls, text: str) -> "CalendarDefinition":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise CalendarDefinitionError(f"Invalid TOML: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CalendarDefinition":
        p = Path(path)
        logger.debug(f"Loading calendar definition from {p}")
        return cls.from_toml_str(p.read_text(encoding="utf-8"))

    @classmethod
    def from_files(cls, base: Union[str, Path], extensions: Sequence[Union[str, Path]] = ()) -> "CalendarDefinition":
        cal = cls.from_file(base)
        for ext in extensions:
            cal.merge_feasts(cls.from_file(ext))
        return cal

    def merge_feasts(self, other: "CalendarDefinition") -> None:
        """Overlay `other`'s feasts: same name replaces, new names are appended."""
        index = {f.name: i for i, f in enumerate(self.feasts)}
        for feast in other.feasts:
            pos = index.get(feast.name)
            if pos is None:
                index[feast.name] = len(self.feasts)
                self.feasts.append(feast)
            else:
                self.feasts[pos] = feast
        self.name = f"{self.name} with {other.name} Extensions"

    # ---------- edition ----------

    @property
    def edition(self) -> Edition:
        return edition_from_name(self.name)

    @property
    def rank_model(self) -> Type[RankModel]:
        return make_rank_model(self.edition)

    # ---------- year bounds ----------

    def advent_season(self) -> SeasonRule:
        for s in self.seasons:
            if "advent" in s.name.lower():
                return s
        raise CalendarDefinitionError(f"Calendar '{self.name}' has no Advent season")

    def first_advent(self, lit_year: int) -> date:
        """First Sunday of Advent opening liturgical year `lit_year`."""
        rule = self.advent_season().begin
        d = rule.evaluate(lit_year)
        if d is None:
            raise CalendarDefinitionError(f"Advent begin rule '{rule}' gives no date in {lit_year}")
        return d

    def bounds(self, lit_year: int) -> Tuple[date, date]:
        """First and last day of liturgical year `lit_year`."""
        return self.first_advent(lit_year), self.first_advent(lit_year + 1)

    # ---------- instantiation ----------

    def instantiate(self, lit_year: int) -> Tuple[List[Season], Dict[date, List[DatedFeast]]]:
        next_first_advent = self.first_advent(lit_year + 1)
        seasons = instantiate_seasons(self.seasons, lit_year)
        feasts = feasts_by_date(self.feasts, lit_year, next_first_advent)
        return seasons, feasts

    def generate(self, lit_year: int) -> YearCalendar:
        """Generate the `YearCalendar` of liturgical year `lit_year`."""
        return YearCalendarBuilder.from_definition(self, lit_year).build()

    # ---------- lookup ----------

    def feast_rank_string(self, feast: FeastRule) -> str:
        try:
            return feast.rank_string(self.rank_model)
        except RankConstructionError as e:
            raise CalendarDefinitionError(f"feast '{feast.name}': {e}") from e

    def suggest_feast_names(self, query: str, limit: int = 5) -> List[Tuple[str, float]]:
        return suggest(query, [f.name for f in self.feasts], [f.titles for f in self.feasts], limit=limit)

    def find_feast(self, name: str) -> Optional[FeastRule]:
        key = name.lower()
        for f in self.feasts:
            if f.name.lower() == key:
                return f
        return None

    def feast_info(self, name: str) -> Tuple[FeastRule, str]:
        """(feast, rank string) by case-insensitive exact name."""
        feast = self.find_feast(name)
        if feast is None:
            raise FeastNotFoundError(name, [n for n, _ in self.suggest_feast_names(name)])
        return feast, self.feast_rank_string(feast)

    def search_feasts(self, query: str, limit: int = 6) -> List[Tuple[FeastRule, float]]:
        """Best-matching feasts with their scores, best first."""
        by_name = {f.name: f for f in self.feasts}
        return [(by_name[n], s) for n, s in self.suggest_feast_names(query, limit=limit)]
