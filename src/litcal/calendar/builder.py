"""
litcal.calendar.builder
-----------------------
Day-by-day generation of a liturgical year.

Each day gathers its competitors (the feasts dated to it, the season's own
observance, and a feast carried over from an earlier day), resolves them with
the edition's rank model and records the winner. A feast pushed off its day is
held in a single transfer slot until a day without a high festival takes it.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple, Type

from loguru import logger

from litcal.core.dates import (
    following_sunday,
    is_saturday,
    is_sunday,
    iter_days,
    month_name,
    preceding_sunday,
    sundays_inclusive,
    to_roman,
    weeks_after,
)
from litcal.core.types import BVMOnSaturday, DayResult, Edition, LiturgicalContext, LiturgicalUnit
from litcal.ranks.interfaces import RankModel

from .feast import DatedFeast
from .season import Season, find_season, season_for
from .year import YearCalendar

Competitor = Tuple[RankModel, LiturgicalUnit]

_DEFAULT_OT_WEEKS = 34


def _feria_name(d: date) -> str:
    if is_saturday(d):
        return "Sabbato"
    if is_sunday(d):
        return "Dominica"
    # Monday is Feria II
    return f"Feria {to_roman(d.isoweekday() + 1)}"


def _season_sundays(season: Season) -> int:
    last = preceding_sunday(season.end)
    start = season.count_sundays_from or season.begin
    return sundays_inclusive(start, last) if last >= start else 0


class YearCalendarBuilder:
    def __init__(
        self,
        lit_year: int,
        seasons: Sequence[Season],
        feasts: Dict[date, List[DatedFeast]],
        first_advent: date,
        next_first_advent: date,
        model: Type[RankModel],
        edition: Edition,
        name: str = "",
    ):
        self.lit_year = lit_year
        self.seasons = list(seasons)
        self.feasts = feasts
        self.first_advent = first_advent
        self.next_first_advent = next_first_advent
        self.model = model
        self.edition = edition
        self.name = name
        self._ot_weeks = self._total_ordinary_time_weeks()

    @classmethod
    def from_definition(cls, definition, lit_year: int) -> "YearCalendarBuilder":
        seasons, feasts = definition.instantiate(lit_year)
        first, nxt = definition.bounds(lit_year)
        return cls(
            lit_year=lit_year,
            seasons=seasons,
            feasts=feasts,
            first_advent=first,
            next_first_advent=nxt,
            model=definition.rank_model,
            edition=definition.edition,
            name=definition.name,
        )

    # ---------------------------------------------------------
    # Week counting
    # ---------------------------------------------------------
    def _total_ordinary_time_weeks(self) -> int:
        before = next((s for s in self.seasons if "Ordinary Time" in s.name and "before" in s.name), None)
        after = next((s for s in self.seasons if "Ordinary Time" in s.name and "after" in s.name), None)
        if before is None or after is None:
            return _DEFAULT_OT_WEEKS
        return _season_sundays(before) + _season_sundays(after)

    @staticmethod
    def _standard_ordinal(season: Season, d: date) -> int:
        if is_sunday(d):
            return sundays_inclusive(season.count_sundays_from or season.begin, d)
        return weeks_after(season.count_ferias_from or season.begin, d)

    def week_ordinal(self, season: Season, d: date) -> int:
        ref_name = season.continue_counting_from_season
        ref = find_season(self.seasons, ref_name) if ref_name else None
        if ref is None:
            return self._standard_ordinal(season, d)

        if is_sunday(d):
            ref_weeks = _season_sundays(ref)
        else:
            start = ref.count_ferias_from or ref.begin
            ref_weeks = weeks_after(start, ref.end) if ref.end >= start else 0

        # a 33-week Ordinary Time skips the first week after Pentecost
        adjustment = 1 if self.edition == "OrdinaryForm" and self._ot_weeks == 33 else 0
        return ref_weeks + self._standard_ordinal(season, d) + adjustment

    # ---------------------------------------------------------
    # Season observance
    # ---------------------------------------------------------
    def descriptor(self, d: date, season: Optional[Season] = None) -> str:
        """Name of the day within its season, e.g. 'Feria II week III of Advent'."""
        season = season or season_for(self.seasons, d)
        sunday = is_sunday(d)

        suffix = season.count_sundays_suffix if sunday else season.count_ferias_suffix
        if not suffix:
            suffix = f"of {season.name}"

        ordinal = self.week_ordinal(season, d)
        if season.dont_show_week_of_season:
            week = ""
        elif ordinal == 0:
            week = "after start "
        elif sunday:
            week = f"{to_roman(ordinal)} "
        else:
            week = f"week {to_roman(ordinal)} "

        week_of_month = ""
        if season.append_week_of_month is not None and d >= season.append_week_of_month:
            ps = preceding_sunday(d)
            first_sunday = following_sunday(date(ps.year, ps.month, 1))
            n = sundays_inclusive(first_sunday, ps)
            week_of_month = f" (Week {n} of {month_name(ps.month)})"

        return f"{_feria_name(d)} {week}{suffix}{week_of_month}"

    def season_rank(self, d: date, season: Season, descriptor: str) -> RankModel:
        ctx = LiturgicalContext().with_season(season.name).with_of_lent(season.is_of_lent)
        if is_sunday(d):
            if season.is_octave:
                return self.model.construct(season.octave_rank or "I", "octave", ctx.also_sunday())
            return self.model.construct(season.sunday_rank_code, "sunday", ctx)
        ctx = ctx.with_feast(descriptor)
        if season.is_octave:
            return self.model.construct(season.octave_rank or "I", "octave", ctx.also_ferial())
        return self.model.construct(season.ferial_rank(d), "feria", ctx)

    # ---------------------------------------------------------
    # Generation
    # ---------------------------------------------------------
    def step(self, d: date, slot: Optional[Competitor]) -> Tuple[DayResult, Optional[Competitor]]:
        """Resolve one day; returns its result and the transfer slot for the next day."""
        season = season_for(self.seasons, d)
        desc = self.descriptor(d, season)
        rank = self.season_rank(d, season, desc)
        season_unit = LiturgicalUnit(desc=desc, rank=rank.rank_string, date=d, color=season.color)

        feasts = [f.competitor(self.model) for f in self.feasts.get(d, [])]
        competitors: List[Competitor] = list(feasts)
        if not any(r.is_ferial_or_sunday() for r, _ in feasts):
            competitors.append((rank, season_unit))

        high_festival = any(r.is_high_festival() for r, _ in feasts)
        if slot is not None and not high_festival:
            t_rank, t_unit = slot
            competitors.append((t_rank, t_unit.transferred()))
            slot = None

        result = self.model.resolve_conflicts(competitors)
        winner = result.winner
        commemorations = list(result.commemorations)

        if is_saturday(d):
            bvm = result.winner_rank.admits_bvm_on_saturday()
            if bvm is BVMOnSaturday.ADMITTED:
                winner = winner.as_bvm_on_saturday()
            elif bvm is BVMOnSaturday.COMMEMORATED:
                bvm_rank = self.model.bvm_on_saturday_rank()
                commemorations.append(
                    LiturgicalUnit.bvm_on_saturday_commemoration(d, bvm_rank.rank_string if bvm_rank else "")
                )

        if result.transferred is not None:
            if slot is None:
                t_rank, t_unit = result.transferred
                slot = (t_rank, t_unit.transferred())
                logger.debug(f"{d}: '{t_unit.desc}' transferred")
            else:
                logger.warning(f"{d}: transfer slot busy, dropping '{result.transferred[1].desc}'")

        day = DayResult(
            date=d,
            day_in_season=desc,
            day_rank=result.winner_rank.rank_string,
            day=winner,
            commemorations=tuple(commemorations),
            season=season.name,
        )
        return day, slot

    def build(self) -> YearCalendar:
        last = self.next_first_advent - timedelta(days=1)
        logger.debug(f"Generating '{self.name}' {self.lit_year}: {self.first_advent}..{last}")
        days: List[DayResult] = []
        slot: Optional[Competitor] = None
        for d in iter_days(self.first_advent, last):
            day, slot = self.step(d, slot)
            days.append(day)
        if slot is not None:
            logger.warning(f"'{slot[1].desc}' still awaiting transfer at the end of {self.lit_year}")
        return YearCalendar(name=self.name, edition=self.edition, lit_year=self.lit_year, days=tuple(days))
