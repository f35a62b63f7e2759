"""
litcal.export.records
---------------------
Flat per-day records, read back from the pipe-separated CSV export or taken
directly from a generated year, plus simple filters and summary statistics.

CSV columns: Date|Day in Season|Rank|Feast|Commemorations
"""

from __future__ import annotations

import csv
import io
from collections import Counter
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from litcal.calendar.year import CSV_HEADER, YearCalendar
from litcal.core.errors import LitcalError


@dataclass(frozen=True)
class DayRecord:
    date: date
    day_in_season: str
    rank: str
    feast: str
    # joined with ", " exactly as in the CSV
    commemorations: str = ""
    # only known for records taken from a YearCalendar
    season: str = ""
    color: str = ""

    @property
    def feast_name(self) -> Optional[str]:
        """The winning observance, unless it is just the day of the season."""
        return None if self.feast == self.day_in_season else self.feast

    def is_feast(self) -> bool:
        return self.feast_name is not None

    def in_season(self, season: str) -> bool:
        if self.season:
            return self.season == season
        return season in self.day_in_season

    @property
    def primary_color(self) -> str:
        return self.color.split("/")[0]


# ============================================================
# Reading
# ============================================================


def read_records(text: str) -> List[DayRecord]:
    reader = csv.reader(io.StringIO(text), delimiter="|", quoting=csv.QUOTE_NONE)
    out: List[DayRecord] = []
    for lineno, row in enumerate(reader, start=1):
        if not row:
            continue
        if lineno == 1 and "|".join(row) == CSV_HEADER:
            continue
        if len(row) != 5:
            raise LitcalError(f"line {lineno}: expected 5 columns, got {len(row)}")
        try:
            d = date.fromisoformat(row[0])
        except ValueError as e:
            raise LitcalError(f"line {lineno}: bad date {row[0]!r}") from e
        out.append(DayRecord(
            date=d,
            day_in_season=row[1],
            rank=row[2],
            feast=row[3],
            commemorations=row[4],
        ))
    return out


def load_records(path: Union[str, Path]) -> List[DayRecord]:
    return read_records(Path(path).read_text(encoding="utf-8"))


def records_from_year(year: YearCalendar) -> List[DayRecord]:
    return [
        DayRecord(
            date=d.date,
            day_in_season=d.day_in_season,
            rank=d.day_rank,
            feast=d.day.desc,
            commemorations=", ".join(c.desc for c in d.commemorations),
            season=d.season,
            color=d.day.color,
        )
        for d in year
    ]


def write_csv(year: YearCalendar, path: Union[str, Path]) -> None:
    Path(path).write_text(year.to_csv(), encoding="utf-8")


# ============================================================
# Queries
# ============================================================

def filter_by_rank(records: Iterable[DayRecord], rank: str) -> List[DayRecord]:
    return [r for r in records if r.rank == rank]


def filter_by_season(records: Iterable[DayRecord], season: str) -> List[DayRecord]:
    return [r for r in records if r.in_season(season)]


def feast_names(records: Iterable[DayRecord]) -> List[str]:
    return sorted({r.feast_name for r in records if r.feast_name is not None})


def statistics(records: Iterable[DayRecord]) -> Dict[str, Any]:
    records = list(records)
    feast_days = sum(1 for r in records if r.is_feast())
    return {
        "total_days": len(records),
        "feast_days": feast_days,
        "ferial_days": len(records) - feast_days,
        "commemoration_days": sum(1 for r in records if r.commemorations),
        "season_counts": dict(Counter(r.season for r in records if r.season)),
        "color_counts": dict(Counter(r.primary_color for r in records if r.color)),
        "rank_counts": dict(Counter(r.rank for r in records)),
    }
