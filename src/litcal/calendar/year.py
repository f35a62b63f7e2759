"""
litcal.calendar.year
--------------------
The generated days of one liturgical year.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Tuple

from litcal.core.types import DayResult, Edition

CSV_HEADER = "Date|Day in Season|Rank|Feast|Commemorations"


@dataclass(frozen=True)
class YearCalendar:
    name: str
    edition: Edition
    lit_year: int
    days: Tuple[DayResult, ...]
    _index: Dict[date, DayResult] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {d.date: d for d in self.days})

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[DayResult]:
        return iter(self.days)

    @property
    def first_day(self) -> date:
        return self.days[0].date

    @property
    def last_day(self) -> date:
        return self.days[-1].date

    def contains(self, d: date) -> bool:
        return d in self._index

    def get_day(self, d: date) -> Optional[DayResult]:
        return self._index.get(d)

    def to_csv(self) -> str:
        lines = [CSV_HEADER] + [day.to_row() for day in self.days]
        return "\n".join(lines) + "\n"

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [day.to_dict() for day in self.days]

    def to_json(self, indent: Optional[int] = 2) -> str:
        payload = {
            "name": self.name,
            "edition": self.edition,
            "lit_year": self.lit_year,
            "days": self.to_dicts(),
        }
        return json.dumps(payload, indent=indent, ensure_ascii=False)
