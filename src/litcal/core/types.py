from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

DayKind = Literal["feria", "feast", "sunday", "vigil", "octave"]
Edition = Literal["1954", "1962", "OrdinaryForm"]

DAY_KINDS: Tuple[str, ...] = ("feria", "feast", "sunday", "vigil", "octave")


def parse_day_kind(s: str) -> DayKind:
    k = s.strip().lower()
    if k not in DAY_KINDS:
        raise ValueError(f"Unknown day type '{s}'. Available: {list(DAY_KINDS)}")
    return k  # type: ignore[return-value]


class BVMOnSaturday(Enum):
    """How a day's winning rank treats the Saturday Office of Our Lady."""
    NOT_ADMITTED = "not_admitted"
    ADMITTED = "admitted"
    COMMEMORATED = "commemorated"


@dataclass(frozen=True)
class LiturgicalContext:
    """Facts about an observance that modulate its rank without changing its class."""
    season: str = ""
    feast: str = ""
    movable: bool = False
    of_our_lord: bool = False
    of_lent: bool = False
    is_octave_day: bool = False
    secondary_day_kind: Optional[DayKind] = None

    def with_season(self, name: str) -> "LiturgicalContext":
        return replace(self, season=name)

    def with_feast(self, name: str) -> "LiturgicalContext":
        return replace(self, feast=name)

    def as_movable(self, flag: bool = True) -> "LiturgicalContext":
        return replace(self, movable=flag)

    def as_of_our_lord(self, flag: bool = True) -> "LiturgicalContext":
        return replace(self, of_our_lord=flag)

    def with_of_lent(self, flag: bool = True) -> "LiturgicalContext":
        return replace(self, of_lent=flag)

    def as_octave_day(self, flag: bool = True) -> "LiturgicalContext":
        return replace(self, is_octave_day=flag)

    def also_ferial(self) -> "LiturgicalContext":
        return replace(self, secondary_day_kind="feria")

    def also_sunday(self) -> "LiturgicalContext":
        return replace(self, secondary_day_kind="sunday")


@dataclass(frozen=True)
class LiturgicalUnit:
    """Display form of one observance on one day."""
    desc: str
    rank: str
    date: date
    color: str

    def transferred(self) -> "LiturgicalUnit":
        if self.desc.endswith(" (transferred)"):
            return self
        return replace(self, desc=f"{self.desc} (transferred)")

    def as_bvm_on_saturday(self) -> "LiturgicalUnit":
        return replace(self, desc="BVM on Saturday")

    @classmethod
    def bvm_on_saturday_commemoration(cls, d: date, rank: str) -> "LiturgicalUnit":
        return cls(desc="BVM on Saturday", rank=rank, date=d, color="white")

    def to_dict(self) -> Dict[str, Any]:
        return {"desc": self.desc, "rank": self.rank, "date": self.date.isoformat(), "color": self.color}


@dataclass(frozen=True)
class DayResult:
    """One generated calendar day."""
    date: date
    day_in_season: str
    day_rank: str
    day: LiturgicalUnit
    commemorations: Tuple[LiturgicalUnit, ...] = ()
    season: str = ""

    def to_row(self) -> str:
        comms = ", ".join(c.desc for c in self.commemorations)
        return f"{self.date.isoformat()}|{self.day_in_season}|{self.day_rank}|{self.day.desc}|{comms}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "day_in_season": self.day_in_season,
            "day_rank": self.day_rank,
            "day": self.day.to_dict(),
            "commemorations": [c.to_dict() for c in self.commemorations],
            "season": self.season,
        }


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of resolving all competitors of one day."""
    winner: LiturgicalUnit
    winner_rank: Any
    transferred: Optional[Tuple[Any, LiturgicalUnit]] = None
    commemorations: Tuple[LiturgicalUnit, ...] = field(default_factory=tuple)
