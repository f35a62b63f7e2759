"""
litcal.ranks.rank_of
--------------------
Precedence in the Ordinary Form (General Roman Calendar of 1969).

There are only solemnities, feasts, memorials and optional memorials, Sundays
and ferias. Vigils and octave days are folded into those on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, auto
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from litcal.core.errors import RankConstructionError, ResolutionError
from litcal.core.types import BVMOnSaturday, DayKind, LiturgicalContext, LiturgicalUnit, ResolveResult
from litcal.ranks.occurrence import Occurrence, resolve_with_table

O = Occurrence


class RankFlags(Flag):
    NONE = 0
    OF_THE_LORD = auto()
    MOVABLE = auto()
    LENT = auto()
    ADVENT = auto()
    ASH_WEDNESDAY = auto()
    GOOD_FRIDAY = auto()


_CODES = {
    "SOLEMNITY": 1, "I": 1,
    "FEAST": 2, "II": 2,
    "MEMORIAL": 3, "III": 3,
    "OPTIONAL": 4, "IV": 4, "COMM.": 4, "COMMEMORATIO": 4,
}

_FEAST_STRINGS = {1: "Solemnity", 2: "Feast", 3: "Memorial", 4: "Optional Memorial"}


def parse_rank(rank: str) -> int:
    # unknown codes are read as memorials
    return _CODES.get(rank.strip().upper(), 3)


@dataclass(frozen=True)
class RankOF:
    kind: DayKind
    rank: int
    flags: RankFlags = RankFlags.NONE

    @classmethod
    def construct(cls, rank: str, day_kind: DayKind, context: LiturgicalContext) -> "RankOF":
        value = parse_rank(rank)

        if day_kind == "feria":
            flags = RankFlags.NONE
            if context.of_lent:
                flags |= RankFlags.LENT
            if "Advent" in context.season:
                flags |= RankFlags.ADVENT
            if "Ash Wednesday" in context.feast:
                flags |= RankFlags.ASH_WEDNESDAY
            elif "Good Friday" in context.feast:
                flags |= RankFlags.GOOD_FRIDAY
            return cls("feria", value, flags)

        if day_kind == "feast":
            flags = RankFlags.NONE
            if context.of_our_lord:
                flags |= RankFlags.OF_THE_LORD
            if context.movable:
                flags |= RankFlags.MOVABLE
            if value not in _FEAST_STRINGS:
                raise RankConstructionError(f"Invalid rank {value} for a feast in the Ordinary Form")
            return cls("feast", value, flags)

        if day_kind == "sunday":
            return cls("sunday", value)

        if day_kind == "vigil":
            flags = RankFlags.OF_THE_LORD if context.of_our_lord else RankFlags.NONE
            return cls("feast", 3 if value <= 2 else 4, flags)

        if day_kind == "octave":
            if context.secondary_day_kind == "feria":
                return cls("feria", value)
            if context.secondary_day_kind == "sunday":
                return cls("sunday", value)
            raise RankConstructionError("An octave day must also be a feria or a Sunday in the Ordinary Form")

        raise RankConstructionError(f"Unknown day kind '{day_kind}'")

    @property
    def numeric_rank(self) -> int:
        if self.kind == "sunday":
            return min(self.rank, 3)
        return self.rank

    def has(self, flag: RankFlags) -> bool:
        return bool(self.flags & flag)

    @property
    def rank_string(self) -> str:
        if self.kind == "feast":
            return _FEAST_STRINGS[self.rank]
        if self.kind == "sunday":
            return "Major Sunday" if self.rank == 1 else "Sunday"
        return "Feria"

    def is_ferial_or_sunday(self) -> bool:
        return self.kind in ("feria", "sunday")

    def is_high_festival(self) -> bool:
        return self.kind == "feast" and self.rank <= 2

    def excludes_commemorations(self) -> bool:
        return not (self.kind == "feria" and self.rank >= 2)

    def resolve(self, other: "RankOF", try_swapped: bool = True) -> Occurrence:
        return resolve_with_table(_occurrence_table, self, other, try_swapped)

    @classmethod
    def resolve_conflicts(cls, competitors: Sequence[Tuple["RankOF", LiturgicalUnit]]) -> ResolveResult:
        """
        Fold the competitors, in rank order, against the running winner.

        Optional memorials never contend; two memorials commemorate each other
        and leave the day to whoever comes next.
        """
        if not competitors:
            raise ResolutionError("No competitors provided for conflict resolution")

        ordered = sorted(competitors, key=lambda c: c[0].numeric_rank)
        commemorations: List[LiturgicalUnit] = [u for r, u in ordered if r.kind == "feast" and r.rank == 4]
        contenders = [(r, u) for r, u in ordered if not (r.kind == "feast" and r.rank == 4)]
        if not contenders:
            raise ResolutionError("No competitors left after removing optional memorials")

        winner: Optional[Tuple[RankOF, LiturgicalUnit]] = None
        transferred = None
        for rank, unit in contenders:
            if winner is None:
                winner = (rank, unit)
                continue
            w_rank, w_unit = winner
            try:
                occ = w_rank.resolve(rank)
            except ResolutionError:
                logger.error(f"Cannot resolve '{w_unit.desc}' against '{unit.desc}' on {unit.date}")
                raise

            if occ is O.FIRST_NOTHING:
                pass
            elif occ is O.SECOND_NOTHING:
                winner = (rank, unit)
            elif occ is O.SECOND_TRANSFERS_FIRST:
                transferred = winner
                winner = (rank, unit)
            elif occ is O.FIRST_TRANSFERS_SECOND:
                transferred = (rank, unit)
            elif occ.first_commemorates:
                commemorations.append(unit)
            elif occ.second_commemorates:
                commemorations.append(w_unit)
                winner = (rank, unit)
            else:  # COMMEMORATE_BOTH
                commemorations.extend([w_unit, unit])
                winner = None

        if winner is None:
            raise ResolutionError("No winner after conflict resolution")

        winning_rank, winning_unit = winner
        if winning_rank.excludes_commemorations():
            commemorations = []
        return ResolveResult(
            winner=winning_unit,
            winner_rank=winning_rank,
            transferred=transferred,
            commemorations=tuple(commemorations),
        )

    @classmethod
    def bvm_on_saturday_rank(cls) -> Optional["RankOF"]:
        return cls("feast", 4)

    def admits_bvm_on_saturday(self) -> BVMOnSaturday:
        if self.kind == "feria" and self.rank == 4:
            return BVMOnSaturday.COMMEMORATED
        return BVMOnSaturday.NOT_ADMITTED


# ============================================================
# Occurrence table
# ============================================================

def _lord_xor(a: RankOF, b: RankOF) -> Optional[bool]:
    la, lb = a.has(RankFlags.OF_THE_LORD), b.has(RankFlags.OF_THE_LORD)
    if la == lb:
        return None
    return la


def _occurrence_table(a: RankOF, b: RankOF) -> Optional[Occurrence]:
    if a.numeric_rank < b.numeric_rank:
        return O.FIRST_NOTHING
    if a.numeric_rank > b.numeric_rank:
        return O.SECOND_NOTHING

    if a.kind == "feast" and b.kind == "sunday":
        if a.rank == 1 and b.rank == 1:
            # Easter, Pentecost and the like are the Sunday itself
            if a.has(RankFlags.OF_THE_LORD) and a.has(RankFlags.MOVABLE):
                return O.FIRST_NOTHING
            return O.SECOND_TRANSFERS_FIRST
        if a.rank == 2 and b.rank == 2:
            return O.FIRST_NOTHING if a.has(RankFlags.OF_THE_LORD) else O.SECOND_NOTHING
        if a.rank == 1:
            return O.FIRST_NOTHING
        if b.rank == 1:
            return O.SECOND_NOTHING
        return O.FIRST_NOTHING

    if a.kind == "feast" and b.kind == "feast":
        if a.rank == 1:
            lord = _lord_xor(a, b)
            if lord is not None:
                return O.FIRST_TRANSFERS_SECOND if lord else O.SECOND_TRANSFERS_FIRST
            ma, mb = a.has(RankFlags.MOVABLE), b.has(RankFlags.MOVABLE)
            if ma != mb:
                return O.SECOND_TRANSFERS_FIRST if ma else O.FIRST_TRANSFERS_SECOND
            return None
        if a.rank == 2:
            lord = _lord_xor(a, b)
            if lord is not None:
                return O.FIRST_NOTHING if lord else O.SECOND_NOTHING
            return None
        if a.rank == 3:
            return O.COMMEMORATE_BOTH
        return None

    if a.kind == "feria" and b.kind == "feast":
        # Ash Wednesday, Holy Week and the Easter octave push solemnities on
        if a.rank == 1:
            return O.FIRST_TRANSFERS_SECOND
        if a.has(RankFlags.LENT) and b.rank >= 3:
            return O.FIRST_COMMEMORATES
        return O.SECOND_NOTHING

    return None
