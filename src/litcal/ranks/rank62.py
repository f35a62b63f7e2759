"""
litcal.ranks.rank62
-------------------
Precedence of observances under the 1960 code of rubrics (Missal of 1962).

Every day is of the I, II, III or IV class. Fourth-class feasts are only ever
commemorated, and commemorations are made either at Lauds alone or at Lauds
and Vespers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, auto
from typing import Optional, Sequence, Tuple

from litcal.core.dates import to_roman
from litcal.core.errors import RankConstructionError
from litcal.core.types import DAY_KINDS, BVMOnSaturday, DayKind, LiturgicalContext, LiturgicalUnit, ResolveResult
from litcal.ranks.occurrence import Occurrence, pivot_fold, resolve_with_table

O = Occurrence


class RankFlags(Flag):
    NONE = 0
    OF_LENT = auto()
    EMBER_DAY = auto()
    OF_OUR_LORD = auto()
    IMMACULATE_CONCEPTION = auto()
    MOVABLE = auto()
    ALL_SOULS = auto()


_CLASS_CODES = {"I": 1, "II": 2, "III": 3, "IV": 4, "COMM.": 4, "COMMEMORATIO": 4}


def parse_class(rank: str) -> int:
    code = rank.strip().upper()
    if code not in _CLASS_CODES:
        raise RankConstructionError(f"Invalid 1962 rank '{rank}'. Available: {sorted(_CLASS_CODES)}")
    return _CLASS_CODES[code]


@dataclass(frozen=True)
class Rank1962:
    kind: DayKind
    rank: int
    flags: RankFlags = RankFlags.NONE

    @classmethod
    def construct(cls, rank: str, day_kind: DayKind, context: LiturgicalContext) -> "Rank1962":
        if day_kind not in DAY_KINDS:
            raise RankConstructionError(f"Unknown day kind '{day_kind}'")
        value = parse_class(rank)

        flags = RankFlags.NONE
        if day_kind == "feria":
            if context.of_lent:
                flags |= RankFlags.OF_LENT
            if "Ember" in context.season:
                flags |= RankFlags.EMBER_DAY
        elif day_kind == "feast":
            name = context.feast.upper()
            if context.of_our_lord:
                flags |= RankFlags.OF_OUR_LORD
            if context.movable:
                flags |= RankFlags.MOVABLE
            if "IMMACULATE CONCEPTION" in name:
                flags |= RankFlags.IMMACULATE_CONCEPTION
            if "ALL SOULS" in name:
                flags |= RankFlags.ALL_SOULS
        return cls(kind=day_kind, rank=value, flags=flags)

    @property
    def numeric_rank(self) -> int:
        return self.rank

    def has(self, flag: RankFlags) -> bool:
        return bool(self.flags & flag)

    @property
    def rank_string(self) -> str:
        if self.kind == "feast" and self.rank == 4:
            return "Comm."
        return to_roman(self.rank)

    def is_ferial_or_sunday(self) -> bool:
        return self.kind in ("feria", "sunday")

    def is_high_festival(self) -> bool:
        return self.kind == "feast" and self.rank in (1, 2)

    def excludes_commemorations(self) -> bool:
        if self.kind == "feast":
            return self.rank < 3 and self.has(RankFlags.MOVABLE)
        if self.kind == "sunday":
            return True
        return self.kind in ("feria", "octave") and self.rank == 1

    def resolve(self, other: "Rank1962", try_swapped: bool = True) -> Occurrence:
        return resolve_with_table(_occurrence_table, self, other, try_swapped)

    @classmethod
    def resolve_conflicts(cls, competitors: Sequence[Tuple["Rank1962", LiturgicalUnit]]) -> ResolveResult:
        ordered = sorted(competitors, key=lambda c: c[0].numeric_rank)
        return pivot_fold(
            ordered,
            is_automatic_commemoration=lambda r: r.kind == "feast" and r.rank == 4,
        )

    @classmethod
    def bvm_on_saturday_rank(cls) -> Optional["Rank1962"]:
        return cls("feria", 4)

    def admits_bvm_on_saturday(self) -> BVMOnSaturday:
        if self.kind == "feria" and self.rank == 4:
            return BVMOnSaturday.ADMITTED
        return BVMOnSaturday.NOT_ADMITTED


# ============================================================
# Occurrence tables (keyed on class pairs)
# ============================================================

def _feria_vs_feria(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if a.rank == b.rank:
        ea, eb = a.has(RankFlags.EMBER_DAY), b.has(RankFlags.EMBER_DAY)
        if ea and not eb:
            return O.FIRST_NOTHING
        if eb and not ea:
            return O.SECOND_NOTHING
        return None
    return O.FIRST_NOTHING if a.rank < b.rank else O.SECOND_NOTHING


def _feast_vs_octave(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    pair = (a.rank, b.rank)
    if a.rank == 1:
        return O.FIRST_NOTHING
    table = {
        (2, 1): O.SECOND_NOTHING,
        (2, 2): O.FIRST_COMMEMORATES,
        (2, 3): O.FIRST_NOTHING,
        (3, 1): O.SECOND_NOTHING,
        (3, 2): O.SECOND_COMMEMORATES_AT_LAUDS,
        (3, 3): O.FIRST_COMMEMORATES_AT_LAUDS,
    }
    return table.get(pair, O.SECOND_COMMEMORATES_AT_LAUDS)


def _feast_vs_feast(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    ra, rb = a.rank, b.rank
    if ra == rb:
        if ra == 1 and a.has(RankFlags.OF_OUR_LORD) and not b.has(RankFlags.OF_OUR_LORD):
            return O.FIRST_TRANSFERS_SECOND
        if ra == 2 and a.has(RankFlags.MOVABLE) and not b.has(RankFlags.MOVABLE):
            return O.FIRST_NOTHING
        return None
    if ra == 1:
        return O.FIRST_NOTHING
    if rb == 1:
        return O.SECOND_NOTHING
    if (ra, rb) == (2, 3):
        return O.FIRST_COMMEMORATES_AT_LAUDS
    if (ra, rb) == (3, 2):
        return O.SECOND_COMMEMORATES_AT_LAUDS
    if rb == 4:
        return O.FIRST_COMMEMORATES_AT_LAUDS
    if ra == 4:
        return O.SECOND_COMMEMORATES_AT_LAUDS
    return None


_FEAST_VS_VIGIL = {
    (1, 1): O.SECOND_TRANSFERS_FIRST,
    (1, 2): O.FIRST_NOTHING,
    (2, 1): O.SECOND_NOTHING,
    (2, 2): O.FIRST_COMMEMORATES_AT_LAUDS,
    (3, 1): O.SECOND_NOTHING,
    (3, 2): O.SECOND_COMMEMORATES_AT_LAUDS,
}


def _feast_vs_vigil(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    return _FEAST_VS_VIGIL.get((a.rank, b.rank))


_FEAST_VS_FERIA = {
    (1, 1): O.SECOND_TRANSFERS_FIRST,
    (1, 2): O.FIRST_COMMEMORATES,
    (1, 3): O.FIRST_COMMEMORATES,
    (2, 1): O.SECOND_NOTHING,
    (2, 2): O.FIRST_COMMEMORATES_AT_LAUDS,
    (2, 3): O.FIRST_COMMEMORATES,
    (3, 1): O.SECOND_NOTHING,
    (3, 2): O.SECOND_COMMEMORATES_AT_LAUDS,
}


def _feast_vs_feria(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if (a.rank, b.rank) == (3, 3):
        if b.has(RankFlags.OF_LENT):
            return O.SECOND_COMMEMORATES_AT_LAUDS
        return O.FIRST_COMMEMORATES
    return _FEAST_VS_FERIA.get((a.rank, b.rank))


_FEAST_VS_SUNDAY = {
    (1, 1): O.SECOND_TRANSFERS_FIRST,
    (1, 2): O.FIRST_COMMEMORATES,
    (2, 1): O.SECOND_NOTHING,
    (2, 2): O.SECOND_COMMEMORATES_AT_LAUDS,
    (3, 1): O.SECOND_NOTHING,
    (3, 2): O.SECOND_NOTHING,
}


def _feast_vs_sunday(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if a.has(RankFlags.OF_OUR_LORD) and a.rank in (1, 2):
        return O.FIRST_NOTHING
    if a.has(RankFlags.IMMACULATE_CONCEPTION):
        return O.FIRST_COMMEMORATES_AT_LAUDS
    if a.has(RankFlags.ALL_SOULS):
        return O.SECOND_TRANSFERS_FIRST
    return _FEAST_VS_SUNDAY.get((a.rank, b.rank))


def _vigil_vs_octave(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if a.rank == 1:
        return O.FIRST_NOTHING
    if a.rank == 2 and b.rank == 3:
        return O.FIRST_COMMEMORATES_AT_LAUDS
    return O.SECOND_NOTHING


def _vigil_vs_feria(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if a.rank in (1, 2):
        return O.FIRST_NOTHING
    return None


def _vigil_vs_sunday(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if a.rank == 1:
        return O.FIRST_NOTHING
    if a.rank in (2, 3) and b.rank == 2:
        return O.SECOND_NOTHING
    return None


def _octave_vs_feria(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if (a.rank, b.rank) == (3, 1):
        return O.SECOND_NOTHING
    return O.FIRST_NOTHING


def _octave_vs_sunday(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if a.rank == 1:
        return O.SECOND_NOTHING if b.rank == 1 else O.FIRST_NOTHING
    if a.rank == 2 and b.rank == 3:
        return O.FIRST_NOTHING
    return O.SECOND_NOTHING


def _octave_vs_octave(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    if a.rank == b.rank:
        return None
    return O.FIRST_NOTHING if a.rank < b.rank else O.SECOND_NOTHING


_TABLES = {
    ("feria", "feria"): _feria_vs_feria,
    ("feast", "octave"): _feast_vs_octave,
    ("feast", "feast"): _feast_vs_feast,
    ("feast", "vigil"): _feast_vs_vigil,
    ("feast", "feria"): _feast_vs_feria,
    ("feast", "sunday"): _feast_vs_sunday,
    ("vigil", "octave"): _vigil_vs_octave,
    ("vigil", "feria"): _vigil_vs_feria,
    ("vigil", "sunday"): _vigil_vs_sunday,
    ("octave", "feria"): _octave_vs_feria,
    ("octave", "sunday"): _octave_vs_sunday,
    ("octave", "octave"): _octave_vs_octave,
}


def _occurrence_table(a: Rank1962, b: Rank1962) -> Optional[Occurrence]:
    fn = _TABLES.get((a.kind, b.kind))
    return fn(a, b) if fn is not None else None
