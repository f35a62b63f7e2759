"""
litcal.ranks.rank54
-------------------
Precedence of observances under the rubrics in force in 1954 (after Divino
Afflatu): doubles, semidoubles, simples, privileged and common octaves,
greater and lesser Sundays, greater and ordinary ferias.

Numeric ranks (lower is more important) are only comparable within a kind;
across kinds the occurrence tables decide.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, IntEnum, auto
from typing import Optional, Sequence, Tuple

from litcal.core.errors import RankConstructionError
from litcal.core.types import BVMOnSaturday, DayKind, LiturgicalContext, LiturgicalUnit, ResolveResult
from litcal.ranks.occurrence import Occurrence, pivot_fold, resolve_with_table

O = Occurrence


class FeastClass(IntEnum):
    FIRST_CLASS_DOUBLE = 1
    SECOND_CLASS_DOUBLE = 2
    MAJOR_DOUBLE = 3
    DOUBLE = 4
    SEMIDOUBLE = 5
    SIMPLE = 6
    COMMEMORATION = 7


class OctaveType(IntEnum):
    PRIVILEGED1 = 1
    PRIVILEGED2 = 2
    PRIVILEGED3 = 3
    COMMON = 4
    SIMPLE = 5


class RankFlags(Flag):
    NONE = 0
    OF_LENT = auto()
    EMBER_DAY = auto()
    OF_OUR_LORD = auto()
    IMMACULATE_CONCEPTION = auto()
    MOVABLE = auto()
    ALL_SOULS = auto()


_FERIA_CODES = {
    "greater privileged": 1, "I": 1,
    "greater non-privileged": 2, "II": 2,
    "ordinary": 3, "III": 3, "IV": 3,
}

_FEAST_CODES = {
    "totum_duplex": FeastClass.FIRST_CLASS_DOUBLE,
    "first_class_duplex": FeastClass.FIRST_CLASS_DOUBLE,
    "first class double": FeastClass.FIRST_CLASS_DOUBLE,
    "I": FeastClass.FIRST_CLASS_DOUBLE,
    "second_class_duplex": FeastClass.SECOND_CLASS_DOUBLE,
    "second class double": FeastClass.SECOND_CLASS_DOUBLE,
    "II": FeastClass.SECOND_CLASS_DOUBLE,
    "major_duplex": FeastClass.MAJOR_DOUBLE,
    "greater_duplex": FeastClass.MAJOR_DOUBLE,
    "major double": FeastClass.MAJOR_DOUBLE,
    "duplex": FeastClass.DOUBLE,
    "double": FeastClass.DOUBLE,
    "III": FeastClass.DOUBLE,
    "semiduplex": FeastClass.SEMIDOUBLE,
    "semidouble": FeastClass.SEMIDOUBLE,
    "IV": FeastClass.SEMIDOUBLE,
    "simplex": FeastClass.SIMPLE,
    "simple": FeastClass.SIMPLE,
    "V": FeastClass.SIMPLE,
    "commemoratio": FeastClass.COMMEMORATION,
    "commemoration": FeastClass.COMMEMORATION,
    "com": FeastClass.COMMEMORATION,
    "VI": FeastClass.COMMEMORATION,
}

_SUNDAY_CODES = {"I": 1, "II": 2, "III": 3}

_VIGIL_CODES = {"major": 1, "I": 1, "minor": 2, "II": 2}

_OCTAVE_CODES = {
    "privileged1": OctaveType.PRIVILEGED1, "I": OctaveType.PRIVILEGED1,
    "privileged2": OctaveType.PRIVILEGED2, "II": OctaveType.PRIVILEGED2,
    "privileged3": OctaveType.PRIVILEGED3, "III": OctaveType.PRIVILEGED3,
    "common": OctaveType.COMMON, "IV": OctaveType.COMMON,
    "simple": OctaveType.SIMPLE, "V": OctaveType.SIMPLE,
}

_CODES = {
    "feria": _FERIA_CODES,
    "feast": _FEAST_CODES,
    "sunday": _SUNDAY_CODES,
    "vigil": _VIGIL_CODES,
    "octave": _OCTAVE_CODES,
}

_FEAST_STRINGS = {
    FeastClass.FIRST_CLASS_DOUBLE: "First Class Double",
    FeastClass.SECOND_CLASS_DOUBLE: "Second Class Double",
    FeastClass.MAJOR_DOUBLE: "Major Double",
    FeastClass.DOUBLE: "Double",
    FeastClass.SEMIDOUBLE: "Semidouble",
    FeastClass.SIMPLE: "Simple",
    FeastClass.COMMEMORATION: "Commemoration",
}

_FERIA_STRINGS = {1: "Greater Privileged Feria", 2: "Greater Non-Privileged Feria", 3: "Ordinary Feria"}

_SUNDAY_STRINGS = {
    1: "Greater Sunday of the First Class",
    2: "Greater Sunday of the Second Class",
    3: "Lesser Sunday",
}

_PRIVILEGED_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


@dataclass(frozen=True)
class Rank1954:
    kind: DayKind
    rank: int
    flags: RankFlags = RankFlags.NONE
    octave_day: bool = False

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------
    @classmethod
    def construct(cls, rank: str, day_kind: DayKind, context: LiturgicalContext) -> "Rank1954":
        codes = _CODES.get(day_kind)
        if codes is None:
            raise RankConstructionError(f"Unknown day kind '{day_kind}'")
        if rank not in codes:
            raise RankConstructionError(
                f"Unknown {day_kind} rank '{rank}'. Available: {sorted(codes)}"
            )
        value = int(codes[rank])

        flags = RankFlags.NONE
        if day_kind == "feria":
            if context.of_lent:
                flags |= RankFlags.OF_LENT
            if "Ember" in context.season:
                flags |= RankFlags.EMBER_DAY
        elif day_kind == "feast":
            if context.of_our_lord:
                flags |= RankFlags.OF_OUR_LORD
            if context.movable:
                flags |= RankFlags.MOVABLE
            if "Immaculate Conception" in context.feast:
                flags |= RankFlags.IMMACULATE_CONCEPTION
            if "All Souls" in context.feast:
                flags |= RankFlags.ALL_SOULS

        return cls(
            kind=day_kind,
            rank=value,
            flags=flags,
            octave_day=(day_kind == "octave" and context.is_octave_day),
        )

    @classmethod
    def feast(cls, feast_class: FeastClass, flags: RankFlags = RankFlags.NONE) -> "Rank1954":
        return cls("feast", int(feast_class), flags)

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------
    @property
    def numeric_rank(self) -> int:
        return self.rank

    def has(self, flag: RankFlags) -> bool:
        return bool(self.flags & flag)

    @property
    def rank_string(self) -> str:
        if self.kind == "feria":
            parts = [_FERIA_STRINGS[self.rank]]
            if self.has(RankFlags.OF_LENT):
                parts.append("of Lent")
            if self.has(RankFlags.EMBER_DAY):
                parts.append("Ember Day")
            return " ".join(parts)
        if self.kind == "feast":
            return _FEAST_STRINGS[FeastClass(self.rank)]
        if self.kind == "vigil":
            return "Major Vigil" if self.rank == 1 else "Minor Vigil"
        if self.kind == "sunday":
            return _SUNDAY_STRINGS[self.rank]
        # octave
        if self.rank in _PRIVILEGED_ORDINALS:
            nth = _PRIVILEGED_ORDINALS[self.rank]
            if self.octave_day:
                return f"Octave Day of a Privileged {nth} Class Octave"
            return f"Day within a Privileged {nth} Class Octave"
        if self.rank == OctaveType.COMMON:
            return "Major Double" if self.octave_day else "Day within a Common Octave"
        return "Simple" if self.octave_day else "Day within a Simple Octave"

    def is_ferial_or_sunday(self) -> bool:
        return self.kind in ("feria", "sunday")

    def is_high_festival(self) -> bool:
        if self.kind == "feast":
            return self.rank <= FeastClass.SECOND_CLASS_DOUBLE
        return self.kind == "octave" and self.rank == OctaveType.PRIVILEGED1

    def excludes_commemorations(self) -> bool:
        if self.kind == "feast":
            return self.rank < FeastClass.MAJOR_DOUBLE and self.has(RankFlags.MOVABLE)
        if self.kind == "sunday":
            return True
        if self.kind == "feria":
            return self.rank == 1
        if self.kind == "octave":
            return self.rank == OctaveType.PRIVILEGED1
        return False

    # ---------------------------------------------------------
    # Occurrence
    # ---------------------------------------------------------
    def resolve(self, other: "Rank1954", try_swapped: bool = True) -> Occurrence:
        return resolve_with_table(_occurrence_table, self, other, try_swapped)

    @classmethod
    def resolve_conflicts(cls, competitors: Sequence[Tuple["Rank1954", LiturgicalUnit]]) -> ResolveResult:
        # Input order is kept: the first competitor is the pivot.
        return pivot_fold(
            competitors,
            is_automatic_commemoration=lambda r: r.kind == "feast" and r.rank == FeastClass.COMMEMORATION,
        )

    @classmethod
    def bvm_on_saturday_rank(cls) -> Optional["Rank1954"]:
        return cls("feria", 3)

    def admits_bvm_on_saturday(self) -> BVMOnSaturday:
        if self.kind == "feria" and self.rank == 3:
            return BVMOnSaturday.ADMITTED
        if self.kind == "feast" and self.rank == FeastClass.SIMPLE:
            return BVMOnSaturday.COMMEMORATED
        return BVMOnSaturday.NOT_ADMITTED


# ============================================================
# Occurrence tables
# ============================================================

def _feria_vs_feria(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    if a.rank == b.rank:
        ea, eb = a.has(RankFlags.EMBER_DAY), b.has(RankFlags.EMBER_DAY)
        if ea and not eb:
            return O.FIRST_NOTHING
        if eb and not ea:
            return O.SECOND_NOTHING
        return None
    return O.FIRST_NOTHING if a.rank < b.rank else O.SECOND_NOTHING


def _feast_vs_feria(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    if b.rank == 1:
        return O.SECOND_COMMEMORATES if a.rank <= FeastClass.DOUBLE else O.SECOND_NOTHING
    if b.rank == 2:
        return O.SECOND_NOTHING if a.rank == FeastClass.SIMPLE else O.FIRST_COMMEMORATES
    return O.FIRST_NOTHING


def _feast_vs_octave(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    fc = a.rank
    if b.rank == OctaveType.PRIVILEGED1:
        if fc == FeastClass.FIRST_CLASS_DOUBLE:
            return O.FIRST_NOTHING
        if fc == FeastClass.SECOND_CLASS_DOUBLE:
            return O.SECOND_TRANSFERS_FIRST
        return O.SECOND_COMMEMORATES if b.octave_day else O.SECOND_NOTHING
    if b.rank == OctaveType.PRIVILEGED2:
        if fc == FeastClass.FIRST_CLASS_DOUBLE:
            return O.SECOND_TRANSFERS_FIRST if b.octave_day else O.SECOND_COMMEMORATES
        if fc == FeastClass.MAJOR_DOUBLE and a.has(RankFlags.OF_OUR_LORD):
            return O.FIRST_COMMEMORATES
        return O.FIRST_NOTHING
    if b.rank in (OctaveType.PRIVILEGED3, OctaveType.COMMON):
        if fc <= FeastClass.SEMIDOUBLE and not b.octave_day:
            return O.FIRST_COMMEMORATES
        if fc == FeastClass.SECOND_CLASS_DOUBLE and b.octave_day:
            return O.FIRST_NOTHING
        if fc == FeastClass.SIMPLE:
            return O.SECOND_COMMEMORATES
        return O.FIRST_NOTHING
    # simple octave
    return O.SECOND_COMMEMORATES if b.octave_day else O.FIRST_NOTHING


def _feast_vs_feast(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    # Only the more important side is tabled; the other orientation is the mirror.
    if a.rank > b.rank:
        return None
    fa, fb = FeastClass(a.rank), FeastClass(b.rank)
    lord_a, lord_b = a.has(RankFlags.OF_OUR_LORD), b.has(RankFlags.OF_OUR_LORD)

    if fa == fb:
        if fa == FeastClass.FIRST_CLASS_DOUBLE and lord_a and not lord_b:
            return O.FIRST_TRANSFERS_SECOND
        if fa in (FeastClass.MAJOR_DOUBLE, FeastClass.DOUBLE) and lord_b and not lord_a:
            return O.SECOND_COMMEMORATES
        return None

    if fa == FeastClass.FIRST_CLASS_DOUBLE:
        if fb == FeastClass.SECOND_CLASS_DOUBLE:
            return O.FIRST_TRANSFERS_SECOND
        if fb in (FeastClass.MAJOR_DOUBLE, FeastClass.DOUBLE, FeastClass.SEMIDOUBLE):
            return O.FIRST_COMMEMORATES
        return O.FIRST_NOTHING
    if fa == FeastClass.SECOND_CLASS_DOUBLE and fb == FeastClass.DOUBLE:
        return O.FIRST_COMMEMORATES
    if fa == FeastClass.MAJOR_DOUBLE and fb == FeastClass.DOUBLE:
        return O.FIRST_COMMEMORATES
    if fb in (FeastClass.SEMIDOUBLE, FeastClass.SIMPLE):
        return O.FIRST_COMMEMORATES
    return None


def _feast_vs_vigil(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    fc = a.rank
    major = b.rank == 1
    if fc == FeastClass.FIRST_CLASS_DOUBLE:
        return O.FIRST_NOTHING
    if fc == FeastClass.SECOND_CLASS_DOUBLE:
        return O.FIRST_COMMEMORATES if major else O.FIRST_NOTHING
    if fc in (FeastClass.MAJOR_DOUBLE, FeastClass.DOUBLE):
        return O.FIRST_NOTHING
    if fc in (FeastClass.SEMIDOUBLE, FeastClass.SIMPLE):
        return O.SECOND_COMMEMORATES
    return O.SECOND_NOTHING


def _feast_vs_sunday(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    fc = a.rank
    lord = a.has(RankFlags.OF_OUR_LORD)
    if b.rank == 1:
        return O.SECOND_COMMEMORATES
    if b.rank == 2:
        if fc == FeastClass.FIRST_CLASS_DOUBLE:
            return O.FIRST_NOTHING
        if fc in (FeastClass.SECOND_CLASS_DOUBLE, FeastClass.MAJOR_DOUBLE) and lord:
            return O.FIRST_NOTHING
        return O.SECOND_COMMEMORATES
    if fc <= FeastClass.SECOND_CLASS_DOUBLE:
        return O.FIRST_COMMEMORATES
    return O.FIRST_NOTHING if lord else O.SECOND_COMMEMORATES


def _vigil_vs_feria(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    if b.rank == 2:
        return O.FIRST_NOTHING if a.rank == 1 else O.SECOND_COMMEMORATES
    if b.rank == 3:
        return O.FIRST_NOTHING
    return None


def _vigil_vs_sunday(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    return O.SECOND_COMMEMORATES


def _octave_vs_feria(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    if a.rank == OctaveType.SIMPLE:
        return O.FIRST_NOTHING if a.octave_day else O.SECOND_NOTHING
    if a.rank == OctaveType.COMMON and b.rank == 2:
        return O.FIRST_COMMEMORATES
    return O.FIRST_NOTHING


def _octave_vs_sunday(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    if b.rank == 1:
        return O.SECOND_NOTHING
    if a.octave_day and a.rank == OctaveType.COMMON and b.rank == 2:
        return O.SECOND_COMMEMORATES
    if not a.octave_day and a.rank in (OctaveType.PRIVILEGED1, OctaveType.PRIVILEGED2):
        return O.FIRST_NOTHING
    if a.rank == OctaveType.PRIVILEGED3:
        return O.SECOND_NOTHING
    if not a.octave_day and a.rank in (OctaveType.COMMON, OctaveType.SIMPLE):
        return O.SECOND_NOTHING
    return None


def _sunday_vs_feria(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    if a.rank == 1:
        return O.FIRST_NOTHING
    if a.rank == 2:
        return O.FIRST_NOTHING if b.rank == 1 else O.SECOND_COMMEMORATES
    return O.FIRST_NOTHING if b.rank in (1, 2) else O.SECOND_COMMEMORATES


_TABLES = {
    ("feria", "feria"): _feria_vs_feria,
    ("feast", "feria"): _feast_vs_feria,
    ("feast", "octave"): _feast_vs_octave,
    ("feast", "feast"): _feast_vs_feast,
    ("feast", "vigil"): _feast_vs_vigil,
    ("feast", "sunday"): _feast_vs_sunday,
    ("vigil", "feria"): _vigil_vs_feria,
    ("vigil", "sunday"): _vigil_vs_sunday,
    ("octave", "feria"): _octave_vs_feria,
    ("octave", "sunday"): _octave_vs_sunday,
    ("sunday", "feria"): _sunday_vs_feria,
}


def _occurrence_table(a: Rank1954, b: Rank1954) -> Optional[Occurrence]:
    fn = _TABLES.get((a.kind, b.kind))
    return fn(a, b) if fn is not None else None
