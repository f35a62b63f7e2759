"""
litcal.ranks.occurrence
-----------------------
Outcome of two observances falling on the same day, and the machinery shared
by all rank models: the reversed-lookup protocol, the numeric fallback and the
pivot fold used by the 1954 and 1962 rubrics.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

from loguru import logger

from litcal.core.errors import ResolutionError
from litcal.core.types import LiturgicalUnit, ResolveResult


class Occurrence(Enum):
    FIRST_NOTHING = "first_nothing"
    SECOND_NOTHING = "second_nothing"
    # 1954 plain commemoration; 1962 "at Lauds and Vespers"
    FIRST_COMMEMORATES = "first_commemorates"
    FIRST_COMMEMORATES_AT_LAUDS = "first_commemorates_at_lauds"
    SECOND_COMMEMORATES = "second_commemorates"
    SECOND_COMMEMORATES_AT_LAUDS = "second_commemorates_at_lauds"
    FIRST_TRANSFERS_SECOND = "first_transfers_second"
    SECOND_TRANSFERS_FIRST = "second_transfers_first"
    # Ordinary Form only: two memorials, neither takes the day
    COMMEMORATE_BOTH = "commemorate_both"

    def reverse(self) -> "Occurrence":
        return _REVERSE[self]

    @property
    def first_commemorates(self) -> bool:
        return self in (Occurrence.FIRST_COMMEMORATES, Occurrence.FIRST_COMMEMORATES_AT_LAUDS)

    @property
    def second_commemorates(self) -> bool:
        return self in (Occurrence.SECOND_COMMEMORATES, Occurrence.SECOND_COMMEMORATES_AT_LAUDS)


_REVERSE = {
    Occurrence.FIRST_NOTHING: Occurrence.SECOND_NOTHING,
    Occurrence.SECOND_NOTHING: Occurrence.FIRST_NOTHING,
    Occurrence.FIRST_COMMEMORATES: Occurrence.SECOND_COMMEMORATES,
    Occurrence.SECOND_COMMEMORATES: Occurrence.FIRST_COMMEMORATES,
    Occurrence.FIRST_COMMEMORATES_AT_LAUDS: Occurrence.SECOND_COMMEMORATES_AT_LAUDS,
    Occurrence.SECOND_COMMEMORATES_AT_LAUDS: Occurrence.FIRST_COMMEMORATES_AT_LAUDS,
    Occurrence.FIRST_TRANSFERS_SECOND: Occurrence.SECOND_TRANSFERS_FIRST,
    Occurrence.SECOND_TRANSFERS_FIRST: Occurrence.FIRST_TRANSFERS_SECOND,
    Occurrence.COMMEMORATE_BOTH: Occurrence.COMMEMORATE_BOTH,
}


def numeric_fallback(a: Any, b: Any) -> Occurrence:
    """Lower numeric rank wins; equal rank is a gap in the occurrence table."""
    if a.numeric_rank < b.numeric_rank:
        return Occurrence.FIRST_NOTHING
    if b.numeric_rank < a.numeric_rank:
        return Occurrence.SECOND_NOTHING
    raise ResolutionError(
        f"No occurrence rule for {a.kind} against {b.kind} at equal rank {a.numeric_rank}", a, b
    )


def resolve_with_table(
    table: Callable[[Any, Any], Optional[Occurrence]],
    a: Any,
    b: Any,
    try_swapped: bool,
) -> Occurrence:
    """Look up (a, b); failing that (b, a) reversed; failing that the numeric fallback."""
    out = table(a, b)
    if out is not None:
        return out
    if try_swapped:
        return b.resolve(a, False).reverse()
    return numeric_fallback(a, b)


Competitor = Tuple[Any, LiturgicalUnit]


def pivot_fold(
    competitors: Sequence[Competitor],
    *,
    is_automatic_commemoration: Callable[[Any], bool],
) -> ResolveResult:
    """
    Resolve every competitor against the first one (the pivot).

    Automatic commemorations are set aside before the fold and re-attached
    afterwards unless the winner's rank shuts out commemorations.
    """
    if not competitors:
        raise ResolutionError("No competitors provided for conflict resolution")

    base_commemorations = [unit for rank, unit in competitors if is_automatic_commemoration(rank)]
    contenders = [(rank, unit) for rank, unit in competitors if not is_automatic_commemoration(rank)]
    if not contenders:
        raise ResolutionError("Only automatic commemorations provided for conflict resolution")

    pivot_rank, pivot_unit = contenders[0]
    winning_rank, winner = pivot_rank, pivot_unit
    commemorations: List[LiturgicalUnit] = []
    transferred: Optional[Competitor] = None

    for rank, unit in contenders[1:]:
        try:
            occ = pivot_rank.resolve(rank, True)
        except ResolutionError:
            logger.error(f"Cannot resolve '{pivot_unit.desc}' against '{unit.desc}' on {unit.date}")
            raise

        if occ is Occurrence.FIRST_NOTHING:
            pass
        elif occ is Occurrence.SECOND_NOTHING:
            winning_rank, winner = rank, unit
        elif occ.first_commemorates:
            commemorations.append(unit)
        elif occ.second_commemorates:
            commemorations.append(winner)
            winning_rank, winner = rank, unit
        elif occ is Occurrence.FIRST_TRANSFERS_SECOND:
            transferred = (rank, unit)
        elif occ is Occurrence.SECOND_TRANSFERS_FIRST:
            transferred = (winning_rank, winner)
            winning_rank, winner = rank, unit
        else:
            raise ResolutionError(f"Unexpected occurrence outcome {occ}", pivot_rank, rank)

    if not winning_rank.excludes_commemorations():
        commemorations.extend(base_commemorations)

    return ResolveResult(
        winner=winner,
        winner_rank=winning_rank,
        transferred=transferred,
        commemorations=tuple(commemorations),
    )
