"""
litcal.ranks.interfaces
-----------------------
The capability every rubrical edition provides to the year builder.

An edition is a class whose instances are immutable rank values. The builder
never inspects a rank's internals; it only goes through this protocol.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple

from litcal.core.types import BVMOnSaturday, DayKind, LiturgicalContext, LiturgicalUnit, ResolveResult
from litcal.ranks.occurrence import Occurrence


class RankModel(Protocol):
    kind: DayKind

    @classmethod
    def construct(cls, rank: str, day_kind: DayKind, context: LiturgicalContext) -> "RankModel":
        """Build a rank from a (rank code, day kind, context) triple."""
        ...

    @property
    def numeric_rank(self) -> int:
        """Lower is more important."""
        ...

    @property
    def rank_string(self) -> str:
        ...

    def is_ferial_or_sunday(self) -> bool:
        ...

    def is_high_festival(self) -> bool:
        """High festivals keep a pending transfer off their day."""
        ...

    def excludes_commemorations(self) -> bool:
        """True if automatic commemorations are dropped when this rank wins."""
        ...

    def resolve(self, other: "RankModel", try_swapped: bool = True) -> Occurrence:
        ...

    @classmethod
    def resolve_conflicts(cls, competitors: Sequence[Tuple["RankModel", LiturgicalUnit]]) -> ResolveResult:
        ...

    @classmethod
    def bvm_on_saturday_rank(cls) -> Optional["RankModel"]:
        ...

    def admits_bvm_on_saturday(self) -> BVMOnSaturday:
        ...
