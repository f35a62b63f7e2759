"""
litcal.ranks.factory
--------------------
Selects the rank model class for a rubrical edition.
"""

from __future__ import annotations

from typing import Dict, Type

from litcal.core.types import Edition
from litcal.ranks.interfaces import RankModel
from litcal.ranks.rank54 import Rank1954
from litcal.ranks.rank62 import Rank1962
from litcal.ranks.rank_of import RankOF

RANK_MODELS: Dict[str, Type[RankModel]] = {
    "1954": Rank1954,
    "1962": Rank1962,
    "OrdinaryForm": RankOF,
}


def edition_from_name(name: str) -> Edition:
    """Infer the edition from a calendar name."""
    n = name.lower()
    if "1954" in n:
        return "1954"
    if "1962" in n or "extraordinary" in n or "tridentine" in n:
        return "1962"
    return "OrdinaryForm"


def make_rank_model(edition: Edition) -> Type[RankModel]:
    if edition not in RANK_MODELS:
        raise KeyError(f"Unknown edition '{edition}'. Available: {sorted(RANK_MODELS)}")
    return RANK_MODELS[edition]
