from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field


class RankDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    commission: int = Field(..., ge=0, le=100, description="Percentage kept from each payout")
    color: str


DEFAULT_RANK_ID = "starter"

# Single source of truth for rank tiers. Order is lowest to highest tier.
RANK_DEFINITIONS: Mapping[str, RankDefinition] = MappingProxyType({
    "starter": RankDefinition(id="starter", name="Starter", commission=0, color="green"),
    "dlx-associate": RankDefinition(id="dlx-associate", name="DLX Associate", commission=25, color="blue"),
    "dlx-executive": RankDefinition(id="dlx-executive", name="DLX Executive", commission=30, color="purple"),
    "dlx-director": RankDefinition(id="dlx-director", name="DLX Director", commission=35, color="orange"),
    "dlx-president": RankDefinition(id="dlx-president", name="DLX President", commission=45, color="red"),
})


def lowest_rank(ranks: Mapping[str, RankDefinition] = RANK_DEFINITIONS) -> RankDefinition:
    """Lowest-commission rank of the table. Raises ValueError for an empty table."""
    if not ranks:
        raise ValueError("Rank table is empty")
    return min(ranks.values(), key=lambda r: r.commission)


def get_rank(rank_id: Any, ranks: Mapping[str, RankDefinition] = RANK_DEFINITIONS) -> RankDefinition:
    """
    Look up a rank; missing, stale or malformed ids resolve to the lowest tier.

    The table must hold at least one rank; an empty one raises ValueError
    whatever the id, since there is no tier to fall back to.
    """
    if not ranks:
        raise ValueError("Rank table is empty")
    if isinstance(rank_id, str) and rank_id in ranks:
        return ranks[rank_id]
    return lowest_rank(ranks)


def rank_distribution(users: Iterable[Mapping[str, Any]]) -> Counter:
    """Count users per rank id. Users without a rank count as the default rank."""
    stats: Counter = Counter()
    for user in users:
        stats[user.get("rank") or DEFAULT_RANK_ID] += 1
    return stats
