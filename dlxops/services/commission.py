from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict

from dlxops.services.ranks import RANK_DEFINITIONS, RankDefinition, get_rank


class CommissionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    commission: float
    net: float

    def as_dict(self) -> dict:
        return self.model_dump()


def calculate_commission(
    base_amount: float,
    rank_id: Any,
    ranks: Mapping[str, RankDefinition] = RANK_DEFINITIONS,
) -> CommissionResult:
    """
    Split a base amount into the rank's commission and the net remainder.
    No rounding is applied; callers format for display.
    """
    rank = get_rank(rank_id, ranks)
    commission = base_amount * rank.commission / 100
    return CommissionResult(commission=commission, net=base_amount - commission)


def check_commission_table(
    base_amount: float,
    expected: Mapping[str, float],
    ranks: Mapping[str, RankDefinition] = RANK_DEFINITIONS,
    tolerance: float = 1e-9,
) -> List[Tuple[str, CommissionResult, float, bool]]:
    """Compare computed commissions against expected values, one row per expected rank."""
    rows = []
    for rank_id, want in expected.items():
        result = calculate_commission(base_amount, rank_id, ranks)
        rows.append((rank_id, result, want, abs(result.commission - want) <= tolerance))
    return rows
