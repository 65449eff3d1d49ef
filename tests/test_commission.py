"""
Tests for the rank table and commission arithmetic.
"""
import pytest
from pydantic import ValidationError

from dlxops.services.commission import calculate_commission, check_commission_table
from dlxops.services.ranks import (
    DEFAULT_RANK_ID,
    RANK_DEFINITIONS,
    RankDefinition,
    get_rank,
    lowest_rank,
    rank_distribution,
)


class TestRankDefinitions:

    def test_table_values(self):
        assert {k: r.commission for k, r in RANK_DEFINITIONS.items()} == {
            "starter": 0,
            "dlx-associate": 25,
            "dlx-executive": 30,
            "dlx-director": 35,
            "dlx-president": 45,
        }
        assert RANK_DEFINITIONS["dlx-director"].name == "DLX Director"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            RANK_DEFINITIONS["vip"] = RankDefinition(id="vip", name="VIP", commission=50, color="gold")

    def test_definition_is_frozen(self):
        with pytest.raises(ValidationError):
            RANK_DEFINITIONS["starter"].commission = 10

    def test_percentage_bounds(self):
        with pytest.raises(ValidationError):
            RankDefinition(id="x", name="X", commission=101, color="red")
        with pytest.raises(ValidationError):
            RankDefinition(id="x", name="X", commission=-1, color="red")

    def test_lowest_rank_is_default(self):
        assert lowest_rank().id == DEFAULT_RANK_ID

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            lowest_rank({})
        with pytest.raises(ValueError, match="empty"):
            get_rank("starter", {})
        with pytest.raises(ValueError, match="empty"):
            calculate_commission(1000, "starter", ranks={})

    @pytest.mark.parametrize("rank_id", [None, "", "nonexistent-rank", "DLX-DIRECTOR", 35, ["dlx-director"]])
    def test_unknown_falls_back(self, rank_id):
        assert get_rank(rank_id).id == "starter"


class TestCalculateCommission:

    def test_director(self):
        assert calculate_commission(1000, "dlx-director").as_dict() == {"commission": 350, "net": 650}

    @pytest.mark.parametrize("rank_id, expected", [
        ("starter", 0),
        ("dlx-associate", 250),
        ("dlx-executive", 300),
        ("dlx-director", 350),
        ("dlx-president", 450),
    ])
    def test_each_rank(self, rank_id, expected):
        assert calculate_commission(1000, rank_id).commission == expected

    def test_unknown_rank_defaults_to_starter(self):
        unknown = calculate_commission(1000, "nonexistent-rank")
        assert unknown.commission == calculate_commission(1000, "starter").commission == 0
        assert unknown.net == 1000

    def test_monotonic_in_percentage(self):
        ordered = sorted(RANK_DEFINITIONS.values(), key=lambda r: r.commission)
        commissions = [calculate_commission(777, r.id).commission for r in ordered]
        assert commissions == sorted(commissions)

    @pytest.mark.parametrize("base", [0, 1, 99.99, 1000, 123456.78])
    @pytest.mark.parametrize("rank_id", list(RANK_DEFINITIONS) + ["unknown"])
    def test_net_plus_commission_is_base(self, base, rank_id):
        result = calculate_commission(base, rank_id)
        assert result.commission + result.net == pytest.approx(base)

    def test_injected_table(self):
        ranks = {
            "gold": RankDefinition(id="gold", name="Gold", commission=10, color="yellow"),
            "bronze": RankDefinition(id="bronze", name="Bronze", commission=5, color="brown"),
        }
        assert calculate_commission(200, "gold", ranks).commission == 20
        assert calculate_commission(200, "starter", ranks).commission == 10


class TestCommissionTable:

    def test_expected_table_passes(self):
        rows = check_commission_table(1000, {"starter": 0, "dlx-director": 350})
        assert [passed for _, _, _, passed in rows] == [True, True]

    def test_wrong_expectation_fails(self):
        rows = check_commission_table(1000, {"dlx-president": 400})
        rank_id, result, expected, passed = rows[0]
        assert rank_id == "dlx-president"
        assert result.commission == 450
        assert passed is False


def test_rank_distribution_counts_missing_as_starter():
    users = [{"rank": "starter"}, {"rank": "dlx-director"}, {}, {"rank": None}, {"rank": "dlx-director"}]
    stats = rank_distribution(users)
    assert stats["starter"] == 3
    assert stats["dlx-director"] == 2
