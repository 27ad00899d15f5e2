from decimal import Decimal

import pytest

from debt_payoff.engine.comparison import compare_strategies, minimum_only
from debt_payoff.engine.errors import UnpayableDebtError
from debt_payoff.models.debt import PlanInputs


class TestMinimumOnly:
    def test_each_debt_alone(self, make_debt):
        outcome = minimum_only([make_debt("A", "300", "50"), make_debt("B", "1000", "50")])
        assert outcome.label == "minimum"
        assert outcome.total_months == 20
        assert outcome.total_paid == Decimal("1300")
        assert outcome.payoff_order == ["A", "B"]

    def test_unpayable_baseline_raises(self, make_debt):
        with pytest.raises(UnpayableDebtError):
            minimum_only([make_debt("Card", "10000", "100", "0.30")])


class TestCompareStrategies:
    def test_disagreement_fixture(self, disagreement_debts):
        comparison = compare_strategies(PlanInputs(debts=disagreement_debts, extra_monthly="200"))
        assert comparison.snowball.label == "snowball"
        assert comparison.avalanche.label == "avalanche"
        assert comparison.snowball.payoff_order == ["B", "C", "A"]
        assert comparison.avalanche.payoff_order == ["C", "B", "A"]
        assert comparison.avalanche.total_interest <= comparison.snowball.total_interest
        assert comparison.avalanche_interest_savings == (
            comparison.snowball.total_interest - comparison.avalanche.total_interest
        )

    def test_baseline_slower_than_either_strategy(self, disagreement_debts):
        comparison = compare_strategies(PlanInputs(debts=disagreement_debts, extra_monthly="200"))
        baseline = comparison.minimum_only
        assert baseline is not None
        assert baseline.total_months > comparison.snowball.total_months
        assert baseline.total_interest > comparison.avalanche.total_interest

    def test_requested_strategy_ignored(self, disagreement_debts):
        comparison = compare_strategies(
            PlanInputs(debts=disagreement_debts, strategy="not-a-strategy", extra_monthly="200")
        )
        assert comparison.avalanche.payoff_order == ["C", "B", "A"]

    def test_unpayable_baseline_reported_as_none(self):
        debts = [
            {"name": "Small", "balance": 500, "minPayment": 100, "apr": 0},
            {"name": "Card", "balance": 10000, "minPayment": 100, "apr": 30},
        ]
        comparison = compare_strategies(PlanInputs(debts=debts, extra_monthly=300))
        assert comparison.minimum_only is None
        assert comparison.snowball.total_months > 0

    def test_identical_debts_no_difference(self, two_cards):
        comparison = compare_strategies(PlanInputs(debts=two_cards, extra_monthly="50"))
        assert comparison.avalanche_interest_savings == Decimal("0")
        assert comparison.avalanche_months_savings == 0
