from datetime import date
from decimal import Decimal

import pytest

from debt_payoff.engine.simulator import simulate
from debt_payoff.engine.summary import (
    build_rows,
    build_totals,
    isolated_months_to_payoff,
    total_payments_by_debt,
)
from debt_payoff.models.debt import Strategy


class TestIsolatedMonthsToPayoff:
    def test_zero_rate_is_ceiling_division(self):
        assert isolated_months_to_payoff(Decimal("1000"), Decimal("0"), Decimal("50")) == 20
        assert isolated_months_to_payoff(Decimal("1010"), Decimal("0"), Decimal("50")) == 21

    def test_amortization_formula(self):
        assert isolated_months_to_payoff(Decimal("500"), Decimal("0.20"), Decimal("25")) == 25
        assert isolated_months_to_payoff(Decimal("2000"), Decimal("0.10"), Decimal("50")) == 49

    def test_minimum_below_interest_is_none(self):
        assert isolated_months_to_payoff(Decimal("10000"), Decimal("0.30"), Decimal("100")) is None

    def test_minimum_equal_to_interest_is_none(self):
        assert isolated_months_to_payoff(Decimal("1200"), Decimal("0.10"), Decimal("10")) is None

    def test_nothing_owed(self):
        assert isolated_months_to_payoff(Decimal("0"), Decimal("0.20"), Decimal("25")) == 0

    def test_no_minimum(self):
        assert isolated_months_to_payoff(Decimal("100"), Decimal("0"), Decimal("0")) is None


class TestBuildRows:
    @pytest.fixture
    def ordered(self, make_debt):
        return [make_debt("A", "300", "50"), make_debt("B", "1000", "50")]

    @pytest.fixture
    def simulation(self, ordered):
        return simulate(ordered, extra_monthly=Decimal("50"))

    def test_rows_follow_attack_order(self, ordered, simulation):
        rows = build_rows(ordered, simulation)
        assert [(r.index, r.name) for r in rows] == [(1, "A"), (2, "B")]

    def test_total_payment_per_debt(self, ordered, simulation):
        rows = build_rows(ordered, simulation)
        assert rows[0].total_payment == Decimal("300")
        assert rows[1].total_payment == Decimal("1000")

    def test_isolated_and_cumulative_months_differ(self, ordered, simulation):
        rows = build_rows(ordered, simulation)
        assert [r.months_to_payoff for r in rows] == [6, 20]
        assert [r.cumulative_months for r in rows] == [3, 9]

    def test_payments_by_debt(self, simulation):
        paid = total_payments_by_debt(simulation.schedule)
        assert paid == {"A": Decimal("300"), "B": Decimal("1000")}


class TestBuildTotals:
    def test_two_card_totals(self, make_debt):
        debts = [make_debt("A", "300", "50"), make_debt("B", "1000", "50")]
        sim = simulate(debts, extra_monthly=Decimal("50"))
        totals = build_totals(debts, sim, Strategy.SNOWBALL, Decimal("50.00"), Decimal("0.00"))
        assert totals.num_debts == 2
        assert totals.sum_balance == Decimal("1300")
        assert totals.sum_min_payment == Decimal("100")
        assert totals.total_months == 9
        assert totals.total_paid == Decimal("1300")
        assert totals.total_interest == Decimal("0")
        assert totals.debt_free_month == 9
        assert totals.debt_free_date is None

    def test_debt_free_date_from_start(self, make_debt):
        debts = [make_debt("Loan", "1200", "100")]
        sim = simulate(debts, start_date=date(2025, 1, 10))
        totals = build_totals(
            debts, sim, Strategy.SNOWBALL, Decimal("0.00"), Decimal("0.00"), start_date=date(2025, 1, 10)
        )
        assert totals.debt_free_date == "Dec 2025"
