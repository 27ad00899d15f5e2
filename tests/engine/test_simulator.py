from datetime import date
from decimal import Decimal

import pytest

from debt_payoff.engine.errors import UnpayableDebtError
from debt_payoff.engine.simulator import monthly_interest, simulate


class TestMonthlyInterest:
    def test_rounds_half_up_to_cents(self):
        # 1000 * 0.1999 / 12 = 16.658333...
        assert monthly_interest(Decimal("1000"), Decimal("0.1999")) == Decimal("16.66")

    def test_zero_apr(self):
        assert monthly_interest(Decimal("1000"), Decimal("0")) == Decimal("0.00")


class TestSingleDebt:
    def test_zero_interest_twelve_months(self, make_debt):
        """$1,200 at 0% paying $100/mo takes exactly 12 months."""
        sim = simulate([make_debt("Loan", "1200", "100")])
        assert len(sim.schedule) == 12
        assert sim.payoff_months == {"Loan": 12}
        assert all(s.entries[0].payment == Decimal("100") for s in sim.schedule)

    def test_final_payment_capped(self, make_debt):
        sim = simulate([make_debt("Loan", "250", "100")])
        assert [s.entries[0].payment for s in sim.schedule] == [
            Decimal("100"), Decimal("100"), Decimal("50.00"),
        ]
        assert sim.schedule[-1].entries[0].ending_balance == Decimal("0")

    def test_interest_accrues_before_payment(self, make_debt):
        sim = simulate([make_debt("Card", "1000", "100", "0.12")])
        first = sim.schedule[0].entries[0]
        assert first.interest == Decimal("10.00")
        assert first.principal == Decimal("90.00")
        assert first.ending_balance == Decimal("910.00")


class TestRollover:
    @pytest.fixture
    def ordered(self, make_debt):
        return [make_debt("A", "300", "50"), make_debt("B", "1000", "50")]

    def test_two_debts_with_extra(self, ordered):
        sim = simulate(ordered, extra_monthly=Decimal("50"))
        assert len(sim.schedule) == 9
        assert sim.payoff_order == ["A", "B"]
        assert sim.payoff_months == {"A": 3, "B": 9}

    def test_pool_grows_by_freed_minimum(self, ordered):
        sim = simulate(ordered, extra_monthly=Decimal("50"))
        pools = [s.snowball_extra for s in sim.schedule]
        assert pools[:3] == [Decimal("50")] * 3
        assert pools[3:] == [Decimal("100")] * 6

    def test_target_gets_minimum_plus_pool(self, ordered):
        sim = simulate(ordered, extra_monthly=Decimal("50"))
        assert sim.schedule[0].entry_for("A").payment == Decimal("100")
        assert sim.schedule[0].entry_for("B").payment == Decimal("50")
        assert sim.schedule[3].entry_for("B").payment == Decimal("150")

    def test_paid_off_debt_stays_with_zero_activity(self, ordered):
        sim = simulate(ordered, extra_monthly=Decimal("50"))
        entry = sim.schedule[5].entry_for("A")
        assert entry.payment == Decimal("0")
        assert entry.ending_balance == Decimal("0")
        assert len(sim.schedule[5].entries) == 2

    def test_one_time_applies_to_month_one_only(self, ordered):
        sim = simulate(ordered, extra_monthly=Decimal("50"), one_time=Decimal("100"))
        assert len(sim.schedule) == 8
        assert [s.snowball_extra for s in sim.schedule[:3]] == [
            Decimal("150"), Decimal("50"), Decimal("100"),
        ]
        assert [s.one_time_applied for s in sim.schedule[:2]] == [Decimal("100"), Decimal("0.00")]
        assert sim.schedule[0].entry_for("A").payment == Decimal("200")

    def test_no_rollover_baseline(self, ordered):
        sim = simulate(ordered, roll_over=False)
        assert len(sim.schedule) == 20
        assert all(s.snowball_extra == Decimal("0.00") for s in sim.schedule)

    def test_surplus_not_cascaded_within_month(self, make_debt):
        """A $120 target can only absorb $120; the rest of the pool is not spent that month."""
        sim = simulate(
            [make_debt("A", "120", "50"), make_debt("B", "1000", "50")],
            extra_monthly=Decimal("100"),
        )
        first, second = sim.schedule[0], sim.schedule[1]
        assert first.entry_for("A").payment == Decimal("120")
        assert first.entry_for("B").payment == Decimal("50")
        assert first.total_paid_this_month == Decimal("170")
        assert second.entry_for("B").payment == Decimal("200")
        assert second.entry_for("B").ending_balance == Decimal("750")


class TestConservation:
    @pytest.fixture
    def sim(self, make_debt):
        return simulate(
            [
                make_debt("B", "500", "25", "0.25"),
                make_debt("C", "2000", "60", "0.30"),
                make_debt("A", "5000", "100", "0.10"),
            ],
            extra_monthly=Decimal("200"),
        )

    def test_payment_splits_into_interest_and_principal(self, sim):
        for snapshot in sim.schedule:
            for entry in snapshot.entries:
                assert entry.payment == entry.interest + entry.principal

    def test_balances_never_increase_with_positive_amortization(self, sim):
        previous = {"A": Decimal("5000"), "B": Decimal("500"), "C": Decimal("2000")}
        for snapshot in sim.schedule:
            for entry in snapshot.entries:
                assert entry.ending_balance <= previous[entry.debt_id]
                assert entry.ending_balance >= 0
                previous[entry.debt_id] = entry.ending_balance

    def test_month_totals_are_entry_sums(self, sim):
        for snapshot in sim.schedule:
            assert snapshot.total_paid_this_month == sum(e.payment for e in snapshot.entries)
            assert snapshot.total_interest == sum(e.interest for e in snapshot.entries)
            assert snapshot.total_remaining == sum(e.ending_balance for e in snapshot.entries)

    def test_total_paid_equals_balance_plus_interest(self, sim):
        paid = sum(s.total_paid_this_month for s in sim.schedule)
        interest = sum(s.total_interest for s in sim.schedule)
        assert paid == Decimal("7500") + interest

    def test_principal_sums_to_original_balance_per_debt(self, sim):
        principal: dict[str, Decimal] = {}
        for snapshot in sim.schedule:
            for entry in snapshot.entries:
                principal[entry.debt_id] = principal.get(entry.debt_id, Decimal("0")) + entry.principal
        assert principal == {"A": Decimal("5000"), "B": Decimal("500"), "C": Decimal("2000")}

    def test_every_debt_reaches_exactly_zero(self, sim):
        assert all(e.ending_balance == 0 for e in sim.schedule[-1].entries)
        assert sorted(sim.payoff_order) == ["A", "B", "C"]


class TestTermination:
    def test_negative_amortization_raises(self, make_debt):
        with pytest.raises(UnpayableDebtError) as exc:
            simulate([make_debt("Card", "10000", "100", "0.30")])
        err = exc.value
        assert err.debt_id == "Card"
        assert err.monthly_interest == Decimal("250.00")
        assert err.min_payment == Decimal("100")

    def test_horizon_exhausted_raises(self, make_debt):
        with pytest.raises(UnpayableDebtError) as exc:
            simulate([make_debt("Loan", "1200", "100")], horizon_months=6)
        assert exc.value.horizon_months == 6

    def test_extra_rescues_unpayable_minimum(self, make_debt):
        sim = simulate(
            [make_debt("Small", "500", "100"), make_debt("Card", "10000", "100", "0.30")],
            extra_monthly=Decimal("300"),
        )
        assert sim.payoff_order == ["Small", "Card"]


class TestCalendar:
    def test_labels_follow_start_date(self, make_debt):
        sim = simulate([make_debt("Loan", "300", "100")], start_date=date(2025, 11, 15))
        assert [s.month_label for s in sim.schedule] == ["Nov 2025", "Dec 2025", "Jan 2026"]
        assert sim.schedule[2].date_iso == "2026-01-01"

    def test_no_start_date_no_labels(self, make_debt):
        sim = simulate([make_debt("Loan", "300", "100")])
        assert sim.schedule[0].month_label is None
        assert sim.schedule[0].date_iso is None
