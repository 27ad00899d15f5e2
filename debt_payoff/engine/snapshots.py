"""Snapshot recorder: captures each simulated month exactly as computed."""

import calendar
from datetime import date
from decimal import Decimal

from debt_payoff.models.debt import Debt
from debt_payoff.models.results import DebtMonthEntry, MonthlySnapshot


def add_months(start: date, months: int) -> date:
    """First day of the month `months` after `start`'s month."""
    index = start.month - 1 + months
    return date(start.year + index // 12, index % 12 + 1, 1)


def month_label(value: date) -> str:
    return f"{calendar.month_abbr[value.month]} {value.year}"


class ScheduleRecorder:
    """Accumulates MonthlySnapshot rows while the simulator runs.

    Month-level totals are sums over the recorded per-debt entries, never
    re-derived afterwards.
    """

    def __init__(self, start_date: date | None = None):
        self.start_date = start_date
        self.schedule: list[MonthlySnapshot] = []
        self._current: MonthlySnapshot | None = None

    def begin_month(self, month: int, snowball_extra: Decimal, one_time_applied: Decimal) -> None:
        snapshot = MonthlySnapshot(
            month=month,
            snowball_extra=snowball_extra,
            one_time_applied=one_time_applied,
        )
        if self.start_date is not None:
            first_of_month = add_months(self.start_date, month - 1)
            snapshot.month_label = month_label(first_of_month)
            snapshot.date_iso = first_of_month.isoformat()
        self._current = snapshot

    def record_payment(
        self,
        debt: Debt,
        payment: Decimal,
        interest: Decimal,
        principal: Decimal,
        ending_balance: Decimal,
    ) -> None:
        self._current.entries.append(DebtMonthEntry(
            debt_id=debt.id,
            name=debt.name,
            last4=debt.last4,
            payment=payment,
            interest=interest,
            principal=principal,
            ending_balance=ending_balance,
        ))

    def record_paid_off(self, debt: Debt) -> None:
        """Debts closed in an earlier month stay in the table with zero activity."""
        self._current.entries.append(DebtMonthEntry(debt_id=debt.id, name=debt.name, last4=debt.last4))

    def close_month(self) -> MonthlySnapshot:
        snapshot = self._current
        snapshot.total_paid_this_month = sum((e.payment for e in snapshot.entries), Decimal("0"))
        snapshot.total_interest = sum((e.interest for e in snapshot.entries), Decimal("0"))
        snapshot.total_remaining = sum((e.ending_balance for e in snapshot.entries), Decimal("0"))
        self.schedule.append(snapshot)
        self._current = None
        return snapshot
