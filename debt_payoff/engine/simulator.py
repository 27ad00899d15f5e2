"""Amortization simulator: the month-by-month payoff state machine.

Pure computation. No I/O. Ordered Debt list in, Simulation out.

Each month:
  1. accrue interest on every active debt (APR / 12, rounded to cents)
  2. pool = extra + one-time (month 1 only) + minimums freed in prior months
  3. the first active debt in priority order is the target
  4. every other active debt pays its minimum, the target pays minimum + pool,
     both capped at balance + interest
  5. a debt that reaches zero is paid off; its minimum joins the pool next month.
     Capped surplus is not cascaded to another debt within the same month.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from debt_payoff.engine.errors import UnpayableDebtError
from debt_payoff.engine.snapshots import ScheduleRecorder
from debt_payoff.models.debt import Debt
from debt_payoff.models.results import Simulation

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")
SAFETY_HORIZON_MONTHS = 1200  # 100 years
MAX_MONEY = Decimal("1000000000000")


@dataclass
class _DebtState:
    debt: Debt
    balance: Decimal
    paid_off_month: int | None = None

    @property
    def active(self) -> bool:
        return self.paid_off_month is None


def monthly_interest(balance: Decimal, apr: Decimal) -> Decimal:
    """One month of interest on `balance`, rounded to cents."""
    return (balance * apr / 12).quantize(TWO_PLACES, ROUND_HALF_UP)


def _unpayable(state: _DebtState, horizon_months: int) -> UnpayableDebtError:
    debt = state.debt
    return UnpayableDebtError(
        debt_id=debt.id,
        debt_name=debt.label,
        monthly_interest=monthly_interest(debt.balance, debt.apr),
        min_payment=debt.min_payment,
        horizon_months=horizon_months,
    )


def _horizon_culprit(states: list[_DebtState]) -> _DebtState:
    """The debt to blame when the horizon runs out.

    Prefer the first debt whose minimum never covered its interest; otherwise the
    largest remaining balance.
    """
    active = [s for s in states if s.active]
    for state in active:
        if state.debt.min_payment <= monthly_interest(state.debt.balance, state.debt.apr):
            return state
    return max(active, key=lambda s: s.balance)


def simulate(
    ordered: list[Debt],
    extra_monthly: Decimal = ZERO,
    one_time: Decimal = ZERO,
    *,
    roll_over: bool = True,
    horizon_months: int = SAFETY_HORIZON_MONTHS,
    max_money: Decimal = MAX_MONEY,
    start_date: date | None = None,
) -> Simulation:
    """Run the payoff loop until every debt is paid off.

    Args:
        ordered: Debts in priority order (see ordering.order_debts)
        extra_monthly: Discretionary budget applied every month
        one_time: Lump sum added to the month-1 pool only
        roll_over: Add freed minimums to the pool (False = minimum-only baseline)
        horizon_months: Safety horizon; exceeding it raises UnpayableDebtError
        max_money: A balance growing past this can only be negative amortization
        start_date: Optional calendar anchor for snapshot labels

    Raises:
        UnpayableDebtError: a debt is never paid off within the horizon
    """
    states = [_DebtState(debt=d, balance=d.balance) for d in ordered]
    recorder = ScheduleRecorder(start_date=start_date)
    payoff_order: list[str] = []
    payoff_months: dict[str, int] = {}
    rolled = ZERO

    for month in range(1, horizon_months + 1):
        one_time_applied = one_time if month == 1 else ZERO
        pool = extra_monthly + one_time_applied + rolled
        target = next(s for s in states if s.active)
        freed = ZERO

        recorder.begin_month(month, snowball_extra=pool, one_time_applied=one_time_applied)
        for state in states:
            if not state.active:
                recorder.record_paid_off(state.debt)
                continue

            interest = monthly_interest(state.balance, state.debt.apr)
            scheduled = state.debt.min_payment + (pool if state is target else ZERO)
            payment = min(scheduled, state.balance + interest)
            principal = payment - interest
            ending = max(ZERO, state.balance - principal)
            if ending > max_money:
                raise _unpayable(state, horizon_months)

            recorder.record_payment(state.debt, payment, interest, principal, ending)
            state.balance = ending

            if ending == 0:
                state.paid_off_month = month
                payoff_months[state.debt.id] = month
                payoff_order.append(state.debt.id)
                freed += state.debt.min_payment
        recorder.close_month()

        if roll_over:
            rolled += freed
        if not any(s.active for s in states):
            return Simulation(
                schedule=recorder.schedule,
                payoff_months=payoff_months,
                payoff_order=payoff_order,
            )

    raise _unpayable(_horizon_culprit(states), horizon_months)
