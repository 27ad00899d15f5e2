"""Summary aggregation: display rows and plan totals.

Pure functions. No I/O.

Two different month counts are reported per debt and must not be confused:
  months_to_payoff   isolated estimate, the debt alone at its own minimum
  cumulative_months  the month the full schedule actually pays it off
"""

from datetime import date
from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP

from debt_payoff.engine.snapshots import add_months, month_label
from debt_payoff.models.debt import Debt, Strategy
from debt_payoff.models.results import MonthlySnapshot, PayoffRow, PlanTotals, Simulation

RATE_PLACES = Decimal("0.000001")


def isolated_months_to_payoff(balance: Decimal, apr: Decimal, min_payment: Decimal) -> int | None:
    """Months to clear `balance` paying only `min_payment`, ignoring every other debt.

    n = ln(P / (P - rB)) / ln(1 + r)

    Returns None when the minimum never outpaces interest (P <= rB): the payoff
    is undefined, not a number.
    """
    if balance <= 0:
        return 0
    if min_payment <= 0:
        return None

    r = apr / 12
    if r == 0:
        return int((balance / min_payment).to_integral_value(rounding=ROUND_CEILING))

    monthly_interest = r * balance
    if min_payment <= monthly_interest:
        return None

    n = (min_payment / (min_payment - monthly_interest)).ln() / (1 + r).ln()
    # Trim floating residue so an exact integer term does not round up
    n = n.quantize(RATE_PLACES, ROUND_HALF_UP)
    return int(n.to_integral_value(rounding=ROUND_CEILING))


def total_payments_by_debt(schedule: list[MonthlySnapshot]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for snapshot in schedule:
        for entry in snapshot.entries:
            totals[entry.debt_id] = totals.get(entry.debt_id, Decimal("0.00")) + entry.payment
    return totals


def build_rows(ordered: list[Debt], simulation: Simulation) -> list[PayoffRow]:
    """One display row per debt, in attack order."""
    paid = total_payments_by_debt(simulation.schedule)
    rows: list[PayoffRow] = []
    for index, debt in enumerate(ordered, start=1):
        rows.append(PayoffRow(
            index=index,
            debt_id=debt.id,
            label=debt.label,
            name=debt.name,
            last4=debt.last4,
            balance=debt.balance,
            min_payment=debt.min_payment,
            apr=debt.apr,
            monthly_rate=debt.monthly_rate.quantize(RATE_PLACES, ROUND_HALF_UP),
            total_payment=paid.get(debt.id, Decimal("0.00")),
            months_to_payoff=isolated_months_to_payoff(debt.balance, debt.apr, debt.min_payment),
            cumulative_months=simulation.payoff_months[debt.id],
            due_date=debt.due_date,
        ))
    return rows


def build_totals(
    debts: list[Debt],
    simulation: Simulation,
    strategy: Strategy,
    extra_monthly: Decimal,
    one_time: Decimal,
    start_date: date | None = None,
) -> PlanTotals:
    """Input reductions come from the normalized debts; month counts from the schedule."""
    schedule = simulation.schedule
    total_months = schedule[-1].month if schedule else 0

    debt_free_date = None
    if start_date is not None and total_months:
        debt_free_date = month_label(add_months(start_date, total_months - 1))

    return PlanTotals(
        num_debts=len(debts),
        sum_balance=sum((d.balance for d in debts), Decimal("0.00")),
        sum_min_payment=sum((d.min_payment for d in debts), Decimal("0.00")),
        strategy=strategy,
        extra_monthly=extra_monthly,
        one_time=one_time,
        total_months=total_months,
        total_interest=sum((s.total_interest for s in schedule), Decimal("0.00")),
        total_paid=sum((s.total_paid_this_month for s in schedule), Decimal("0.00")),
        debt_free_month=total_months or None,
        debt_free_date=debt_free_date,
    )
