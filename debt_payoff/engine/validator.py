"""Schedule validator: advisory self-check of a completed schedule.

Re-derives the expected progression by ascending starting balance, whatever
strategy produced the schedule, and checks that every debt is paid off and that
each freed payment rolled into the next debt. Output is for display only; it
never blocks a computation.
"""

from decimal import Decimal

from debt_payoff.models.results import MonthlySnapshot, RolloverCheck, ScheduleValidation

PAID_OFF_EPSILON = Decimal("0.01")


def _payoff_month(schedule: list[MonthlySnapshot], debt_id: str) -> int | None:
    for snapshot in schedule:
        entry = snapshot.entry_for(debt_id)
        if entry is not None and entry.ending_balance <= PAID_OFF_EPSILON:
            return snapshot.month
    return None


def _payment(schedule: list[MonthlySnapshot], debt_id: str, month: int) -> Decimal:
    entry = schedule[month - 1].entry_for(debt_id)
    return entry.payment if entry is not None else Decimal("0.00")


def validate_schedule(schedule: list[MonthlySnapshot]) -> ScheduleValidation:
    if not schedule:
        return ScheduleValidation(is_valid=False, messages=["Schedule is empty"])

    # Starting balance = month-1 ending balance + month-1 principal
    first = schedule[0]
    debts = sorted(
        ((e.ending_balance + e.principal, e.name, e.debt_id) for e in first.entries),
        key=lambda item: (item[0], item[1]),
    )

    messages: list[str] = []
    details: list[RolloverCheck] = []
    is_valid = True

    last = schedule[-1]
    for starting_balance, name, debt_id in debts:
        entry = last.entry_for(debt_id)
        if entry is None or entry.ending_balance > PAID_OFF_EPSILON:
            is_valid = False
            remaining = entry.ending_balance if entry is not None else starting_balance
            messages.append(f"{name} is not fully paid off (ending balance ${remaining:,.2f})")

    for (_, prev_name, prev_id), (starting_balance, name, debt_id) in zip(debts, debts[1:]):
        prev_payoff = _payoff_month(schedule, prev_id)
        if prev_payoff is None or prev_payoff >= len(schedule):
            continue
        own_payoff = _payoff_month(schedule, debt_id)
        if own_payoff is not None and own_payoff <= prev_payoff:
            # Closed before it could become the target; nothing rolled into it
            continue

        # Recurring payment flowing into the previous debt before it closed
        flowing_month = max(prev_payoff - 1, 1)
        expected = _payment(schedule, prev_id, flowing_month) - schedule[flowing_month - 1].one_time_applied
        expected = max(expected, Decimal("0.00"))

        target_month = prev_payoff + 1
        actual = _payment(schedule, debt_id, target_month)
        passed = actual >= expected or own_payoff == target_month

        details.append(RolloverCheck(
            name=name,
            starting_balance=starting_balance,
            expected_payment=expected,
            actual_payment=actual,
            passed=passed,
        ))
        if passed:
            messages.append(f"{name} payment rolled over correctly: ${actual:,.2f}")
        else:
            is_valid = False
            messages.append(
                f"{name} payment did not roll over after {prev_name} was paid off: "
                f"expected at least ${expected:,.2f}, got ${actual:,.2f}"
            )

    if is_valid:
        messages.append("Schedule verified: every debt is paid off and freed payments roll forward.")
    else:
        messages.append("Schedule check found problems; review the messages above.")

    return ScheduleValidation(is_valid=is_valid, messages=messages, details=details)
