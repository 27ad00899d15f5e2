"""Plan orchestrator: composes normalizer, orderer, simulator and aggregator.

Pure computation. No I/O. PlanInputs in, ComputeResult out. The same inputs
always produce the same result.
"""

import decimal
import logging
from decimal import Decimal, ROUND_HALF_UP

from debt_payoff.engine.errors import ComputationOverflow, ValidationError
from debt_payoff.engine.normalizer import MAX_MONEY, normalize_debts, parse_money
from debt_payoff.engine.ordering import order_debts, parse_strategy
from debt_payoff.engine.simulator import SAFETY_HORIZON_MONTHS, simulate
from debt_payoff.engine.summary import build_rows, build_totals
from debt_payoff.engine.validator import validate_schedule
from debt_payoff.models.debt import Debt, PlanInputs, Strategy
from debt_payoff.models.results import ComputeResult, ScheduleValidation

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def parse_budget(value, field: str, max_money: Decimal = MAX_MONEY) -> Decimal:
    """Validate a non-negative budget amount (extraMonthly / oneTime)."""
    amount = parse_money(value, field)
    if amount is None:
        return Decimal("0.00")
    if amount.is_nan():
        raise ValidationError(f"{field} is not a number", field=field)
    if amount.is_infinite() or amount > max_money:
        raise ComputationOverflow(f"{field} {amount} exceeds the safe range of {max_money}")
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative", field=field)
    return amount.quantize(TWO_PLACES, ROUND_HALF_UP)


def prepare(
    inputs: PlanInputs,
    max_money: Decimal = MAX_MONEY,
) -> tuple[list[Debt], Strategy, Decimal, Decimal]:
    """Normalize and validate everything a simulation needs."""
    strategy = parse_strategy(inputs.strategy)
    extra_monthly = parse_budget(inputs.extra_monthly, "extraMonthly", max_money)
    one_time = parse_budget(inputs.one_time, "oneTime", max_money)
    debts = normalize_debts(inputs.debts, max_money=max_money)
    return debts, strategy, extra_monthly, one_time


def _check_totals(result: ComputeResult, max_money: Decimal) -> None:
    totals = result.totals
    for field in ("sum_balance", "sum_min_payment", "total_paid", "total_interest"):
        value = getattr(totals, field)
        if not value.is_finite() or value > max_money:
            raise ComputationOverflow(f"{field} {value} exceeds the safe range of {max_money}")


def compute_plan(
    inputs: PlanInputs,
    horizon_months: int = SAFETY_HORIZON_MONTHS,
    max_money: Decimal = MAX_MONEY,
) -> ComputeResult:
    """Compute a full payoff plan.

    Raises:
        ValidationError: nothing to simulate, duplicates, unknown strategy, bad budget
        UnpayableDebtError: minimums never outpace interest within the horizon
        ComputationOverflow: amounts outside the safe numeric range
    """
    debts, strategy, extra_monthly, one_time = prepare(inputs, max_money)
    ordered = order_debts(debts, strategy)

    try:
        simulation = simulate(
            ordered,
            extra_monthly=extra_monthly,
            one_time=one_time,
            horizon_months=horizon_months,
            max_money=max_money,
            start_date=inputs.start_date,
        )
        result = ComputeResult(
            rows=build_rows(ordered, simulation),
            totals=build_totals(
                debts, simulation, strategy, extra_monthly, one_time, start_date=inputs.start_date
            ),
            schedule=simulation.schedule,
            payoff_order=simulation.payoff_order,
        )
    except (decimal.Overflow, decimal.InvalidOperation) as e:
        raise ComputationOverflow(f"Arithmetic overflow while simulating: {e!r}") from e

    _check_totals(result, max_money)
    logger.info(
        "Computed %s plan: %d debts, %d months, interest %s",
        strategy.value,
        result.totals.num_debts,
        result.totals.total_months,
        result.totals.total_interest,
    )
    return result


def compute_and_validate(
    inputs: PlanInputs,
    horizon_months: int = SAFETY_HORIZON_MONTHS,
    max_money: Decimal = MAX_MONEY,
) -> tuple[ComputeResult, ScheduleValidation]:
    result = compute_plan(inputs, horizon_months=horizon_months, max_money=max_money)
    report = validate_schedule(result.schedule)
    if not report.is_valid:
        logger.warning("Schedule check flagged %s plan: %s", result.totals.strategy.value, report.messages)
    return result, report
