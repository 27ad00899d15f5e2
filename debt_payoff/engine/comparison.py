"""Strategy comparison: snowball vs avalanche vs minimum payments only.

Reports outcomes side by side; choosing a strategy is left to the user.
"""

import logging
from dataclasses import replace
from decimal import Decimal

from debt_payoff.engine.errors import UnpayableDebtError
from debt_payoff.engine.normalizer import MAX_MONEY
from debt_payoff.engine.ordering import order_debts
from debt_payoff.engine.plan import compute_plan, prepare
from debt_payoff.engine.simulator import SAFETY_HORIZON_MONTHS, simulate
from debt_payoff.models.debt import Debt, PlanInputs, Strategy
from debt_payoff.models.results import ComputeResult, PlanOutcome, StrategyComparison

logger = logging.getLogger(__name__)


def _outcome(result: ComputeResult) -> PlanOutcome:
    return PlanOutcome(
        label=result.totals.strategy.value,
        total_months=result.totals.total_months,
        total_interest=result.totals.total_interest,
        total_paid=result.totals.total_paid,
        payoff_order=list(result.payoff_order),
    )


def minimum_only(
    debts: list[Debt],
    horizon_months: int = SAFETY_HORIZON_MONTHS,
    max_money: Decimal = MAX_MONEY,
) -> PlanOutcome:
    """Baseline: each debt pays only its own minimum, nothing rolls over.

    Raises UnpayableDebtError when some minimum never covers its interest.
    """
    simulation = simulate(
        order_debts(debts, Strategy.SNOWBALL),
        roll_over=False,
        horizon_months=horizon_months,
        max_money=max_money,
    )
    schedule = simulation.schedule
    return PlanOutcome(
        label="minimum",
        total_months=schedule[-1].month,
        total_interest=sum((s.total_interest for s in schedule), Decimal("0.00")),
        total_paid=sum((s.total_paid_this_month for s in schedule), Decimal("0.00")),
        payoff_order=simulation.payoff_order,
    )


def compare_strategies(
    inputs: PlanInputs,
    horizon_months: int = SAFETY_HORIZON_MONTHS,
    max_money: Decimal = MAX_MONEY,
) -> StrategyComparison:
    """Compute both strategies and the minimum-only baseline for the same inputs.

    The requested strategy on `inputs` is ignored. Errors from either strategy
    propagate; an unpayable minimum-only baseline is reported as None.
    """
    snowball = compute_plan(
        replace(inputs, strategy=Strategy.SNOWBALL), horizon_months=horizon_months, max_money=max_money
    )
    avalanche = compute_plan(
        replace(inputs, strategy=Strategy.AVALANCHE), horizon_months=horizon_months, max_money=max_money
    )

    debts, _, _, _ = prepare(replace(inputs, strategy=Strategy.SNOWBALL), max_money)
    try:
        baseline = minimum_only(debts, horizon_months=horizon_months, max_money=max_money)
    except UnpayableDebtError as e:
        logger.warning("Minimum-only baseline never pays off: %s", e)
        baseline = None

    return StrategyComparison(
        snowball=_outcome(snowball),
        avalanche=_outcome(avalanche),
        minimum_only=baseline,
    )
