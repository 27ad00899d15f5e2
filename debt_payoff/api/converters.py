"""Conversions between API schemas and engine inputs/results.

Shared by the HTTP routes and the CLI.
"""

from debt_payoff.api.schemas import (
    DebtMonthEntryResponse,
    MonthlySnapshotResponse,
    PayoffRowResponse,
    PlanOutcomeResponse,
    PlanRequest,
    PlanResponse,
    PlanTotalsResponse,
)
from debt_payoff.config import Settings
from debt_payoff.models.debt import PlanInputs
from debt_payoff.models.results import ComputeResult, PlanOutcome


def build_inputs(req: PlanRequest, settings: Settings) -> PlanInputs:
    return PlanInputs(
        debts=req.debts,
        strategy=req.strategy or settings.default_strategy,
        extra_monthly=req.extra_monthly,
        one_time=req.one_time,
        start_date=req.start_date,
    )


def result_to_response(result: ComputeResult) -> PlanResponse:
    """Convert engine ComputeResult to API response."""
    rows = [
        PayoffRowResponse(
            index=r.index,
            debt_id=r.debt_id,
            label=r.label,
            name=r.name,
            last4=r.last4,
            balance=r.balance,
            min_payment=r.min_payment,
            apr=r.apr,
            monthly_rate=r.monthly_rate,
            total_payment=r.total_payment,
            months_to_payoff=r.months_to_payoff,
            cumulative_months=r.cumulative_months,
            due_date=r.due_date,
        )
        for r in result.rows
    ]

    t = result.totals
    totals = PlanTotalsResponse(
        num_debts=t.num_debts,
        sum_balance=t.sum_balance,
        sum_min_payment=t.sum_min_payment,
        strategy=t.strategy.value,
        extra_monthly=t.extra_monthly,
        one_time=t.one_time,
        total_months=t.total_months,
        total_interest=t.total_interest,
        total_paid=t.total_paid,
        debt_free_month=t.debt_free_month,
        debt_free_date=t.debt_free_date,
    )

    schedule = [
        MonthlySnapshotResponse(
            month=s.month,
            debts=[
                DebtMonthEntryResponse(
                    debt_id=e.debt_id,
                    name=e.name,
                    last4=e.last4,
                    payment=e.payment,
                    interest=e.interest,
                    principal=e.principal,
                    ending_balance=e.ending_balance,
                )
                for e in s.entries
            ],
            snowball_extra=s.snowball_extra,
            one_time_applied=s.one_time_applied,
            total_paid_this_month=s.total_paid_this_month,
            total_interest=s.total_interest,
            total_remaining=s.total_remaining,
            month_label=s.month_label,
            date_iso=s.date_iso,
        )
        for s in result.schedule
    ]

    return PlanResponse(rows=rows, totals=totals, schedule=schedule, payoff_order=result.payoff_order)


def outcome_to_response(outcome: PlanOutcome | None) -> PlanOutcomeResponse | None:
    if outcome is None:
        return None
    return PlanOutcomeResponse(
        label=outcome.label,
        total_months=outcome.total_months,
        total_interest=outcome.total_interest,
        total_paid=outcome.total_paid,
        payoff_order=outcome.payoff_order,
    )
