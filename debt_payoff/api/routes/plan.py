"""Debt plan routes: compute, compare, validate, integrity check."""

from fastapi import APIRouter, Depends, HTTPException

from debt_payoff.api.converters import build_inputs, outcome_to_response, result_to_response
from debt_payoff.api.deps import get_settings
from debt_payoff.api.schemas import (
    ComparisonResponse,
    DebtBatchRequest,
    DebtBatchResponse,
    IntegrityIssueResponse,
    PlanRequest,
    PlanResponse,
    RolloverCheckResponse,
    ValidationResponse,
)
from debt_payoff.config import Settings
from debt_payoff.engine.comparison import compare_strategies
from debt_payoff.engine.errors import PlanError, UnpayableDebtError
from debt_payoff.engine.integrity import check_debt_batch
from debt_payoff.engine.plan import compute_and_validate, compute_plan

router = APIRouter(prefix="/api/v1", tags=["plan"])


def _http_error(e: PlanError) -> HTTPException:
    """Unpayable plans are 422 with structured detail; bad or oversized input is 400."""
    if isinstance(e, UnpayableDebtError):
        return HTTPException(status_code=422, detail=e.to_dict())
    return HTTPException(status_code=400, detail=str(e))


@router.post("/plan/compute", response_model=PlanResponse)
def compute(req: PlanRequest, settings: Settings = Depends(get_settings)):
    """Primary endpoint: debts + budget + strategy → schedule, rows and totals."""
    try:
        result = compute_plan(
            build_inputs(req, settings),
            horizon_months=settings.horizon_months,
            max_money=settings.max_money,
        )
    except PlanError as e:
        raise _http_error(e)
    return result_to_response(result)


@router.post("/plan/compare", response_model=ComparisonResponse)
def compare(req: PlanRequest, settings: Settings = Depends(get_settings)):
    """Snowball vs avalanche vs minimum payments, for the same debts and budget."""
    try:
        comparison = compare_strategies(
            build_inputs(req, settings),
            horizon_months=settings.horizon_months,
            max_money=settings.max_money,
        )
    except PlanError as e:
        raise _http_error(e)
    return ComparisonResponse(
        snowball=outcome_to_response(comparison.snowball),
        avalanche=outcome_to_response(comparison.avalanche),
        minimum_only=outcome_to_response(comparison.minimum_only),
        avalanche_interest_savings=comparison.avalanche_interest_savings,
        avalanche_months_savings=comparison.avalanche_months_savings,
    )


@router.post("/plan/validate", response_model=ValidationResponse)
def validate(req: PlanRequest, settings: Settings = Depends(get_settings)):
    """Compute the plan, then run the advisory schedule check over it."""
    try:
        _, report = compute_and_validate(
            build_inputs(req, settings),
            horizon_months=settings.horizon_months,
            max_money=settings.max_money,
        )
    except PlanError as e:
        raise _http_error(e)
    return ValidationResponse(
        is_valid=report.is_valid,
        messages=report.messages,
        details=[
            RolloverCheckResponse(
                name=d.name,
                starting_balance=d.starting_balance,
                expected_payment=d.expected_payment,
                actual_payment=d.actual_payment,
                passed=d.passed,
            )
            for d in report.details
        ],
    )


@router.post("/debts/check", response_model=DebtBatchResponse)
def check_debts(req: DebtBatchRequest):
    """Advisory integrity rules for an imported batch. Never blocks computation."""
    issues = check_debt_batch(req.debts)
    return DebtBatchResponse(
        issues=[
            IntegrityIssueResponse(
                code=i.code.value,
                message=i.message,
                debt_name=i.debt_name,
                details=i.details,
            )
            for i in issues
        ]
    )
