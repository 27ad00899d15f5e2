"""Pydantic schemas for API request/response models.

JSON field names are camelCase; Python attributes stay snake_case.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- Request schemas ----

class PlanRequest(CamelModel):
    # Loosely typed rows (manual entry, spreadsheet or bank import); the engine normalizes them
    debts: list[dict[str, Any]] = Field(..., description="Raw debt records")
    extra_monthly: Decimal | str | None = Decimal("0")
    one_time: Decimal | str | None = Decimal("0")
    strategy: str | None = None
    start_date: date | None = Field(None, description="Anchor for month labels")


class DebtBatchRequest(CamelModel):
    debts: list[dict[str, Any]]


# ---- Response schemas ----

class PayoffRowResponse(CamelModel):
    index: int
    debt_id: str
    label: str
    name: str
    last4: str | None = None
    balance: Decimal
    min_payment: Decimal
    apr: Decimal
    monthly_rate: Decimal
    total_payment: Decimal
    months_to_payoff: int | None = None
    cumulative_months: int
    due_date: int | None = None


class PlanTotalsResponse(CamelModel):
    num_debts: int
    sum_balance: Decimal
    sum_min_payment: Decimal
    strategy: str
    extra_monthly: Decimal
    one_time: Decimal
    total_months: int
    total_interest: Decimal
    total_paid: Decimal
    debt_free_month: int | None = None
    debt_free_date: str | None = None


class DebtMonthEntryResponse(CamelModel):
    debt_id: str
    name: str
    last4: str | None = None
    payment: Decimal
    interest: Decimal
    principal: Decimal
    ending_balance: Decimal


class MonthlySnapshotResponse(CamelModel):
    month: int
    debts: list[DebtMonthEntryResponse]
    snowball_extra: Decimal
    one_time_applied: Decimal
    total_paid_this_month: Decimal
    total_interest: Decimal
    total_remaining: Decimal
    month_label: str | None = None
    date_iso: str | None = None


class PlanResponse(CamelModel):
    rows: list[PayoffRowResponse]
    totals: PlanTotalsResponse
    schedule: list[MonthlySnapshotResponse]
    payoff_order: list[str]


class PlanOutcomeResponse(CamelModel):
    label: str
    total_months: int
    total_interest: Decimal
    total_paid: Decimal
    payoff_order: list[str]


class ComparisonResponse(CamelModel):
    snowball: PlanOutcomeResponse
    avalanche: PlanOutcomeResponse
    minimum_only: PlanOutcomeResponse | None = None
    avalanche_interest_savings: Decimal
    avalanche_months_savings: int


class RolloverCheckResponse(CamelModel):
    name: str
    starting_balance: Decimal
    expected_payment: Decimal
    actual_payment: Decimal
    passed: bool


class ValidationResponse(CamelModel):
    is_valid: bool
    messages: list[str]
    details: list[RolloverCheckResponse]


class IntegrityIssueResponse(CamelModel):
    code: str
    message: str
    debt_name: str | None = None
    details: dict[str, str] = {}


class DebtBatchResponse(CamelModel):
    issues: list[IntegrityIssueResponse]
