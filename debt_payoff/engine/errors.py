"""Engine failure taxonomy.

Every failure is a pure-function failure: nothing is mutated, nothing is retried.
"""

from decimal import Decimal


class PlanError(ValueError):
    """Base class for every debt plan computation failure."""


class ValidationError(PlanError):
    """Inputs cannot be simulated: empty set, duplicate keys, unknown strategy, bad field."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class UnpayableDebtError(PlanError):
    """Minimum payments never outpace interest accrual within the safety horizon."""

    def __init__(
        self,
        debt_id: str,
        debt_name: str,
        monthly_interest: Decimal,
        min_payment: Decimal,
        horizon_months: int,
    ):
        self.debt_id = debt_id
        self.debt_name = debt_name
        self.monthly_interest = monthly_interest
        self.min_payment = min_payment
        self.horizon_months = horizon_months
        super().__init__(
            f"{debt_name} cannot be paid off within {horizon_months} months: "
            f"monthly interest ${monthly_interest:,.2f} vs minimum payment ${min_payment:,.2f}"
        )

    def to_dict(self) -> dict:
        return {
            "message": str(self),
            "debtId": self.debt_id,
            "debtName": self.debt_name,
            "monthlyInterest": str(self.monthly_interest),
            "minPayment": str(self.min_payment),
            "horizonMonths": self.horizon_months,
        }


class ComputationOverflow(PlanError):
    """A monetary value is infinite or outside the safe numeric range."""
