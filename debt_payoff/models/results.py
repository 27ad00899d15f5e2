from dataclasses import dataclass, field
from decimal import Decimal

from debt_payoff.models.debt import Strategy


@dataclass(frozen=True)
class DebtMonthEntry:
    debt_id: str
    name: str
    last4: str | None = None
    payment: Decimal = Decimal("0.00")
    interest: Decimal = Decimal("0.00")
    principal: Decimal = Decimal("0.00")
    ending_balance: Decimal = Decimal("0.00")


@dataclass
class MonthlySnapshot:
    month: int  # 1-based
    entries: list[DebtMonthEntry] = field(default_factory=list)

    # Discretionary pool: extra + rolled-over minimums + one-time (month 1)
    snowball_extra: Decimal = Decimal("0.00")
    one_time_applied: Decimal = Decimal("0.00")

    total_paid_this_month: Decimal = Decimal("0.00")
    total_interest: Decimal = Decimal("0.00")
    total_remaining: Decimal = Decimal("0.00")

    # Calendar, only when the request carries a start date
    month_label: str | None = None
    date_iso: str | None = None

    def entry_for(self, debt_id: str) -> DebtMonthEntry | None:
        for entry in self.entries:
            if entry.debt_id == debt_id:
                return entry
        return None


@dataclass
class Simulation:
    """Raw simulator output, before summary aggregation."""
    schedule: list[MonthlySnapshot]
    payoff_months: dict[str, int]  # debt id -> month paid off
    payoff_order: list[str]  # debt ids, in the order they reached zero


@dataclass(frozen=True)
class PayoffRow:
    index: int  # 1-based position in attack order
    debt_id: str
    label: str
    name: str
    balance: Decimal
    min_payment: Decimal
    apr: Decimal
    monthly_rate: Decimal
    total_payment: Decimal  # Sum of this debt's payments in the schedule
    months_to_payoff: int | None  # Isolated estimate; None = never at minimum
    cumulative_months: int  # Month the full schedule pays this debt off
    last4: str | None = None
    due_date: int | None = None


@dataclass(frozen=True)
class PlanTotals:
    num_debts: int
    sum_balance: Decimal
    sum_min_payment: Decimal
    strategy: Strategy
    extra_monthly: Decimal
    one_time: Decimal
    total_months: int
    total_interest: Decimal
    total_paid: Decimal
    debt_free_month: int | None = None
    debt_free_date: str | None = None


@dataclass
class ComputeResult:
    rows: list[PayoffRow]
    totals: PlanTotals
    schedule: list[MonthlySnapshot]
    payoff_order: list[str]


@dataclass(frozen=True)
class RolloverCheck:
    name: str
    starting_balance: Decimal
    expected_payment: Decimal
    actual_payment: Decimal
    passed: bool


@dataclass
class ScheduleValidation:
    is_valid: bool
    messages: list[str] = field(default_factory=list)
    details: list[RolloverCheck] = field(default_factory=list)


@dataclass(frozen=True)
class PlanOutcome:
    label: str  # "snowball", "avalanche" or "minimum"
    total_months: int
    total_interest: Decimal
    total_paid: Decimal
    payoff_order: list[str]


@dataclass
class StrategyComparison:
    snowball: PlanOutcome
    avalanche: PlanOutcome
    minimum_only: PlanOutcome | None  # None when minimums alone never pay off

    @property
    def avalanche_interest_savings(self) -> Decimal:
        """Positive when avalanche pays less interest than snowball."""
        return self.snowball.total_interest - self.avalanche.total_interest

    @property
    def avalanche_months_savings(self) -> int:
        return self.snowball.total_months - self.avalanche.total_months
