from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


class Strategy(Enum):
    SNOWBALL = "snowball"  # Smallest balance first
    AVALANCHE = "avalanche"  # Highest APR first


@dataclass(frozen=True)
class Debt:
    """A validated liability, ready for simulation."""
    id: str
    name: str
    balance: Decimal  # Cents
    min_payment: Decimal  # Monthly, cents
    apr: Decimal  # Fraction, e.g. Decimal("0.1899")
    last4: str | None = None
    due_date: int | None = None  # Day of month, display only

    @property
    def label(self) -> str:
        return f"{self.name} ({self.last4})" if self.last4 else self.name

    @property
    def monthly_rate(self) -> Decimal:
        return self.apr / 12


@dataclass(frozen=True)
class PlanInputs:
    # Raw records (mappings) or already-normalized Debt instances
    debts: list[Any]
    strategy: Strategy | str = Strategy.SNOWBALL
    extra_monthly: Decimal = Decimal("0")
    one_time: Decimal = Decimal("0")
    start_date: date | None = None  # Calendar labels only
