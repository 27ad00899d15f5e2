"""Canonical test fixtures used across engine, API and CLI tests.

Two-card fixture: $300 and $1,000 at 0% APR, $50 minimums, $50 extra.
Disagreement fixture: three cards where snowball and avalanche orders differ.
"""

import pytest
from decimal import Decimal

from debt_payoff.models.debt import Debt, PlanInputs, Strategy


@pytest.fixture
def make_debt():
    """Factory for already-normalized Debt instances."""
    def _make(name: str, balance: str, min_payment: str, apr: str = "0", **kwargs) -> Debt:
        return Debt(
            id=kwargs.pop("id", name),
            name=name,
            balance=Decimal(balance),
            min_payment=Decimal(min_payment),
            apr=Decimal(apr),
            **kwargs,
        )
    return _make


@pytest.fixture
def two_cards() -> list[dict]:
    """Raw records: small and large zero-interest cards."""
    return [
        {"name": "A", "balance": 300, "minPayment": 50, "apr": 0},
        {"name": "B", "balance": 1000, "minPayment": 50, "apr": 0},
    ]


@pytest.fixture
def two_card_inputs(two_cards) -> PlanInputs:
    return PlanInputs(debts=two_cards, strategy=Strategy.SNOWBALL, extra_monthly=Decimal("50"))


@pytest.fixture
def disagreement_debts() -> list[dict]:
    """Snowball attacks B, C, A; avalanche attacks C, B, A."""
    return [
        {"name": "A", "balance": "5000", "minPayment": "100", "apr": "0.10"},
        {"name": "B", "balance": "500", "minPayment": "25", "apr": "0.25"},
        {"name": "C", "balance": "2000", "minPayment": "60", "apr": "0.30"},
    ]


@pytest.fixture
def unpayable_debt() -> list[dict]:
    """$10K at 30% with a $100 minimum: interest is $250/mo."""
    return [{"name": "Card", "balance": "10000", "minPayment": "100", "apr": "0.30"}]
