"""Advisory integrity rules for imported debt batches.

Catches import and mapping mistakes (phantom rows, percent/fraction mix-ups, a
whole sheet coerced to one APR) before the user sees a surprising plan. Never
blocks computation.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping

from debt_payoff.engine.errors import ValidationError
from debt_payoff.engine.normalizer import normalize_apr, parse_money

MAX_REALISTIC_APR = Decimal("0.80")


class IssueCode(Enum):
    EMPTY_DEBT_ROW = "EMPTY_DEBT_ROW"
    NEGATIVE_BALANCE = "NEGATIVE_BALANCE"
    NEGATIVE_MINIMUM = "NEGATIVE_MINIMUM"
    ZERO_MIN_WITH_BALANCE = "ZERO_MIN_WITH_BALANCE"
    APR_OUT_OF_RANGE = "APR_OUT_OF_RANGE"
    APR_BATCH_ANOMALY = "APR_BATCH_ANOMALY"
    UNREADABLE_FIELD = "UNREADABLE_FIELD"


@dataclass(frozen=True)
class IntegrityIssue:
    code: IssueCode
    message: str
    debt_name: str | None = None
    details: dict[str, str] = field(default_factory=dict)


def _read(raw: Mapping[str, Any], keys: tuple[str, ...], name: str, issues: list[IntegrityIssue]) -> Decimal | None:
    for key in keys:
        if key in raw:
            try:
                value = parse_money(raw[key], keys[0])
            except ValidationError as e:
                issues.append(IntegrityIssue(IssueCode.UNREADABLE_FIELD, str(e), name))
                return None
            if value is not None and value.is_nan():
                issues.append(IntegrityIssue(IssueCode.UNREADABLE_FIELD, f"{keys[0]} is not a number", name))
                return None
            return value
    return None


def check_debt_batch(records: Iterable[Mapping[str, Any]]) -> list[IntegrityIssue]:
    """Run per-row and batch-level rules over raw records."""
    issues: list[IntegrityIssue] = []
    aprs: list[Decimal] = []

    for raw in records:
        name = str(raw.get("name") or "").strip()
        label = name or "(unnamed debt)"
        balance = _read(raw, ("balance",), label, issues)
        min_payment = _read(raw, ("minPayment", "min_payment"), label, issues)
        apr = _read(raw, ("apr",), label, issues)

        if not name and balance is None and min_payment is None and apr is None:
            issues.append(IntegrityIssue(IssueCode.EMPTY_DEBT_ROW, "Found a completely empty debt row."))
            continue

        if balance is not None and balance < 0:
            issues.append(IntegrityIssue(
                IssueCode.NEGATIVE_BALANCE,
                "Debt has a negative balance.",
                label,
                {"balance": str(balance)},
            ))
        if min_payment is not None and min_payment < 0:
            issues.append(IntegrityIssue(
                IssueCode.NEGATIVE_MINIMUM,
                "Debt has a negative minimum payment.",
                label,
                {"minPayment": str(min_payment)},
            ))
        if balance is not None and balance > 0 and not min_payment:
            issues.append(IntegrityIssue(
                IssueCode.ZERO_MIN_WITH_BALANCE,
                "Debt has a balance but no minimum payment; it will be left out of the plan.",
                label,
                {"balance": str(balance)},
            ))

        if apr is not None and apr.is_finite():
            fraction = normalize_apr(apr)
            aprs.append(fraction)
            if fraction < 0 or fraction > MAX_REALISTIC_APR:
                issues.append(IntegrityIssue(
                    IssueCode.APR_OUT_OF_RANGE,
                    f"APR {fraction * 100:.2f}% is outside the expected 0-{MAX_REALISTIC_APR * 100:.0f}% range.",
                    label,
                    {"apr": str(fraction)},
                ))

    if len(aprs) >= 2 and len(set(aprs)) == 1:
        issues.append(IntegrityIssue(
            IssueCode.APR_BATCH_ANOMALY,
            f"All {len(aprs)} debts share the same APR ({aprs[0] * 100:.2f}%); check the import mapping.",
            details={"apr": str(aprs[0])},
        ))

    return issues
