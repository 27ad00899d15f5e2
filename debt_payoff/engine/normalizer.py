"""Debt normalizer: loosely typed records in, validated Debt list out.

Records come from manual entry, spreadsheet import or bank-liability import, so
keys may be camelCase or snake_case and numbers may arrive as strings such as
"$1,200.50" or "18.99%". Pure functions. No I/O.
"""

import logging
import re
from dataclasses import asdict, dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Mapping

from debt_payoff.engine.errors import ComputationOverflow, ValidationError
from debt_payoff.models.debt import Debt

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
MAX_MONEY = Decimal("1000000000000")

_FIELD_ALIASES = {
    "min_payment": ("minPayment", "min_payment", "minimumPayment", "minimum_payment"),
    "due_date": ("dueDate", "due_date", "dueDay", "due_day"),
}


@dataclass(frozen=True)
class RecordResult:
    """Outcome of normalizing one record: either a Debt or the reason it was rejected."""
    debt: Debt | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.debt is not None


def parse_money(value: Any, field: str) -> Decimal | None:
    """Parse a loosely typed numeric field. Empty values parse to None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}", field=field)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))

    txt = str(value).strip().replace("$", "").replace(",", "").replace("%", "").replace(" ", "")
    if not txt:
        return None
    try:
        return Decimal(txt)
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number, got {value!r}", field=field) from None


def normalize_apr(apr: Decimal) -> Decimal:
    """Whole percentages (> 1) become fractions; values <= 1 are taken as fractions already."""
    return apr / 100 if apr > 1 else apr


def parse_due_day(value: Any) -> int | None:
    """Day of month from a day number ("15", "21st") or a date ("2025-11-15")."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.day
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10]).day
    except ValueError:
        match = re.search(r"\d+", text)
    if not match:
        return None
    day = int(match.group(0))
    return day if 1 <= day <= 31 else None


def _get(raw: Mapping[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES.get(field, (field,)):
        if key in raw:
            return raw[key]
    return None


def _check_range(value: Decimal, field: str, name: str, max_money: Decimal) -> None:
    if value.is_nan():
        raise ValidationError(f"{name}: {field} is not a number", field=field)
    if value.is_infinite() or abs(value) > max_money:
        raise ComputationOverflow(f"{name}: {field} {value} exceeds the safe range of {max_money}")


def normalize_record(raw: Mapping[str, Any] | Debt, max_money: Decimal = MAX_MONEY) -> RecordResult:
    """Validate and canonicalize a single record.

    Returns a RecordResult holding the Debt, or the ValidationError explaining why
    the record is excluded. Raises ComputationOverflow for infinite or
    out-of-range amounts; those are never silently dropped.
    """
    if isinstance(raw, Debt):
        raw = asdict(raw)

    name = str(raw.get("name") or "").strip()
    if not name:
        return RecordResult(error=ValidationError("Debt name is empty", field="name"))

    try:
        balance = parse_money(raw.get("balance"), "balance")
        min_payment = parse_money(_get(raw, "min_payment"), "minPayment")
        apr = parse_money(raw.get("apr"), "apr")
        for field, value in (("balance", balance), ("minPayment", min_payment), ("apr", apr)):
            if value is not None:
                _check_range(value, field, name, max_money)
    except ValidationError as e:
        return RecordResult(error=e)

    if balance is None or balance <= 0:
        return RecordResult(error=ValidationError(f"{name}: balance must be positive", field="balance"))
    if min_payment is None or min_payment <= 0:
        return RecordResult(
            error=ValidationError(f"{name}: minimum payment must be positive", field="minPayment")
        )
    apr = Decimal("0") if apr is None else normalize_apr(apr)
    if apr < 0:
        return RecordResult(error=ValidationError(f"{name}: APR cannot be negative", field="apr"))

    last4 = str(raw.get("last4") or "").strip() or None
    label = f"{name} ({last4})" if last4 else name
    return RecordResult(debt=Debt(
        id=str(raw.get("id") or "").strip() or label,
        name=name,
        balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        min_payment=min_payment.quantize(TWO_PLACES, ROUND_HALF_UP),
        apr=apr,
        last4=last4,
        due_date=parse_due_day(_get(raw, "due_date")),
    ))


def _has_explicit_id(raw: Mapping[str, Any] | Debt) -> bool:
    return isinstance(raw, Debt) or bool(str(raw.get("id") or "").strip())


def _unique_id(base: str, taken: set[str]) -> str:
    n = 2
    while f"{base} #{n}" in taken:
        n += 1
    return f"{base} #{n}"


def _duplicate_key(debt: Debt) -> tuple[str, str]:
    return (" ".join(debt.name.split()).casefold(), debt.last4 or "")


def normalize_debts(
    records: Iterable[Mapping[str, Any] | Debt],
    max_money: Decimal = MAX_MONEY,
) -> list[Debt]:
    """Filter and canonicalize raw records.

    Raises ValidationError when nothing valid remains, or when two valid records
    share a name + last4 (or an explicit id); the caller must resolve duplicates.
    Generated ids that collide get a " #2" style suffix.
    """
    debts: list[Debt] = []
    generated_ids: set[int] = set()
    for position, raw in enumerate(records):
        result = normalize_record(raw, max_money=max_money)
        if result.ok:
            if not _has_explicit_id(raw):
                generated_ids.add(len(debts))
            debts.append(result.debt)
        else:
            logger.debug("Dropping debt record %d: %s", position, result.error)

    if not debts:
        raise ValidationError("No valid debts to simulate", field="debts")

    seen_keys: set[tuple[str, str]] = set()
    seen_ids: set[str] = set()
    for index, debt in enumerate(debts):
        key = _duplicate_key(debt)
        if key in seen_keys:
            raise ValidationError(
                f"Duplicate debt: {debt.label} appears more than once", field="debts"
            )
        if debt.id in seen_ids:
            if index not in generated_ids:
                raise ValidationError(f"Duplicate debt id: {debt.id}", field="debts")
            # Distinct name + last4 whose labels collide, e.g. "Visa (1234)" vs Visa / 1234
            debt = replace(debt, id=_unique_id(debt.id, seen_ids))
            debts[index] = debt
        seen_keys.add(key)
        seen_ids.add(debt.id)

    return debts
