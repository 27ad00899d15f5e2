"""Strategy orderer: attack order for snowball and avalanche.

The order is fixed for the whole simulation; only the current target advances.
"""

from debt_payoff.engine.errors import ValidationError
from debt_payoff.models.debt import Debt, Strategy


def parse_strategy(value: Strategy | str | None, default: Strategy = Strategy.SNOWBALL) -> Strategy:
    if value is None or value == "":
        return default
    if isinstance(value, Strategy):
        return value
    try:
        return Strategy(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in Strategy)
        raise ValidationError(f"Unknown strategy {value!r}; expected one of: {choices}", field="strategy") from None


def order_debts(debts: list[Debt], strategy: Strategy) -> list[Debt]:
    """Return debts in priority order (index 0 = first target).

    snowball:  balance asc, then APR asc, then name.
    avalanche: APR desc, then balance asc, then name.
    """
    if strategy is Strategy.SNOWBALL:
        return sorted(debts, key=lambda d: (d.balance, d.apr, d.name, d.id))
    if strategy is Strategy.AVALANCHE:
        return sorted(debts, key=lambda d: (-d.apr, d.balance, d.name, d.id))
    raise ValidationError(f"Unsupported strategy: {strategy}", field="strategy")
