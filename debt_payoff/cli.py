"""CLI for the debt payoff engine: reads a plan request and prints a terminal report.

Usage:
    python -m debt_payoff.cli debts.json
    python -m debt_payoff.cli debts.json --strategy avalanche --extra 200 --one-time 1000
    python -m debt_payoff.cli debts.json --compare
    python -m debt_payoff.cli debts.json --json

The request file holds either a list of debts or an object in the API request
shape ({"debts": [...], "extraMonthly": ..., "strategy": ...}). Command line
options override the file.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError as SchemaError

from debt_payoff.api.converters import build_inputs, result_to_response
from debt_payoff.api.schemas import PlanRequest
from debt_payoff.config import settings
from debt_payoff.engine.comparison import compare_strategies
from debt_payoff.engine.errors import PlanError
from debt_payoff.engine.integrity import check_debt_batch
from debt_payoff.engine.plan import compute_plan
from debt_payoff.engine.validator import validate_schedule
from debt_payoff.models.results import ComputeResult, PlanOutcome, ScheduleValidation, StrategyComparison

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${v:,.2f}"


def _pct(v) -> str:
    return f"{float(v) * 100:.2f}%"


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


def load_request(path: Path) -> PlanRequest:
    raw = json.loads(path.read_text())
    if isinstance(raw, list):
        raw = {"debts": raw}
    return PlanRequest.model_validate(raw)


# ── Report sections ──────────────────────────────────────────────────────────

def print_plan_summary(result: ComputeResult) -> None:
    t = result.totals
    _header(f"Payoff Plan ({t.strategy.value})")
    print(f"  Debts:              {t.num_debts}")
    print(f"  Total Balance:      {_dollar(t.sum_balance)}")
    print(f"  Total Minimums:     {_dollar(t.sum_min_payment)}/mo")
    print(f"  Extra Monthly:      {_dollar(t.extra_monthly)}")
    if t.one_time:
        print(f"  One-Time Payment:   {_dollar(t.one_time)}")
    print(f"  Months to Freedom:  {t.total_months}")
    if t.debt_free_date:
        print(f"  Debt-Free By:       {t.debt_free_date}")
    print(f"  Total Interest:     {_dollar(t.total_interest)}")
    print(f"  Total Paid:         {_dollar(t.total_paid)}")


def print_payoff_rows(result: ComputeResult) -> None:
    _header("Attack Order")
    print(
        f"  {'#':>2}  {'Debt':<28}  {'Balance':>12}  {'Min':>9}  {'APR':>7}  "
        f"{'Paid Off':>8}  {'Alone':>5}"
    )
    print(f"  {'--':>2}  {'-' * 28}  {'-' * 12}  {'-' * 9}  {'-' * 7}  {'-' * 8}  {'-' * 5}")
    for row in result.rows:
        alone = str(row.months_to_payoff) if row.months_to_payoff is not None else "never"
        print(
            f"  {row.index:>2}  {row.label[:28]:<28}  {_dollar(row.balance):>12}  "
            f"{_dollar(row.min_payment):>9}  {_pct(row.apr):>7}  "
            f"{row.cumulative_months:>8}  {alone:>5}"
        )


def print_schedule(result: ComputeResult) -> None:
    _header("Monthly Schedule")
    print(f"  {'Mo':>4}  {'Label':<8}  {'Paid':>12}  {'Interest':>10}  {'Pool':>10}  {'Remaining':>13}")
    for s in result.schedule:
        print(
            f"  {s.month:>4}  {(s.month_label or ''):<8}  {_dollar(s.total_paid_this_month):>12}  "
            f"{_dollar(s.total_interest):>10}  {_dollar(s.snowball_extra):>10}  "
            f"{_dollar(s.total_remaining):>13}"
        )


def print_validation(report: ScheduleValidation) -> None:
    _header("Schedule Check")
    print(f"  Status:  {'PASS' if report.is_valid else 'FLAGGED'}")
    for message in report.messages:
        print(f"  - {message}")


def _outcome_line(outcome: PlanOutcome) -> str:
    return (
        f"  {outcome.label:<10}  {outcome.total_months:>6}  "
        f"{_dollar(outcome.total_interest):>14}  {_dollar(outcome.total_paid):>14}"
    )


def print_comparison(comparison: StrategyComparison) -> None:
    _header("Strategy Comparison")
    print(f"  {'Strategy':<10}  {'Months':>6}  {'Interest':>14}  {'Total Paid':>14}")
    print(_outcome_line(comparison.snowball))
    print(_outcome_line(comparison.avalanche))
    if comparison.minimum_only is not None:
        print(_outcome_line(comparison.minimum_only))
    else:
        print(f"  {'minimum':<10}  {'never':>6}")
    print()
    print(f"  Avalanche interest difference:  {_dollar(comparison.avalanche_interest_savings)}")
    print(f"  Avalanche months difference:    {comparison.avalanche_months_savings}")


# ── Main ─────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Debt snowball / avalanche payoff planner")
    parser.add_argument("request", type=Path, help="JSON file with debts (list or request object)")
    parser.add_argument(
        "--strategy",
        choices=["snowball", "avalanche"],
        default=None,
        help=f"Payoff strategy (default: file, then {settings.default_strategy})",
    )
    parser.add_argument("--extra", help="Extra monthly budget beyond the minimums")
    parser.add_argument("--one-time", dest="one_time", help="Lump sum applied in month 1")
    parser.add_argument("--start-date", dest="start_date", help="Plan start date (YYYY-MM-DD)")
    parser.add_argument("--compare", action="store_true", help="Compare snowball, avalanche and minimums")
    parser.add_argument("--validate", action="store_true", help="Run the schedule check")
    parser.add_argument("--schedule", action="store_true", help="Print the month-by-month schedule")
    parser.add_argument("--json", action="store_true", help="Emit the plan as JSON instead of a report")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides = {
        "strategy": args.strategy,
        "extra_monthly": args.extra,
        "one_time": args.one_time,
        "start_date": args.start_date,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}

    try:
        req = load_request(args.request)
        if updates:
            req = PlanRequest.model_validate({**req.model_dump(), **updates})
    except (OSError, json.JSONDecodeError, SchemaError) as e:
        print(f"Error: could not read {args.request}: {e}", file=sys.stderr)
        return 1

    inputs = build_inputs(req, settings)
    for issue in check_debt_batch(req.debts):
        logger.warning("%s: %s", issue.code.value, issue.message)

    try:
        if args.compare:
            comparison = compare_strategies(
                inputs, horizon_months=settings.horizon_months, max_money=settings.max_money
            )
        else:
            result = compute_plan(inputs, horizon_months=settings.horizon_months, max_money=settings.max_money)
    except PlanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.compare:
        print_comparison(comparison)
        print()
        return 0

    if args.json:
        print(result_to_response(result).model_dump_json(by_alias=True, indent=2))
        return 0

    print_plan_summary(result)
    print_payoff_rows(result)
    if args.schedule:
        print_schedule(result)
    if args.validate:
        print_validation(validate_schedule(result.schedule))
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
