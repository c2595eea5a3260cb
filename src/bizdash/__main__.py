"""Command-line entry point.

Usage:
    # Dashboard totals, monthly series and projection for the sample ledger
    python -m bizdash summary

    # Same, starting from an empty ledger
    python -m bizdash summary --no-demo

    # Longer projection with a different growth rate
    python -m bizdash forecast --months 6 --growth 0.03

    # Break-even point
    python -m bizdash break-even 5000 15 40

    # AI recommendations (needs GOOGLE_API_KEY)
    python -m bizdash recommend
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import structlog

from bizdash.analytics import break_even, format_currency, month_label
from bizdash.config import configure_logging
from bizdash.dashboard import Dashboard
from bizdash.errors import BizdashError
from bizdash.ledger import Ledger, demo_ledger

logger = structlog.get_logger(__name__)


def _build_dashboard(args: argparse.Namespace) -> Dashboard:
    return Dashboard(ledger=demo_ledger() if args.demo else Ledger())


def cmd_summary(args: argparse.Namespace) -> None:
    snapshot = _build_dashboard(args).snapshot()
    summary = snapshot.summary

    print(f"Total Revenue:      {format_currency(summary.total_revenue)}")
    print(f"Total Expenses:     {format_currency(summary.total_expenses)}")
    print(f"Net Profit:         {format_currency(summary.net_profit)}")
    print(f"Total Transactions: {summary.count}")
    print()

    if not snapshot.has_chart:
        print("Add more transactions to build your profit model.")
        return

    print("Profit Modeling")
    for point in snapshot.chart:
        actual = format_currency(point.actual) if point.actual is not None else ""
        predicted = format_currency(point.predicted) if point.predicted is not None else ""
        print(f"  {point.label:<10} {actual:>12} {predicted:>12}")

    if snapshot.recent:
        print()
        print("Recent Transactions")
        for t in snapshot.recent:
            sign = "+" if t.kind.value == "revenue" else "-"
            print(f"  {t.date.isoformat()}  {t.description:<30} {sign}{format_currency(t.amount)}")


def cmd_forecast(args: argparse.Namespace) -> None:
    dashboard = _build_dashboard(args)
    series = dashboard.snapshot().series
    for bucket in series:
        print(f"  {month_label(bucket.month_key):<10} {format_currency(bucket.net_profit):>12}")
    for point in dashboard.forecast(series, args.months, args.growth):
        print(f"  {point.label:<10} {format_currency(point.projected_profit):>12}  (projected)")


def cmd_break_even(args: argparse.Namespace) -> None:
    result = break_even(args.fixed_costs, args.variable_cost, args.sale_price)
    print(f"Break-Even Point (Units):   {result.units:,}")
    print(f"Break-Even Point (Revenue): {format_currency(result.revenue)}")


async def cmd_recommend(args: argparse.Namespace) -> None:
    recommendations = await _build_dashboard(args).refresh_recommendations()
    for index, recommendation in enumerate(recommendations, start=1):
        print(f"{index}. {recommendation}")


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except ArithmeticError as e:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bizdash",
        description="Small-business financial dashboard",
    )

    # Shared by every command that reads the ledger
    ledger_options = argparse.ArgumentParser(add_help=False)
    ledger_options.add_argument(
        "--demo",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Start from the sample transactions (default: on)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "summary",
        parents=[ledger_options],
        help="Totals, profit chart and recent transactions",
    )

    forecast = subparsers.add_parser(
        "forecast",
        parents=[ledger_options],
        help="Monthly profit with a trend projection",
    )
    forecast.add_argument("--months", type=int, default=None, help="Months to project")
    forecast.add_argument("--growth", type=_decimal_arg, default=None, help="Monthly growth rate")

    be = subparsers.add_parser("break-even", help="Break-even units and revenue")
    be.add_argument("fixed_costs", help="Total monthly fixed costs")
    be.add_argument("variable_cost", help="Variable cost per unit")
    be.add_argument("sale_price", help="Sale price per unit")

    subparsers.add_parser(
        "recommend",
        parents=[ledger_options],
        help="AI recommendations for the ledger",
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        if args.command == "summary":
            cmd_summary(args)
        elif args.command == "forecast":
            cmd_forecast(args)
        elif args.command == "break-even":
            cmd_break_even(args)
        elif args.command == "recommend":
            await cmd_recommend(args)
    except BizdashError as e:
        logger.debug("command_failed", command=args.command, error=e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
