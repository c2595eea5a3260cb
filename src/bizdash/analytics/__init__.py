"""Deterministic dashboard computations over ledger data."""

from bizdash.analytics.breakeven import break_even, contribution_margin
from bizdash.analytics.forecast import build_profit_chart, project, round_currency
from bizdash.analytics.invoices import format_currency, line_total, render_invoice, total
from bizdash.analytics.series import build_monthly_series, month_key, month_label
from bizdash.analytics.summary import net_profit_margin, recent_transactions, summarize

__all__ = [
    # Aggregation
    "summarize",
    "net_profit_margin",
    "recent_transactions",
    # Time series & projection
    "build_monthly_series",
    "month_key",
    "month_label",
    "project",
    "build_profit_chart",
    "round_currency",
    # Break-even
    "break_even",
    "contribution_margin",
    # Invoices
    "line_total",
    "total",
    "format_currency",
    "render_invoice",
]
