"""bizdash - small-business financial dashboard with AI insights."""

__version__ = "0.1.0"

from bizdash.analytics import (
    break_even,
    build_monthly_series,
    build_profit_chart,
    project,
    summarize,
    total,
)
from bizdash.config import configure_logging, get_settings
from bizdash.dashboard import Dashboard, DashboardSnapshot
from bizdash.errors import BizdashError, ProviderError, ValidationError
from bizdash.insights import GeminiClient, InsightProvider
from bizdash.ledger import Ledger, demo_ledger
from bizdash.models import (
    BreakEvenResult,
    ChartPoint,
    ForecastPoint,
    Invoice,
    InvoiceItem,
    MonthBucket,
    Summary,
    Transaction,
    TransactionKind,
)

__all__ = [
    # Version
    "__version__",
    # Records
    "Transaction",
    "TransactionKind",
    "Invoice",
    "InvoiceItem",
    "Summary",
    "MonthBucket",
    "ForecastPoint",
    "ChartPoint",
    "BreakEvenResult",
    # Ledger & dashboard
    "Ledger",
    "demo_ledger",
    "Dashboard",
    "DashboardSnapshot",
    # Computations
    "summarize",
    "build_monthly_series",
    "project",
    "build_profit_chart",
    "break_even",
    "total",
    # Insights
    "GeminiClient",
    "InsightProvider",
    # Errors
    "BizdashError",
    "ValidationError",
    "ProviderError",
    # Config
    "get_settings",
    "configure_logging",
]
