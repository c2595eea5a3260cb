"""Ledger records and derived dashboard values.

Records owned by the ledger (transactions, invoices) and the values derived
from them (summaries, month buckets, forecast and chart points) are all
frozen dataclasses. Money is always ``Decimal``.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    """Direction of a ledger transaction."""

    REVENUE = "revenue"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """A single revenue or expense entry."""

    id: int
    kind: TransactionKind
    description: str
    amount: Decimal
    date: date

    @property
    def signed_amount(self) -> Decimal:
        """Amount with expenses negated."""
        return self.amount if self.kind is TransactionKind.REVENUE else -self.amount


@dataclass(frozen=True)
class InvoiceItem:
    """One line of an invoice."""

    description: str
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Invoice:
    """An issued invoice with its line items."""

    id: int
    number: str
    client_name: str
    client_address: str
    issue_date: date
    due_date: date
    items: tuple[InvoiceItem, ...]

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))


@dataclass(frozen=True)
class Summary:
    """Dashboard totals for a set of transactions."""

    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    count: int


@dataclass(frozen=True)
class MonthBucket:
    """Net profit accumulated over one calendar month."""

    month_key: str  # YYYY-MM
    net_profit: Decimal

    @property
    def year_month(self) -> tuple[int, int]:
        year, month = self.month_key.split("-")
        return int(year), int(month)


@dataclass(frozen=True)
class ForecastPoint:
    """A projected month produced by the trend projector."""

    label: str  # "Mon YYYY"
    projected_profit: Decimal


@dataclass(frozen=True)
class ChartPoint:
    """One row of the profit-modelling chart.

    Historical rows carry ``actual``, projected rows carry ``predicted``.
    The last historical row carries both so the two lines connect.
    """

    label: str
    actual: Decimal | None = None
    predicted: Decimal | None = None


@dataclass(frozen=True)
class BreakEvenResult:
    """Units and revenue needed to cover fixed costs."""

    units: int
    revenue: Decimal
