"""Summary totals over a set of transactions."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from bizdash.models import Summary, Transaction, TransactionKind

ZERO = Decimal("0")


def summarize(transactions: Iterable[Transaction]) -> Summary:
    """Total revenue, expenses, net profit and count.

    Empty input yields a zero summary.
    """
    total_revenue = ZERO
    total_expenses = ZERO
    count = 0
    for t in transactions:
        if t.kind is TransactionKind.REVENUE:
            total_revenue += t.amount
        else:
            total_expenses += t.amount
        count += 1

    return Summary(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=total_revenue - total_expenses,
        count=count,
    )


def net_profit_margin(summary: Summary) -> Decimal:
    """Net profit as a percentage of revenue, 0 when there is no revenue."""
    if summary.total_revenue <= 0:
        return ZERO
    return summary.net_profit / summary.total_revenue * 100


def recent_transactions(
    transactions: Sequence[Transaction], limit: int = 5
) -> list[Transaction]:
    """Newest transactions first; later entries win ties on the same date."""
    ordered = sorted(
        enumerate(transactions),
        key=lambda pair: (pair[1].date, pair[0]),
        reverse=True,
    )
    return [t for _, t in ordered[:limit]]
