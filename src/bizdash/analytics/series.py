"""Monthly net-profit time series."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from bizdash.models import MonthBucket, Transaction

# Fixed English abbreviations so labels do not depend on the process locale
MONTH_ABBR = ("", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_key(on_date: date) -> str:
    """Return the zero-padded YYYY-MM key of a date."""
    return f"{on_date.year:04d}-{on_date.month:02d}"


def format_month(year: int, month: int) -> str:
    """Format a calendar month as "Mon YYYY"."""
    return f"{MONTH_ABBR[month]} {year}"


def month_label(key: str) -> str:
    """Turn a YYYY-MM key into its "Mon YYYY" label."""
    year, month = key.split("-")
    return format_month(int(year), int(month))


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Shift a (year, month) pair by a number of months."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def build_monthly_series(transactions: Iterable[Transaction]) -> list[MonthBucket]:
    """Bucket transactions by calendar month into net profit.

    Revenue adds to a month, expenses subtract. Buckets come back in
    chronological order, one per month that has at least one transaction.
    The series is never truncated here; whether it is long enough to chart
    is decided by the caller.
    """
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for t in transactions:
        totals[month_key(t.date)] += t.signed_amount

    return [MonthBucket(month_key=key, net_profit=totals[key]) for key in sorted(totals)]
