"""Invoice totals and plain-text invoice previews."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from bizdash.models import Invoice, InvoiceItem


def line_total(item: InvoiceItem) -> Decimal:
    return item.line_total


def total(items: Iterable[InvoiceItem]) -> Decimal:
    """Sum of quantity x unit price over all items; 0 when there are none."""
    return sum((line_total(item) for item in items), Decimal("0"))


def format_currency(amount: Decimal) -> str:
    """Format an amount as US dollars, e.g. ``$1,234.50`` or ``-$50.00``."""
    cents = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents):,.2f}"


def render_invoice(invoice: Invoice) -> str:
    """Render an invoice as a plain-text preview."""
    amount = total(invoice.items)
    rows = [
        f"INVOICE {invoice.number}",
        "",
        "Billed To:",
        f"  {invoice.client_name}",
        f"  {invoice.client_address}",
        "",
        f"Issue Date: {invoice.issue_date.isoformat()}",
        f"Due Date:   {invoice.due_date.isoformat()}",
        "",
        f"{'Description':<30} {'Qty':>5} {'Price':>12} {'Total':>12}",
        "-" * 62,
    ]
    for item in invoice.items:
        rows.append(
            f"{item.description[:30]:<30} {item.quantity:>5} "
            f"{format_currency(item.unit_price):>12} {format_currency(line_total(item)):>12}"
        )
    rows.extend([
        "-" * 62,
        f"{'Subtotal:':>50} {format_currency(amount):>11}",
        f"{'Total Due:':>50} {format_currency(amount):>11}",
    ])
    return "\n".join(rows)
