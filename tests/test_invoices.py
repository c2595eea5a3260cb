"""Tests for invoice totals and previews."""

from decimal import Decimal

import pytest

from bizdash.analytics.invoices import format_currency, line_total, render_invoice, total
from bizdash.ledger import Ledger
from bizdash.models import InvoiceItem


class TestTotals:
    """Tests for line and invoice totals."""

    def test_invoice_total(self):
        items = [
            InvoiceItem("Design", 2, Decimal("100")),
            InvoiceItem("Hosting", 1, Decimal("50")),
        ]

        assert total(items) == Decimal("250")

    def test_empty_total_is_zero(self):
        assert total([]) == Decimal("0")

    def test_line_total(self):
        assert line_total(InvoiceItem("Hours", 3, Decimal("33.33"))) == Decimal("99.99")

    def test_invoice_total_property_matches(self):
        invoice = Ledger().add_invoice(
            "Acme", "1 Main St", "2024-03-01", "2024-03-31",
            [{"description": "Hours", "quantity": 3, "unit_price": "19.99"}],
        )

        assert invoice.total == total(invoice.items) == Decimal("59.97")


class TestFormatCurrency:
    """Tests for format_currency()."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            ("0", "$0.00"),
            ("250", "$250.00"),
            ("1234.5", "$1,234.50"),
            ("1000000", "$1,000,000.00"),
            ("0.005", "$0.01"),
            ("-50", "-$50.00"),
        ],
    )
    def test_formats_usd(self, amount, expected):
        assert format_currency(Decimal(amount)) == expected


def test_render_invoice_preview():
    invoice = Ledger().add_invoice(
        "Acme Corp",
        "1 Main St",
        "2024-03-01",
        "2024-03-31",
        [
            {"description": "Design", "quantity": 2, "unit_price": 100},
            {"description": "Hosting", "quantity": 1, "unit_price": 50},
        ],
    )

    text = render_invoice(invoice)

    assert text.startswith("INVOICE INV-1001")
    assert "Acme Corp" in text
    assert "1 Main St" in text
    assert "Issue Date: 2024-03-01" in text
    assert "Due Date:   2024-03-31" in text
    assert "$200.00" in text
    assert text.rstrip().endswith("$250.00")
