"""Append-only in-memory store of transactions and invoices.

The ledger is the single source of truth for every dashboard computation.
Records are validated on the way in and never mutated afterwards. Reads
return tuples, so consumers always iterate over a consistent snapshot.
"""

import itertools
import threading
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any

import structlog

from bizdash.config import get_settings
from bizdash.errors import ValidationError
from bizdash.models import Invoice, InvoiceItem, Transaction, TransactionKind
from bizdash.parsing import parse_date, require_text, to_decimal

logger = structlog.get_logger(__name__)


# Sample data shown on first launch
DEMO_TRANSACTIONS: list[tuple[str, str, str, str]] = [
    ("revenue", "Website Design Project", "2500", "2023-10-15"),
    ("expense", "Software Subscription", "50", "2023-10-20"),
    ("revenue", "Consulting Services", "1200", "2023-11-05"),
    ("expense", "Office Supplies", "150", "2023-11-10"),
    ("revenue", "E-commerce Sales", "3200", "2023-11-25"),
    ("expense", "Marketing Campaign", "500", "2023-12-01"),
    ("revenue", "Website Design Project", "2800", "2024-01-15"),
    ("expense", "Software Subscription", "50", "2024-01-20"),
    ("revenue", "Consulting Services", "1500", "2024-02-05"),
    ("expense", "Office Supplies", "120", "2024-02-10"),
    ("revenue", "E-commerce Sales", "3500", "2024-02-25"),
    ("expense", "Marketing Campaign", "550", "2024-03-01"),
]


def _parse_kind(value: Any) -> TransactionKind:
    if isinstance(value, TransactionKind):
        return value
    try:
        return TransactionKind(str(value).strip().lower())
    except ValueError as e:
        raise ValidationError(
            f"kind must be 'revenue' or 'expense', got {value!r}", field="kind"
        ) from e


def _parse_item(raw: InvoiceItem | Mapping[str, Any], index: int) -> InvoiceItem:
    if isinstance(raw, InvoiceItem):
        description, quantity, price = raw.description, raw.quantity, raw.unit_price
    elif isinstance(raw, Mapping):
        description = raw.get("description", "")
        quantity = raw.get("quantity", 0)
        price = raw.get("unit_price", raw.get("price"))
    else:
        raise ValidationError(f"items[{index}] must be an invoice item", field="items")

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            f"items[{index}].quantity must be a whole number", field="items"
        )
    if quantity < 0:
        raise ValidationError(f"items[{index}].quantity must not be negative", field="items")

    unit_price = to_decimal(price, f"items[{index}].unit_price")
    if unit_price < 0:
        raise ValidationError(
            f"items[{index}].unit_price must not be negative", field="items"
        )

    return InvoiceItem(
        description=str(description or "").strip(),
        quantity=quantity,
        unit_price=unit_price,
    )


class Ledger:
    """Append-only collection of transactions and invoices."""

    def __init__(
        self,
        invoice_number_start: int | None = None,
        invoice_number_prefix: str | None = None,
    ):
        settings = get_settings()
        self._invoice_number_start = (
            invoice_number_start
            if invoice_number_start is not None
            else settings.invoice_number_start
        )
        self._invoice_number_prefix = (
            invoice_number_prefix
            if invoice_number_prefix is not None
            else settings.invoice_number_prefix
        )

        self._transactions: list[Transaction] = []
        self._invoices: list[Invoice] = []
        self._transaction_ids = itertools.count(1)
        self._invoice_ids = itertools.count(1)
        self._lock = threading.Lock()
        self._logger = logger.bind(component="ledger")

    @classmethod
    def with_transactions(
        cls, records: Iterable[tuple[Any, str, Any, Any]], **kwargs: Any
    ) -> "Ledger":
        """Build a ledger seeded with (kind, description, amount, date) records."""
        ledger = cls(**kwargs)
        for kind, description, amount, on_date in records:
            ledger.add_transaction(kind, description, amount, on_date)
        return ledger

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_transaction(
        self,
        kind: TransactionKind | str,
        description: str,
        amount: Decimal | int | float | str,
        date: date | str,
    ) -> Transaction:
        """Validate and append a transaction.

        Raises:
            ValidationError: If the amount is not positive, the description is
                empty, the kind is unknown or the date cannot be parsed.
        """
        parsed_kind = _parse_kind(kind)
        parsed_description = require_text(description, "description")
        parsed_amount = to_decimal(amount, "amount")
        if parsed_amount <= 0:
            raise ValidationError("amount must be greater than zero", field="amount")
        parsed_date = parse_date(date, "date")

        with self._lock:
            transaction = Transaction(
                id=next(self._transaction_ids),
                kind=parsed_kind,
                description=parsed_description,
                amount=parsed_amount,
                date=parsed_date,
            )
            self._transactions.append(transaction)

        self._logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            kind=transaction.kind.value,
            amount=str(transaction.amount),
            date=transaction.date.isoformat(),
        )
        return transaction

    def add_invoice(
        self,
        client_name: str,
        client_address: str,
        issue_date: date | str,
        due_date: date | str,
        items: Iterable[InvoiceItem | Mapping[str, Any]],
    ) -> Invoice:
        """Validate and append an invoice, assigning the next display number.

        Raises:
            ValidationError: If there are no items, an item has a negative
                quantity or price, or a date cannot be parsed.
        """
        parsed_items = tuple(_parse_item(raw, i) for i, raw in enumerate(items))
        if not parsed_items:
            raise ValidationError("an invoice needs at least one item", field="items")
        parsed_issue = parse_date(issue_date, "issue_date")
        parsed_due = parse_date(due_date, "due_date")

        with self._lock:
            number = (
                f"{self._invoice_number_prefix}"
                f"{self._invoice_number_start + len(self._invoices)}"
            )
            invoice = Invoice(
                id=next(self._invoice_ids),
                number=number,
                client_name=str(client_name or "").strip(),
                client_address=str(client_address or "").strip(),
                issue_date=parsed_issue,
                due_date=parsed_due,
                items=parsed_items,
            )
            self._invoices.append(invoice)

        self._logger.info(
            "invoice_added",
            invoice_id=invoice.id,
            number=invoice.number,
            items=len(invoice.items),
            total=str(invoice.total),
        )
        return invoice

    # =========================================================================
    # Reads
    # =========================================================================

    def get_transactions(self) -> tuple[Transaction, ...]:
        """Return all transactions in insertion order."""
        with self._lock:
            return tuple(self._transactions)

    def get_invoices(self) -> tuple[Invoice, ...]:
        """Return all invoices in insertion order."""
        with self._lock:
            return tuple(self._invoices)

    def filter_transactions(
        self,
        kind: TransactionKind | str | None = None,
        start: date | str | None = None,
        end: date | str | None = None,
    ) -> list[Transaction]:
        """Return transactions matching a kind and an inclusive date range.

        Any of the filters may be omitted.
        """
        wanted_kind = _parse_kind(kind) if kind not in (None, "", "all") else None
        start_date = parse_date(start, "start") if start else None
        end_date = parse_date(end, "end") if end else None

        return [
            t
            for t in self.get_transactions()
            if (wanted_kind is None or t.kind is wanted_kind)
            and (start_date is None or t.date >= start_date)
            and (end_date is None or t.date <= end_date)
        ]


def demo_ledger(**kwargs: Any) -> Ledger:
    """Return a ledger pre-filled with the sample transactions."""
    return Ledger.with_transactions(DEMO_TRANSACTIONS, **kwargs)
