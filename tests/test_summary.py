"""Tests for summary aggregation."""

from decimal import Decimal

from bizdash.analytics.summary import net_profit_margin, recent_transactions, summarize
from bizdash.ledger import Ledger, demo_ledger
from bizdash.models import Summary


class TestSummarize:
    """Tests for summarize()."""

    def test_empty_input_is_all_zero(self):
        assert summarize([]) == Summary(Decimal("0"), Decimal("0"), Decimal("0"), 0)

    def test_totals(self, transactions):
        summary = summarize(transactions)

        assert summary.total_revenue == Decimal("3700")
        assert summary.total_expenses == Decimal("1000")
        assert summary.net_profit == Decimal("2700")
        assert summary.count == 4

    def test_demo_data_totals(self):
        summary = summarize(demo_ledger().get_transactions())

        assert summary.total_revenue == Decimal("14700")
        assert summary.total_expenses == Decimal("1420")
        assert summary.net_profit == Decimal("13280")
        assert summary.count == 12

    def test_additive_over_partitions(self):
        """Totals of a union equal the sum of the totals of its parts."""
        transactions = demo_ledger().get_transactions()
        whole = summarize(transactions)

        for split in range(len(transactions) + 1):
            first = summarize(transactions[:split])
            second = summarize(transactions[split:])
            assert first.total_revenue + second.total_revenue == whole.total_revenue
            assert first.total_expenses + second.total_expenses == whole.total_expenses

    def test_net_profit_identity(self):
        ledger = Ledger()
        ledger.add_transaction("expense", "Big bill", "999.99", "2024-01-01")
        ledger.add_transaction("revenue", "Small sale", "0.01", "2024-01-02")

        summary = summarize(ledger.get_transactions())

        assert summary.net_profit == summary.total_revenue - summary.total_expenses
        assert summary.net_profit == Decimal("-999.98")

    def test_decimal_sums_do_not_drift(self):
        ledger = Ledger()
        for _ in range(10):
            ledger.add_transaction("revenue", "Tip", 0.1, "2024-01-01")

        assert summarize(ledger.get_transactions()).total_revenue == Decimal("1.0")

    def test_is_pure(self, transactions):
        assert summarize(transactions) == summarize(transactions)

    def test_accepts_iterators(self, transactions):
        assert summarize(iter(transactions)).count == 4


class TestNetProfitMargin:
    """Tests for net_profit_margin()."""

    def test_margin_percentage(self, transactions):
        margin = net_profit_margin(summarize(transactions))

        assert round(margin, 2) == Decimal("72.97")

    def test_zero_revenue_gives_zero(self):
        ledger = Ledger()
        ledger.add_transaction("expense", "Rent", 100, "2024-01-01")

        assert net_profit_margin(summarize(ledger.get_transactions())) == Decimal("0")


class TestRecentTransactions:
    """Tests for recent_transactions()."""

    def test_newest_first_with_limit(self):
        transactions = demo_ledger().get_transactions()

        recent = recent_transactions(transactions, limit=5)

        assert [t.date.isoformat() for t in recent] == [
            "2024-03-01",
            "2024-02-25",
            "2024-02-10",
            "2024-02-05",
            "2024-01-20",
        ]

    def test_ties_prefer_later_entries(self):
        ledger = Ledger()
        first = ledger.add_transaction("revenue", "First", 1, "2024-01-01")
        second = ledger.add_transaction("revenue", "Second", 1, "2024-01-01")

        assert recent_transactions(ledger.get_transactions()) == [second, first]

    def test_empty(self):
        assert recent_transactions([]) == []
