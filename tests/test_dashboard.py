"""Tests for the dashboard composition root."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from bizdash.dashboard import Dashboard
from bizdash.errors import ProviderError
from bizdash.ledger import Ledger, demo_ledger
from bizdash.models import ChartPoint


@pytest.fixture
def provider():
    provider = MagicMock()
    provider.recommendations = AsyncMock(return_value=["One", "Two", "Three", "Four"])
    return provider


class TestSnapshot:
    """Tests for Dashboard.snapshot()."""

    def test_demo_snapshot(self, provider):
        snapshot = Dashboard(ledger=demo_ledger(), provider=provider).snapshot()

        assert snapshot.summary.net_profit == Decimal("13280")
        assert len(snapshot.series) == 6
        # Last month lost money, so the projection starts from the floor
        assert [p.projected_profit for p in snapshot.forecast] == [
            Decimal("105"),
            Decimal("110"),
            Decimal("116"),
        ]
        assert [p.label for p in snapshot.forecast] == ["Apr 2024", "May 2024", "Jun 2024"]
        assert len(snapshot.chart) == 9
        assert snapshot.chart[5] == ChartPoint(
            "Mar 2024", actual=Decimal("-550"), predicted=Decimal("-550")
        )
        assert len(snapshot.recent) == 5
        assert snapshot.recommendations == []

    def test_empty_ledger(self, provider):
        snapshot = Dashboard(ledger=Ledger(), provider=provider).snapshot()

        assert snapshot.summary.count == 0
        assert snapshot.series == []
        assert snapshot.forecast == []
        assert not snapshot.has_chart
        assert snapshot.recent == []

    def test_single_transaction_has_series_but_no_chart(self, provider):
        dashboard = Dashboard(ledger=Ledger(), provider=provider)
        dashboard.add_transaction("revenue", "First sale", 500, "2024-05-02")

        snapshot = dashboard.snapshot()

        assert len(snapshot.series) == 1
        assert snapshot.chart == []
        assert snapshot.forecast == []

    def test_chart_threshold_is_configurable(self, provider, monkeypatch):
        monkeypatch.setenv("MIN_CHART_TRANSACTIONS", "1")
        dashboard = Dashboard(ledger=Ledger(), provider=provider)
        dashboard.add_transaction("revenue", "First sale", 500, "2024-05-02")

        snapshot = dashboard.snapshot()

        assert [p.label for p in snapshot.chart] == ["May 2024", "Jun 2024", "Jul 2024", "Aug 2024"]

    def test_snapshot_reflects_new_transactions(self, provider, ledger):
        dashboard = Dashboard(ledger=ledger, provider=provider)
        before = dashboard.snapshot()

        dashboard.add_transaction("revenue", "Retainer", 1000, "2024-03-01")
        after = dashboard.snapshot()

        assert after.summary.total_revenue == before.summary.total_revenue + 1000
        assert after.series[-1].month_key == "2024-03"
        assert after.forecast[0].label == "Apr 2024"

    def test_forecast_overrides(self, provider, ledger):
        dashboard = Dashboard(ledger=ledger, provider=provider)

        forecast = dashboard.forecast(horizon_months=6, growth_rate=Decimal("0"))

        assert len(forecast) == 6
        assert {p.projected_profit for p in forecast} == {Decimal("1700")}

    def test_forecast_is_empty_without_history(self, provider):
        assert Dashboard(ledger=Ledger(), provider=provider).forecast() == []


class TestOwnership:
    """The dashboard works on the ledger it was given."""

    def test_empty_ledger_is_shared_by_reference(self, provider):
        ledger = Ledger(invoice_number_start=5001)
        dashboard = Dashboard(ledger=ledger, provider=provider)

        dashboard.add_transaction("revenue", "First sale", 500, "2024-05-02")
        invoice = dashboard.add_invoice(
            "Acme", "1 Main St", "2024-05-02", "2024-06-01",
            [{"description": "Design", "quantity": 1, "unit_price": 500}],
        )

        assert dashboard.ledger is ledger
        assert len(ledger.get_transactions()) == 1
        assert invoice.number == "INV-5001"

    def test_given_provider_is_kept(self, provider):
        assert Dashboard(ledger=Ledger(), provider=provider).provider is provider


class TestInvoices:
    def test_add_invoice_goes_to_ledger(self, provider):
        dashboard = Dashboard(ledger=Ledger(), provider=provider)

        invoice = dashboard.add_invoice(
            "Acme", "1 Main St", "2024-03-01", "2024-03-31",
            [{"description": "Design", "quantity": 2, "unit_price": 100}],
        )

        assert invoice.number == "INV-1001"
        assert dashboard.ledger.get_invoices() == (invoice,)


class TestRecommendations:
    """Tests for Dashboard.refresh_recommendations()."""

    @pytest.mark.asyncio
    async def test_refresh_stores_recommendations(self, provider, ledger):
        dashboard = Dashboard(ledger=ledger, provider=provider)

        result = await dashboard.refresh_recommendations()

        assert result == ["One", "Two", "Three", "Four"]
        provider.recommendations.assert_awaited_once_with(ledger.get_transactions())
        assert dashboard.snapshot().recommendations == ["One", "Two", "Three"]

    @pytest.mark.asyncio
    async def test_provider_error_keeps_previous_state(self, provider, ledger):
        dashboard = Dashboard(ledger=ledger, provider=provider)
        await dashboard.refresh_recommendations()
        before = dashboard.snapshot()

        provider.recommendations.side_effect = ProviderError("boom", kind="recommendations")
        with pytest.raises(ProviderError):
            await dashboard.refresh_recommendations()

        assert dashboard.recommendations == ["One", "Two", "Three", "Four"]
        assert dashboard.snapshot() == before
