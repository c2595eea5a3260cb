"""Composition root tying the ledger, analytics and insight provider together."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

import structlog

from bizdash.analytics import (
    build_monthly_series,
    build_profit_chart,
    project,
    recent_transactions,
    summarize,
)
from bizdash.config import get_settings
from bizdash.errors import ProviderError
from bizdash.insights import InsightProvider
from bizdash.ledger import Ledger
from bizdash.models import (
    ChartPoint,
    ForecastPoint,
    Invoice,
    InvoiceItem,
    MonthBucket,
    Summary,
    Transaction,
    TransactionKind,
)

logger = structlog.get_logger(__name__)

QUICK_RECOMMENDATIONS = 3


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard page shows, computed from one ledger read."""

    summary: Summary
    series: list[MonthBucket]
    forecast: list[ForecastPoint]
    chart: list[ChartPoint]
    recent: list[Transaction]
    recommendations: list[str] = field(default_factory=list)

    @property
    def has_chart(self) -> bool:
        return bool(self.chart)


class Dashboard:
    """Owns the ledger and the insight provider for one session.

    Consumers get read-only snapshots; only the dashboard mutates the ledger.
    """

    def __init__(
        self,
        ledger: Ledger | None = None,
        provider: InsightProvider | None = None,
    ):
        self._settings = get_settings()
        self._ledger = ledger if ledger is not None else Ledger()
        self._provider = provider if provider is not None else InsightProvider()
        self._recommendations: list[str] = []
        self._logger = logger.bind(component="dashboard")

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def recommendations(self) -> list[str]:
        return list(self._recommendations)

    # =========================================================================
    # Ledger mutations
    # =========================================================================

    def add_transaction(
        self,
        kind: TransactionKind | str,
        description: str,
        amount: Decimal | int | float | str,
        date: date | str,
    ) -> Transaction:
        return self._ledger.add_transaction(kind, description, amount, date)

    def add_invoice(
        self,
        client_name: str,
        client_address: str,
        issue_date: date | str,
        due_date: date | str,
        items: Iterable[InvoiceItem | Mapping[str, Any]],
    ) -> Invoice:
        return self._ledger.add_invoice(client_name, client_address, issue_date, due_date, items)

    # =========================================================================
    # Derived views
    # =========================================================================

    def forecast(
        self,
        series: Sequence[MonthBucket] | None = None,
        horizon_months: int | None = None,
        growth_rate: Decimal | None = None,
    ) -> list[ForecastPoint]:
        """Project the monthly series; empty when there is no history."""
        if series is None:
            series = build_monthly_series(self._ledger.get_transactions())
        if not series:
            return []
        return project(
            series,
            horizon_months=(
                horizon_months
                if horizon_months is not None
                else self._settings.forecast_horizon_months
            ),
            growth_rate=(
                growth_rate if growth_rate is not None else self._settings.forecast_growth_rate
            ),
            floor=self._settings.forecast_floor,
        )

    def snapshot(self) -> DashboardSnapshot:
        """Recompute every dashboard aggregate from the current ledger."""
        transactions = self._ledger.get_transactions()
        series = build_monthly_series(transactions)

        # Too little history to draw a meaningful trend line
        if len(transactions) < self._settings.min_chart_transactions:
            forecast: list[ForecastPoint] = []
            chart: list[ChartPoint] = []
        else:
            forecast = self.forecast(series)
            chart = build_profit_chart(series, forecast)

        return DashboardSnapshot(
            summary=summarize(transactions),
            series=series,
            forecast=forecast,
            chart=chart,
            recent=recent_transactions(transactions, self._settings.recent_transactions_limit),
            recommendations=self._recommendations[:QUICK_RECOMMENDATIONS],
        )

    # =========================================================================
    # Insights
    # =========================================================================

    async def refresh_recommendations(self) -> list[str]:
        """Ask the provider for recommendations and keep them for the dashboard.

        On ProviderError the previous recommendations are kept and the error
        is re-raised for the caller to display.
        """
        try:
            recommendations = await self._provider.recommendations(
                self._ledger.get_transactions()
            )
        except ProviderError as e:
            self._logger.warning("recommendations_unavailable", error=e.message)
            raise

        self._recommendations = recommendations
        self._logger.info("recommendations_updated", count=len(recommendations))
        return list(recommendations)

    @property
    def provider(self) -> InsightProvider:
        return self._provider
