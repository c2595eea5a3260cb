"""Async insight provider backed by Gemini.

Every method builds a prompt from ledger-derived values, calls the model and
validates the answer into a typed result. Any failure (SDK error, missing
key, empty answer, invalid JSON, schema mismatch) is raised as a
ProviderError carrying a user-facing message; ledger state is never touched.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Any, TypeVar

import pydantic
import structlog
from pydantic import TypeAdapter

from bizdash.errors import ProviderError
from bizdash.insights import prompts
from bizdash.insights.gemini import GeminiClient, GeminiResponse
from bizdash.insights.types import (
    Benchmark,
    BreakEvenScenario,
    CompetitorAnalysis,
    InsightKind,
    MonthlyForecast,
    TextInsight,
)
from bizdash.models import Transaction
from bizdash.parsing import to_decimal

logger = structlog.get_logger(__name__)

T = TypeVar("T")

FAILURE_MESSAGES: dict[InsightKind, str] = {
    InsightKind.RECOMMENDATIONS: "Failed to generate financial recommendations from AI.",
    InsightKind.COMPETITOR_ANALYSIS: "Failed to generate competitor analysis from AI.",
    InsightKind.FINANCIAL_REPORT: "Failed to generate financial report from AI.",
    InsightKind.MARKET_TRENDS: "Failed to get market trends from AI.",
    InsightKind.INDUSTRY_BENCHMARK: "Failed to get industry benchmarks from AI.",
    InsightKind.ADVANCED_FORECAST: "Failed to get advanced forecast from AI.",
    InsightKind.BREAK_EVEN_SCENARIOS: "Failed to get break-even scenarios from AI.",
}

_FORECASTS = TypeAdapter(list[MonthlyForecast])
_SCENARIOS = TypeAdapter(list[BreakEvenScenario])
_COMPETITORS = TypeAdapter(CompetitorAnalysis)
_BENCHMARK = TypeAdapter(Benchmark)


class InsightProvider:
    """One async method per insight kind."""

    def __init__(self, client: GeminiClient | None = None):
        self._client = client
        self._logger = logger.bind(component="insight_provider")

    def _get_client(self, kind: InsightKind) -> GeminiClient:
        if self._client is None:
            try:
                self._client = GeminiClient()
            except ProviderError as e:
                raise ProviderError(FAILURE_MESSAGES[kind], kind=kind.value, details=e.message) from e
        return self._client

    async def _call(
        self,
        kind: InsightKind,
        prompt: str,
        schema: dict[str, Any] | None = None,
        use_search: bool = False,
    ) -> GeminiResponse:
        client = self._get_client(kind)
        try:
            response = await client.generate(prompt, response_schema=schema, use_search=use_search)
        except Exception as e:
            self._logger.error("insight_failed", kind=kind.value, error=str(e))
            raise ProviderError(FAILURE_MESSAGES[kind], kind=kind.value, details=str(e)) from e

        if not response.content.strip():
            self._logger.error("insight_failed", kind=kind.value, error="empty response")
            raise ProviderError(FAILURE_MESSAGES[kind], kind=kind.value, details="empty response")
        return response

    async def _call_structured(
        self,
        kind: InsightKind,
        prompt: str,
        schema: dict[str, Any],
        adapter: TypeAdapter[T],
    ) -> T:
        response = await self._call(kind, prompt, schema=schema)
        try:
            return adapter.validate_json(response.content.strip())
        except pydantic.ValidationError as e:
            self._logger.error("insight_invalid", kind=kind.value, errors=e.error_count())
            raise ProviderError(FAILURE_MESSAGES[kind], kind=kind.value, details=str(e)) from e

    # =========================================================================
    # Insight kinds
    # =========================================================================

    async def recommendations(self, transactions: Sequence[Transaction]) -> list[str]:
        """3-5 short recommendations to improve profitability."""
        response = await self._call(
            InsightKind.RECOMMENDATIONS, prompts.recommendations_prompt(transactions)
        )
        return prompts.parse_recommendations(response.content)

    async def competitor_analysis(
        self, industry: str, competitors: Sequence[str], usp: str
    ) -> CompetitorAnalysis:
        named = [c.strip() for c in competitors if c.strip()]
        return await self._call_structured(
            InsightKind.COMPETITOR_ANALYSIS,
            prompts.competitor_analysis_prompt(industry, named, usp),
            prompts.COMPETITOR_ANALYSIS_SCHEMA,
            _COMPETITORS,
        )

    async def financial_report(self, transactions: Sequence[Transaction]) -> TextInsight:
        """Weekly markdown email report."""
        response = await self._call(
            InsightKind.FINANCIAL_REPORT, prompts.financial_report_prompt(transactions)
        )
        return TextInsight(text=response.content)

    async def market_trends(self, topic: str) -> TextInsight:
        """Search-grounded market summary with its sources."""
        response = await self._call(
            InsightKind.MARKET_TRENDS, prompts.market_trends_prompt(topic), use_search=True
        )
        return TextInsight(text=response.content, citations=response.citations)

    async def industry_benchmark(
        self, transactions: Sequence[Transaction], industry: str
    ) -> Benchmark:
        return await self._call_structured(
            InsightKind.INDUSTRY_BENCHMARK,
            prompts.industry_benchmark_prompt(transactions, industry),
            prompts.BENCHMARK_SCHEMA,
            _BENCHMARK,
        )

    async def advanced_forecast(
        self, transactions: Sequence[Transaction], today: date | None = None
    ) -> list[MonthlyForecast]:
        """Six-month revenue/expense forecast looking at seasonality."""
        reference = (today or date.today()).isoformat()
        return await self._call_structured(
            InsightKind.ADVANCED_FORECAST,
            prompts.advanced_forecast_prompt(transactions, reference),
            prompts.FORECAST_SCHEMA,
            _FORECASTS,
        )

    async def break_even_scenarios(
        self,
        fixed_costs: Decimal | int | float | str,
        variable_cost: Decimal | int | float | str,
        sale_price: Decimal | int | float | str,
    ) -> list[BreakEvenScenario]:
        """Strategies for lowering the break-even point."""
        prompt = prompts.break_even_scenarios_prompt(
            to_decimal(fixed_costs, "fixed_costs"),
            to_decimal(variable_cost, "variable_cost_per_unit"),
            to_decimal(sale_price, "sale_price_per_unit"),
        )
        return await self._call_structured(
            InsightKind.BREAK_EVEN_SCENARIOS,
            prompt,
            prompts.BREAK_EVEN_SCENARIOS_SCHEMA,
            _SCENARIOS,
        )
