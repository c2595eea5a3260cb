"""Typed results returned by the insight provider.

Responses from the model are validated into these models at the provider
boundary; anything that does not fit is reported as a ProviderError.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class InsightKind(str, Enum):
    """Kinds of AI-generated insight."""

    RECOMMENDATIONS = "recommendations"
    COMPETITOR_ANALYSIS = "competitor_analysis"
    FINANCIAL_REPORT = "financial_report"
    MARKET_TRENDS = "market_trends"
    INDUSTRY_BENCHMARK = "industry_benchmark"
    ADVANCED_FORECAST = "advanced_forecast"
    BREAK_EVEN_SCENARIOS = "break_even_scenarios"


class Citation(BaseModel):
    """A web source the model grounded its answer on."""

    uri: str
    title: str = ""


class TextInsight(BaseModel):
    """Free text, optionally with the sources it cites."""

    text: str
    citations: list[Citation] = Field(default_factory=list)


class Competitor(BaseModel):
    name: str
    pricing_strategy: str
    marketing_strategy: str


class CompetitorAnalysis(BaseModel):
    competitors: list[Competitor] = Field(default_factory=list)


class Benchmark(BaseModel):
    """The business's metric next to its industry average."""

    user_metric: str
    industry_average: str
    analysis: str


class MonthlyForecast(BaseModel):
    month: str
    revenue: Decimal
    expenses: Decimal

    @property
    def net_profit(self) -> Decimal:
        return self.revenue - self.expenses


class BreakEvenScenario(BaseModel):
    title: str
    description: str
