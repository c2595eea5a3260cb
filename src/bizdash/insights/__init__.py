"""AI insight boundary: Gemini client, prompts and typed results."""

from bizdash.insights.gemini import GeminiClient, GeminiResponse
from bizdash.insights.provider import InsightProvider
from bizdash.insights.types import (
    Benchmark,
    BreakEvenScenario,
    Citation,
    Competitor,
    CompetitorAnalysis,
    InsightKind,
    MonthlyForecast,
    TextInsight,
)

__all__ = [
    "GeminiClient",
    "GeminiResponse",
    "InsightProvider",
    "InsightKind",
    "Benchmark",
    "BreakEvenScenario",
    "Citation",
    "Competitor",
    "CompetitorAnalysis",
    "MonthlyForecast",
    "TextInsight",
]
