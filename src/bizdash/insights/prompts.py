"""Prompt builders and response schemas for the insight provider.

Prompts are plain functions of ledger-derived values so they can be tested
without a model. Schemas are JSON Schema dicts; the Gemini client converts
them to its own format.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any

from bizdash.analytics.summary import net_profit_margin, summarize
from bizdash.models import Transaction

ADVANCED_FORECAST_MONTHS = 6


def format_amount(amount: Decimal) -> str:
    """Render an amount without trailing zeros, e.g. 2500 or 19.99."""
    normalized = amount.normalize()
    if normalized == normalized.to_integral_value():
        return str(normalized.quantize(Decimal("1")))
    return str(normalized)


def format_transactions(
    transactions: Iterable[Transaction], with_description: bool = True
) -> str:
    """One line per transaction: ``YYYY-MM-DD: kind - description - $amount``."""
    lines = []
    for t in transactions:
        if with_description:
            lines.append(
                f"{t.date.isoformat()}: {t.kind.value} - {t.description} - ${format_amount(t.amount)}"
            )
        else:
            lines.append(f"{t.date.isoformat()}: {t.kind.value} - ${format_amount(t.amount)}")
    return "\n".join(lines)


def recommendations_prompt(transactions: Sequence[Transaction]) -> str:
    return f"""Based on the following financial transactions, provide 3-5 actionable recommendations for a small business to improve profitability.
Focus on cost-saving opportunities, revenue growth ideas, and financial management improvements.
Keep each recommendation concise and clear.

Transactions:
{format_transactions(transactions)}

Recommendations:"""


def competitor_analysis_prompt(industry: str, competitors: Sequence[str], usp: str) -> str:
    return f"""Analyze the competitive landscape for a small business.
Industry: {industry}
Our Unique Selling Proposition (USP): {usp}
Competitors to analyze: {", ".join(competitors)}

For each competitor, provide a brief analysis of their likely pricing and marketing strategies.
Return the analysis in JSON format."""


def financial_report_prompt(transactions: Sequence[Transaction]) -> str:
    return f"""You are a financial analyst AI. Based on the following transactions, generate a weekly email report.
The report should include:
1. A **Financial Summary** (total revenue, expenses, net profit).
2. A **Key Insights** section identifying the largest revenue source and largest expense.
3. An **Alerts & Opportunities** section with one key risk or opportunity you've identified from the data.

Format it clearly with markdown-style headings (e.g., ### Financial Summary).

Transactions:
{format_transactions(transactions)}"""


def market_trends_prompt(topic: str) -> str:
    return (
        f'Provide a summary of the current market trends and social media sentiment for the "{topic}" '
        "industry. Include any recent news or significant events."
    )


def industry_benchmark_prompt(transactions: Sequence[Transaction], industry: str) -> str:
    margin = net_profit_margin(summarize(transactions))
    return f"""A small business in the "{industry}" industry has a net profit margin of {margin:.2f}%.
What is a typical net profit margin for this industry?
Provide a brief analysis comparing the business's performance to the industry average."""


def advanced_forecast_prompt(transactions: Sequence[Transaction], today: str) -> str:
    last_date = transactions[-1].date.isoformat() if transactions else today
    return f"""Analyze the following financial transactions, looking for monthly patterns and potential seasonality.
Then, provide a {ADVANCED_FORECAST_MONTHS}-month financial forecast starting from the month after {last_date}.
For each month, predict the total revenue and total expenses.

Transactions:
{format_transactions(transactions, with_description=False)}"""


def break_even_scenarios_prompt(
    fixed_costs: Decimal, variable_cost: Decimal, sale_price: Decimal
) -> str:
    return f"""A business has the following financials:
- Monthly Fixed Costs: ${format_amount(fixed_costs)}
- Variable Cost per Unit: ${format_amount(variable_cost)}
- Sale Price per Unit: ${format_amount(sale_price)}

Suggest 2-3 actionable scenarios to lower their break-even point. For each scenario, provide a title and a brief description of the strategy."""


# === Response schemas ===

COMPETITOR_ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "competitors": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "pricing_strategy": {
                        "type": "string",
                        "description": "A brief analysis of the competitor's pricing strategy.",
                    },
                    "marketing_strategy": {
                        "type": "string",
                        "description": "A brief analysis of the competitor's marketing strategy.",
                    },
                },
                "required": ["name", "pricing_strategy", "marketing_strategy"],
            },
        },
    },
}

BENCHMARK_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "user_metric": {
            "type": "string",
            "description": "The user's metric, e.g., '15.20% Net Profit Margin'",
        },
        "industry_average": {
            "type": "string",
            "description": "The industry average metric, e.g., '10-12% Net Profit Margin'",
        },
        "analysis": {
            "type": "string",
            "description": "A brief analysis comparing the two and providing context.",
        },
    },
    "required": ["user_metric", "industry_average", "analysis"],
}

FORECAST_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "month": {"type": "string", "description": "The forecasted month, e.g., 'July 2024'"},
            "revenue": {"type": "number", "description": "Predicted total revenue for the month"},
            "expenses": {"type": "number", "description": "Predicted total expenses for the month"},
        },
        "required": ["month", "revenue", "expenses"],
    },
}

BREAK_EVEN_SCENARIOS_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "title": {
                "type": "string",
                "description": "The title of the scenario, e.g., 'Reduce Material Costs'",
            },
            "description": {"type": "string", "description": "A brief description of the strategy."},
        },
        "required": ["title", "description"],
    },
}


def parse_recommendations(text: str) -> list[str]:
    """Split model output into recommendations, dropping bullets and blanks."""
    results = []
    for line in text.splitlines():
        cleaned = line.strip()
        if cleaned[:1] in ("*", "-"):
            cleaned = cleaned[1:].strip()
        if cleaned:
            results.append(cleaned)
    return results
