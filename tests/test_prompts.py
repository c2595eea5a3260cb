"""Tests for prompt builders."""

from decimal import Decimal

import pytest

from bizdash.insights.prompts import (
    competitor_analysis_prompt,
    format_amount,
    format_transactions,
    parse_recommendations,
    recommendations_prompt,
)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [("2500", "2500"), ("2500.00", "2500"), ("19.90", "19.9"), ("0.5", "0.5")],
)
def test_format_amount(amount, expected):
    assert format_amount(Decimal(amount)) == expected


def test_format_transactions(transactions):
    lines = format_transactions(transactions).splitlines()

    assert lines == [
        "2024-01-05: revenue - Consulting - $1200",
        "2024-01-20: expense - Software - $200",
        "2024-02-03: revenue - Website build - $2500",
        "2024-02-28: expense - Rent - $800",
    ]


def test_format_transactions_without_description(transactions):
    assert format_transactions(transactions[:1], with_description=False) == (
        "2024-01-05: revenue - $1200"
    )


def test_recommendations_prompt_lists_transactions(transactions):
    prompt = recommendations_prompt(transactions)

    assert "3-5 actionable recommendations" in prompt
    assert prompt.rstrip().endswith("Recommendations:")
    assert "2024-02-28: expense - Rent - $800" in prompt


def test_competitor_analysis_prompt():
    prompt = competitor_analysis_prompt("Bakery", ["Crumbs", "Loaf"], "Sourdough")

    assert "Industry: Bakery" in prompt
    assert "Our Unique Selling Proposition (USP): Sourdough" in prompt
    assert "Competitors to analyze: Crumbs, Loaf" in prompt


def test_parse_recommendations_strips_single_bullet():
    text = "1. Numbered stays\n* Bulleted\n-  Dashed\n\n   \n** Double"

    assert parse_recommendations(text) == [
        "1. Numbered stays",
        "Bulleted",
        "Dashed",
        "* Double",
    ]
