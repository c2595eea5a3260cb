"""Pytest configuration and fixtures."""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables before importing settings
os.environ.setdefault("GOOGLE_API_KEY", "test-key")

from bizdash.config import get_settings  # noqa: E402
from bizdash.insights.gemini import GeminiResponse  # noqa: E402
from bizdash.ledger import Ledger  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test so env overrides do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ledger():
    """Ledger with a small two-month history."""
    ledger = Ledger()
    ledger.add_transaction("revenue", "Consulting", "1200", "2024-01-05")
    ledger.add_transaction("expense", "Software", "200", "2024-01-20")
    ledger.add_transaction("revenue", "Website build", "2500", "2024-02-03")
    ledger.add_transaction("expense", "Rent", "800", "2024-02-28")
    return ledger


@pytest.fixture
def transactions(ledger):
    return ledger.get_transactions()


def _make_response(content: str, citations=None) -> GeminiResponse:
    return GeminiResponse(
        content=content,
        stop_reason="end_turn",
        usage={"input_tokens": 10, "output_tokens": 5},
        citations=citations or [],
    )


@pytest.fixture
def make_response():
    """Build a GeminiResponse as returned by GeminiClient.generate()."""
    return _make_response


@pytest.fixture
def mock_gemini_client():
    """A GeminiClient stand-in whose generate() is an AsyncMock."""
    client = MagicMock()
    client.generate = AsyncMock(return_value=_make_response(""))
    return client


@pytest.fixture
def sdk_response():
    """Build a google-genai style response object."""

    def _build(
        texts=("Hello",),
        finish_reason="STOP",
        chunks=None,
        prompt_tokens=12,
        output_tokens=7,
    ):
        parts = [SimpleNamespace(text=text) for text in texts]
        candidate = SimpleNamespace(
            content=SimpleNamespace(parts=parts),
            finish_reason=finish_reason,
            grounding_metadata=(
                SimpleNamespace(grounding_chunks=chunks) if chunks is not None else None
            ),
        )
        return SimpleNamespace(
            candidates=[candidate],
            usage_metadata=SimpleNamespace(
                prompt_token_count=prompt_tokens,
                candidates_token_count=output_tokens,
            ),
        )

    return _build
