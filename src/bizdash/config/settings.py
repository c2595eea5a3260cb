"""Configuration settings for the bizdash dashboard."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class FlatSettings(BaseSettings):
    """Flat settings read from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gemini insight provider. The key is only required once a client is built.
    google_api_key: SecretStr | None = Field(default=None, validation_alias="GOOGLE_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
    llm_max_tokens: int = Field(default=4096, validation_alias="LLM_MAX_TOKENS")
    llm_temperature: float = Field(default=0.7, validation_alias="LLM_TEMPERATURE")

    # Trend projection
    forecast_horizon_months: int = Field(
        default=3, ge=0, validation_alias="FORECAST_HORIZON_MONTHS"
    )
    forecast_growth_rate: Decimal = Field(
        default=Decimal("0.05"), validation_alias="FORECAST_GROWTH_RATE"
    )
    forecast_floor: Decimal = Field(
        default=Decimal("100"), gt=0, validation_alias="FORECAST_FLOOR"
    )
    min_chart_transactions: int = Field(
        default=2, ge=0, validation_alias="MIN_CHART_TRANSACTIONS"
    )

    # Ledger
    invoice_number_start: int = Field(default=1001, validation_alias="INVOICE_NUMBER_START")
    invoice_number_prefix: str = Field(default="INV-", validation_alias="INVOICE_NUMBER_PREFIX")
    recent_transactions_limit: int = Field(
        default=5, ge=0, validation_alias="RECENT_TRANSACTIONS_LIMIT"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", validation_alias="LOG_FORMAT"
    )


@lru_cache
def get_settings() -> FlatSettings:
    """Get cached settings instance."""
    return FlatSettings()
