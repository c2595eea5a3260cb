"""Configuration module for bizdash."""

from bizdash.config.logging import configure_logging
from bizdash.config.settings import FlatSettings, get_settings

__all__ = ["FlatSettings", "get_settings", "configure_logging"]
