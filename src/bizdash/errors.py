"""Exception hierarchy for bizdash."""

from typing import Any


class BizdashError(Exception):
    """Base exception for bizdash errors."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(BizdashError):
    """Malformed or out-of-range input to the ledger or a calculator."""

    def __init__(self, message: str, field: str | None = None, details: Any = None):
        super().__init__(message, details)
        self.field = field


class ProviderError(BizdashError):
    """The external insight provider failed or returned unusable data."""

    def __init__(self, message: str, kind: str | None = None, details: Any = None):
        super().__init__(message, details)
        self.kind = kind
