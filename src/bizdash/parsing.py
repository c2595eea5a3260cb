"""Coercion of user-supplied values into ledger types."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from bizdash.errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"


def to_decimal(value: Any, field: str) -> Decimal:
    """Normalize a numeric value to a finite Decimal.

    Args:
        value: Decimal, int, float or numeric string.
        field: Name of the input, reported on failure.

    Raises:
        ValidationError: If the value is missing, non-numeric or not finite.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number", field=field)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(f"{field} must be a number, got {value!r}", field=field) from e
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field)
    return result


def parse_date(value: Any, field: str) -> date:
    """Parse a calendar date given as a date or a YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError as e:
            raise ValidationError(
                f"{field} must be a YYYY-MM-DD date, got {value!r}", field=field
            ) from e
    raise ValidationError(f"{field} must be a date", field=field)


def require_text(value: Any, field: str) -> str:
    """Return the stripped text, rejecting empty or blank values."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value.strip()
