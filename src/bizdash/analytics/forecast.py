"""Fixed-rate trend projection of the monthly profit series."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from bizdash.analytics.series import add_months, format_month, month_label
from bizdash.errors import ValidationError
from bizdash.models import ChartPoint, ForecastPoint, MonthBucket
from bizdash.parsing import to_decimal

DEFAULT_HORIZON_MONTHS = 3
DEFAULT_GROWTH_RATE = Decimal("0.05")
# Seed used when the last month made a loss or broke even
DEFAULT_FLOOR = Decimal("100")


def round_currency(amount: Decimal) -> Decimal:
    """Round to whole currency units, halves away from zero."""
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def project(
    series: Sequence[MonthBucket],
    horizon_months: int = DEFAULT_HORIZON_MONTHS,
    growth_rate: Decimal | int | float | str = DEFAULT_GROWTH_RATE,
    floor: Decimal = DEFAULT_FLOOR,
) -> list[ForecastPoint]:
    """Extend a monthly series by compounding the last month's profit.

    Args:
        series: Chronological month buckets; must not be empty.
        horizon_months: Number of months to project.
        growth_rate: Monthly growth applied to each projected month.
        floor: Seed used instead of a non-positive last-month profit.

    Returns:
        One point per projected month, profit rounded to whole units.

    Raises:
        ValidationError: On an empty series, a negative horizon or a growth
            rate that is not a finite number.
    """
    if not series:
        raise ValidationError("cannot project an empty series", field="series")
    if horizon_months < 0:
        raise ValidationError("horizon_months must not be negative", field="horizon_months")

    rate = to_decimal(growth_rate, "growth_rate")
    multiplier = Decimal("1") + rate

    last = series[-1]
    base_profit = last.net_profit if last.net_profit > 0 else floor
    year, month = last.year_month

    points: list[ForecastPoint] = []
    for i in range(1, horizon_months + 1):
        cursor_year, cursor_month = add_months(year, month, i)
        base_profit *= multiplier
        points.append(
            ForecastPoint(
                label=format_month(cursor_year, cursor_month),
                projected_profit=round_currency(base_profit),
            )
        )
    return points


def build_profit_chart(
    series: Sequence[MonthBucket], forecast: Sequence[ForecastPoint]
) -> list[ChartPoint]:
    """Join history and projection into chart rows.

    The last historical row repeats its actual value as the predicted value
    so the projected line starts where the actual line ends.
    """
    if not series:
        return []

    points = [
        ChartPoint(label=month_label(bucket.month_key), actual=bucket.net_profit)
        for bucket in series[:-1]
    ]
    last = series[-1]
    points.append(
        ChartPoint(
            label=month_label(last.month_key),
            actual=last.net_profit,
            predicted=last.net_profit,
        )
    )
    points.extend(
        ChartPoint(label=point.label, predicted=point.projected_profit) for point in forecast
    )
    return points
