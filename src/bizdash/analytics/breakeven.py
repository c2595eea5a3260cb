"""Break-even point from fixed costs and unit economics."""

from decimal import Decimal, getcontext, localcontext
from fractions import Fraction

from bizdash.errors import ValidationError
from bizdash.models import BreakEvenResult
from bizdash.parsing import to_decimal


def _exact_precision(*values: Decimal) -> int:
    """Digits needed to add or subtract the given values without rounding."""
    top = max(value.adjusted() for value in values)
    bottom = min(value.as_tuple().exponent for value in values)
    return max(top - bottom + 2, getcontext().prec)


def contribution_margin(
    variable_cost_per_unit: Decimal, sale_price_per_unit: Decimal
) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _exact_precision(variable_cost_per_unit, sale_price_per_unit)
        return sale_price_per_unit - variable_cost_per_unit


def break_even(
    fixed_costs: Decimal | int | float | str,
    variable_cost_per_unit: Decimal | int | float | str,
    sale_price_per_unit: Decimal | int | float | str,
) -> BreakEvenResult:
    """Units (and the revenue they bring) needed to cover fixed costs.

    Units are the exact ceiling of fixed costs over the contribution margin,
    however many digits the inputs carry.

    Raises:
        ValidationError: If an input is not a finite number, fixed costs are
            not positive, or the sale price does not exceed the variable cost.
    """
    fixed = to_decimal(fixed_costs, "fixed_costs")
    variable = to_decimal(variable_cost_per_unit, "variable_cost_per_unit")
    price = to_decimal(sale_price_per_unit, "sale_price_per_unit")

    if fixed <= 0:
        raise ValidationError("fixed_costs must be greater than zero", field="fixed_costs")
    margin = contribution_margin(variable, price)
    if margin <= 0:
        raise ValidationError(
            "sale price must be greater than variable cost", field="sale_price_per_unit"
        )

    ratio = Fraction(fixed) / Fraction(margin)
    units = -(-ratio.numerator // ratio.denominator)

    with localcontext() as ctx:
        ctx.prec = max(len(str(units)) + len(price.as_tuple().digits), getcontext().prec)
        revenue = units * price
    return BreakEvenResult(units=units, revenue=revenue)
