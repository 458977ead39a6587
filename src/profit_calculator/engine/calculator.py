"""
Calculation Engine - derives the cost and profit figures for one row.

The work is split in two stages:
- compute_figures() does the arithmetic on plain floats and may return
  inf or nan for degenerate inputs (e.g. GST of -1)
- format_figure() renders a float as fixed-precision text and clamps
  any non-finite value to "0.00"

recompute() glues the two together and never raises.
"""
import math
import re
from dataclasses import dataclass, replace
from decimal import Decimal, Context, ROUND_HALF_UP

from .models import PricingRow


# Longest leading decimal number: optional sign, digits/fraction, exponent,
# or a signed Infinity
_LEADING_NUMBER = re.compile(r'\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))')

# Anything a numeric input field may not contain
_NON_NUMERIC = re.compile(r'[^0-9.\-]')

# Enough precision to quantize any finite double without an exponent
_FORMAT_CONTEXT = Context(prec=400)

INVALID_FIGURE = '0.00'


@dataclass(frozen=True)
class Figures:
    """Unclamped derived figures for one row."""
    effective_cost: float
    cost_with_gst: float
    final_cost: float
    selling_price_without_gst: float
    selling_price_per_metre: float
    profit: float


# Derived field → fraction digits used when rendering it
PRECISION = {
    'effective_cost': 2,
    'cost_with_gst': 2,
    'final_cost': 2,
    'selling_price_without_gst': 2,
    'selling_price_per_metre': 3,
    'profit': 2,
}


def parse_decimal(value) -> float:
    """
    Parse the leading decimal number of a text value.

    Trailing junk is ignored ("12abc" → 12.0). Empty or unparsable
    text gives 0.0.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
        return 0.0 if math.isnan(number) else number

    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return 0.0
    number = float(match.group(1))
    # -0 coerces to 0
    return number if number != 0 else 0.0


def sanitize_numeric(value: str) -> str:
    """Strip everything except digits, decimal point and minus sign."""
    return _NON_NUMERIC.sub('', str(value))


def _divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE results instead of ZeroDivisionError."""
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def compute_figures(
    quantity: float,
    cost: float,
    discount: float,
    gst: float,
    expense: float,
    selling_price: float,
) -> Figures:
    """
    Compute the derived figures from numeric inputs.

    Discount and GST are fractions and are not range-checked. Only the
    per-metre price branches on quantity, which is 0 unless quantity > 0.
    """
    # Cost side
    effective_cost = (quantity * cost) * (1 - discount)
    cost_with_gst = effective_cost * (1 + gst)
    final_cost = cost_with_gst + expense

    # Selling side
    selling_price_without_gst = _divide(selling_price, 1 + gst)
    if quantity > 0:
        selling_price_per_metre = selling_price_without_gst / quantity
    else:
        selling_price_per_metre = 0.0
    profit = selling_price - final_cost

    return Figures(
        effective_cost=effective_cost,
        cost_with_gst=cost_with_gst,
        final_cost=final_cost,
        selling_price_without_gst=selling_price_without_gst,
        selling_price_per_metre=selling_price_per_metre,
        profit=profit,
    )


def format_figure(number: float, decimals: int = 2) -> str:
    """
    Render a number with a fixed count of fraction digits.

    Halves round away from zero on the exact binary value. NaN and
    infinities render as "0.00".
    """
    if math.isnan(number) or math.isinf(number):
        return INVALID_FIGURE
    if number == 0:
        number = 0.0
    exponent = Decimal(1).scaleb(-decimals)
    quantized = Decimal(number).quantize(exponent, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT)
    return format(quantized, 'f')


def figures_for(row: PricingRow) -> Figures:
    """Parse a row's raw fields and compute its unclamped figures."""
    return compute_figures(
        quantity=parse_decimal(row.quantity),
        cost=parse_decimal(row.cost),
        discount=parse_decimal(row.discount),
        gst=parse_decimal(row.gst),
        expense=parse_decimal(row.expense),
        selling_price=parse_decimal(row.selling_price),
    )


def recompute(row: PricingRow) -> PricingRow:
    """
    Return a copy of the row with every derived field recalculated.

    Pure and total: the input row is not modified and no input makes it
    raise.
    """
    figures = figures_for(row)
    derived = {
        name: format_figure(getattr(figures, name), decimals)
        for name, decimals in PRECISION.items()
    }
    # No per-metre price exists without a positive quantity
    if not parse_decimal(row.quantity) > 0:
        derived['selling_price_per_metre'] = INVALID_FIGURE
    return replace(row, **derived)
