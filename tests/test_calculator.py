"""
Regression tests for the calculation engine.

The worked example is the default row: 30 metres at 9.75 with a 2% discount,
18% GST, 55 expense and a 660 selling price.
"""
import math
import pytest

from profit_calculator.engine.models import PricingRow, DERIVED_FIELDS, create_row
from profit_calculator.engine.calculator import (
    compute_figures,
    format_figure,
    parse_decimal,
    recompute,
    sanitize_numeric,
)


def test_default_row_figures():
    """The default row produces the known breakdown."""
    row = recompute(create_row())

    assert row.effective_cost == "286.65"
    assert row.cost_with_gst == "338.25"
    assert row.final_cost == "393.25"
    assert row.selling_price_without_gst == "559.32"
    assert row.selling_price_per_metre == "18.644"
    assert row.profit == "266.75"


def test_unclamped_figures_are_inspectable():
    figures = compute_figures(30, 9.75, 0.02, 0.18, 55, 660)

    assert abs(figures.effective_cost - 286.65) < 1e-9
    assert abs(figures.cost_with_gst - 338.247) < 1e-9
    assert abs(figures.selling_price_without_gst - 660 / 1.18) < 1e-9
    assert abs(figures.profit - (660 - 393.247)) < 1e-9


def test_recompute_is_pure_and_deterministic():
    row = create_row()
    first = recompute(row)
    second = recompute(row)

    assert row.profit == "", "Input row must not be modified"
    for name in DERIVED_FIELDS:
        assert getattr(first, name) == getattr(second, name), f"{name} differs between runs"
    assert first.id == row.id


@pytest.mark.parametrize("quantity", ["0", "-5", "0.0", "abc", "-0.5"])
def test_per_metre_price_zero_without_positive_quantity(quantity):
    row = recompute(create_row({'quantity': quantity, 'selling_price': '1000', 'gst': '0.05'}))
    assert row.selling_price_per_metre == "0.00", \
        f"Per-metre price should be zero for quantity {quantity!r}, got {row.selling_price_per_metre}"


def test_fractional_quantity_is_computed_through():
    row = recompute(create_row({'quantity': '0.5', 'cost': '10', 'discount': '0', 'gst': '0',
                                'expense': '0', 'selling_price': '20'}))
    assert row.effective_cost == "5.00"
    assert row.selling_price_per_metre == "40.000"
    assert row.profit == "15.00"


def test_gst_of_minus_one_is_clamped():
    """Division by zero in the selling-side figures renders as 0.00."""
    row = recompute(create_row({'gst': '-1'}))

    assert row.selling_price_without_gst == "0.00"
    assert row.selling_price_per_metre == "0.00"
    assert row.cost_with_gst == "0.00"
    # No division in profit: selling price minus expense
    assert row.profit == "605.00"


def test_gst_of_minus_one_unclamped_is_infinite():
    figures = compute_figures(30, 9.75, 0.02, -1, 55, 660)
    assert math.isinf(figures.selling_price_without_gst)

    figures = compute_figures(30, 9.75, 0.02, -1, 55, 0)
    assert math.isnan(figures.selling_price_without_gst)


def test_fractions_are_not_range_checked():
    row = recompute(create_row({'quantity': '10', 'cost': '10', 'discount': '1.5',
                                'gst': '2', 'expense': '0', 'selling_price': '300'}))
    assert row.effective_cost == "-50.00"
    assert row.cost_with_gst == "-150.00"
    assert row.selling_price_without_gst == "100.00"
    assert row.profit == "450.00"


def test_unparsable_inputs_coerce_to_zero():
    row = recompute(PricingRow(id="x", item_name="Broken", quantity="", cost="n/a",
                               discount="", gst="", expense="", selling_price=""))
    for name in DERIVED_FIELDS:
        value = getattr(row, name)
        assert float(value) == 0.0, f"{name} should be zero, got {value}"


@pytest.mark.parametrize("text,expected", [
    ("12", 12.0),
    ("9.75", 9.75),
    ("-3.5", -3.5),
    (".5", 0.5),
    ("12abc", 12.0),
    ("1.2.3", 1.2),
    ("1-2", 1.0),
    ("  7", 7.0),
    ("2e3", 2000.0),
    ("", 0.0),
    ("-", 0.0),
    (".", 0.0),
    ("abc", 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
    ("Infinity", math.inf),
    ("-Infinity5", -math.inf),
    (None, 0.0),
])
def test_parse_decimal(text, expected):
    assert parse_decimal(text) == expected


def test_infinite_input_renders_invalid_figures():
    row = recompute(create_row({'cost': 'Infinity'}))

    assert row.effective_cost == "0.00"
    assert row.final_cost == "0.00"
    assert row.profit == "0.00"
    assert row.selling_price_without_gst == "559.32", "Selling side does not depend on cost"


@pytest.mark.parametrize("number,decimals,expected", [
    (338.247, 2, "338.25"),
    (18.64406779661017, 3, "18.644"),
    (2.5, 0, "3"),
    (-2.5, 0, "-3"),
    (0.0, 2, "0.00"),
    (-0.0, 2, "0.00"),
    (1234567.891, 2, "1234567.89"),
    (float('nan'), 2, "0.00"),
    (float('inf'), 3, "0.00"),
    (float('-inf'), 2, "0.00"),
])
def test_format_figure(number, decimals, expected):
    assert format_figure(number, decimals) == expected


def test_sanitize_numeric():
    assert sanitize_numeric("₹1,234.50") == "1234.50"
    assert sanitize_numeric("-12 kg") == "-12"
    assert sanitize_numeric("abc") == ""
