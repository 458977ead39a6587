"""
Aggregator - totals across a collection of rows.
"""
from typing import Iterable

from .calculator import parse_decimal
from .models import PricingRow, Summary


def sum_field(rows: Iterable[PricingRow], field_name: str) -> float:
    """Sum a numeric field over all rows; unparsable values count as 0."""
    return sum((parse_decimal(getattr(row, field_name)) for row in rows), 0.0)


def total_profit(rows: Iterable[PricingRow]) -> float:
    """Sum of every row's profit. An empty collection totals 0."""
    return sum_field(rows, 'profit')


def summarize(rows: Iterable[PricingRow]) -> Summary:
    """Build the aggregate figures shown under the table."""
    rows = list(rows)
    profits = [parse_decimal(row.profit) for row in rows]
    return Summary(
        item_count=len(rows),
        total_profit=sum(profits, 0.0),
        total_final_cost=sum_field(rows, 'final_cost'),
        profitable_count=sum(1 for p in profits if p > 0),
        loss_count=sum(1 for p in profits if p < 0),
    )
