"""
Sorter - presentation ordering of rows by profit.

Sorting only ever produces a view. The storage order of the collection
is left alone.
"""
from enum import Enum
from typing import Sequence

from .calculator import parse_decimal
from .models import PricingRow


class SortDirection(str, Enum):
    """Profit sort direction, cycled by a single toggle."""
    NONE = 'none'
    DESCENDING = 'desc'
    ASCENDING = 'asc'

    def next(self) -> 'SortDirection':
        """Advance none → descending → ascending → none."""
        return _CYCLE[self]

    @property
    def arrow(self) -> str:
        return {'none': '↕', 'desc': '↓', 'asc': '↑'}[self.value]


_CYCLE = {
    SortDirection.NONE: SortDirection.DESCENDING,
    SortDirection.DESCENDING: SortDirection.ASCENDING,
    SortDirection.ASCENDING: SortDirection.NONE,
}


def _profit_key(row: PricingRow) -> float:
    return parse_decimal(row.profit)


def sorted_view(rows: Sequence[PricingRow], direction: SortDirection) -> Sequence[PricingRow]:
    """
    Order rows for display.

    NONE hands back the given sequence itself. The other directions return
    a new list sorted by parsed profit; ties keep their storage order.
    """
    direction = SortDirection(direction)
    if direction is SortDirection.NONE:
        return rows
    # sorted() is stable, and stays stable with reverse=True
    return sorted(rows, key=_profit_key, reverse=direction is SortDirection.DESCENDING)
