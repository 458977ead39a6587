"""Engine subpackage - row model, calculation, totals and sorting."""
from .models import PricingRow, Summary, create_row
from .calculator import recompute, parse_decimal, format_figure
from .aggregator import total_profit, summarize
from .sorter import SortDirection, sorted_view

__all__ = [
    'PricingRow', 'Summary', 'create_row',
    'recompute', 'parse_decimal', 'format_figure',
    'total_profit', 'summarize',
    'SortDirection', 'sorted_view',
]
