"""
Data models for the profit calculator.

Uses dataclasses for structured row representation. Every field is kept as
text, the way the values are entered and displayed; numbers are only parsed
inside the calculation engine.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


# Raw (user-editable) fields, in record order
RAW_FIELDS = (
    'item_name', 'quantity', 'cost', 'discount', 'gst', 'expense', 'selling_price',
)

# Raw fields that hold numbers
NUMERIC_FIELDS = ('quantity', 'cost', 'discount', 'gst', 'expense', 'selling_price')

# Derived (computed, read-only) fields
DERIVED_FIELDS = (
    'effective_cost',
    'cost_with_gst',
    'final_cost',
    'selling_price_without_gst',
    'selling_price_per_metre',
    'profit',
)

# Defaults for a newly created row
ROW_DEFAULTS = {
    'item_name': 'New Item',
    'quantity': '30',
    'cost': '9.75',
    'discount': '0.02',
    'gst': '0.18',
    'expense': '55',
    'selling_price': '660',
}

# Attribute name → key used in saved state files
RECORD_KEYS = {
    'id': 'id',
    'item_name': 'itemName',
    'quantity': 'quantity',
    'cost': 'cost',
    'discount': 'discount',
    'effective_cost': 'effective_cost',
    'gst': 'gst',
    'cost_with_gst': 'cost_with_gst',
    'expense': 'expense',
    'final_cost': 'final_cost',
    'selling_price': 'selling_price',
    'selling_price_without_gst': 'selling_price_without_gst',
    'selling_price_per_metre': 'selling_price_per_metre',
    'profit': 'profit',
}

# Human-readable column labels
FIELD_LABELS = {
    'id': 'ID',
    'item_name': 'Item Name',
    'quantity': 'Quantity',
    'cost': 'Cost/Metre',
    'discount': 'Discount %',
    'effective_cost': 'Effective Cost',
    'gst': 'GST %',
    'cost_with_gst': 'Cost with GST',
    'expense': 'Expense',
    'final_cost': 'Final Cost',
    'selling_price': 'Selling Price',
    'selling_price_without_gst': 'SP without GST',
    'selling_price_per_metre': 'SP/Metre',
    'profit': 'Profit',
}


def new_item_id() -> str:
    """Generate a fresh, never-reused row identifier."""
    return f"item-{uuid.uuid4().hex}"


@dataclass
class PricingRow:
    """A single priceable item with its raw inputs and derived figures."""
    id: str
    item_name: str = ROW_DEFAULTS['item_name']
    quantity: str = ROW_DEFAULTS['quantity']
    cost: str = ROW_DEFAULTS['cost']
    discount: str = ROW_DEFAULTS['discount']
    gst: str = ROW_DEFAULTS['gst']
    expense: str = ROW_DEFAULTS['expense']
    selling_price: str = ROW_DEFAULTS['selling_price']

    # Derived, blank until the row has been through the engine
    effective_cost: str = ''
    cost_with_gst: str = ''
    final_cost: str = ''
    selling_price_without_gst: str = ''
    selling_price_per_metre: str = ''
    profit: str = ''

    def to_record(self) -> dict:
        """Convert to the record format used in state files."""
        return {key: getattr(self, attr) for attr, key in RECORD_KEYS.items()}

    @classmethod
    def from_record(cls, record: dict, item_id: Optional[str] = None) -> 'PricingRow':
        """
        Create a row from a state file record.

        Missing fields become empty text and non-text values are converted to
        text. The identifier is taken from ``item_id`` when given.
        """
        values = {}
        for attr, key in RECORD_KEYS.items():
            value = record.get(key)
            if value is None and attr == 'item_name':
                value = record.get('item_name')
            values[attr] = '' if value is None else str(value)
        if item_id is not None:
            values['id'] = item_id
        return cls(**values)


@dataclass
class Summary:
    """Aggregate figures for a collection of rows."""
    item_count: int
    total_profit: float
    total_final_cost: float
    profitable_count: int = 0
    loss_count: int = 0

    @property
    def is_profitable(self) -> bool:
        return self.total_profit > 0


def create_row(defaults: Optional[dict] = None) -> PricingRow:
    """
    Create a new row with a fresh identifier.

    ``defaults`` may override any raw field; empty or missing overrides fall
    back to the built-in defaults. Derived fields start blank.
    """
    defaults = defaults or {}
    raw = {}
    for name in RAW_FIELDS:
        value = defaults.get(name)
        raw[name] = str(value) if value not in (None, '') else ROW_DEFAULTS[name]
    return PricingRow(id=new_item_id(), **raw)

