"""
State Codec - save/load of the row collection.

The JSON state document is a list of row records (all values as text),
written with indentation so it stays readable when opened by hand.
Loading returns a LoadResult instead of raising, so callers can surface
the errors and keep their current rows.
"""
import io
import json
from dataclasses import dataclass, field
from typing import Iterable, Optional

import pandas as pd

from ..engine.models import PricingRow, RECORD_KEYS, FIELD_LABELS, new_item_id


# Keys accepted as the item-name field of a record
ITEM_NAME_KEYS = ('itemName', 'item_name')

TABLE_FORMATS = {
    'csv': 'text/csv',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
}


class EmptyStateError(ValueError):
    """Raised when asked to export a collection with no rows."""


@dataclass
class LoadResult:
    """Result of decoding a state document."""
    valid: bool
    rows: list[PricingRow] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


def export_rows(rows: Iterable[PricingRow], indent: int = 2) -> str:
    """
    Serialize every row (raw and derived fields) to a JSON document.

    Raises:
        EmptyStateError: if there are no rows to save
    """
    records = [row.to_record() for row in rows]
    if not records:
        raise EmptyStateError("There is no data to save.")
    return json.dumps(records, indent=indent, ensure_ascii=False)


def _has_item_name(record) -> bool:
    return isinstance(record, dict) and any(key in record for key in ITEM_NAME_KEYS)


def import_rows(text: Optional[str]) -> LoadResult:
    """
    Parse a JSON state document back into rows.

    Only the shape is checked: the document must be a list, and its first
    element (if any) must be an object carrying an item name. Field values
    are taken as they are; missing identifiers and duplicates get a fresh
    one.
    """
    try:
        if isinstance(text, bytes):
            text = text.decode('utf-8-sig')
        data = json.loads(text or '')
    except (TypeError, ValueError, RecursionError) as e:
        return LoadResult(valid=False, errors=[f"Invalid or corrupted state file: {e}"])

    if not isinstance(data, list):
        return LoadResult(
            valid=False,
            errors=["Invalid or corrupted state file: expected a list of items."],
        )

    if data and not _has_item_name(data[0]):
        return LoadResult(
            valid=False,
            errors=["Invalid or corrupted state file: first item has no item name."],
        )

    result = LoadResult(valid=True)
    seen_ids = set()

    for index, record in enumerate(data, start=1):
        if not isinstance(record, dict):
            result.valid = False
            result.errors.append(f"Invalid or corrupted state file: item {index} is not an object.")
            continue

        item_id = record.get(RECORD_KEYS['id'])
        item_id = str(item_id) if item_id not in (None, '') else None
        if item_id is None:
            item_id = new_item_id()
        elif item_id in seen_ids:
            fresh_id = new_item_id()
            result.warnings.append(f"Duplicate id '{item_id}' on item {index} replaced with '{fresh_id}'")
            item_id = fresh_id
        seen_ids.add(item_id)

        result.rows.append(PricingRow.from_record(record, item_id=item_id))

    if not result.valid:
        result.rows = []
    return result


def export_table(rows: Iterable[PricingRow], fmt: str = 'csv') -> bytes:
    """
    Render the rows as a spreadsheet (CSV or XLSX) with readable column labels.

    Raises:
        EmptyStateError: if there are no rows to export
        ValueError: for an unknown format
    """
    if fmt not in TABLE_FORMATS:
        raise ValueError(f"Unsupported table format '{fmt}'. Use one of: {', '.join(TABLE_FORMATS)}")

    columns = [attr for attr in RECORD_KEYS if attr != 'id']
    df = pd.DataFrame(
        [{FIELD_LABELS[attr]: getattr(row, attr) for attr in columns} for row in rows],
        columns=[FIELD_LABELS[attr] for attr in columns],
    )
    if df.empty:
        raise EmptyStateError("There is no data to export.")

    if fmt == 'csv':
        return df.to_csv(index=False).encode('utf-8')

    buffer = io.BytesIO()
    df.to_excel(buffer, index=False, sheet_name='Profit', engine='openpyxl')
    return buffer.getvalue()
