"""
Workbook Service - owns the row collection and routes every user action
through the calculation engine.

The engine functions stay pure; this class is the only place the
collection or the sort direction is changed.
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from ..config.settings import get_settings, Settings
from ..engine.models import PricingRow, RAW_FIELDS, NUMERIC_FIELDS, DERIVED_FIELDS, Summary, create_row
from ..engine.calculator import recompute, sanitize_numeric
from ..engine.aggregator import total_profit, summarize
from ..engine.sorter import SortDirection, sorted_view
from .state_codec import LoadResult, export_rows, export_table, import_rows


logger = logging.getLogger(__name__)


class Workbook:
    """
    Collection of pricing rows plus the current profit sort direction.

    Storage order is insertion order. Rows are addressed by id for updates
    and deletes.
    """

    def __init__(self, rows: Optional[list[PricingRow]] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        if rows is None:
            rows = [recompute(create_row())]
        self._rows: list[PricingRow] = list(rows)
        self._sort_direction = SortDirection.NONE

    @property
    def rows(self) -> list[PricingRow]:
        """Rows in storage order."""
        return list(self._rows)

    @property
    def sort_direction(self) -> SortDirection:
        return self._sort_direction

    def __len__(self) -> int:
        return len(self._rows)

    def _index_of(self, item_id: str) -> int:
        for i, row in enumerate(self._rows):
            if row.id == item_id:
                return i
        raise ValueError(f"Item with ID '{item_id}' not found")

    def get_item(self, item_id: str) -> PricingRow:
        """Get a single row by ID."""
        return self._rows[self._index_of(item_id)]

    def view(self) -> list[PricingRow]:
        """Rows in display order for the current sort direction."""
        return list(sorted_view(self._rows, self._sort_direction))

    def add_item(self) -> PricingRow:
        """
        Append a new calculated row.

        The new row copies the inherited fields (discount, GST and expense by
        default) from the first row, when there is one.
        """
        defaults = {}
        if self._rows:
            first = self._rows[0]
            defaults = {name: getattr(first, name) for name in self.settings.inherit_fields}

        row = recompute(create_row(defaults))
        self._rows.append(row)
        logger.debug("Added item %s", row.id)
        return row

    def update_item(self, item_id: str, field_name: str, value) -> PricingRow:
        """
        Set one raw field of a row and recalculate it.

        Numeric fields are stripped down to digits, '.' and '-' first.

        Raises:
            ValueError: unknown item, unknown field or a derived field
        """
        if field_name in DERIVED_FIELDS:
            raise ValueError(f"Field '{field_name}' is calculated and cannot be edited")
        if field_name not in RAW_FIELDS:
            raise ValueError(f"Unknown field '{field_name}'")

        index = self._index_of(item_id)
        value = '' if value is None else str(value)
        if field_name in NUMERIC_FIELDS:
            value = sanitize_numeric(value)

        row = replace(self._rows[index], **{field_name: value})
        self._rows[index] = recompute(row)
        return self._rows[index]

    def delete_item(self, item_id: str) -> bool:
        """Delete a row by ID."""
        index = self._index_of(item_id)
        del self._rows[index]
        logger.debug("Deleted item %s", item_id)
        return True

    def toggle_sort(self) -> SortDirection:
        """Advance the profit sort: none → descending → ascending → none."""
        self._sort_direction = self._sort_direction.next()
        return self._sort_direction

    def total_profit(self) -> float:
        return total_profit(self._rows)

    def summary(self) -> Summary:
        return summarize(self._rows)

    def export_state(self) -> str:
        """
        Serialize all rows for saving.

        Raises:
            EmptyStateError: if there are no rows
        """
        text = export_rows(self._rows, indent=self.settings.json_indent)
        logger.debug("Exported %d items", len(self._rows))
        return text

    def export_table(self, fmt: str = 'csv') -> bytes:
        """Spreadsheet export of the rows in display order."""
        return export_table(self.view(), fmt)

    def import_state(self, text) -> LoadResult:
        """
        Replace all rows with the ones in a state document.

        On a rejected document the current rows are kept. With
        recompute_on_import set, every loaded row is recalculated so stale or
        hand-edited derived fields are repaired.
        """
        result = import_rows(text)
        if not result.valid:
            logger.warning("Rejected state file: %s", result.message)
            return result

        if self.settings.recompute_on_import:
            result.rows = [recompute(row) for row in result.rows]

        for warning in result.warnings:
            logger.warning(warning)

        self._rows = list(result.rows)
        logger.info("Loaded %d items", len(self._rows))
        return result

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the state document to disk (default: the configured state file)."""
        path = Path(path) if path else self.settings.state_file
        text = self.export_state()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        logger.info("Saved state to %s", path)
        return path

    def load(self, path: Optional[Path] = None) -> LoadResult:
        """Load a state document from disk; a missing file leaves the rows alone."""
        path = Path(path) if path else self.settings.state_file
        if not path.exists():
            logger.warning("State file not found: %s", path)
            return LoadResult(valid=False, errors=[f"State file not found: {path}"])

        with open(path, 'r', encoding='utf-8') as f:
            return self.import_state(f.read())
