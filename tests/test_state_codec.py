"""
Tests for saving and loading the row collection.
"""
import io
import json
import pytest
import pandas as pd

from profit_calculator.engine.models import RECORD_KEYS
from profit_calculator.services.state_codec import (
    EmptyStateError,
    export_rows,
    export_table,
    import_rows,
)


@pytest.fixture
def rows(make_row):
    return [
        make_row(item_name="Copper wire", quantity="100", cost="4.2"),
        make_row(item_name="PVC conduit", quantity="12", gst="0.12", selling_price="250"),
        make_row(item_name="Junction box", quantity="0"),
    ]


def test_export_is_indented_list_of_records(rows):
    text = export_rows(rows)
    data = json.loads(text)

    assert isinstance(data, list)
    assert len(data) == 3
    assert set(data[0]) == set(RECORD_KEYS.values())
    assert data[0]['itemName'] == "Copper wire"
    assert data[0]['profit'] == rows[0].profit
    assert '\n  {' in text, "Export should be indented for readability"


def test_export_empty_collection_rejected():
    with pytest.raises(EmptyStateError):
        export_rows([])


def test_round_trip_reproduces_rows(rows):
    result = import_rows(export_rows(rows))

    assert result.valid, result.errors
    assert result.rows == rows
    assert result.warnings == []


def test_import_empty_list_is_valid():
    result = import_rows("[]")
    assert result.valid
    assert result.rows == []


def test_import_single_record_not_wrapped_rejected(rows):
    text = json.dumps(rows[0].to_record())
    result = import_rows(text)

    assert not result.valid
    assert result.rows == []
    assert "Invalid or corrupted state file" in result.message


@pytest.mark.parametrize("text", [
    "",
    "not json at all",
    "42",
    '"a string"',
    '[{"quantity": "3"}]',
    "[5]",
    "[null]",
])
def test_import_rejects_bad_shape(text):
    result = import_rows(text)
    assert not result.valid, f"Document {text!r} should be rejected"
    assert result.errors


def test_import_accepts_snake_case_item_name():
    result = import_rows('[{"item_name": "Legacy", "quantity": "2"}]')
    assert result.valid
    assert result.rows[0].item_name == "Legacy"


def test_import_rejects_non_object_after_first():
    result = import_rows('[{"itemName": "ok"}, "oops"]')
    assert not result.valid
    assert result.rows == []
    assert "item 2" in result.message


def test_import_does_not_validate_fields():
    """Field values are kept as-is; no recalculation happens in the codec."""
    text = json.dumps([{"itemName": "Hand edited", "quantity": 7, "profit": "12345.00"}])
    result = import_rows(text)

    assert result.valid
    row = result.rows[0]
    assert row.quantity == "7"
    assert row.profit == "12345.00"
    assert row.cost == ""
    assert row.id.startswith("item-"), "Missing id gets a fresh one"


def test_import_reassigns_duplicate_ids():
    text = json.dumps([
        {"id": "item-1", "itemName": "first"},
        {"id": "item-1", "itemName": "second"},
    ])
    result = import_rows(text)

    assert result.valid
    assert result.rows[0].id == "item-1"
    assert result.rows[1].id != "item-1"
    assert len(result.warnings) == 1


def test_import_accepts_bytes(rows):
    result = import_rows(export_rows(rows).encode('utf-8'))
    assert result.valid
    assert len(result.rows) == 3


def test_import_rejects_undecodable_bytes():
    result = import_rows(b'[{"itemName": "\xff"}]')
    assert not result.valid
    assert result.rows == []
    assert "Invalid or corrupted state file" in result.message


def test_import_rejects_deeply_nested_document():
    result = import_rows("[" * 100000 + "]" * 100000)
    assert not result.valid
    assert "Invalid or corrupted state file" in result.message


def test_export_table_csv(rows):
    df = pd.read_csv(io.BytesIO(export_table(rows, 'csv')), dtype=str)

    assert list(df['Item Name']) == ["Copper wire", "PVC conduit", "Junction box"]
    assert 'Profit' in df.columns
    assert 'ID' not in df.columns


def test_export_table_xlsx(rows):
    df = pd.read_excel(io.BytesIO(export_table(rows, 'xlsx')), dtype=str)
    assert len(df) == 3
    assert df.loc[0, 'Item Name'] == "Copper wire"


def test_export_table_rejects_unknown_format(rows):
    with pytest.raises(ValueError):
        export_table(rows, 'pdf')


def test_export_table_empty_rejected():
    with pytest.raises(EmptyStateError):
        export_table([], 'csv')
