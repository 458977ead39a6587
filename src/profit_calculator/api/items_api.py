"""
Items API - FastAPI router for row editing, sorting and totals.
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from ..engine.models import PricingRow
from . import state

router = APIRouter(prefix="/api/items", tags=["items"])


# Pydantic models for API
class ItemResponse(BaseModel):
    """Response model for a row."""
    id: str
    item_name: str
    quantity: str
    cost: str
    discount: str
    gst: str
    expense: str
    selling_price: str
    effective_cost: str
    cost_with_gst: str
    final_cost: str
    selling_price_without_gst: str
    selling_price_per_metre: str
    profit: str


class FieldUpdate(BaseModel):
    """Request model for editing one raw field of a row."""
    field: str
    value: Optional[str] = None


class SummaryResponse(BaseModel):
    """Response model for the totals."""
    item_count: int
    total_profit: float
    total_final_cost: float
    profitable_count: int
    loss_count: int
    sort_direction: str


class SortResponse(BaseModel):
    sort_direction: str


def _to_response(row: PricingRow) -> ItemResponse:
    return ItemResponse(**row.__dict__)


# Endpoints

@router.get("", response_model=list[ItemResponse])
async def list_items(ordered: bool = True):
    """List rows in display order (or storage order with ordered=false)."""
    rows = state.workbook.view() if ordered else state.workbook.rows
    return [_to_response(row) for row in rows]


@router.get("/summary", response_model=SummaryResponse)
async def get_summary():
    """Get the total profit and row counts."""
    summary = state.workbook.summary()
    return SummaryResponse(
        item_count=summary.item_count,
        total_profit=summary.total_profit,
        total_final_cost=summary.total_final_cost,
        profitable_count=summary.profitable_count,
        loss_count=summary.loss_count,
        sort_direction=state.workbook.sort_direction.value,
    )


@router.post("/sort", response_model=SortResponse)
async def toggle_sort():
    """Advance the profit sort direction."""
    direction = state.workbook.toggle_sort()
    return SortResponse(sort_direction=direction.value)


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: str):
    """Get a single row by ID."""
    try:
        return _to_response(state.workbook.get_item(item_id))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=ItemResponse)
async def add_item():
    """Add a new row."""
    return _to_response(state.workbook.add_item())


@router.patch("/{item_id}", response_model=ItemResponse)
async def update_item(item_id: str, update: FieldUpdate):
    """Edit one raw field and return the recalculated row."""
    try:
        state.workbook.get_item(item_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        return _to_response(state.workbook.update_item(item_id, update.field, update.value))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{item_id}")
async def delete_item(item_id: str):
    """Delete a row."""
    try:
        state.workbook.delete_item(item_id)
        return {"success": True, "message": f"Item '{item_id}' deleted"}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
