"""
State API - FastAPI router for saving and loading the working set.
"""
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response

from ..services.state_codec import EmptyStateError, TABLE_FORMATS
from . import state

router = APIRouter(prefix="/api/state", tags=["state"])


@router.get("/export")
async def export_state():
    """Download all rows as a JSON state file."""
    try:
        text = state.workbook.export_state()
    except EmptyStateError as e:
        raise HTTPException(status_code=400, detail=str(e))

    filename = state.workbook.settings.state_filename
    return PlainTextResponse(
        text,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export/{fmt}")
async def export_table(fmt: str):
    """Download the rows as a CSV or XLSX spreadsheet."""
    if fmt not in TABLE_FORMATS:
        raise HTTPException(status_code=404, detail=f"Unknown format '{fmt}'")
    try:
        data = state.workbook.export_table(fmt)
    except EmptyStateError as e:
        raise HTTPException(status_code=400, detail=str(e))

    filename = f"{state.workbook.settings.table_filename}.{fmt}"
    return Response(
        content=data,
        media_type=TABLE_FORMATS[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import")
async def import_state(request: Request):
    """Replace all rows with the JSON state document sent as the request body."""
    body = await request.body()
    result = state.workbook.import_state(body)
    if not result.valid:
        raise HTTPException(status_code=400, detail={"errors": result.errors})
    return {
        "success": True,
        "item_count": len(result.rows),
        "warnings": result.warnings,
    }
