from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add src to path for internal imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from profit_calculator import __version__
from profit_calculator.config.settings import configure_logging
from profit_calculator.api.items_api import router as items_router
from profit_calculator.api.state_api import router as state_router
from profit_calculator.api import state

configure_logging()

app = FastAPI(
    title="Profit Calculator API",
    description="Backend API for the bulk item profit calculator",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Row editing and save/load
app.include_router(items_router)
app.include_router(state_router)


@app.get("/")
async def root():
    return {"status": "online", "message": "Profit Calculator API Active"}

@app.get("/system/status")
async def get_status():
    return {
        "engine_active": True,
        "item_count": len(state.workbook),
        "sort_direction": state.workbook.sort_direction.value,
        "recompute_on_import": state.workbook.settings.recompute_on_import,
    }
