import os
import sys
import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from profit_calculator.config.settings import Settings
from profit_calculator.engine.models import create_row
from profit_calculator.engine.calculator import recompute


@pytest.fixture
def settings(tmp_path):
    """Settings rooted in a throwaway directory."""
    return Settings(project_root=tmp_path, data_dir=tmp_path / 'data')


@pytest.fixture
def make_row():
    """Build a calculated row from raw field overrides."""
    def _make(**raw):
        return recompute(create_row(raw))
    return _make
