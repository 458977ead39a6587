"""
Centralized settings and path configuration for the profit calculator.
"""
import logging
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('true', '1', 'yes', 'on')


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path
    data_dir: Path

    # Output file names
    state_filename: str = 'profit-calculator-state.json'
    table_filename: str = 'profit-calculator-table'
    json_indent: int = 2

    # Raw fields a new row copies from the first existing row
    inherit_fields: tuple = ('discount', 'gst', 'expense')

    # Re-run the calculation engine over every row loaded from a state file
    recompute_on_import: bool = True

    currency_symbol: str = '₹'
    log_level: str = 'INFO'

    @property
    def state_file(self) -> Path:
        """Default location of the saved state file."""
        return self.data_dir / self.state_filename

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        data_dir = os.environ.get('PROFIT_CALCULATOR_DATA_DIR')

        return cls(
            project_root=root,
            data_dir=Path(data_dir) if data_dir else root / 'data',
            recompute_on_import=_env_flag('PROFIT_CALCULATOR_RECOMPUTE_ON_IMPORT', True),
            log_level=os.environ.get('PROFIT_CALCULATOR_LOG_LEVEL', 'INFO').upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def configure_logging(level: Optional[str] = None):
    """Configure root logging for an entry point (app, API or script)."""
    level = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
