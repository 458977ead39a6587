"""Shared workbook instance for the API process."""
from ..services.workbook import Workbook

workbook = Workbook()
