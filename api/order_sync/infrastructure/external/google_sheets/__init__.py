"""
Integracion con Google Sheets (destino tabular).
"""
from .a1 import a1_range, column_letter, quote_sheet_name
from .sheets_client import GoogleSheetsDestination, SheetsApiError

__all__ = [
    "GoogleSheetsDestination",
    "SheetsApiError",
    "a1_range",
    "column_letter",
    "quote_sheet_name",
]
