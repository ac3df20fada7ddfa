"""
Helpers puros para notación A1 de Google Sheets.
"""

from __future__ import annotations

from typing import Optional


def column_letter(index: int) -> str:
    """
    Letra de columna para un índice 0-based (0 -> A, 25 -> Z, 26 -> AA).
    """
    if index < 0:
        raise ValueError(f"Índice de columna inválido: {index}")
    letters = ""
    n = index + 1
    while n:
        n, remainder = divmod(n - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def quote_sheet_name(sheet_name: str) -> str:
    """
    Nombre de hoja escapado para A1: entre comillas simples, con las
    comillas internas duplicadas ("Ventas 'MX'" -> "'Ventas ''MX'''").
    """
    return "'" + sheet_name.replace("'", "''") + "'"


def a1_range(sheet_name: str, ref: Optional[str] = None) -> str:
    """Rango A1 completo: "'Hoja'!A1" o solo "'Hoja'" para toda la hoja."""
    quoted = quote_sheet_name(sheet_name)
    return f"{quoted}!{ref}" if ref else quoted
