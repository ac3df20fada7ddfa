"""
Interfaz del destino tabular (una hoja dentro de un spreadsheet).

Este contrato existe para:
- Que el motor de reconciliacion no dependa de Google Sheets directamente.
- Facilitar tests unitarios con un destino en memoria.

El destino no ofrece upsert ni restricciones de unicidad: toda la logica de
deduplicacion vive en SheetReconciler.
"""

from __future__ import annotations

from typing import Any, List, Protocol, Sequence


class TabularDestination(Protocol):
    """
    Operaciones minimas sobre una hoja. Numeracion de filas/columnas:
    filas 1-based (fila 1 = encabezado), columnas 0-based.

    Cualquier fallo de I/O debe lanzar DestinationUnavailable.
    """

    def list_sheets(self, spreadsheet_id: str) -> List[str]:
        """Nombres de las hojas existentes en el spreadsheet."""

    def add_sheet(self, spreadsheet_id: str, sheet_name: str) -> None:
        """Crea una hoja vacia."""

    def read_rows(
        self, spreadsheet_id: str, sheet_name: str, *, first_row: int, last_row: int
    ) -> List[List[Any]]:
        """Lee un rango de filas completas (puede retornar menos filas)."""

    def read_column(
        self, spreadsheet_id: str, sheet_name: str, column_index: int, *, first_row: int = 2
    ) -> List[Any]:
        """Lee una columna completa desde first_row hasta el final."""

    def clear(self, spreadsheet_id: str, sheet_name: str) -> None:
        """Borra todo el contenido de la hoja (la hoja sigue existiendo)."""

    def write_rows(self, spreadsheet_id: str, sheet_name: str, values: Sequence[Sequence[Any]]) -> int:
        """Sobrescribe desde A1. Retorna la cantidad de filas escritas."""

    def append_rows(self, spreadsheet_id: str, sheet_name: str, values: Sequence[Sequence[Any]]) -> int:
        """Agrega filas al final. Retorna la cantidad de filas agregadas."""
