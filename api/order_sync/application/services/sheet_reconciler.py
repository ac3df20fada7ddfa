"""
Motor de reconciliacion de filas contra una hoja de destino.

Diseño (resumen):
- Prueba el estado de la hoja con lecturas acotadas (encabezado + 1 fila).
- Predicado de frescura: la primera fila de datos ya es de la fecha de hoy.
  - Si es fresca  -> DEDUP APPEND: solo agrega pedidos que no estan en la hoja.
  - Si no         -> FULL REWRITE: limpia la hoja y escribe encabezado + filas.

Estrategia de idempotencia:
- La hoja no tiene upsert: se lee la columna orderId completa y se filtra.
- Una hoja con datos de ayer se limpia completa. El orderId solo no distingue
  "mismo pedido, mismo dia" de "mismo pedido, otro dia".
- No hay reintentos: cualquier fallo de I/O se propaga al orquestador.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set

from loguru import logger

from order_sync.application.interfaces.tabular_destination import TabularDestination
from order_sync.application.services.order_normalizer import (
    DATE_FIELD,
    KEY_FIELD,
    ORDER_FIELDS,
)
from order_sync.domain.entities.sync_run import (
    DestinationState,
    ReconcileResult,
    SyncStrategy,
)
from order_sync.shared.exceptions.sync import SchemaMismatch


def render_cell(value: Any) -> Any:
    """Valor de celda listo para la API de la hoja (None -> "")."""
    if value is None:
        return ""
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def project_row(row: Mapping[str, Any], columns: Sequence[str]) -> List[Any]:
    """
    Proyecta una fila sobre un orden de columnas dado.

    Columnas ausentes en la fila quedan vacias; claves de la fila que no
    estan en columns se descartan.
    """
    return [render_cell(row.get(column)) for column in columns]


def _key_of(row: Mapping[str, Any], key_field: str) -> str:
    value = row.get(key_field)
    return "" if value is None else str(value).strip()


class DestinationInspector:
    """
    Lecturas de solo-lectura para clasificar el estado de la hoja.

    Unica excepcion: si la hoja no existe se crea vacia, para que ambas
    ramas trabajen sobre un contenedor existente.
    """

    def __init__(self, destination: TabularDestination, *, date_field: str = DATE_FIELD) -> None:
        self._destination = destination
        self._date_field = date_field

    def inspect(self, spreadsheet_id: str, sheet_name: str) -> DestinationState:
        existing = self._destination.list_sheets(spreadsheet_id)
        if sheet_name not in existing:
            logger.info(f"Hoja '{sheet_name}' no existe, creandola...")
            self._destination.add_sheet(spreadsheet_id, sheet_name)
            return DestinationState(exists=False)

        rows = self._destination.read_rows(spreadsheet_id, sheet_name, first_row=1, last_row=2)
        header = tuple(str(cell).strip() for cell in rows[0]) if rows and rows[0] else None
        sample = rows[1] if len(rows) > 1 and rows[1] else None

        sample_date: Optional[str] = None
        if header and sample is not None and self._date_field in header:
            index = header.index(self._date_field)
            if index < len(sample) and sample[index] not in (None, ""):
                sample_date = str(sample[index]).strip()

        return DestinationState(
            exists=True,
            header_row=header,
            has_sample_row=sample is not None,
            sample_row_date=sample_date,
        )

    def read_keys(self, spreadsheet_id: str, sheet_name: str, column_index: int) -> Set[str]:
        """Set de claves existentes (columna completa desde la fila 2)."""
        values = self._destination.read_column(
            spreadsheet_id, sheet_name, column_index, first_row=2
        )
        return {str(v).strip() for v in values if v not in (None, "")}


class SheetReconciler:
    """
    Decide y ejecuta FULL REWRITE o DEDUP APPEND para una hoja.

    Uso:
        reconciler = SheetReconciler(destination)
        result = reconciler.reconcile(sheet_id, "Montecarlo", rows, run_date="2025-01-15")
    """

    def __init__(
        self,
        destination: TabularDestination,
        *,
        columns: Sequence[str] = ORDER_FIELDS,
        key_field: str = KEY_FIELD,
        date_field: str = DATE_FIELD,
    ) -> None:
        self._destination = destination
        self._inspector = DestinationInspector(destination, date_field=date_field)
        self._columns = tuple(columns)
        self._key_field = key_field

    def reconcile(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        rows: Sequence[Mapping[str, Any]],
        *,
        run_date: str,
    ) -> ReconcileResult:
        batch = self._unique_rows(rows)
        state = self._inspector.inspect(spreadsheet_id, sheet_name)

        if state.is_fresh_for(run_date):
            logger.info(f"Estrategia para '{sheet_name}': DEDUP APPEND.")
            written = self._dedup_append(spreadsheet_id, sheet_name, batch, state.header_row or ())
            return ReconcileResult(rows_written=written, strategy=SyncStrategy.DEDUP_APPEND)

        logger.info(
            f"Estrategia para '{sheet_name}': FULL REWRITE "
            f"(existe={state.exists}, fecha_muestra={state.sample_row_date}, hoy={run_date})."
        )
        written = self._full_rewrite(spreadsheet_id, sheet_name, batch)
        return ReconcileResult(rows_written=written, strategy=SyncStrategy.FULL_REWRITE)

    def _unique_rows(self, rows: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
        """
        Descarta filas sin clave y colapsa claves repetidas dentro del lote
        (gana la primera aparicion).
        """
        seen: Set[str] = set()
        unique: List[Mapping[str, Any]] = []
        missing_key = 0
        for row in rows:
            key = _key_of(row, self._key_field)
            if not key:
                missing_key += 1
                continue
            if key in seen:
                continue
            seen.add(key)
            unique.append(row)

        if missing_key:
            logger.warning(f"{missing_key} fila(s) sin '{self._key_field}' descartada(s).")
        return unique

    def _dedup_append(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        rows: Sequence[Mapping[str, Any]],
        header: Sequence[str],
    ) -> int:
        if self._key_field not in header:
            raise SchemaMismatch(sheet_name, self._key_field, header)

        key_index = list(header).index(self._key_field)
        existing = self._inspector.read_keys(spreadsheet_id, sheet_name, key_index)
        new_rows = [row for row in rows if _key_of(row, self._key_field) not in existing]

        if not new_rows:
            logger.info("No hay pedidos nuevos para agregar.")
            return 0

        values = [project_row(row, header) for row in new_rows]
        appended = self._destination.append_rows(spreadsheet_id, sheet_name, values)
        logger.info(f"Agregadas {appended} fila(s) nuevas ({len(existing)} ya existian).")
        return appended

    def _full_rewrite(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        rows: Sequence[Mapping[str, Any]],
    ) -> int:
        self._destination.clear(spreadsheet_id, sheet_name)

        if not rows:
            logger.info("Sin pedidos para hoy. La hoja queda vacia.")
            return 0

        values = [list(self._columns)] + [project_row(row, self._columns) for row in rows]
        updated = self._destination.write_rows(spreadsheet_id, sheet_name, values)
        written = max(updated - 1, 0)
        logger.info(f"Escritas {written} fila(s) en la hoja limpia.")
        return written
