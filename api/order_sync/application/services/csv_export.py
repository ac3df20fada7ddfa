"""
Exportacion de filas planas a texto CSV.
"""
from __future__ import annotations

import csv
import io
import json
from typing import Any, Mapping, Sequence


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def rows_to_csv(rows: Sequence[Mapping[str, Any]], delimiter: str = ",") -> str:
    """
    Convierte filas (mismo set de claves) a CSV: encabezado + N lineas.

    Los campos que contienen el delimitador, comillas o saltos de linea van
    entre comillas dobles, con las comillas internas duplicadas.
    Sin filas retorna "".
    """
    if not rows:
        return ""

    headers = list(rows[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=delimiter,
        quotechar='"',
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell_text(row.get(header)) for header in headers])
    return buffer.getvalue().rstrip("\n")
