"""
Historial de corridas de sincronizacion.

- Append-only con capacidad maxima (por defecto 50): se descartan las mas antiguas.
- Orden: de la corrida mas reciente a la mas antigua.
- JsonFileRunLedger persiste en un archivo JSON (reemplazo atomico).
"""
from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import List, Optional

from loguru import logger

from order_sync.domain.entities.sync_run import RunSummary
from order_sync.shared.exceptions.sync import RunHistoryError

DEFAULT_HISTORY_LIMIT = 50


def _apply_limit(entries: List[RunSummary], limit: Optional[int]) -> List[RunSummary]:
    if limit is None:
        return list(entries)
    return list(entries[: max(limit, 0)])


class InMemoryRunLedger:
    """Historial en memoria (tests y ejecuciones sin disco)."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._capacity = capacity
        self._entries: List[RunSummary] = []
        self._lock = threading.Lock()

    def append(self, summary: RunSummary) -> None:
        with self._lock:
            self._entries.insert(0, summary)
            del self._entries[self._capacity:]

    def list(self, limit: Optional[int] = None) -> List[RunSummary]:
        with self._lock:
            return _apply_limit(self._entries, limit)


class JsonFileRunLedger:
    """
    Historial persistido en disco como lista JSON.

    Si el archivo no existe, el historial esta vacio. Un archivo corrupto
    lanza RunHistoryError (no se sobrescribe silenciosamente).
    """

    def __init__(self, path: Path | str, capacity: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._path = Path(path)
        self._capacity = capacity
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def list(self, limit: Optional[int] = None) -> List[RunSummary]:
        with self._lock:
            return _apply_limit(self._read(), limit)

    def append(self, summary: RunSummary) -> None:
        with self._lock:
            entries = self._read()
            entries.insert(0, summary)
            self._write(entries[: self._capacity])
        logger.debug(f"Corrida registrada en historial: {self._path}")

    def _read(self) -> List[RunSummary]:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "[]")
            if not isinstance(raw, list) or not all(isinstance(entry, dict) for entry in raw):
                raise RunHistoryError("El historial de sincronizacion no es una lista de corridas")
            return [RunSummary.from_dict(entry) for entry in raw]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise RunHistoryError(f"No se pudo leer el historial de sincronizacion: {e}") from e

    def _write(self, entries: List[RunSummary]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False, indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".history-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise RunHistoryError(f"No se pudo guardar el historial de sincronizacion: {e}") from e
