"""
Interfaz del historial de corridas (append-only, con capacidad maxima).
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from order_sync.domain.entities.sync_run import RunSummary


class RunLedger(Protocol):
    def append(self, summary: RunSummary) -> None:
        """Agrega una corrida; descarta las mas antiguas si se supera la capacidad."""

    def list(self, limit: Optional[int] = None) -> List[RunSummary]:
        """Corridas de la mas reciente a la mas antigua."""
