"""
Entidades del resultado de una pasada de sincronizacion.

Se mantienen libres de I/O para poder testearlas y serializarlas facilmente.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class SyncOutcome(str, Enum):
    """Resultado de la sincronizacion de un cliente."""

    SUCCESS = "success"
    FAILED = "failed"


class SyncStrategy(str, Enum):
    """Rama elegida por el motor de reconciliacion."""

    FULL_REWRITE = "full_rewrite"
    DEDUP_APPEND = "dedup_append"


@dataclass(frozen=True)
class DestinationState:
    """
    Estado observado de la hoja de destino (se recalcula en cada reconcile).
    """

    exists: bool
    header_row: Optional[tuple[str, ...]] = None
    has_sample_row: bool = False
    sample_row_date: Optional[str] = None

    def is_fresh_for(self, run_date: str) -> bool:
        """La hoja ya contiene datos del dia de la corrida."""
        return bool(
            self.exists
            and self.header_row
            and self.has_sample_row
            and self.sample_row_date is not None
            and self.sample_row_date == run_date
        )


@dataclass(frozen=True)
class ReconcileResult:
    rows_written: int
    strategy: SyncStrategy


@dataclass(frozen=True)
class RunResult:
    """Resultado por cliente."""

    tenant_name: str
    outcome: SyncOutcome
    rows_written: int = 0
    error_detail: Optional[str] = None
    strategy: Optional[SyncStrategy] = None
    orders_fetched: int = 0

    @property
    def succeeded(self) -> bool:
        return self.outcome is SyncOutcome.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        return {
            "tenant_name": self.tenant_name,
            "outcome": self.outcome.value,
            "rows_written": self.rows_written,
            "error_detail": self.error_detail,
            "strategy": self.strategy.value if self.strategy else None,
            "orders_fetched": self.orders_fetched,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunResult":
        strategy = data.get("strategy")
        return cls(
            tenant_name=str(data.get("tenant_name") or ""),
            outcome=SyncOutcome(data.get("outcome", SyncOutcome.FAILED.value)),
            rows_written=int(data.get("rows_written") or 0),
            error_detail=data.get("error_detail"),
            strategy=SyncStrategy(strategy) if strategy else None,
            orders_fetched=int(data.get("orders_fetched") or 0),
        )


@dataclass(frozen=True)
class RunSummary:
    """Resumen de una pasada completa sobre todos los clientes."""

    overall_success: bool
    message: str
    timestamp: datetime
    run_date: str
    results: tuple[RunResult, ...] = field(default_factory=tuple)

    @property
    def total_rows_written(self) -> int:
        return sum(r.rows_written for r in self.results if r.succeeded)

    @property
    def failed_results(self) -> tuple[RunResult, ...]:
        return tuple(r for r in self.results if not r.succeeded)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_success": self.overall_success,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "run_date": self.run_date,
            "results": [r.to_dict() for r in self.results],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunSummary":
        timestamp = datetime.fromisoformat(str(data["timestamp"]).replace("Z", "+00:00"))
        return cls(
            overall_success=bool(data.get("overall_success")),
            message=str(data.get("message") or ""),
            timestamp=timestamp,
            run_date=str(data.get("run_date") or timestamp.date().isoformat()),
            results=tuple(RunResult.from_dict(r) for r in data.get("results") or []),
        )
