"""
DTOs relacionados con la sincronizacion de pedidos.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from order_sync.domain.entities.sync_run import RunResult, RunSummary
from order_sync.domain.entities.tenant import TenantConfig


class RunResultDTO(BaseModel):
    """Resultado de un cliente dentro de una pasada."""

    tenant_name: str
    outcome: str = Field(..., description="success | failed")
    rows_written: int = 0
    orders_fetched: int = 0
    strategy: Optional[str] = Field(None, description="full_rewrite | dedup_append")
    error_detail: Optional[str] = None

    @classmethod
    def from_entity(cls, result: RunResult) -> "RunResultDTO":
        return cls(
            tenant_name=result.tenant_name,
            outcome=result.outcome.value,
            rows_written=result.rows_written,
            orders_fetched=result.orders_fetched,
            strategy=result.strategy.value if result.strategy else None,
            error_detail=result.error_detail,
        )


class RunSummaryDTO(BaseModel):
    """Resumen de una pasada completa."""

    overall_success: bool
    message: str
    timestamp: datetime
    run_date: str
    total_rows_written: int
    results: List[RunResultDTO]

    @classmethod
    def from_entity(cls, summary: RunSummary) -> "RunSummaryDTO":
        return cls(
            overall_success=summary.overall_success,
            message=summary.message,
            timestamp=summary.timestamp,
            run_date=summary.run_date,
            total_rows_written=summary.total_rows_written,
            results=[RunResultDTO.from_entity(r) for r in summary.results],
        )


class RunHistoryResponseDTO(BaseModel):
    """Historial de pasadas, de la mas reciente a la mas antigua."""

    runs: List[RunSummaryDTO]
    total: int


class ClientDTO(BaseModel):
    """Cliente configurado (sin credenciales)."""

    name: str
    vtex_account_name: str
    sheet_id: str
    sheet_name: str

    @classmethod
    def from_entity(cls, tenant: TenantConfig) -> "ClientDTO":
        return cls(
            name=tenant.name,
            vtex_account_name=tenant.vtex_account_name,
            sheet_id=tenant.sheet_id,
            sheet_name=tenant.sheet_name,
        )


class ScheduleDTO(BaseModel):
    """Estado del job de sincronizacion periodica."""

    enabled: bool
    interval_minutes: Optional[int] = None
    next_run_time: Optional[datetime] = None
    running: bool = False
