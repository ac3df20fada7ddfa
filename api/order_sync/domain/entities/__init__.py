"""
Entidades del dominio de sincronizacion.
"""
from .tenant import TenantConfig
from .sync_run import (
    DestinationState,
    ReconcileResult,
    RunResult,
    RunSummary,
    SyncOutcome,
    SyncStrategy,
)

__all__ = [
    "TenantConfig",
    "DestinationState",
    "ReconcileResult",
    "RunResult",
    "RunSummary",
    "SyncOutcome",
    "SyncStrategy",
]
