"""
Casos de uso de la capa de aplicacion.
"""
from .sync_use_cases import TenantSyncOrchestrator, build_summary_message
from .orders_sync_use_cases import OrdersSyncUseCases

__all__ = ["TenantSyncOrchestrator", "build_summary_message", "OrdersSyncUseCases"]
