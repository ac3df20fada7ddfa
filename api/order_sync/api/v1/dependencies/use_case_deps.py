"""
Dependencias para inyeccion de casos de uso.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Request

from order_sync.application.use_cases.orders_sync_use_cases import OrdersSyncUseCases
from order_sync.core.config import settings
from order_sync.infrastructure.factory import build_from_settings
from order_sync.infrastructure.scheduler.sync_scheduler import SyncScheduler


@lru_cache(maxsize=1)
def get_orders_sync_use_cases() -> OrdersSyncUseCases:
    """
    Dependencia para obtener los casos de uso de sincronizacion.

    Returns:
        OrdersSyncUseCases: Instancia unica por proceso
    """
    return build_from_settings(settings)


def get_sync_scheduler(request: Request) -> Optional[SyncScheduler]:
    """Scheduler creado en el startup (None si la app no lo inicializo)."""
    return getattr(request.app.state, "sync_scheduler", None)
