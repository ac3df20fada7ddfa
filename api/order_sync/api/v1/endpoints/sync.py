"""
Endpoints para la sincronizacion de pedidos VTEX con Google Sheets.
Permite disparar pasadas, consultar el historial, exportar CSV y
controlar la sincronizacion automatica desde la UI.
"""
import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from loguru import logger

from order_sync.api.v1.dependencies.use_case_deps import get_orders_sync_use_cases, get_sync_scheduler
from order_sync.application.dto.sync_dto import (
    ClientDTO,
    RunHistoryResponseDTO,
    RunSummaryDTO,
    ScheduleDTO,
)
from order_sync.application.use_cases.orders_sync_use_cases import OrdersSyncUseCases
from order_sync.infrastructure.scheduler.sync_scheduler import SyncScheduler
from order_sync.shared.exceptions.base import AppException


router = APIRouter(prefix="/sync", tags=["Sync"])


def _schedule_state(scheduler: Optional[SyncScheduler]) -> ScheduleDTO:
    if scheduler is None:
        return ScheduleDTO(enabled=False, running=OrdersSyncUseCases.is_running())
    return ScheduleDTO(
        enabled=scheduler.enabled,
        interval_minutes=scheduler.interval_minutes,
        next_run_time=scheduler.next_run_time(),
        running=OrdersSyncUseCases.is_running(),
    )


def _require_scheduler(scheduler: Optional[SyncScheduler]) -> SyncScheduler:
    if scheduler is None:
        raise AppException(
            message="El scheduler no esta disponible en esta instancia",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="SCHEDULER_UNAVAILABLE",
        )
    return scheduler


@router.post(
    "/run",
    response_model=RunSummaryDTO,
    status_code=status.HTTP_200_OK,
    summary="Ejecutar una pasada de sincronizacion",
)
async def run_sync(
    use_cases: OrdersSyncUseCases = Depends(get_orders_sync_use_cases),
) -> RunSummaryDTO:
    """
    Sincroniza los pedidos de todos los clientes configurados.

    Los errores por cliente no cortan la pasada: quedan en `results`.
    Retorna 409 si ya hay una pasada en curso.
    """
    logger.info("Iniciando sincronizacion manual desde la API...")
    # La pasada es sincrona (requests); corre en un thread aparte.
    summary = await asyncio.to_thread(use_cases.run_pass)
    return RunSummaryDTO.from_entity(summary)


@router.get(
    "/history",
    response_model=RunHistoryResponseDTO,
    summary="Historial de pasadas",
)
async def get_history(
    limit: Optional[int] = Query(default=None, ge=1, description="Cantidad maxima de pasadas"),
    use_cases: OrdersSyncUseCases = Depends(get_orders_sync_use_cases),
) -> RunHistoryResponseDTO:
    """Retorna el historial de pasadas, de la mas reciente a la mas antigua."""
    runs = await asyncio.to_thread(use_cases.get_history, limit)
    return RunHistoryResponseDTO(
        runs=[RunSummaryDTO.from_entity(run) for run in runs],
        total=len(runs),
    )


@router.get(
    "/clients",
    response_model=List[ClientDTO],
    summary="Clientes configurados",
)
async def list_clients(
    use_cases: OrdersSyncUseCases = Depends(get_orders_sync_use_cases),
) -> List[ClientDTO]:
    """Lista los clientes completos (sin credenciales VTEX)."""
    return [ClientDTO.from_entity(tenant) for tenant in use_cases.list_clients()]


@router.get(
    "/orders.csv",
    response_class=Response,
    summary="Exportar pedidos a CSV",
)
async def export_orders_csv(
    client: Optional[str] = Query(default=None, description="Nombre del cliente (default: el primero)"),
    use_cases: OrdersSyncUseCases = Depends(get_orders_sync_use_cases),
) -> Response:
    """
    Descarga los pedidos normalizados de un cliente como CSV.
    No escribe en Google Sheets.
    """
    export = await asyncio.to_thread(use_cases.export_csv, client)
    return Response(
        content=export.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.file_name}"'},
    )


@router.get(
    "/schedule",
    response_model=ScheduleDTO,
    summary="Estado de la sincronizacion automatica",
)
async def get_schedule(
    scheduler: Optional[SyncScheduler] = Depends(get_sync_scheduler),
) -> ScheduleDTO:
    return _schedule_state(scheduler)


@router.post(
    "/schedule",
    response_model=ScheduleDTO,
    summary="Iniciar o reprogramar la sincronizacion automatica",
)
async def start_schedule(
    minutes: int = Query(..., ge=1, description="Intervalo en minutos"),
    scheduler: Optional[SyncScheduler] = Depends(get_sync_scheduler),
) -> ScheduleDTO:
    scheduler = _require_scheduler(scheduler)
    scheduler.start(minutes)
    return _schedule_state(scheduler)


@router.delete(
    "/schedule",
    response_model=ScheduleDTO,
    summary="Detener la sincronizacion automatica",
)
async def stop_schedule(
    scheduler: Optional[SyncScheduler] = Depends(get_sync_scheduler),
) -> ScheduleDTO:
    scheduler = _require_scheduler(scheduler)
    scheduler.stop()
    return _schedule_state(scheduler)
