"""
Scheduler de sincronizacion periodica (APScheduler).

El scheduler solo invoca la pasada como una unidad opaca cada N minutos;
el nucleo de sincronizacion no sabe nada de horarios.

Ciclo de vida:
- SyncScheduler.start(minutes) al arrancar la app (si esta habilitado) o desde la API.
- SyncScheduler.stop() desde la API o al cerrar la app.
"""
from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from order_sync.shared.exceptions.sync import SyncAlreadyRunning

SYNC_JOB_ID = "orders_sync"


def _run_job(run_pass: Callable[[], object]) -> None:
    try:
        run_pass()
    except SyncAlreadyRunning:
        logger.warning("Pasada programada omitida: ya hay una sincronizacion en curso.")
    except Exception as e:
        logger.exception(f"Error en la sincronizacion programada: {e}")


def _validate_interval(interval_minutes: int) -> None:
    if interval_minutes < 1:
        raise ValueError("El intervalo de sincronizacion debe ser de al menos 1 minuto")


def build_sync_scheduler(run_pass: Callable[[], object], *, interval_minutes: int) -> BackgroundScheduler:
    """
    Crea un BackgroundScheduler (sin iniciar) con el job de sincronizacion.
    """
    _validate_interval(interval_minutes)

    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        _run_job,
        trigger=IntervalTrigger(minutes=interval_minutes),
        args=[run_pass],
        id=SYNC_JOB_ID,
        name="Sincronizacion VTEX -> Google Sheets",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    logger.info(f"Scheduler de sincronizacion configurado cada {interval_minutes} minuto(s)")
    return scheduler


def reschedule_sync_job(scheduler: BackgroundScheduler, *, interval_minutes: int) -> None:
    _validate_interval(interval_minutes)
    scheduler.reschedule_job(SYNC_JOB_ID, trigger=IntervalTrigger(minutes=interval_minutes))
    logger.info(f"Intervalo de sincronizacion actualizado a {interval_minutes} minuto(s)")


class SyncScheduler:
    """
    Encapsula el BackgroundScheduler de la app.

    Se puede iniciar, reprogramar y detener en caliente; un solo job a la vez.
    """

    def __init__(self, run_pass: Callable[[], object]) -> None:
        self._run_pass = run_pass
        self._scheduler: Optional[BackgroundScheduler] = None
        self._interval_minutes: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._scheduler is not None

    @property
    def interval_minutes(self) -> Optional[int]:
        return self._interval_minutes

    def next_run_time(self) -> Optional[datetime]:
        if self._scheduler is None:
            return None
        job = self._scheduler.get_job(SYNC_JOB_ID)
        return job.next_run_time if job else None

    def start(self, interval_minutes: int) -> None:
        """Inicia el job o, si ya corre, cambia su intervalo."""
        _validate_interval(interval_minutes)
        with self._lock:
            if self._scheduler is None:
                self._scheduler = build_sync_scheduler(self._run_pass, interval_minutes=interval_minutes)
                self._scheduler.start()
                logger.success(f"Sincronizacion automatica iniciada (cada {interval_minutes} minuto(s))")
            else:
                reschedule_sync_job(self._scheduler, interval_minutes=interval_minutes)
            self._interval_minutes = interval_minutes

    def stop(self) -> bool:
        """Detiene el job. Retorna False si no estaba activo."""
        with self._lock:
            if self._scheduler is None:
                return False
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            self._interval_minutes = None
        logger.info("Sincronizacion automatica detenida")
        return True
