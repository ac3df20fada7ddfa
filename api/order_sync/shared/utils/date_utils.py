"""
Utilidades de fecha para las pasadas de sincronizacion.
"""
from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Retorna la hora actual en UTC, como datetime aware."""
    return datetime.now(timezone.utc)


def run_date_for(moment: Optional[datetime] = None) -> str:
    """
    Fecha logica de una corrida: dia calendario UTC en formato YYYY-MM-DD.

    Un datetime naive se interpreta como UTC.
    """
    moment = moment or utc_now()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date().isoformat()


def is_iso_date(value: str) -> bool:
    """Indica si el string es una fecha YYYY-MM-DD valida."""
    try:
        date.fromisoformat(value)
    except (TypeError, ValueError):
        return False
    return len(value) == 10
