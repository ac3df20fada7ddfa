"""
Excepciones del pipeline de sincronizacion de pedidos.

Cada una corresponde a una causa de fallo por cliente. El orquestador las
captura y las convierte en un RunResult fallido; nunca escapan de una pasada.
"""
from typing import Any, Iterable, Optional

from order_sync.shared.exceptions.base import AppException


class SyncException(AppException):
    """Excepción base para errores de sincronizacion."""

    def __init__(
        self,
        message: str,
        error_code: str = "SYNC_ERROR",
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            details=details,
        )


class ConfigIncomplete(SyncException):
    """El cliente no tiene todos los campos requeridos para sincronizar."""

    def __init__(self, tenant_name: str, missing_fields: Iterable[str]):
        missing = list(missing_fields)
        super().__init__(
            message=(
                f"Configuracion incompleta para el cliente '{tenant_name}': "
                f"faltan {', '.join(missing)}"
            ),
            error_code="CONFIG_INCOMPLETE",
            status_code=400,
            details={"tenant": tenant_name, "missing_fields": missing},
        )


class UpstreamUnavailable(SyncException):
    """La API de pedidos no responde o devuelve un estado no-2xx."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(
            message=message,
            error_code="UPSTREAM_UNAVAILABLE",
            status_code=502,
            details={"upstream_status": status} if status is not None else None,
        )
        self.upstream_status = status


class DestinationUnavailable(SyncException):
    """No se pudo leer o escribir en la hoja de destino."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(
            message=message,
            error_code="DESTINATION_UNAVAILABLE",
            status_code=502,
            details={"destination_status": status} if status is not None else None,
        )
        self.destination_status = status


class SchemaMismatch(SyncException):
    """El encabezado existente no contiene la columna clave de deduplicacion."""

    def __init__(self, sheet_name: str, key_field: str, header: Iterable[str]):
        super().__init__(
            message=(
                f"La columna '{key_field}' no existe en el encabezado de la hoja "
                f"'{sheet_name}'. No se puede agregar sin duplicar."
            ),
            error_code="SCHEMA_MISMATCH",
            status_code=409,
            details={"sheet": sheet_name, "key_field": key_field, "header": list(header)},
        )


class SyncAlreadyRunning(SyncException):
    """Ya hay una pasada de sincronizacion en curso."""

    def __init__(self):
        super().__init__(
            message="Ya hay una sincronizacion en curso. Intenta nuevamente en unos minutos.",
            error_code="SYNC_ALREADY_RUNNING",
            status_code=409,
        )


class RunHistoryError(SyncException):
    """El historial de corridas no se pudo leer o escribir."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="RUN_HISTORY_ERROR")


class ClientNotFound(SyncException):
    """El cliente solicitado no esta configurado."""

    def __init__(self, client_name: Optional[str]):
        super().__init__(
            message=(
                f"Cliente '{client_name}' no configurado"
                if client_name
                else "No hay clientes configurados."
            ),
            error_code="CLIENT_NOT_FOUND",
            status_code=404,
            details={"client": client_name} if client_name else None,
        )


class NoOrdersToExport(SyncException):
    """La fuente no devolvio pedidos para exportar."""

    def __init__(self, client_name: str):
        super().__init__(
            message=f"No se encontraron pedidos para exportar del cliente '{client_name}'.",
            error_code="NO_ORDERS_TO_EXPORT",
            status_code=404,
            details={"client": client_name},
        )
