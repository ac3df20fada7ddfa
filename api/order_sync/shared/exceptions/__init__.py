from order_sync.shared.exceptions.base import AppException
from order_sync.shared.exceptions.sync import (
    ClientNotFound,
    ConfigIncomplete,
    DestinationUnavailable,
    NoOrdersToExport,
    RunHistoryError,
    SchemaMismatch,
    SyncAlreadyRunning,
    SyncException,
    UpstreamUnavailable,
)

__all__ = [
    "AppException",
    "ClientNotFound",
    "ConfigIncomplete",
    "DestinationUnavailable",
    "NoOrdersToExport",
    "RunHistoryError",
    "SchemaMismatch",
    "SyncAlreadyRunning",
    "SyncException",
    "UpstreamUnavailable",
]
