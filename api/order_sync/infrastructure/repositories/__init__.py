from .run_history_repository import DEFAULT_HISTORY_LIMIT, InMemoryRunLedger, JsonFileRunLedger

__all__ = ["DEFAULT_HISTORY_LIMIT", "InMemoryRunLedger", "JsonFileRunLedger"]
