"""
Integracion con la API de OMS de VTEX.
"""
from .order_source import VtexOrderSource
from .vtex_client import VtexApiError, VtexClient, VtexCredentials

__all__ = ["VtexApiError", "VtexClient", "VtexCredentials", "VtexOrderSource"]
