"""
Servicios de la capa de aplicacion.
"""
from .order_normalizer import ORDER_FIELDS, normalize_order, normalize_orders
from .sheet_reconciler import DestinationInspector, SheetReconciler
from .csv_export import rows_to_csv

__all__ = [
    "ORDER_FIELDS",
    "normalize_order",
    "normalize_orders",
    "DestinationInspector",
    "SheetReconciler",
    "rows_to_csv",
]
