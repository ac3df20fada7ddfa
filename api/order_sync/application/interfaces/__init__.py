from .order_source import OrderSource
from .run_ledger import RunLedger
from .tabular_destination import TabularDestination

__all__ = ["OrderSource", "RunLedger", "TabularDestination"]
