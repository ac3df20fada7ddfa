"""
Servicio de sincronizacion de pedidos VTEX -> Google Sheets (multi-cliente).
"""

__version__ = "1.0.0"
