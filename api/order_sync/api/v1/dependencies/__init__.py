"""
Dependencias de FastAPI para la API v1.
"""
