"""
Router principal de la API v1.
Agrupa todos los endpoints de la version 1.
"""
from fastapi import APIRouter

from order_sync.api.v1.endpoints import sync


api_router = APIRouter(prefix="/v1")

api_router.include_router(sync.router)
