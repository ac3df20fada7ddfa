"""
Punto de entrada principal de la aplicacion FastAPI.
Configura la aplicacion, middlewares, rutas y eventos.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from order_sync.core.config import settings, get_cors_origins
from order_sync.core.events import startup_handler, shutdown_handler
from order_sync.api.v1.router import api_router
from order_sync.api.v1.dependencies.use_case_deps import get_orders_sync_use_cases
from order_sync.api.middlewares.error_handler import ErrorHandlerMiddleware
from order_sync.shared.exceptions.base import AppException


def _scheduled_pass() -> None:
    get_orders_sync_use_cases().run_pass()


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Inicia el scheduler al arrancar y lo detiene al cerrar."""
    await startup_handler(application, _scheduled_pass)()
    try:
        yield
    finally:
        await shutdown_handler(application)()


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicacion FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicacion
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Sincronizacion de pedidos VTEX con Google Sheets (multi-cliente)",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=_lifespan,
    )

    cors_origins = get_cors_origins(settings.CORS_ORIGINS)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_middleware(ErrorHandlerMiddleware)

    application.include_router(api_router, prefix="/api")

    @application.exception_handler(AppException)
    async def app_exception_handler(request, exc: AppException):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @application.get("/health", tags=["Health"])
    async def health_check():
        """Endpoint para verificar el estado de la aplicacion."""
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        }

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
