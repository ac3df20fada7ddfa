"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.

Los clientes (tenants) no se declaran aqui: se cargan desde CLIENT_NAMES y
variables con prefijo por cliente (ver infrastructure/config/tenant_loader.py).
"""
import json
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.
    """
    
    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="VTEX Orders Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")
    
    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    
    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")
    
    # Clientes a sincronizar (separados por coma)
    CLIENT_NAMES: str = Field(default="")
    
    # Google Sheets - cuenta de servicio
    GOOGLE_CLIENT_EMAIL: str = Field(default="")
    GOOGLE_PRIVATE_KEY: str = Field(default="")
    GOOGLE_PROJECT_ID: str = Field(default="")
    SHEETS_VALUE_INPUT_OPTION: str = Field(default="USER_ENTERED")
    # Lecturas de la hoja: 0 = el error se reporta sin reintentar
    SHEETS_READ_RETRIES: int = Field(default=0)
    
    # VTEX OMS
    VTEX_ORDER_STATUS: str = Field(default="invoiced")
    VTEX_PAGE_SIZE: int = Field(default=50)
    VTEX_MAX_PAGES: int = Field(default=1)
    
    # HTTP (aplica a VTEX y Google Sheets)
    HTTP_TIMEOUT_S: int = Field(default=30)
    HTTP_MAX_RETRIES: int = Field(default=4)
    
    # Historial de corridas
    HISTORY_PATH: str = Field(default="data/history.json")
    HISTORY_LIMIT: int = Field(default=50)
    
    # Scheduler de sincronizacion periodica
    SYNC_SCHEDULER_ENABLED: bool = Field(default=False)
    SYNC_INTERVAL_MINUTES: int = Field(default=60)
    
    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")
    
    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"
    
    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
