"""
Excepcion base del servicio de sincronizacion.

Todo error que la API deba traducir a JSON hereda de AppException; el
handler global de main.py responde con to_dict() y status_code.
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Error con codigo HTTP y codigo de negocio.

    Args:
        message: Texto legible (se usa tambien como detalle del RunResult)
        status_code: Codigo HTTP de la respuesta
        error_code: Codigo estable para clientes de la API
        details: Datos extra (nunca credenciales)
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = dict(details or {})
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error_code, "message": self.message, "details": self.details}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error_code={self.error_code!r}, message={self.message!r})"
