"""
Entidad de configuracion por cliente (tenant).
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantConfig:
    """
    Descriptor inmutable de un cliente a sincronizar.

    - name: nombre visible del cliente
    - vtex_account_name / vtex_app_key / vtex_app_token: credenciales VTEX
    - sheet_id: ID del Google Spreadsheet de destino
    - sheet_name: nombre de la hoja (pestaña) dentro del spreadsheet
    """

    name: str
    vtex_account_name: str
    vtex_app_key: str
    vtex_app_token: str
    sheet_id: str
    sheet_name: str

    def missing_fields(self) -> list[str]:
        """Campos requeridos vacios (en el orden en que se validan)."""
        required = {
            "vtex_account_name": self.vtex_account_name,
            "vtex_app_key": self.vtex_app_key,
            "vtex_app_token": self.vtex_app_token,
            "sheet_id": self.sheet_id,
            "sheet_name": self.sheet_name,
        }
        return [key for key, value in required.items() if not (value or "").strip()]

    def __repr__(self) -> str:
        # Nunca exponer credenciales en logs.
        return (
            f"TenantConfig(name={self.name!r}, vtex_account_name={self.vtex_account_name!r}, "
            f"sheet_id={self.sheet_id!r}, sheet_name={self.sheet_name!r})"
        )
