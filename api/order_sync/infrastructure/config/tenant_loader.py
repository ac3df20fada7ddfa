"""
Carga de clientes (tenants) desde variables de entorno.

Formato:
    CLIENT_NAMES=montecarlo,acme
    MONTECARLO_NAME=Montecarlo            (opcional, default: clave)
    MONTECARLO_VTEX_ACCOUNT_NAME=...
    MONTECARLO_VTEX_APP_KEY=...
    MONTECARLO_VTEX_APP_TOKEN=...
    MONTECARLO_SHEET_ID=...
    MONTECARLO_SHEET_NAME=Montecarlo      (opcional, default: clave)

Un cliente incompleto se omite con un warning, antes de cualquier llamada de red.
"""
from __future__ import annotations

import os
from typing import Iterable, List, Mapping, Optional

from loguru import logger

from order_sync.domain.entities.tenant import TenantConfig


def parse_client_names(raw: str) -> List[str]:
    return [name.strip().lower() for name in (raw or "").split(",") if name.strip()]


def tenant_from_env(client_key: str, environ: Mapping[str, str]) -> TenantConfig:
    prefix = client_key.upper()
    return TenantConfig(
        name=environ.get(f"{prefix}_NAME") or client_key,
        vtex_account_name=environ.get(f"{prefix}_VTEX_ACCOUNT_NAME", ""),
        vtex_app_key=environ.get(f"{prefix}_VTEX_APP_KEY", ""),
        vtex_app_token=environ.get(f"{prefix}_VTEX_APP_TOKEN", ""),
        sheet_id=environ.get(f"{prefix}_SHEET_ID", ""),
        sheet_name=environ.get(f"{prefix}_SHEET_NAME") or client_key,
    )


def load_tenant_configs(
    client_names: Optional[Iterable[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> List[TenantConfig]:
    """
    Retorna los clientes completos, en el orden de CLIENT_NAMES.

    Args:
        client_names: Claves de clientes. Si es None se lee CLIENT_NAMES de environ.
        environ: Variables de entorno (default: os.environ)
    """
    environ = os.environ if environ is None else environ
    if client_names is None:
        client_names = parse_client_names(environ.get("CLIENT_NAMES", ""))
    keys = [name.strip().lower() for name in client_names if name and name.strip()]

    if not keys:
        logger.info("[Client Config] CLIENT_NAMES no definido. No hay clientes para procesar.")
        return []

    tenants: List[TenantConfig] = []
    for key in keys:
        tenant = tenant_from_env(key, environ)
        missing = tenant.missing_fields()
        if missing:
            logger.warning(
                f"[Client Config] Configuracion incompleta para '{key}' (faltan: {', '.join(missing)}). Omitido."
            )
            continue
        tenants.append(tenant)

    logger.info(f"[Client Config] {len(tenants)} cliente(s) cargado(s): {', '.join(t.name for t in tenants)}")
    return tenants
