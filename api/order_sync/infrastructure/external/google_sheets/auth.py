"""
Credenciales de cuenta de servicio para Google Sheets.
"""

from __future__ import annotations

from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from order_sync.shared.exceptions.sync import DestinationUnavailable

from .sheets_client import SHEETS_SCOPES

TOKEN_URI = "https://oauth2.googleapis.com/token"


def normalize_private_key(raw_key: str) -> str:
    """
    Las variables de entorno suelen traer la llave con "\\n" literales.
    """
    return (raw_key or "").replace("\\n", "\n")


def build_authorized_session(
    *,
    client_email: str,
    private_key: str,
    project_id: str = "",
) -> AuthorizedSession:
    """
    Construye una sesión requests autenticada con la cuenta de servicio.
    """
    if not client_email or not private_key:
        raise DestinationUnavailable(
            "Faltan credenciales de Google (GOOGLE_CLIENT_EMAIL / GOOGLE_PRIVATE_KEY)."
        )
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": normalize_private_key(private_key),
        "project_id": project_id,
        "token_uri": TOKEN_URI,
    }
    try:
        credentials = service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
    except ValueError as e:
        raise DestinationUnavailable(f"Credenciales de Google inválidas: {e}") from e
    return AuthorizedSession(credentials)
