"""
CLI: VTEX -> Google Sheets (una pasada sobre todos los clientes).

Uso recomendado:
  - Ejecutar como job (cron/systemd timer) si no se usa el scheduler del API.

Variables de entorno requeridas:
  - CLIENT_NAMES y, por cliente, <CLIENTE>_VTEX_ACCOUNT_NAME, <CLIENTE>_VTEX_APP_KEY,
    <CLIENTE>_VTEX_APP_TOKEN, <CLIENTE>_SHEET_ID (opcional <CLIENTE>_SHEET_NAME)
  - GOOGLE_CLIENT_EMAIL, GOOGLE_PRIVATE_KEY

Ejecucion:
  python scripts/run_orders_sync.py
  python scripts/run_orders_sync.py --csv pedidos.csv --client montecarlo
  python scripts/run_orders_sync.py --history 5
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from order_sync.core.config import settings
from order_sync.infrastructure.factory import build_from_settings
from order_sync.shared.exceptions.base import AppException


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sincroniza pedidos VTEX con Google Sheets.")
    parser.add_argument(
        "--csv",
        metavar="PATH",
        help="Exporta los pedidos de un cliente a CSV en lugar de sincronizar.",
    )
    parser.add_argument(
        "--client",
        metavar="NAME",
        help="Cliente a exportar con --csv (default: el primero de CLIENT_NAMES).",
    )
    parser.add_argument(
        "--history",
        type=int,
        metavar="N",
        help="Imprime las ultimas N pasadas registradas.",
    )
    args = parser.parse_args(argv)

    use_cases = build_from_settings(settings)

    if args.history is not None:
        runs = use_cases.get_history(max(args.history, 0))
        print(json.dumps([run.to_dict() for run in runs], indent=2, ensure_ascii=False))
        return 0

    if args.csv:
        try:
            export = use_cases.export_csv(args.client)
        except AppException as e:
            logger.error(e.message)
            return 1
        Path(args.csv).write_text(export.content, encoding="utf-8")
        logger.info(f"CSV generado: {args.csv} ({export.rows} pedido(s) de {export.tenant_name})")
        return 0

    logger.info("Iniciando VTEX -> Google Sheets sync...")
    summary = use_cases.run_pass()
    print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
    return 0 if summary.overall_success else 1


if __name__ == "__main__":
    raise SystemExit(main())
