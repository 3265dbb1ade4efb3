"""
CLI: AITable -> Firebase (one-way sync de usuarios).

Ejecuta la misma pasada que el endpoint /sync, pensado para cron/systemd timer.

Variables de entorno requeridas:
  - AITABLE_API_URL
  - PATCH_URL
  - AITABLE_TOKEN
  - FIREBASE_SERVICE_ACCOUNT_BASE64

Ejecución:
  python scripts/sync_users.py
  python scripts/sync_users.py --quiet
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `app/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe (api/.env o raíz del repo).
_REPO_ROOT = _API_ROOT.parent
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_REPO_ROOT / ".env", override=False)

from app.application.dto.sync_dto import SyncResponseDTO
from app.core.config import settings
from app.infrastructure.external.user_sync_builder import build_from_settings
from app.shared.exceptions.base import AppException


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sincroniza usuarios de AITable con Firebase.")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Solo loguea warnings y errores.",
    )
    args = parser.parse_args(argv)

    if args.quiet:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    try:
        use_case, aitable = build_from_settings(settings)
    except AppException as e:
        logger.error(f"Configuración inválida: {e.message}")
        print(json.dumps({"error": e.message}))
        return 1

    try:
        logger.info("Iniciando AITable -> Firebase sync...")
        summary = use_case.run()
    except AppException as e:
        logger.error(f"Sync abortado: {e.message}")
        print(json.dumps({"error": e.message}))
        return 1
    finally:
        aitable.close()

    print(json.dumps(SyncResponseDTO.from_summary(summary).to_body(), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
