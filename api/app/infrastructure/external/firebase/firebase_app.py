"""
Inicialización explícita de Firebase Admin.

No hay bandera global de "inicializado": firebase_admin ya guarda la App por
nombre, así que initialize_firebase() la reutiliza si existe y es idempotente.
Se llama una vez en el startup y de nuevo (sin efecto) al construir el job.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict

import firebase_admin
from firebase_admin import credentials
from loguru import logger

from app.core.config import Settings
from app.shared.exceptions.sync import SyncConfigException


def decode_service_account(encoded: str) -> Dict[str, Any]:
    """
    Decodifica el JSON del service account guardado en base64.

    Raises:
        SyncConfigException: si falta, no es base64 válido o no es un objeto JSON
    """
    if not encoded:
        raise SyncConfigException(
            "FIREBASE_SERVICE_ACCOUNT_BASE64 no está configurada",
            setting="FIREBASE_SERVICE_ACCOUNT_BASE64",
        )
    try:
        raw = base64.b64decode(encoded, validate=True).decode("utf-8")
        info = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SyncConfigException(
            f"No se pudo decodificar FIREBASE_SERVICE_ACCOUNT_BASE64: {e}",
            setting="FIREBASE_SERVICE_ACCOUNT_BASE64",
        ) from e

    if not isinstance(info, dict):
        raise SyncConfigException(
            "FIREBASE_SERVICE_ACCOUNT_BASE64 no contiene un objeto JSON",
            setting="FIREBASE_SERVICE_ACCOUNT_BASE64",
        )
    return info


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    """
    Devuelve la App por defecto de Firebase, creándola si todavía no existe.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    info = decode_service_account(settings.FIREBASE_SERVICE_ACCOUNT_BASE64)
    try:
        cred = credentials.Certificate(info)
    except ValueError as e:
        raise SyncConfigException(
            f"Service account de Firebase inválido: {e}",
            setting="FIREBASE_SERVICE_ACCOUNT_BASE64",
        ) from e

    app = firebase_admin.initialize_app(cred)
    logger.info(f"Firebase inicializado para el proyecto {info.get('project_id', '?')}")
    return app
