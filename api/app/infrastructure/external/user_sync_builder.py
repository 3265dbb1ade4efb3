"""
Constructor "oficial" del job de sync leyendo la configuración.

Lo usan tanto el endpoint /sync como el script de línea de comandos.
"""

from __future__ import annotations

from typing import Optional

import firebase_admin

from app.application.use_cases.user_sync_use_cases import UserSyncUseCase
from app.core.config import Settings
from app.core.security import SecurityService
from app.infrastructure.external.aitable.aitable_client import AITableClient, AITableCredentials
from app.infrastructure.external.firebase.firebase_app import initialize_firebase
from app.infrastructure.external.firebase.identity_provider import FirebaseIdentityProvider
from app.infrastructure.external.firebase.profile_store import FirestoreProfileStore
from app.shared.exceptions.sync import SyncConfigException


def _require(settings: Settings, name: str) -> str:
    val = getattr(settings, name)
    if not val:
        raise SyncConfigException(f"Falta variable de entorno obligatoria: {name}", setting=name)
    return val


def build_aitable_client(settings: Settings) -> AITableClient:
    creds = AITableCredentials(
        token=_require(settings, "AITABLE_TOKEN"),
        api_url=_require(settings, "AITABLE_API_URL"),
        patch_url=_require(settings, "PATCH_URL"),
    )
    return AITableClient(
        creds,
        field_key=settings.AITABLE_FIELD_KEY,
        timeout_s=settings.AITABLE_TIMEOUT_S,
    )


def build_from_settings(
    settings: Settings,
    *,
    firebase_app: Optional[firebase_admin.App] = None,
) -> tuple[UserSyncUseCase, AITableClient]:
    """
    Arma el caso de uso con sus adaptadores reales.

    Returns:
        (use_case, aitable_client): el caller debe cerrar el cliente al terminar

    Raises:
        SyncConfigException: si falta configuración o las credenciales no decodifican
    """
    aitable = build_aitable_client(settings)
    try:
        app = firebase_app or initialize_firebase(settings)
        identity_provider = FirebaseIdentityProvider(app)
        profile_store = FirestoreProfileStore(app, collection=settings.FIRESTORE_USER_COLLECTION)
    except Exception:
        # El caller no recibe el cliente: la sesión se cierra aquí.
        aitable.close()
        raise

    password_length = settings.PASSWORD_LENGTH
    use_case = UserSyncUseCase(
        table_source=aitable,
        identity_provider=identity_provider,
        profile_store=profile_store,
        password_factory=lambda: SecurityService.generate_password(password_length),
    )
    return use_case, aitable
