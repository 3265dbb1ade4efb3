"""
Dependencias para inyeccion de casos de uso.
"""
from typing import Generator

from fastapi import Request

from app.application.use_cases.user_sync_use_cases import UserSyncUseCase
from app.core.config import settings
from app.infrastructure.external.user_sync_builder import build_from_settings


def get_user_sync_use_case(request: Request) -> Generator[UserSyncUseCase, None, None]:
    """
    Dependencia para obtener el job de sync de usuarios.

    Reutiliza la App de Firebase creada en el startup (app.state.firebase_app);
    si no se pudo crear ahi, la inicializa aqui mismo. La sesion HTTP de
    AITable se cierra al terminar el request.

    Yields:
        UserSyncUseCase: Instancia del caso de uso
    """
    firebase_app = getattr(request.app.state, "firebase_app", None)
    use_case, aitable = build_from_settings(settings, firebase_app=firebase_app)
    try:
        yield use_case
    finally:
        aitable.close()
