"""
Casos de uso de la aplicacion.
"""
from .user_sync_use_cases import UserSyncUseCase

__all__ = ["UserSyncUseCase"]
