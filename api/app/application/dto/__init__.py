"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import NO_RECORDS_MESSAGE, SyncCountsDTO, SyncResponseDTO

__all__ = [
    "NO_RECORDS_MESSAGE",
    "SyncCountsDTO",
    "SyncResponseDTO",
]
