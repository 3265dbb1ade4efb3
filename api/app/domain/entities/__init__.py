"""
Entidades del dominio.
"""
from app.domain.entities.user_sync import (
    IdentityRecord,
    ProfileDocument,
    SourceRow,
    SyncSummary,
)

__all__ = [
    "SourceRow",
    "IdentityRecord",
    "ProfileDocument",
    "SyncSummary",
]
