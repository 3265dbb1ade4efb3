"""
DTOs del endpoint de sincronización de usuarios.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from app.domain.entities.user_sync import SyncSummary


NO_RECORDS_MESSAGE = "No records found in AITable."


class SyncCountsDTO(BaseModel):
    """Conteos de una corrida."""

    synced: int
    skipped: int
    total: int


class SyncResponseDTO(BaseModel):
    """
    Respuesta del endpoint /sync.

    details y errors solo se incluyen cuando hubo errores por registro.
    """

    message: str = Field(..., description="Resumen legible de la corrida")
    details: Optional[SyncCountsDTO] = None
    errors: Optional[List[str]] = None

    @classmethod
    def from_summary(cls, summary: SyncSummary) -> "SyncResponseDTO":
        if summary.total == 0:
            return cls(message=NO_RECORDS_MESSAGE)
        if not summary.has_errors:
            return cls(message=summary.message)
        return cls(
            message=summary.message,
            details=SyncCountsDTO(**summary.counts()),
            errors=list(summary.errors),
        )

    def to_body(self) -> Dict[str, object]:
        """Cuerpo JSON sin los campos opcionales vacíos."""
        return self.model_dump(exclude_none=True)
