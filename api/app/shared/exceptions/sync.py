"""
Excepciones del sync AITable -> Firebase.

Dos niveles:
- Invocación: abortan la corrida completa y se responden con 500
  (SourceUnreachableException, SyncConfigException).
- Registro: se capturan por fila, se agregan a la lista de errores del
  resumen y la corrida continúa con la siguiente fila (RowSyncException y derivadas).
"""
from typing import Any, Dict, Optional

from app.shared.exceptions.base import AppException


class SyncConfigException(AppException):
    """Falta configuración obligatoria o las credenciales no se pueden decodificar."""

    def __init__(self, message: str, setting: Optional[str] = None):
        details = {"setting": setting} if setting else None
        super().__init__(
            message=message,
            status_code=500,
            error_code="SYNC_CONFIG_ERROR",
            details=details
        )


class SourceUnreachableException(AppException):
    """No se pudo leer la tabla origen (AITable)."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=500,
            error_code="SOURCE_UNREACHABLE"
        )


class RowSyncException(AppException):
    """Error aislado a un registro. Nunca aborta la corrida."""

    def __init__(
        self,
        record_id: str,
        message: str,
        error_code: str = "ROW_SYNC_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.record_id = record_id
        super().__init__(
            message=message,
            status_code=422,
            error_code=error_code,
            details={"record_id": record_id, **(details or {})}
        )


class IdentityInvalidInputException(RowSyncException):
    """El proveedor de identidad rechazó el email por formato inválido."""

    def __init__(self, record_id: str, email: str):
        super().__init__(
            record_id=record_id,
            message=f"Invalid email for recordId {record_id}: {email}",
            error_code="IDENTITY_INVALID_INPUT",
            details={"email": email}
        )


class IdentityResolutionException(RowSyncException):
    """Cualquier otro error del proveedor de identidad al buscar o crear el usuario."""

    def __init__(self, record_id: str, reason: str):
        super().__init__(
            record_id=record_id,
            message=f"Identity resolution failed for recordId {record_id}: {reason}",
            error_code="IDENTITY_RESOLUTION_FAILED"
        )


class WriteBackException(RowSyncException):
    """
    Falló el upsert del perfil o el PATCH en AITable después de crear la identidad.

    La identidad (y quizás el perfil) quedan creados: no hay rollback.
    """

    def __init__(self, record_id: str, stage: str, reason: str, uid: Optional[str] = None):
        super().__init__(
            record_id=record_id,
            message=f"Write-back ({stage}) failed for recordId {record_id}: {reason}",
            error_code="WRITE_BACK_FAILED",
            details={"stage": stage, "uid": uid}
        )
