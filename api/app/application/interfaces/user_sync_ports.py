"""
Contratos de los servicios externos que usa el sync de usuarios.

Este contrato existe para:
- Mantener Clean Architecture: el caso de uso no depende de requests ni de firebase_admin.
- Facilitar tests unitarios con fakes en memoria.

Implementaciones:
- AITableClient (tabla origen)
- FirebaseIdentityProvider (Firebase Auth)
- FirestoreProfileStore (Firestore)
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol

from app.domain.entities.user_sync import IdentityRecord, ProfileDocument, SourceRow


class IdentityProviderError(RuntimeError):
    """Error genérico del proveedor de identidad."""


class IdentityNotFoundError(IdentityProviderError):
    """No existe ningún usuario con ese email."""


class InvalidEmailError(IdentityProviderError):
    """El proveedor rechazó el email por formato inválido."""


class TableSource(Protocol):
    """Tabla origen de registros (AITable)."""

    def fetch_records(self) -> List[SourceRow]:
        """Trae todos los registros de la tabla en una sola llamada."""
        ...

    def patch_record(self, record_id: str, fields: Dict[str, Any]) -> None:
        """Reescribe los fields del registro; lanza error si la respuesta no es 2xx."""
        ...


class IdentityProvider(Protocol):
    """Servicio de autenticación donde viven las identidades."""

    def get_by_email(self, email: str) -> IdentityRecord:
        """Lanza IdentityNotFoundError o InvalidEmailError según el caso."""
        ...

    def create(self, *, email: str, password: str, display_name: str) -> IdentityRecord:
        """Crea la identidad con el email marcado como verificado."""
        ...


class ProfileStore(Protocol):
    """Almacén de documentos de perfil."""

    def upsert(self, profile: ProfileDocument) -> None:
        """Escribe el documento con merge: no borra campos ajenos."""
        ...
