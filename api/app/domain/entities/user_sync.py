"""
Entidades de dominio del sync de usuarios AITable -> Firebase.

Sin I/O: se pueden testear sin levantar ningún servicio externo.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


REQUIRED_FIELDS = ("email", "firstname", "lastname", "displayname")
UID_FIELD = "uid"


def _clean(value: Any) -> str:
    """Valor de texto recortado; cualquier cosa que no sea str cuenta como vacío."""
    if not isinstance(value, str):
        return ""
    return value.strip()


@dataclass(frozen=True)
class SourceRow:
    """
    Registro de AITable tal como llega del GET.

    Los fields se mantienen crudos: el PATCH de vuelta reenvía todos
    los fields originales más el uid.
    """

    record_id: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "SourceRow":
        """Construye el registro desde un item de data.records."""
        return cls(
            record_id=str(raw.get("recordId") or ""),
            fields=dict(raw.get("fields") or {}),
        )

    @property
    def email(self) -> str:
        return _clean(self.fields.get("email"))

    @property
    def first_name(self) -> str:
        return _clean(self.fields.get("firstname"))

    @property
    def last_name(self) -> str:
        return _clean(self.fields.get("lastname"))

    @property
    def display_name(self) -> str:
        return _clean(self.fields.get("displayname"))

    @property
    def uid(self) -> str:
        value = self.fields.get(UID_FIELD)
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    def is_synced(self) -> bool:
        """
        Un registro está sincronizado si y solo si su uid no está vacío.

        Se mira el valor crudo: AITable puede devolver números o listas
        según el tipo de columna. Solo None, "" o un contenedor vacío
        cuentan como vacío; un uid con solo espacios cuenta como presente.
        """
        value = self.fields.get(UID_FIELD)
        if value is None or value == "":
            return False
        if isinstance(value, (list, tuple, dict, set)):
            return len(value) > 0
        return True

    def missing_fields(self) -> List[str]:
        """Campos obligatorios ausentes o en blanco, en orden."""
        return [name for name in REQUIRED_FIELDS if not _clean(self.fields.get(name))]

    def with_uid(self, uid: str) -> Dict[str, Any]:
        """Fields originales más el uid asignado, listos para el PATCH."""
        return {**self.fields, UID_FIELD: uid}


@dataclass(frozen=True)
class IdentityRecord:
    """Usuario de Firebase Auth. La contraseña nunca se guarda aquí."""

    uid: str
    email: str
    display_name: Optional[str] = None
    created: bool = False


@dataclass(frozen=True)
class ProfileDocument:
    """Documento de perfil en Firestore, una por identidad, con id = uid."""

    uid: str
    email: str
    display_name: str
    first_name: str
    last_name: str

    @classmethod
    def from_row(cls, row: SourceRow, identity: IdentityRecord) -> "ProfileDocument":
        return cls(
            uid=identity.uid,
            email=row.email,
            display_name=row.display_name,
            first_name=row.first_name,
            last_name=row.last_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "display_name": self.display_name,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "uid": self.uid,
        }


@dataclass
class SyncSummary:
    """
    Resumen de una corrida. Vive solo durante la invocación, no se persiste.
    """

    total: int = 0
    synced: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def mark_synced(self) -> None:
        self.synced += 1

    def mark_skipped(self, warning: Optional[str] = None) -> None:
        self.skipped += 1
        if warning:
            self.warnings.append(warning)

    def mark_failed(self, error: str) -> None:
        """Un registro con error también cuenta como omitido."""
        self.skipped += 1
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def message(self) -> str:
        return (
            f"Sync complete. Synced {self.synced} users. "
            f"Skipped {self.skipped} records. Total records: {self.total}"
        )

    def counts(self) -> Dict[str, int]:
        return {"synced": self.synced, "skipped": self.skipped, "total": self.total}
