"""
Configuración de fixtures para pytest.

Fakes en memoria de AITable, Firebase Auth y Firestore para probar el
sync sin red.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from app.application.interfaces.user_sync_ports import (
    IdentityNotFoundError,
    IdentityProviderError,
    InvalidEmailError,
)
from app.domain.entities.user_sync import IdentityRecord, ProfileDocument, SourceRow


class FakeTableSource:
    """Tabla AITable en memoria. Los PATCH exitosos quedan visibles en el próximo fetch."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None) -> None:
        self.records: List[Dict[str, Any]] = records or []
        self.patches: List[Dict[str, Any]] = []
        self.fetch_error: Optional[Exception] = None
        self.patch_error: Optional[Exception] = None
        self.apply_patches = True

    def fetch_records(self) -> List[SourceRow]:
        if self.fetch_error:
            raise self.fetch_error
        return [SourceRow.from_api(rec) for rec in self.records]

    def patch_record(self, record_id: str, fields: Dict[str, Any]) -> None:
        self.patches.append({"recordId": record_id, "fields": fields})
        if self.patch_error:
            raise self.patch_error
        if not self.apply_patches:
            return
        for rec in self.records:
            if rec["recordId"] == record_id:
                rec["fields"] = dict(fields)


class FakeIdentityProvider:
    """Firebase Auth en memoria, indexado por email."""

    def __init__(self) -> None:
        self.users: Dict[str, IdentityRecord] = {}
        self.lookups: List[str] = []
        self.created: List[Dict[str, Any]] = []
        self.invalid_emails: set[str] = set()
        self.fail_with: Optional[Exception] = None
        self._next = 1

    def get_by_email(self, email: str) -> IdentityRecord:
        self.lookups.append(email)
        if self.fail_with:
            raise self.fail_with
        if email in self.invalid_emails:
            raise InvalidEmailError(f"Malformed email address string: {email}")
        if email not in self.users:
            raise IdentityNotFoundError(email)
        return self.users[email]

    def create(self, *, email: str, password: str, display_name: str) -> IdentityRecord:
        self.created.append({"email": email, "password": password, "display_name": display_name})
        if email in self.users:
            raise IdentityProviderError(f"EMAIL_EXISTS: {email}")
        identity = IdentityRecord(uid=f"uid-{self._next}", email=email, display_name=display_name, created=True)
        self._next += 1
        self.users[email] = IdentityRecord(uid=identity.uid, email=email, display_name=display_name)
        return identity

    @property
    def call_count(self) -> int:
        return len(self.lookups) + len(self.created)


class FakeProfileStore:
    """Colección de Firestore en memoria con semántica merge."""

    def __init__(self) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.upserts: List[ProfileDocument] = []
        self.fail_with: Optional[Exception] = None

    def upsert(self, profile: ProfileDocument) -> None:
        self.upserts.append(profile)
        if self.fail_with:
            raise self.fail_with
        self.documents.setdefault(profile.uid, {}).update(profile.to_dict())


def make_record(
    record_id: str = "rec1",
    email: Any = "a@b.com",
    firstname: Any = "A",
    lastname: Any = "B",
    displayname: Any = "A B",
    uid: Any = "",
    **extra: Any,
) -> Dict[str, Any]:
    """Registro con el formato de data.records de AITable."""
    fields = {
        "email": email,
        "firstname": firstname,
        "lastname": lastname,
        "displayname": displayname,
        "uid": uid,
        **extra,
    }
    return {"recordId": record_id, "fields": fields}


@pytest.fixture
def table_source() -> FakeTableSource:
    return FakeTableSource()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def profile_store() -> FakeProfileStore:
    return FakeProfileStore()


@pytest.fixture(name="make_record")
def make_record_fixture():
    """Expone make_record a los tests sin importar conftest."""
    return make_record
