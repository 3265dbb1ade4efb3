"""
Perfiles de usuario en Firestore (colección "user" por defecto).
"""

from __future__ import annotations

from typing import Any, Optional

import firebase_admin
from firebase_admin import firestore

from app.domain.entities.user_sync import ProfileDocument


class FirestoreProfileStore:
    """Upsert con merge=True: los campos que no maneja el sync se conservan."""

    def __init__(
        self,
        app: Optional[firebase_admin.App] = None,
        *,
        collection: str = "user",
        client: Any = None,
    ) -> None:
        self._client = client or firestore.client(app)
        self._collection = collection

    def upsert(self, profile: ProfileDocument) -> None:
        doc_ref = self._client.collection(self._collection).document(profile.uid)
        doc_ref.set(profile.to_dict(), merge=True)
