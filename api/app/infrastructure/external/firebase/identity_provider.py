"""
Proveedor de identidad sobre Firebase Authentication.

Traduce las excepciones de firebase_admin a los errores del contrato
(IdentityNotFoundError, InvalidEmailError, IdentityProviderError) para que el
caso de uso no dependa del SDK.
"""

from __future__ import annotations

from typing import Optional

import firebase_admin
from firebase_admin import auth
from firebase_admin import exceptions as firebase_exceptions

from app.application.interfaces.user_sync_ports import (
    IdentityNotFoundError,
    IdentityProviderError,
    InvalidEmailError,
)
from app.domain.entities.user_sync import IdentityRecord


class FirebaseIdentityProvider:
    """Busca y crea usuarios en Firebase Auth."""

    def __init__(self, app: Optional[firebase_admin.App] = None) -> None:
        self._app = app

    def get_by_email(self, email: str) -> IdentityRecord:
        try:
            user = auth.get_user_by_email(email, app=self._app)
        except auth.UserNotFoundError as e:
            raise IdentityNotFoundError(f"No existe usuario con email {email}") from e
        except (ValueError, firebase_exceptions.InvalidArgumentError) as e:
            # El SDK valida el formato localmente (ValueError) y el backend
            # responde INVALID_ARGUMENT si se escapa alguno.
            raise InvalidEmailError(str(e)) from e
        except firebase_exceptions.FirebaseError as e:
            raise IdentityProviderError(str(e)) from e

        return IdentityRecord(
            uid=user.uid,
            email=user.email or email,
            display_name=user.display_name,
            created=False,
        )

    def create(self, *, email: str, password: str, display_name: str) -> IdentityRecord:
        try:
            user = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                email_verified=True,
                app=self._app,
            )
        except ValueError as e:
            if "email" in str(e).lower():
                raise InvalidEmailError(str(e)) from e
            raise IdentityProviderError(str(e)) from e
        except firebase_exceptions.InvalidArgumentError as e:
            raise InvalidEmailError(str(e)) from e
        except firebase_exceptions.FirebaseError as e:
            raise IdentityProviderError(str(e)) from e

        return IdentityRecord(
            uid=user.uid,
            email=user.email or email,
            display_name=user.display_name or display_name,
            created=True,
        )
