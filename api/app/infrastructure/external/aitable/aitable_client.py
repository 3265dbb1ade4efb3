"""
Cliente mínimo de AITable REST API (sin SDKs externos).

Cubre:
- GET de todos los registros de la tabla (sin paginación)
- PATCH de un registro con fieldKey="name"

No reintenta: un error de red o una respuesta no-2xx se propagan como
AITableApiError y el caller decide si es fatal (GET) o solo del registro (PATCH).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests
from loguru import logger

from app.domain.entities.user_sync import SourceRow


@dataclass(frozen=True)
class AITableCredentials:
    token: str
    api_url: str
    patch_url: str


class AITableApiError(RuntimeError):
    """Error de integración con AITable."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AITableClient:
    """
    Cliente HTTP de AITable.

    Importante:
    - No castea fields: se devuelven tal cual para poder reenviarlos en el PATCH.
    - Espera el formato {"data": {"records": [{"recordId", "fields"}]}}.
    """

    def __init__(
        self,
        credentials: AITableCredentials,
        *,
        session: Optional[requests.Session] = None,
        field_key: str = "name",
        timeout_s: int = 30,
    ) -> None:
        self._creds = credentials
        self._field_key = field_key
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    def fetch_records(self) -> list[SourceRow]:
        """Trae todos los registros visibles en la URL configurada."""
        payload = self._request_json("GET", self._creds.api_url)
        data = payload.get("data") or {}
        records = data.get("records") or []
        logger.debug(f"AITable devolvió {len(records)} registro(s)")
        return [SourceRow.from_api(rec) for rec in records]

    def patch_record(self, record_id: str, fields: dict[str, Any]) -> None:
        """
        Actualiza un registro identificado por recordId.

        AITable espera la lista completa de fields; se reenvían los originales
        más los nuevos para no vaciar columnas.
        """
        body = {
            "records": [{"recordId": record_id, "fields": fields}],
            "fieldKey": self._field_key,
        }
        self._request_json("PATCH", self._creds.patch_url, body=body)

    def close(self) -> None:
        self._session.close()

    def _request_json(
        self, method: str, url: str, *, body: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._creds.token}",
            "Content-Type": "application/json",
        }

        try:
            resp = self._session.request(
                method=method,
                url=url,
                json=body,
                headers=headers,
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            raise AITableApiError(f"AITable {method} falló: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise AITableApiError(
                f"AITable {method} respondió {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            if method == "PATCH":
                # Algunas respuestas de PATCH llegan sin cuerpo
                return {}
            raise AITableApiError(f"AITable {method} devolvió un cuerpo no JSON") from e
