from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from app.infrastructure.external.aitable.aitable_client import (
    AITableApiError,
    AITableClient,
    AITableCredentials,
)


def _response(status_code: int = 200, payload=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload if payload is not None else {}
    return resp


def _client(session: MagicMock) -> AITableClient:
    creds = AITableCredentials(
        token="tok",
        api_url="https://aitable.example/fusion/v1/datasheets/dst1/records",
        patch_url="https://aitable.example/fusion/v1/datasheets/dst1/records?viewId=v1",
    )
    return AITableClient(creds, session=session, timeout_s=5)


def test_fetch_records_parses_data_records() -> None:
    session = MagicMock()
    session.request.return_value = _response(payload={
        "data": {"records": [
            {"recordId": "rec1", "fields": {"email": "a@b.com"}},
            {"recordId": "rec2", "fields": {}},
        ]}
    })

    rows = _client(session).fetch_records()

    assert [r.record_id for r in rows] == ["rec1", "rec2"]
    assert rows[0].email == "a@b.com"
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["timeout"] == 5


def test_fetch_records_tolerates_missing_data() -> None:
    session = MagicMock()
    session.request.return_value = _response(payload={"success": False})

    assert _client(session).fetch_records() == []


def test_fetch_records_raises_on_http_error() -> None:
    session = MagicMock()
    session.request.return_value = _response(status_code=401, text="unauthorized")

    with pytest.raises(AITableApiError) as exc_info:
        _client(session).fetch_records()

    assert exc_info.value.status_code == 401
    assert "unauthorized" in str(exc_info.value)


def test_fetch_records_wraps_network_errors() -> None:
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(AITableApiError):
        _client(session).fetch_records()


def test_fetch_records_rejects_non_json_body() -> None:
    session = MagicMock()
    session.request.return_value = _response(payload=ValueError("no json"))

    with pytest.raises(AITableApiError):
        _client(session).fetch_records()


def test_patch_record_sends_records_and_field_key() -> None:
    session = MagicMock()
    session.request.return_value = _response(payload={"success": True})

    _client(session).patch_record("rec1", {"email": "a@b.com", "uid": "uid-1"})

    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "PATCH"
    assert kwargs["url"].endswith("?viewId=v1")
    assert kwargs["json"] == {
        "records": [{"recordId": "rec1", "fields": {"email": "a@b.com", "uid": "uid-1"}}],
        "fieldKey": "name",
    }


def test_patch_record_accepts_empty_body() -> None:
    session = MagicMock()
    session.request.return_value = _response(status_code=204, payload=ValueError("empty"))

    _client(session).patch_record("rec1", {"uid": "uid-1"})


def test_patch_record_raises_on_non_success() -> None:
    session = MagicMock()
    session.request.return_value = _response(status_code=400, text="bad field")

    with pytest.raises(AITableApiError) as exc_info:
        _client(session).patch_record("rec1", {"uid": "uid-1"})

    assert exc_info.value.status_code == 400
