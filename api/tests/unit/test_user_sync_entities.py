"""
Tests unitarios de las entidades del sync y del DTO de respuesta.
"""
from __future__ import annotations

import pytest

from app.application.dto.sync_dto import NO_RECORDS_MESSAGE, SyncResponseDTO
from app.domain.entities.user_sync import IdentityRecord, ProfileDocument, SourceRow, SyncSummary


def test_source_row_from_api_trims_values() -> None:
    row = SourceRow.from_api({
        "recordId": "rec1",
        "fields": {"email": "  a@b.com ", "firstname": "A", "lastname": "B", "displayname": " A B "},
    })

    assert row.record_id == "rec1"
    assert row.email == "a@b.com"
    assert row.display_name == "A B"
    assert row.missing_fields() == []
    assert not row.is_synced()


def test_source_row_without_fields() -> None:
    row = SourceRow.from_api({"recordId": "rec1"})

    assert row.fields == {}
    assert row.missing_fields() == ["email", "firstname", "lastname", "displayname"]


def test_whitespace_uid_counts_as_synced() -> None:
    row = SourceRow(record_id="rec1", fields={"uid": "   "})

    assert row.is_synced()


@pytest.mark.parametrize("uid", [12345, ["usr-1"], {"id": "usr-1"}])
def test_non_text_uid_counts_as_synced(uid) -> None:
    row = SourceRow(record_id="rec1", fields={"uid": uid})

    assert row.is_synced()


@pytest.mark.parametrize("uid", [None, "", [], {}])
def test_empty_uid_is_not_synced(uid) -> None:
    row = SourceRow(record_id="rec1", fields={"uid": uid})

    assert not row.is_synced()


def test_with_uid_does_not_mutate_row() -> None:
    row = SourceRow(record_id="rec1", fields={"email": "a@b.com", "uid": ""})

    patched = row.with_uid("uid-9")

    assert patched == {"email": "a@b.com", "uid": "uid-9"}
    assert row.fields["uid"] == ""


def test_profile_document_uses_identity_uid() -> None:
    row = SourceRow(
        record_id="rec1",
        fields={"email": "a@b.com", "firstname": "A", "lastname": "B", "displayname": "A B"},
    )
    identity = IdentityRecord(uid="uid-1", email="a@b.com")

    doc = ProfileDocument.from_row(row, identity).to_dict()

    assert doc == {
        "display_name": "A B",
        "email": "a@b.com",
        "first_name": "A",
        "last_name": "B",
        "uid": "uid-1",
    }


def test_summary_message_and_counts() -> None:
    summary = SyncSummary(total=3)
    summary.mark_synced()
    summary.mark_skipped("incomplete")
    summary.mark_failed("boom")

    assert summary.skipped == 2
    assert summary.counts() == {"synced": 1, "skipped": 2, "total": 3}
    assert summary.message == "Sync complete. Synced 1 users. Skipped 2 records. Total records: 3"
    assert summary.warnings == ["incomplete"]
    assert summary.errors == ["boom"]


def test_response_for_empty_table() -> None:
    body = SyncResponseDTO.from_summary(SyncSummary()).to_body()

    assert body == {"message": NO_RECORDS_MESSAGE}


def test_response_without_errors_has_only_message() -> None:
    summary = SyncSummary(total=1, synced=1)

    body = SyncResponseDTO.from_summary(summary).to_body()

    assert body == {"message": summary.message}


def test_response_with_errors_includes_details() -> None:
    summary = SyncSummary(total=2, synced=1)
    summary.mark_failed("Invalid email for recordId rec2: x")

    body = SyncResponseDTO.from_summary(summary).to_body()

    assert body["details"] == {"synced": 1, "skipped": 1, "total": 2}
    assert body["errors"] == ["Invalid email for recordId rec2: x"]
