"""
Tests for the upload command.
"""

import pytest

from sglacier.commands import Upload, UploadOutcome, run_command
from sglacier.core.errors import ServiceFailure, TransportError, UsageError
from sglacier.glacier.mock_service import MOCK_ARCHIVE_ID, MockArchiveService


def run_upload(make_context, files, **options):
    options.setdefault("collection_name", "C")
    command = Upload(files, make_context(**options))
    report = run_command(command, save=lambda store: None)
    return command, report


def test_upload_requires_files(make_context):
    command = Upload([], make_context(collection_name="C"))
    with pytest.raises(UsageError):
        command.check_args()


def test_upload_records_receipts(make_context, make_file):
    path = make_file("fileA", b"12345")
    command, report = run_upload(make_context, [path])

    assert report.persisted
    assert command.outcomes == [(path, UploadOutcome.UPLOADED)]
    [receipt] = make_context.store.collection("V", "C")
    assert receipt["filename"] == path
    assert receipt["description"] == f"C::{path}"
    assert receipt["size"] == 5
    assert receipt["error"] is None
    assert receipt["completed"]
    assert receipt["glacier_response"]["archive_id"].startswith(MOCK_ARCHIVE_ID)
    assert make_context.service.calls_to("upload_archive") == [
        {"vault": "V", "description": f"C::{path}"}
    ]


def test_mixed_success_and_failure(make_context, make_file):
    file_a = make_file("fileA")
    file_b = make_file("fileB")
    make_context.service.fail(
        "upload_archive", ServiceFailure("InvalidParameterValueException", "bad body"), key=f"C::{file_b}"
    )
    command, _ = run_upload(make_context, [file_a, file_b])

    receipt_a, receipt_b = make_context.store.collection("V", "C")
    assert receipt_a["glacier_response"]["archive_id"]
    assert receipt_a["error"] is None
    assert "archive_id" not in receipt_b["glacier_response"]
    assert receipt_b["error"]
    assert receipt_b["glacier_response"] == {
        "glacier_error": "InvalidParameterValueException",
        "glacier_message": "bad body",
    }
    assert receipt_b["completed"]
    assert (command.completed, command.failed, command.skipped) == (1, 1, 0)
    assert "Archive transfers completed: 1, failed: 1, skipped: 0" in make_context.text


def test_transport_error_has_its_own_shape(make_context, make_file):
    path = make_file("fileA")
    make_context.service.fail("upload_archive", TransportError("EndpointConnectionError", "no route"))
    command, report = run_upload(make_context, [path])

    [receipt] = make_context.store.collection("V", "C")
    assert receipt["error"] == "Exception caught during upload"
    assert receipt["glacier_response"] == {
        "glacier_error": "EndpointConnectionError",
        "glacier_message": "no route",
    }
    assert command.failed == 1
    # failed attempts are still saved
    assert report.persisted


def test_reupload_without_force_is_skipped(make_context, make_file):
    path = make_file("fileA")
    run_upload(make_context, [path])
    [receipt] = make_context.store.collection("V", "C")
    first_id = receipt["glacier_response"]["archive_id"]
    first_completed = receipt["completed"]

    command, _ = run_upload(make_context, [path])

    assert make_context.store.collection("V", "C") == [receipt]
    assert receipt["glacier_response"]["archive_id"] == first_id
    assert receipt["completed"] == first_completed
    assert command.outcomes == [(path, UploadOutcome.SKIPPED)]
    assert (command.completed, command.failed, command.skipped) == (0, 0, 1)
    assert len(make_context.service.calls_to("upload_archive")) == 1


def test_reupload_with_force_overwrites(make_context, make_file, monkeypatch):
    path = make_file("fileA")
    run_upload(make_context, [path])
    [receipt] = make_context.store.collection("V", "C")
    first_id = receipt["glacier_response"]["archive_id"]

    monkeypatch.setattr("sglacier.commands.upload.timestamp", lambda: "2030-01-01T00:00:00+00:00")
    command, _ = run_upload(make_context, [path], force=True)

    assert len(make_context.store.collection("V", "C")) == 1
    assert receipt["glacier_response"]["archive_id"] != first_id
    assert receipt["completed"] == "2030-01-01T00:00:00+00:00"
    assert command.completed == 1


def test_failed_receipt_is_retried_without_force(make_context, make_file):
    path = make_file("fileA")
    make_context.service.fail("upload_archive", ServiceFailure("Throttled", "slow down"))
    run_upload(make_context, [path])

    make_context.service = MockArchiveService(label="TEST")
    make_file("fileA", b"bigger content")
    command, _ = run_upload(make_context, [path])

    [receipt] = make_context.store.collection("V", "C")
    assert receipt["error"] is None
    assert receipt["glacier_response"]["archive_id"]
    assert receipt["size"] == len(b"bigger content")
    assert command.completed == 1


def test_missing_file_counts_as_failed_and_batch_continues(make_context, make_file, tmp_path):
    missing = str(tmp_path / "missing")
    present = make_file("present")
    command, _ = run_upload(make_context, [missing, present])

    assert command.outcomes == [(missing, UploadOutcome.FAILED), (present, UploadOutcome.UPLOADED)]
    assert [r["filename"] for r in make_context.store.collection("V", "C")] == [present]


def test_random_collection_name_when_none_given(make_context, make_file):
    command = Upload([make_file("fileA")], make_context())
    run_command(command, save=lambda store: None)
    assert len(command.collection_name) == 8
    assert list(make_context.store.vault_collections("V")) == [command.collection_name]


def test_existing_description_is_kept_on_update(make_context, make_file):
    path = make_file("fileA")
    make_context.store.collection("V", "C", create=True).append(
        {"filename": path, "description": "holiday photos", "error": "old failure"}
    )
    run_upload(make_context, [path])
    [receipt] = make_context.store.collection("V", "C")
    assert receipt["description"] == "holiday photos"
    assert receipt["error"] is None
    assert make_context.service.calls_to("upload_archive")[0]["description"] == "holiday photos"
