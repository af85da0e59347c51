"""
Tests for the boto3-backed Glacier service, with the client mocked out.
"""

import io
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from sglacier.core.config import RunOptions, Settings
from sglacier.core.errors import ServiceFailure, TransportError
from sglacier.glacier import MockArchiveService, get_archive_service
from sglacier.glacier.boto_service import GlacierArchiveService


def client_error(code, message, operation="UploadArchive"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def service(client):
    return GlacierArchiveService(client=client)


def test_upload_archive(service, client):
    client.upload_archive.return_value = {"archiveId": "arch", "checksum": "sum", "location": "/loc"}
    body = io.BytesIO(b"data")
    result = service.upload_archive("V", "C::file", body)

    client.upload_archive.assert_called_once_with(
        accountId="-", vaultName="V", archiveDescription="C::file", body=body
    )
    assert (result.archive_id, result.checksum, result.location) == ("arch", "sum", "/loc")


def test_client_error_becomes_service_failure(service, client):
    client.upload_archive.side_effect = client_error("RequestTimeoutException", "too slow")
    with pytest.raises(ServiceFailure) as excinfo:
        service.upload_archive("V", "d", io.BytesIO(b""))
    assert excinfo.value.error == "RequestTimeoutException"
    assert excinfo.value.message == "too slow"


def test_botocore_error_becomes_transport_error(service, client):
    client.delete_archive.side_effect = EndpointConnectionError(endpoint_url="https://glacier")
    with pytest.raises(TransportError) as excinfo:
        service.delete_archive("V", "arch")
    assert excinfo.value.error == "EndpointConnectionError"


def test_delete_archive(service, client):
    service.delete_archive("V", "arch")
    client.delete_archive.assert_called_once_with(accountId="-", vaultName="V", archiveId="arch")


def test_initiate_inventory_job(service, client):
    client.initiate_job.return_value = {"jobId": "job", "location": "/jobs/job"}
    result = service.initiate_inventory_job("V")
    client.initiate_job.assert_called_once_with(
        accountId="-", vaultName="V", jobParameters={"Type": "inventory-retrieval"}
    )
    assert (result.job_id, result.location) == ("job", "/jobs/job")


def test_describe_job(service, client):
    client.describe_job.return_value = {"Completed": False, "StatusCode": "InProgress"}
    result = service.describe_job("V", "job")
    assert not result.completed
    assert result.status_code == "InProgress"


def test_get_job_output_streams_body(service, client):
    body = MagicMock()
    body.iter_chunks.return_value = iter([b"abc", b"def"])
    client.get_job_output.return_value = {"status": 200, "body": body}

    output = service.get_job_output("V", "job")
    assert output.successful
    assert b"".join(output.body) == b"abcdef"
    body.close.assert_called_once()


def test_account_id_is_passed_through(client):
    service = GlacierArchiveService(account_id="123456789012", client=client)
    service.delete_archive("V", "arch")
    assert client.delete_archive.call_args.kwargs["accountId"] == "123456789012"


@pytest.mark.parametrize("flags, label", [({"dry_run": True}, "DRY-RUN"), ({"test_debug": True}, "DEBUG")])
def test_mock_service_selected_for_dry_run_and_debug(flags, label):
    options = RunOptions(receipts_file="r.json", vault="V", **flags)
    service = get_archive_service(options, Settings())
    assert isinstance(service, MockArchiveService)
    assert service.label == label


def test_glacier_service_selected_otherwise(monkeypatch):
    monkeypatch.setattr("sglacier.core.config.keyring.get_password", lambda service, key: None)
    options = RunOptions(receipts_file="r.json", vault="V")
    service = get_archive_service(options, Settings(aws_account_id="42", aws_region="eu-west-1"))
    assert isinstance(service, GlacierArchiveService)
    assert service.account_id == "42"
