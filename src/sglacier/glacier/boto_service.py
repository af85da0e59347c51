# src/sglacier/glacier/boto_service.py
"""
Archive service backed by the AWS Glacier API through boto3.
"""

import logging
from typing import Any, BinaryIO, Callable, Iterator, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sglacier.core.errors import ServiceFailure, TransportError
from sglacier.core.settings import INVENTORY_JOB_TYPE
from sglacier.glacier.base import (
    BaseArchiveService, UploadResult, InventoryJobResult, JobDescription, JobOutput
)

logger = logging.getLogger(__name__)


class GlacierArchiveService(BaseArchiveService):
    """AWS Glacier vault operations for the configured account."""

    def __init__(
        self,
        account_id: str = "-",
        region_name: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        client: Any = None,
    ):
        """
        Args:
            account_id: AWS account ID; "-" means the account of the credentials
            region_name: AWS region, or None for the boto3 default
            aws_access_key_id: Explicit credentials, or None for the boto3 default chain
            aws_secret_access_key: Secret matching aws_access_key_id
            client: A ready-made Glacier client (used instead of creating one)
        """
        self.account_id = account_id
        self._client = client
        self._client_args = {
            "region_name": region_name,
            "aws_access_key_id": aws_access_key_id,
            "aws_secret_access_key": aws_secret_access_key,
        }

    @property
    def client(self):
        if self._client is None:
            args = {key: value for key, value in self._client_args.items() if value}
            self._client = boto3.client("glacier", **args)
        return self._client

    def _call(self, operation: str, func: Callable[[Any], Any]) -> Any:
        """Run func(client), translating boto errors into service errors."""
        try:
            return func(self.client)
        except ClientError as e:
            error = e.response.get("Error", {})
            logger.error(f"Glacier {operation} failed: {error.get('Code')} {error.get('Message')}")
            raise ServiceFailure(error.get("Code", "Unknown"), error.get("Message", str(e))) from e
        except (BotoCoreError, OSError) as e:
            logger.error(f"Glacier {operation} raised {type(e).__name__}: {e}")
            raise TransportError.from_exception(e) from e

    def upload_archive(self, vault: str, description: str, body: BinaryIO) -> UploadResult:
        response = self._call("upload_archive", lambda client: client.upload_archive(
            accountId=self.account_id,
            vaultName=vault,
            archiveDescription=description,
            body=body,
        ))
        return UploadResult(
            archive_id=response["archiveId"],
            checksum=response.get("checksum"),
            location=response.get("location"),
        )

    def delete_archive(self, vault: str, archive_id: str) -> None:
        self._call("delete_archive", lambda client: client.delete_archive(
            accountId=self.account_id,
            vaultName=vault,
            archiveId=archive_id,
        ))

    def initiate_inventory_job(self, vault: str) -> InventoryJobResult:
        response = self._call("initiate_job", lambda client: client.initiate_job(
            accountId=self.account_id,
            vaultName=vault,
            jobParameters={"Type": INVENTORY_JOB_TYPE},
        ))
        return InventoryJobResult(job_id=response["jobId"], location=response.get("location"))

    def describe_job(self, vault: str, job_id: str) -> JobDescription:
        response = self._call("describe_job", lambda client: client.describe_job(
            accountId=self.account_id,
            vaultName=vault,
            jobId=job_id,
        ))
        return JobDescription(completed=response["Completed"], status_code=response.get("StatusCode"))

    def get_job_output(self, vault: str, job_id: str) -> JobOutput:
        response = self._call("get_job_output", lambda client: client.get_job_output(
            accountId=self.account_id,
            vaultName=vault,
            jobId=job_id,
        ))
        return JobOutput(status=response.get("status", 200), body=self._stream(response["body"]))

    def _stream(self, body) -> Iterator[bytes]:
        try:
            for chunk in body.iter_chunks():
                yield chunk
        except (BotoCoreError, OSError) as e:
            raise TransportError.from_exception(e) from e
        finally:
            body.close()
