# src/sglacier/glacier/base.py
"""
Base class for archive service implementations, and the result types they return.
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional

from pydantic import BaseModel


class UploadResult(BaseModel):
    archive_id: str
    checksum: Optional[str] = None
    location: Optional[str] = None


class InventoryJobResult(BaseModel):
    job_id: str
    location: Optional[str] = None


class JobDescription(BaseModel):
    completed: bool
    status_code: Optional[str] = None


class JobOutput(BaseModel):
    """Job output; body yields the output in byte chunks and can be consumed once."""
    status: int
    body: Any  # Iterable[bytes]

    @property
    def successful(self) -> bool:
        return 200 <= self.status < 300


class BaseArchiveService(ABC):
    """
    Base class for remote archive services.

    Every operation either returns its result or raises ServiceFailure
    (the service reported an error) or TransportError (the call itself
    failed). Nothing else may escape.
    """

    @abstractmethod
    def upload_archive(self, vault: str, description: str, body: BinaryIO) -> UploadResult:
        """Upload body as a new archive with the given description."""

    @abstractmethod
    def delete_archive(self, vault: str, archive_id: str) -> None:
        """Delete an archive from the vault."""

    @abstractmethod
    def initiate_inventory_job(self, vault: str) -> InventoryJobResult:
        """Request an asynchronous inventory of the vault."""

    @abstractmethod
    def describe_job(self, vault: str, job_id: str) -> JobDescription:
        """Get the status of an asynchronous job."""

    @abstractmethod
    def get_job_output(self, vault: str, job_id: str) -> JobOutput:
        """Get the output of a completed job."""
