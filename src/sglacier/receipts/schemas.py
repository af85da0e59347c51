"""
Record types for the current receipts file schema (version 2).

The document itself is kept as plain JSON-compatible dicts so it can be
mutated in place and written back unchanged; these models validate it after
loading and build new records before they are inserted.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ArchiveResponse(BaseModel):
    """Glacier's answer to a successful upload."""
    model_config = ConfigDict(extra="allow")

    archive_id: str
    checksum: Optional[str] = None
    location: Optional[str] = None


class ArchiveErrorResponse(BaseModel):
    """Error details recorded for a failed upload."""
    model_config = ConfigDict(extra="allow")

    glacier_error: Optional[str] = None
    glacier_message: Optional[str] = None


class Receipt(BaseModel):
    """Local record of one file's archive attempt and outcome."""
    model_config = ConfigDict(extra="allow")

    filename: str
    description: str
    size: Optional[int] = None
    completed: Optional[str] = None
    error: Optional[str] = None
    glacier_response: Optional[Dict[str, Any]] = None

    @property
    def archive_id(self) -> Optional[str]:
        if self.glacier_response:
            return self.glacier_response.get("archive_id")
        return None

    @property
    def is_archived(self) -> bool:
        return bool(self.archive_id)


class Job(BaseModel):
    """An outstanding asynchronous Glacier job."""
    model_config = ConfigDict(extra="allow")

    type: str
    requested: str
    job_id: str
    location: Optional[str] = None


class VaultRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    collections: Dict[str, List[Receipt]] = Field(default_factory=dict)
    pending_jobs: List[Job] = Field(default_factory=list)


class ReceiptDocument(BaseModel):
    """The whole receipts file."""
    model_config = ConfigDict(extra="allow")

    version: int
    vaults: Dict[str, VaultRecord] = Field(default_factory=dict)
