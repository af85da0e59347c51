"""
Archive service implementations.

Commands talk to Glacier only through BaseArchiveService; which
implementation they get is decided once, by get_archive_service().
"""

from sglacier.glacier.base import (
    BaseArchiveService, UploadResult, InventoryJobResult, JobDescription, JobOutput
)
from sglacier.glacier.manager import get_archive_service
from sglacier.glacier.mock_service import MockArchiveService

__all__ = [
    "BaseArchiveService",
    "UploadResult",
    "InventoryJobResult",
    "JobDescription",
    "JobOutput",
    "MockArchiveService",
    "get_archive_service",
]
