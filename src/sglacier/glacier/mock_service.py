# src/sglacier/glacier/mock_service.py
"""
Stand-in archive service that never touches the network.

Used for dry runs (nothing is saved afterwards) and for --test-debug runs
(everything else behaves normally, including saving receipts). Tests use it
to script failures for individual archives and jobs.
"""

import logging
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from sglacier.core.errors import ArchiveServiceError
from sglacier.glacier.base import (
    BaseArchiveService, UploadResult, InventoryJobResult, JobDescription, JobOutput
)

logger = logging.getLogger(__name__)

MOCK_ARCHIVE_ID = "MOCKnTnEPDwwTDuivbmS-FvTTG3V3MlZIDnoYcTMH4xzu24iNkee67b8moEVALiLkfWuUN_og6JzgjfkMCdyylaWrg"
MOCK_CHECKSUM = "MOCK3a35367088c595b367a30eb334942412584dbecaff542dd2376d25685cdd8662"
MOCK_LOCATION = "MOCK/31545654644/vaults/{vault}/archives/nTnEmDwhuwTDuivb_ogKy8DcQzgjfkMCdyylaWrg"
MOCK_JOB_ID = "MOCKjTnEPDwwTDuivbmS-FvTTG3V3MlZIDnoYcTMH4xzu24iNkee67b8moEVALiLkfWuUN_og6JzgjfkMCdyylaWrg"
MOCK_JOB_LOCATION = "MOCK/31545654644/vaults/{vault}/jobs/{job_id}"
MOCK_INVENTORY = (
    b'{"VaultARN":"arn:aws:glacier:us-east-1:000000000000:vaults/{vault}",'
    b'"InventoryDate":"2015-10-12T13:46:09Z","ArchiveList":[]}'
)


class MockArchiveService(BaseArchiveService):
    """
    Logs every call and answers with fixed mock values.

    Each upload gets its own archive ID (MOCK_ARCHIVE_ID with a sequence
    suffix) so that re-uploads can be told apart.
    """

    def __init__(self, label: str = "DRY-RUN", job_completed: bool = True):
        self.label = label
        self.job_completed = job_completed
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self._failures: Dict[Tuple[str, Optional[str]], ArchiveServiceError] = {}
        self._uploads = 0

    def fail(self, operation: str, error: ArchiveServiceError, key: Optional[str] = None) -> None:
        """
        Make an operation raise error.

        key narrows the failure to one call: the description for
        upload_archive, the archive ID for delete_archive, the vault for
        initiate_inventory_job and the job ID for the job operations.
        """
        self._failures[(operation, key)] = error

    def _record(self, operation: str, key: str, **args) -> None:
        self.calls.append((operation, args))
        logger.info(f"{self.label}: Glacier {operation} was not called, arguments: {args}")
        error = self._failures.get((operation, key)) or self._failures.get((operation, None))
        if error is not None:
            raise error

    def calls_to(self, operation: str) -> List[Dict[str, Any]]:
        return [args for name, args in self.calls if name == operation]

    def upload_archive(self, vault: str, description: str, body: BinaryIO) -> UploadResult:
        self._record("upload_archive", description, vault=vault, description=description)
        self._uploads += 1
        return UploadResult(
            archive_id=f"{MOCK_ARCHIVE_ID}-{self._uploads}",
            checksum=MOCK_CHECKSUM,
            location=MOCK_LOCATION.format(vault=vault),
        )

    def delete_archive(self, vault: str, archive_id: str) -> None:
        self._record("delete_archive", archive_id, vault=vault, archive_id=archive_id)

    def initiate_inventory_job(self, vault: str) -> InventoryJobResult:
        self._record("initiate_inventory_job", vault, vault=vault)
        return InventoryJobResult(
            job_id=MOCK_JOB_ID,
            location=MOCK_JOB_LOCATION.format(vault=vault, job_id=MOCK_JOB_ID),
        )

    def describe_job(self, vault: str, job_id: str) -> JobDescription:
        self._record("describe_job", job_id, vault=vault, job_id=job_id)
        return JobDescription(
            completed=self.job_completed,
            status_code="Succeeded" if self.job_completed else "InProgress",
        )

    def get_job_output(self, vault: str, job_id: str) -> JobOutput:
        self._record("get_job_output", job_id, vault=vault, job_id=job_id)
        return JobOutput(status=200, body=[MOCK_INVENTORY.replace(b"{vault}", vault.encode())])
