"""
Upload files to Glacier as a named collection, keeping a receipt for each file.
"""

import logging
import os
from datetime import datetime
from enum import Enum
from typing import BinaryIO, Dict, List, Optional, Tuple

from sglacier.commands.base import GlacierCommand, CommandContext
from sglacier.core.errors import FileOpenError, ServiceFailure, TransportError, UsageError
from sglacier.core.utils import random_collection_name, timestamp
from sglacier.receipts.paths import seek
from sglacier.receipts.schemas import ArchiveErrorResponse, ArchiveResponse, Receipt

logger = logging.getLogger(__name__)


class UploadOutcome(str, Enum):
    UPLOADED = "uploaded"
    FAILED = "failed"
    SKIPPED = "skipped"  # Already archived and --force not given


def open_for_upload(filename: str) -> BinaryIO:
    try:
        return open(filename, "rb")
    except OSError as e:
        raise FileOpenError(f"Failed to open {filename}: {e}") from e


def find_receipt(collection: List[dict], filename: str) -> Optional[dict]:
    for receipt in collection:
        if receipt.get("filename") == filename:
            return receipt
    return None


class Upload(GlacierCommand):
    name = "upload"

    def __init__(self, args: List[str], context: CommandContext):
        super().__init__(args, context)
        self.collection_name = self.options.collection_name or random_collection_name()
        self.counts: Dict[UploadOutcome, int] = {outcome: 0 for outcome in UploadOutcome}
        self.outcomes: List[Tuple[str, UploadOutcome]] = []

    @property
    def completed(self) -> int:
        return self.counts[UploadOutcome.UPLOADED]

    @property
    def failed(self) -> int:
        return self.counts[UploadOutcome.FAILED]

    @property
    def skipped(self) -> int:
        return self.counts[UploadOutcome.SKIPPED]

    def check_args(self) -> None:
        if not self.args:
            raise UsageError("No files specified for upload")

    def banner_start(self) -> None:
        self.echo(f"Upload {self.collection_name} started at {datetime.now()}")

    def do_action(self) -> None:
        collection = self.store.collection(self.options.vault, self.collection_name, create=True)
        for filename in self.args:
            outcome = self.upload_file(filename, collection)
            self.counts[outcome] += 1
            self.outcomes.append((filename, outcome))
            if outcome == UploadOutcome.UPLOADED:
                self.echo(f"Archive {filename} uploaded successfully at {datetime.now()}")
            elif outcome == UploadOutcome.FAILED:
                self.echo(f"Archive {filename} FAILED upload at {datetime.now()}")

    def banner_end(self) -> None:
        self.echo(f"Upload {self.collection_name} completed at {datetime.now()}")
        self.echo(
            f"Archive transfers completed: {self.completed}, failed: {self.failed}, "
            f"skipped: {self.skipped}"
        )

    def save_receipts(self) -> bool:
        # Failed attempts are recorded too, so there is always something to save.
        return True

    def upload_file(self, filename: str, collection: List[dict]) -> UploadOutcome:
        """
        Upload one file and update (or append) its receipt in the collection.

        Returns:
            The outcome; failures are recorded in the receipt, not raised
        """
        try:
            fileio = open_for_upload(filename)
        except FileOpenError as e:
            logger.error(str(e))
            self.echo(f"  Failed to open {filename}")
            return UploadOutcome.FAILED

        with fileio:
            receipt = find_receipt(collection, filename)
            if receipt is not None:
                existing_id = seek(receipt, "glacier_response", "archive_id")
                if existing_id and not self.options.force:
                    logger.warning(f"Skipping {filename}: already archived as {existing_id}")
                    self.echo(f"  Skipping {filename} -- A Glacier archive ID already exists and would be lost")
                    self.echo("  Use --force option to allow the existing record to be overwritten")
                    return UploadOutcome.SKIPPED
                self.echo(f"  Updating existing receipt for {filename}")
                if not receipt.get("description"):
                    receipt["description"] = f"{self.collection_name}::{filename}"
            else:
                receipt = Receipt(
                    filename=filename,
                    description=f"{self.collection_name}::{filename}",
                ).model_dump()
                collection.append(receipt)

            receipt["size"] = os.fstat(fileio.fileno()).st_size
            receipt["error"] = None
            try:
                outcome = self._upload(fileio, receipt)
            finally:
                receipt["completed"] = timestamp()
        return outcome

    def _upload(self, fileio: BinaryIO, receipt: dict) -> UploadOutcome:
        try:
            result = self.service.upload_archive(self.options.vault, receipt["description"], fileio)
        except ServiceFailure as e:
            self.echo(f"  ERROR of type {e.error} occurred")
            self.echo(f"  Error message is: {e.message}")
            receipt["error"] = f"Glacier reported an error during upload: {e.error}"
            receipt["glacier_response"] = ArchiveErrorResponse(
                glacier_error=e.error, glacier_message=e.message
            ).model_dump()
            return UploadOutcome.FAILED
        except TransportError as e:
            self.echo(f"  ERROR of exception type {e.error} occurred")
            self.echo(f"  Exception message is: {e.message}")
            receipt["error"] = "Exception caught during upload"
            receipt["glacier_response"] = ArchiveErrorResponse(
                glacier_error=e.error, glacier_message=e.message
            ).model_dump()
            return UploadOutcome.FAILED

        receipt["glacier_response"] = ArchiveResponse(**result.model_dump()).model_dump()
        self.echo(f"  Glacier archive ID: {result.archive_id}")
        return UploadOutcome.UPLOADED
