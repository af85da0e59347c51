"""
Delete every Glacier archive in a named collection.
"""

import logging
from datetime import datetime
from typing import List

from sglacier.commands.base import GlacierCommand, CommandContext
from sglacier.core.errors import ArchiveServiceError, UsageError
from sglacier.receipts.paths import seek
from sglacier.receipts.schemas import ArchiveErrorResponse

logger = logging.getLogger(__name__)


class DeleteCollection(GlacierCommand):
    name = "delete"

    def __init__(self, args: List[str], context: CommandContext):
        super().__init__(args, context)
        self.completed = 0
        self.failed = 0
        self.found = False
        self.iterated = 0

    def check_args(self) -> None:
        if not self.options.collection_name:
            raise UsageError("Name of collection to delete must be specified using '-n NAME' switch")
        if self.args:
            raise UsageError("Delete takes no arguments. Specify collection name using '-n NAME' switch")

    def banner_start(self) -> None:
        self.echo(f"Deletion of upload collection {self.options.collection_name} started at {datetime.now()}")

    def do_action(self) -> None:
        name = self.options.collection_name
        collection = self.store.collection(self.options.vault, name)
        if collection is None:
            self.echo(f"No archive files found for collection {name}")
            return

        self.found = True
        self.iterated = len(collection)
        kept = []
        for receipt in collection:
            if self.delete_archive(receipt):
                self.completed += 1
            else:
                self.failed += 1
                kept.append(receipt)
        collection[:] = kept

        if not collection:
            self.store.remove_collection(self.options.vault, name)
            logger.info(f"Removed empty collection {name} from vault {self.options.vault}")

    def banner_end(self) -> None:
        if not self.found:
            self.echo("Delete failed")
            return
        self.echo(f"Delete {self.options.collection_name} completed at {datetime.now()}")
        self.echo(f"Archives deleted: {self.completed}, failed: {self.failed}")

    def save_receipts(self) -> bool:
        return self.iterated > 0

    def delete_archive(self, receipt: dict) -> bool:
        """
        Delete the archive behind one receipt.

        Receipts without an archive ID have nothing to delete remotely and
        count as deleted. A failed delete is recorded in the receipt.
        """
        label = f"{receipt.get('filename')} ({receipt.get('description')})"
        archive_id = seek(receipt, "glacier_response", "archive_id")
        if not archive_id:
            self.echo(f"  Removing {label} -- no Glacier archive ID")
            return True

        try:
            self.service.delete_archive(self.options.vault, archive_id)
        except ArchiveServiceError as e:
            self.echo(f"  Delete failed for {label} -- An error of type {e.error} occurred")
            self.echo(f"  Glacier message is: {e.message}")
            receipt["delete_error"] = ArchiveErrorResponse(
                glacier_error=e.error, glacier_message=e.message
            ).model_dump()
            return False

        self.echo(f"Successful deletion of {label}")
        return True
