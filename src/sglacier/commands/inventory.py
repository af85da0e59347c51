"""
Request an asynchronous inventory of the vault and remember the job.
"""

import logging
from datetime import datetime
from typing import List

from sglacier.commands.base import GlacierCommand, CommandContext
from sglacier.core.errors import ArchiveServiceError, UsageError
from sglacier.core.settings import INVENTORY_JOB_TYPE
from sglacier.core.utils import shorten, timestamp
from sglacier.receipts.schemas import Job

logger = logging.getLogger(__name__)


class InventoryJob(GlacierCommand):
    name = "inventory"

    def __init__(self, args: List[str], context: CommandContext):
        super().__init__(args, context)
        self.succeeded = False

    def check_args(self) -> None:
        if self.args:
            raise UsageError("Glacier inventory job takes no arguments")
        if self.options.collection_name:
            logger.warning("Collection name ignored. Glacier inventory includes the entire vault")
            self.echo("Collection name ignored. Glacier inventory includes the entire vault")

    def banner_start(self) -> None:
        self.echo(f"Inventory job request for {self.options.vault} sent at {datetime.now()}")

    def do_action(self) -> None:
        vault = self.options.vault
        try:
            result = self.service.initiate_inventory_job(vault)
        except ArchiveServiceError as e:
            self.echo(f"  Inventory job request failed for vault {vault} -- An error of type {e.error} occurred")
            self.echo(f"  Glacier message is: {e.message}")
            self.echo(f"Vault inventory request for {vault} FAILED")
            return

        job = Job(
            type=INVENTORY_JOB_TYPE,
            requested=timestamp(),
            job_id=result.job_id,
            location=result.location,
        )
        self.store.vault_jobs(vault, create=True).append(job.model_dump())
        self.succeeded = True
        self.echo(f"Inventory job request for {vault} succeeded")
        self.echo(f"Glacier job ID {shorten(job.job_id)}")

    def save_receipts(self) -> bool:
        return self.succeeded
