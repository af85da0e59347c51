"""
Check pending Glacier jobs and write the output of completed ones to files.

Pending jobs are never removed from the receipts file here; a completed job
is checked (and its output fetched) again on every run.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from sglacier.commands.base import GlacierCommand, CommandContext
from sglacier.core.errors import ArchiveServiceError, UsageError
from sglacier.core.settings import JOB_OUTPUT_ID_LENGTH
from sglacier.core.utils import shorten
from sglacier.receipts.schemas import Job

logger = logging.getLogger(__name__)


class CheckJobs(GlacierCommand):
    name = "jobs"

    def __init__(self, args: List[str], context: CommandContext):
        super().__init__(args, context)
        self.checked = 0
        self.retrieved = 0
        self.failed = 0
        self.output_files: List[Path] = []

    def check_args(self) -> None:
        if self.args:
            raise UsageError("Checking Glacier jobs takes no arguments")
        if self.options.collection_name:
            logger.warning("Collection name ignored. Glacier jobs are not collection-specific")
            self.echo("Collection name ignored. Glacier jobs are not collection-specific")

    def banner_start(self) -> None:
        self.echo(f"Retrieving Glacier jobs for {self.options.vault}")

    def do_action(self) -> None:
        jobs = self.store.vault_jobs(self.options.vault)
        if not jobs:
            self.echo(f"No pending Glacier jobs for vault {self.options.vault}")
            return
        for item in jobs:
            self.check_job(Job.model_validate(item))

    def banner_end(self) -> None:
        self.echo(f"Jobs checked: {self.checked}, outputs retrieved: {self.retrieved}, failed: {self.failed}")

    def output_path(self, job: Job) -> Path:
        return Path(self.options.job_output_prefix + job.job_id[:JOB_OUTPUT_ID_LENGTH])

    def check_job(self, job: Job) -> None:
        vault = self.options.vault
        try:
            description = self.service.describe_job(vault, job.job_id)
        except ArchiveServiceError as e:
            self.failed += 1
            self.echo(f"Job status request for {shorten(job.job_id)} FAILED")
            self.echo(f"  An error of type {e.error} occurred")
            self.echo(f"  Glacier message is: {e.message}")
            return

        self.checked += 1
        self.echo(f"Job {job.type} status request for {shorten(job.job_id)} succeeded")
        self.echo(f"  Job status is {description.status_code}")
        if description.completed:
            self.fetch_output(job)

    def fetch_output(self, job: Job) -> None:
        output_file = self.output_path(job)
        try:
            output = self.service.get_job_output(self.options.vault, job.job_id)
            if not output.successful:
                self.failed += 1
                self.echo(f"Job {job.type} output request for {shorten(job.job_id)} FAILED with code {output.status}")
                return
            if self.options.dry_run:
                self.echo(f"  Job output would be written to {output_file}")
                return
            self.write_output(output_file, output.body)
        except ArchiveServiceError as e:
            self.failed += 1
            self.echo(f"  Request for job output failed for job ID {shorten(job.job_id)} -- An error of type {e.error} occurred")
            self.echo(f"  Glacier message is: {e.message}")
            return
        except OSError as e:
            self.failed += 1
            logger.error(f"Could not write job output to {output_file}: {e}")
            self.echo(f"  Could not write job output to {output_file}: {e}")
            return

        self.retrieved += 1
        self.output_files.append(output_file)
        self.echo(f"Job {job.type} output request for {shorten(job.job_id)} succeeded")
        self.echo(f"  Job output sent to {output_file}")

    @staticmethod
    def write_output(output_file: Path, body: Iterable[bytes]) -> None:
        """Stream body into output_file; the file only appears once the stream is complete."""
        fd, tmp_name = tempfile.mkstemp(prefix=f".{output_file.name}.", suffix=".part", dir=output_file.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                for chunk in body:
                    f.write(chunk)
            os.replace(tmp_name, output_file)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
