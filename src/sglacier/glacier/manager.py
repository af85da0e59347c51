# src/sglacier/glacier/manager.py

import logging

from sglacier.core.config import RunOptions, Settings
from sglacier.glacier.base import BaseArchiveService
from sglacier.glacier.boto_service import GlacierArchiveService
from sglacier.glacier.mock_service import MockArchiveService

logger = logging.getLogger(__name__)


def get_archive_service(options: RunOptions, settings: Settings) -> BaseArchiveService:
    """
    Pick the archive service for this run.

    Dry runs and --test-debug runs get the mock service; everything else
    talks to AWS Glacier.
    """
    if options.dry_run:
        return MockArchiveService(label="DRY-RUN")
    if options.test_debug:
        return MockArchiveService(label="DEBUG")

    logger.debug(f"Using AWS Glacier, account {settings.aws_account_id}")
    return GlacierArchiveService(
        account_id=settings.aws_account_id,
        region_name=settings.aws_region,
        aws_access_key_id=settings.get_secure_value("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=settings.get_secure_value("AWS_SECRET_ACCESS_KEY"),
    )
