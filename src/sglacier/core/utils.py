"""
Utility functions shared across modules: ID shortening, timestamps, etc.
"""

import random
import string
from datetime import datetime

from sglacier.core.settings import SHORT_ID_LENGTH

_BASE36 = string.digits + string.ascii_lowercase


def shorten(identifier: str) -> str:
    """Abbreviate a long Glacier archive or job ID for display."""
    return identifier[:SHORT_ID_LENGTH] + "..."


def timestamp() -> str:
    """Current local time as stored in receipts (ISO 8601, with offset)."""
    return datetime.now().astimezone().isoformat(timespec="seconds")


def random_collection_name(length: int = 8) -> str:
    return "".join(random.choice(_BASE36) for _ in range(length))
