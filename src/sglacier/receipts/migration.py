"""
Schema migration for receipts files.

Receipts files have gone through three layouts:

    version 0: {collection_name: [receipt, ...], ...}
    version 1: {"version": 1, "vaults": {vault_name: {collection_name: [receipt, ...]}}}
    version 2: {"version": 2, "vaults": {vault_name: {"collections": {...}, "pending_jobs": [...]}}}

MIGRATIONS lists one transform per step, in ascending order. Each transform
receives a private copy of the document and returns the next layout.
"""

import copy
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from sglacier.core.errors import FutureSchemaVersionError, MalformedStoreError
from sglacier.core.settings import CURRENT_SCHEMA_VERSION
from sglacier.receipts.schemas import ReceiptDocument

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def _v0_to_v1(document: Document, vault_name: str) -> Document:
    # Version 0 files knew nothing about vaults, so everything in them is
    # assigned to whichever vault is configured for this run.
    document.pop("version", None)
    return {"vaults": {vault_name: document}}


def _v1_to_v2(document: Document, vault_name: str) -> Document:
    vaults = document.setdefault("vaults", {})
    if not isinstance(vaults, dict):
        raise MalformedStoreError("Receipts file has a 'vaults' entry that is not a JSON object")
    for name, collections in list(vaults.items()):
        if not isinstance(collections, dict):
            raise MalformedStoreError(f"Receipts file has an invalid entry for vault {name!r}")
        vaults[name] = {"collections": collections, "pending_jobs": []}
    return document


MIGRATIONS: List[Tuple[int, Callable[[Document, str], Document]]] = [
    (0, _v0_to_v1),
    (1, _v1_to_v2),
]


def new_document() -> Document:
    return {"version": CURRENT_SCHEMA_VERSION, "vaults": {}}


def parse_document(text: Union[str, bytes]) -> Document:
    """Decode the JSON text of a receipts file; bytes must be UTF-8."""
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        return json.loads(text)
    except ValueError as e:
        raise MalformedStoreError(f"Receipts file is not valid JSON: {e}") from e


def document_version(document: Any) -> int:
    if not isinstance(document, dict):
        raise MalformedStoreError("Receipts file does not contain a JSON object")
    version = document.get("version", 0)
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise MalformedStoreError(f"Receipts file has an invalid version: {version!r}")
    return version


def migrate(document: Optional[Any], vault_name: str) -> Document:
    """
    Bring a loaded receipts document up to CURRENT_SCHEMA_VERSION.

    Args:
        document: The decoded receipts file, or None if there is no file yet
        vault_name: The configured vault; only used for version 0 files

    Returns:
        A new document at the current version; the input is never modified

    Raises:
        MalformedStoreError: If the document has an unexpected shape
        FutureSchemaVersionError: If the document is newer than this code
    """
    if document is None:
        return new_document()

    from_version = document_version(document)
    if from_version > CURRENT_SCHEMA_VERSION:
        raise FutureSchemaVersionError(from_version, CURRENT_SCHEMA_VERSION)
    if from_version < CURRENT_SCHEMA_VERSION:
        logger.info(f"Converting receipts file from version: {from_version}")

    migrated = copy.deepcopy(document)
    for step_version, transform in MIGRATIONS:
        if from_version <= step_version:
            migrated = transform(migrated, vault_name)

    migrated.pop("version", None)
    migrated = {"version": CURRENT_SCHEMA_VERSION, "vaults": {}, **migrated}

    try:
        ReceiptDocument.model_validate(migrated)
    except ValidationError as e:
        raise MalformedStoreError(f"Receipts file has an unexpected layout: {e}") from e
    return migrated
