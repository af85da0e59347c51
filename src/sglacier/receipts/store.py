"""
ReceiptStore: vault, collection and job accessors over a receipts document,
plus loading and saving of the receipts file.
"""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sglacier.receipts.migration import Document, migrate, parse_document
from sglacier.receipts.paths import MISSING, seek, set_or_create

logger = logging.getLogger(__name__)


class ReceiptStore:
    """
    Domain view over a migrated receipts document.

    Accessors called with create=False never modify the document and return
    None when the container does not exist. With create=True a missing
    container is created empty and returned.
    """

    def __init__(self, document: Document):
        self.document = document

    def _get(self, default_factory, create: bool, *keys: str) -> Any:
        value = seek(self.document, *keys)
        if value is MISSING:
            if not create:
                return None
            value = set_or_create(self.document, default_factory(), *keys)
        return value

    def vaults(self, create: bool = False) -> Optional[Dict[str, Any]]:
        return self._get(dict, create, "vaults")

    def vault_collections(self, vault: str, create: bool = False) -> Optional[Dict[str, List[dict]]]:
        return self._get(dict, create, "vaults", vault, "collections")

    def collection(self, vault: str, name: str, create: bool = False) -> Optional[List[dict]]:
        return self._get(list, create, "vaults", vault, "collections", name)

    def vault_jobs(self, vault: str, create: bool = False) -> Optional[List[dict]]:
        return self._get(list, create, "vaults", vault, "pending_jobs")

    def remove_collection(self, vault: str, name: str) -> bool:
        collections = self.vault_collections(vault)
        if collections is None or name not in collections:
            return False
        del collections[name]
        return True


def load_receipts(path: Union[str, Path], vault_name: str) -> ReceiptStore:
    """
    Load and migrate the receipts file at path.

    A missing file yields an empty store at the current schema version.

    Raises:
        MalformedStoreError: If the file is not valid JSON or has the wrong shape
        FutureSchemaVersionError: If the file was written by a newer version
    """
    path = Path(path)
    if path.is_file():
        logger.debug(f"Loading receipts from {path}")
        raw = parse_document(path.read_bytes())
    else:
        logger.info(f"No receipts file at {path}, a new one will be created")
        raw = None
    return ReceiptStore(migrate(raw, vault_name))


def save_receipts(path: Union[str, Path], store: ReceiptStore) -> None:
    """Write the receipts document to path, replacing the old file atomically."""
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(store.document, indent=2))
            f.write("\n")
        if path.exists():
            os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.debug(f"Saved receipts to {path}")
