"""
List the local receipts of one collection, or all collections of the vault.
"""

from typing import List

from sglacier.commands.base import GlacierCommand, CommandContext
from sglacier.core.errors import UsageError
from sglacier.core.utils import shorten
from sglacier.receipts.schemas import Receipt


class ListReceipts(GlacierCommand):
    name = "list"

    def __init__(self, args: List[str], context: CommandContext):
        super().__init__(args, context)
        self.completed = 0
        self.failed = 0
        self.size = 0
        self.found = False
        self.entries = 0

    def check_args(self) -> None:
        if self.args:
            raise UsageError("List takes no arguments. Specify collection name using '-n NAME' switch")

    def banner_start(self) -> None:
        if self.options.collection_name:
            self.echo(f"Local listing for collection {self.options.collection_name}:")
        else:
            self.echo("Local listing of all collections")

    def do_action(self) -> None:
        if self.options.collection_name:
            self.list_collection(self.options.collection_name)
        else:
            self.list_collections()

    def list_collection(self, name: str) -> None:
        collection = self.store.collection(self.options.vault, name)
        if collection is None:
            self.echo(f"No archive files found for collection {name}")
            return

        self.found = True
        self.entries = len(collection)
        for item in collection:
            receipt = Receipt.model_validate(item)
            self.echo(receipt.filename)
            self.echo(f"  Description: {receipt.description}")
            self.echo(f"  {receipt.size if receipt.size is not None else 'unknown'} bytes")
            if receipt.is_archived:
                self.echo(f"  Archive file uploaded {receipt.completed}")
                self.echo(f"  Glacier archive ID: {shorten(receipt.archive_id)}")
                self.completed += 1
                self.size += receipt.size or 0
            else:
                self.echo(f"  FAILED archive file upload at {receipt.completed}")
                self.echo(f"  Error message: {receipt.error or 'None'}")
                self.failed += 1

    def list_collections(self) -> None:
        collections = self.store.vault_collections(self.options.vault)
        if collections is None:
            self.echo(f"No collections found for vault {self.options.vault}")
            return

        self.found = True
        self.entries = len(collections)
        for name, receipts in collections.items():
            self.echo(f"  Collection: {name:<24} -- {len(receipts)} archives")
            self.completed += len(receipts)

    def banner_end(self) -> None:
        if not self.found:
            self.echo("Listing failed")
        elif self.options.collection_name:
            self.echo()
            self.echo(f"Upload collection {self.options.collection_name} contains {self.entries} archives")
            self.echo(f"{self.completed} files complete, {self.failed} files failed to upload")
            self.echo(f"{self.size} bytes successfully uploaded")
        else:
            self.echo()
            self.echo(f"{self.entries} collections, {self.completed} files total")
