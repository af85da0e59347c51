"""
Commands that read and update the receipts document.

COMMANDS maps each command name to its class; every class is driven through
the same lifecycle by run_command().
"""

from typing import Dict, List, Type

from sglacier.commands.base import (
    CommandContext, CommandPhase, CommandReport, GlacierCommand, run_command
)
from sglacier.commands.delete import DeleteCollection
from sglacier.commands.inventory import InventoryJob
from sglacier.commands.jobs import CheckJobs
from sglacier.commands.listing import ListReceipts
from sglacier.commands.upload import Upload, UploadOutcome

COMMANDS: Dict[str, Type[GlacierCommand]] = {
    Upload.name: Upload,
    ListReceipts.name: ListReceipts,
    DeleteCollection.name: DeleteCollection,
    InventoryJob.name: InventoryJob,
    CheckJobs.name: CheckJobs,
}


def create_command(name: str, args: List[str], context: CommandContext) -> GlacierCommand:
    if name not in COMMANDS:
        raise ValueError(f"Unknown command {name}")
    return COMMANDS[name](args, context)


__all__ = [
    "COMMANDS",
    "CheckJobs",
    "CommandContext",
    "CommandPhase",
    "CommandReport",
    "DeleteCollection",
    "GlacierCommand",
    "InventoryJob",
    "ListReceipts",
    "Upload",
    "UploadOutcome",
    "create_command",
    "run_command",
]
