"""
Command base class and the lifecycle every command goes through.

A command is validated, announced, executed, optionally saved and then
summarised, strictly in that order:

    check_args -> banner_start -> do_action -> save (maybe) -> banner_end

check_args is the only phase allowed to stop the run (by raising
UsageError). do_action records per-item failures in the receipts document
and its own counters instead of raising.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, Field
from rich.console import Console

from sglacier.core.config import RunOptions
from sglacier.glacier.base import BaseArchiveService
from sglacier.receipts.store import ReceiptStore, save_receipts

logger = logging.getLogger(__name__)


class CommandPhase(str, Enum):
    VALIDATE = "validate"
    START = "start"
    EXECUTE = "execute"
    PERSIST = "persist"
    FINISH = "finish"


class CommandReport(BaseModel):
    """What happened during one command run."""
    command: str
    phases: List[CommandPhase] = Field(default_factory=list)
    persisted: bool = False


class CommandContext:
    """Everything a command needs: options, receipts, archive service and output."""

    def __init__(
        self,
        options: RunOptions,
        store: ReceiptStore,
        service: BaseArchiveService,
        console: Optional[Console] = None,
    ):
        self.options = options
        self.store = store
        self.service = service
        self.console = console or Console()


class GlacierCommand:
    """Base class for commands; subclasses override the lifecycle hooks they need."""

    name = "base"

    def __init__(self, args: List[str], context: CommandContext):
        self.args = list(args)
        self.context = context
        self.options = context.options
        self.store = context.store
        self.service = context.service

    def echo(self, message: str = "") -> None:
        self.context.console.print(message, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def check_args(self) -> None:
        """Raise UsageError if the command cannot run with the given arguments."""

    def banner_start(self) -> None:
        pass

    def do_action(self) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} does not implement do_action")

    def banner_end(self) -> None:
        pass

    def save_receipts(self) -> bool:
        """Whether the receipts document changed and must be written back."""
        return False


def run_command(
    command: GlacierCommand,
    save: Optional[Callable[[ReceiptStore], None]] = None,
) -> CommandReport:
    """
    Drive a command through its lifecycle.

    Args:
        command: The command to run
        save: Writes the receipts document; defaults to saving it to
              the receipts file named in the command's options

    Returns:
        A CommandReport listing the phases that ran

    Raises:
        UsageError: If the command rejects its arguments (nothing else runs)
    """
    options = command.options
    if save is None:
        def save(store: ReceiptStore) -> None:
            save_receipts(options.receipts_file, store)

    report = CommandReport(command=command.name)

    report.phases.append(CommandPhase.VALIDATE)
    command.check_args()

    report.phases.append(CommandPhase.START)
    command.banner_start()
    if options.dry_run:
        command.echo("Dry-run -- no actions will be taken")

    report.phases.append(CommandPhase.EXECUTE)
    command.do_action()

    if not options.dry_run and command.save_receipts():
        report.phases.append(CommandPhase.PERSIST)
        save(command.store)
        report.persisted = True
        logger.debug(f"Receipts saved after {command.name}")

    report.phases.append(CommandPhase.FINISH)
    command.banner_end()
    return report
