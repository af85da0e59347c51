"""
Top-level CLI: global options on the callback, one subcommand per command.

    sglacier [options] COMMAND [files...]
"""

import logging
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from sglacier.commands import CommandContext, create_command, run_command
from sglacier.core.config import LogLevel, RunOptions, get_settings
from sglacier.core.errors import MigrationError, UsageError
from sglacier.glacier import get_archive_service
from sglacier.receipts.store import load_receipts

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s - %(message)s"
)
logger = logging.getLogger(__name__)

main_app = typer.Typer(help="Upload files to AWS Glacier and keep local receipts of what was archived.")
console = Console()


@main_app.callback()
def main_callback(
    ctx: typer.Context,
    collection_name: Optional[str] = typer.Option(
        None, "--collection-name", "-n",
        help="Name the upload collection for later reference"
    ),
    receipts_file: Optional[str] = typer.Option(
        None, "--receipts-file", "-r",
        help="JSON archive of upload-receipts"
    ),
    vault_name: Optional[str] = typer.Option(
        None, "--vault-name", "-v",
        help="Glacier vault name"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d",
        help="No actions are taken; they are displayed instead"
    ),
    force: bool = typer.Option(
        False, "--force", "-f",
        help="Allow files that already have a Glacier archive ID to be re-uploaded"
    ),
    test_debug: bool = typer.Option(
        False, "--test-debug", "-t",
        help="AWS is not called, but otherwise actions work normally"
    ),
    log_level: Optional[LogLevel] = typer.Option(
        None, "--log-level",
        case_sensitive=False,
        help="Logging level"
    ),
):
    try:
        settings = get_settings()
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=1)
    logging.getLogger().setLevel((log_level or settings.log_level).value)
    ctx.obj = {
        "settings": settings,
        "options": RunOptions.from_settings(
            settings,
            collection_name=collection_name,
            receipts_file=receipts_file,
            vault=vault_name,
            dry_run=dry_run,
            force=force,
            test_debug=test_debug,
        ),
    }


def execute(ctx: typer.Context, command_name: str, args: Optional[List[str]]) -> None:
    settings = ctx.obj["settings"]
    options: RunOptions = ctx.obj["options"]

    try:
        store = load_receipts(options.receipts_file, options.vault)
    except MigrationError as e:
        logger.error(str(e))
        typer.echo(f"Receipts JSON file {options.receipts_file} is not valid: {e}", err=True)
        raise typer.Exit(code=1)

    service = get_archive_service(options, settings)
    command = create_command(command_name, args or [], CommandContext(options, store, service, console))
    try:
        run_command(command)
    except UsageError as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=2)


@main_app.command("upload")
def upload_cmd(
    ctx: typer.Context,
    files: Optional[List[str]] = typer.Argument(None, help="Files to upload"),
):
    """
    Upload files as a named collection, appending to an existing collection.
    """
    execute(ctx, "upload", files)


@main_app.command("list")
def list_cmd(ctx: typer.Context, args: Optional[List[str]] = typer.Argument(None, hidden=True)):
    """
    List file information for a named collection, or list all collections.
    """
    execute(ctx, "list", args)


@main_app.command("delete")
def delete_cmd(ctx: typer.Context, args: Optional[List[str]] = typer.Argument(None, hidden=True)):
    """
    Delete all Glacier archive files in the named collection.
    """
    execute(ctx, "delete", args)


@main_app.command("inventory")
def inventory_cmd(ctx: typer.Context, args: Optional[List[str]] = typer.Argument(None, hidden=True)):
    """
    Request an async Glacier inventory job for the vault.
    """
    execute(ctx, "inventory", args)


@main_app.command("jobs")
def jobs_cmd(ctx: typer.Context, args: Optional[List[str]] = typer.Argument(None, hidden=True)):
    """
    Check completion of async Glacier jobs and write available results to output files.
    """
    execute(ctx, "jobs", args)


def main():
    main_app()

if __name__ == "__main__":
    main()
