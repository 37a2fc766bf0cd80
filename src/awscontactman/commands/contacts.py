"""Alternate contact commands for awscontactman."""

import asyncio
import json
from typing import Callable, List, Optional, Tuple

import typer
from rich.console import Console

from ..contacts.exceptions import ContactManagerError, S3Error, UserInputError
from ..contacts.export import normalize_prefix, upload_result
from ..contacts.models import BatchMode, BatchResult, Cancelled, ContactRecord, Failure
from ..contacts.orchestrator import BatchOrchestrator
from ..contacts.reporting import ReportGenerator
from ..contacts.retry import RetryExecutor
from ..contacts.validator import expand_contact_types, is_valid_email, is_valid_phone_number
from ..utils.config import Config
from .common import (
    BatchContext,
    accounts_argument,
    console,
    contact_type_option,
    finish,
    get_aws_client_manager,
    handle_error,
    prepare_batch,
    profile_option,
    region_option,
    setup_command_logging,
    verbose_option,
)

app = typer.Typer(
    help="Manage AWS Organizations alternate contacts. List, update and delete contacts across accounts."
)


def _start(
    account_spec: str,
    profile: Optional[str],
    region: Optional[str],
    verbose: bool,
    status_console: Console,
) -> Tuple[Config, BatchContext]:
    """Set up logging and clients, then resolve and validate the accounts."""
    config = Config()
    setup_command_logging(verbose, config)

    try:
        policy = config.retry_policy()
    except ValueError as e:
        console.print(f"[red]Error: Invalid retry configuration: {e}[/red]")
        raise typer.Exit(1)

    client_manager = get_aws_client_manager(profile, region, config)
    executor = RetryExecutor(policy)
    try:
        context = asyncio.run(prepare_batch(account_spec, client_manager, executor, status_console))
    except ContactManagerError as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
    return config, context


def _run(
    context: BatchContext,
    mode: BatchMode,
    contact_types: List[str],
    status_console: Console,
    record: Optional[ContactRecord] = None,
    confirm: Optional[Callable[[BatchMode, int], bool]] = None,
) -> BatchResult:
    orchestrator = BatchOrchestrator(
        context.client_manager.get_account_client(context.current_account_id),
        context.executor,
        console=status_console,
    )
    return asyncio.run(
        orchestrator.run_batch(
            mode, context.accounts, expand_contact_types(contact_types), record, confirm
        )
    )


def _confirm_hook(assume_yes: bool, verb: str) -> Callable[[BatchMode, int], bool]:
    """Build the pre-flight confirmation used by update and delete."""

    def confirm(mode: BatchMode, total_cells: int) -> bool:
        if assume_yes:
            return True
        try:
            return typer.confirm(f"\n{verb} {total_cells} alternate contacts?", default=False)
        except typer.Abort:
            return False

    return confirm


def _prompt_until_valid(prompt: str, check: Optional[Callable[[str], bool]], hint: str) -> str:
    while True:
        value = typer.prompt(prompt).strip()
        if check is None or check(value):
            return value
        console.print(f"[red]{hint}[/red]")


def collect_contact_record(
    email: Optional[str],
    name: Optional[str],
    phone: Optional[str],
    title: Optional[str],
) -> ContactRecord:
    """
    Build the contact applied to every cell of an update.

    Values given on the command line are validated as-is; missing values are
    prompted for until valid.

    Raises:
        UserInputError: If a value given on the command line is invalid
        typer.Abort: If the user aborts a prompt
    """
    email_hint = "Invalid email format. Please include '@' symbol."
    phone_hint = "Phone number must contain at least 8 digits."

    if email is not None and not is_valid_email(email):
        raise UserInputError(email_hint)
    if phone is not None and not is_valid_phone_number(phone):
        raise UserInputError(phone_hint)

    if email is None:
        email = _prompt_until_valid(
            "Type the email address (e.g. example@mail.com)", is_valid_email, email_hint
        )
    if name is None:
        name = _prompt_until_valid("Type the name (e.g. John Doe)", None, "")
    if phone is None:
        phone = _prompt_until_valid(
            "Type the phone number (e.g. +5511900002222)", is_valid_phone_number, phone_hint
        )
    if title is None:
        title = _prompt_until_valid("Type the title (e.g. Manager)", None, "")

    return ContactRecord(email_address=email, name=name, phone_number=phone, title=title)


def _choose_export_destination(
    s3_client, default_bucket: Optional[str], default_prefix: str
) -> Tuple[str, str]:
    """Ask for the export bucket and folder, showing what is available."""
    console.print("\n[yellow]Listing available S3 buckets...[/yellow]")
    buckets = s3_client.list_buckets()
    if buckets:
        for index, bucket_name in enumerate(buckets, start=1):
            console.print(f"  {index}. {bucket_name}")
    else:
        console.print("No S3 buckets found or unable to list buckets.")

    choice = typer.prompt("S3 bucket name or number", default=default_bucket).strip()
    if choice.isdigit() and 1 <= int(choice) <= len(buckets):
        bucket = buckets[int(choice) - 1]
    else:
        bucket = choice

    folders = s3_client.list_folders(bucket)
    if folders:
        console.print(f"\nFolders in s3://{bucket}/:")
        for folder in folders:
            console.print(f"  📁 {folder}")
    prefix = typer.prompt(
        "Folder path (e.g. folder1/folder2/, empty for bucket root)",
        default=default_prefix,
        show_default=bool(default_prefix),
    )
    return bucket, normalize_prefix(prefix)


@app.command("list")
def list_contacts(
    accounts: str = accounts_argument(),
    contact_types: List[str] = contact_type_option(),
    bucket: Optional[str] = typer.Option(
        None, "--bucket", "-b", help="Export the result to this S3 bucket without prompting"
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Folder prefix inside the export bucket"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
    no_export: bool = typer.Option(False, "--no-export", help="Do not offer an S3 export"),
    profile: Optional[str] = profile_option(),
    region: Optional[str] = region_option(),
    verbose: bool = verbose_option(),
):
    """List alternate contacts for the selected accounts.

    Accounts with no contact of a type are reported as "Null". Access denied
    and other per-account errors are reported without stopping the run.
    """
    status_console = Console(stderr=True) if json_output else console
    config, context = _start(accounts, profile, region, verbose, status_console)
    result = _run(context, BatchMode.LIST, contact_types, status_console)

    if isinstance(result.outcome, Failure):
        finish(result.outcome, result.duration, status_console)

    if json_output:
        typer.echo(json.dumps(result.to_contact_map(), indent=2))
    else:
        ReportGenerator(console).print_contact_table(result)

    export_config = config.get_export_config()
    s3_client = context.client_manager.get_s3_client()
    if bucket is None and not (no_export or json_output):
        try:
            if typer.confirm("\nDo you want to export the result to an S3 bucket?", default=False):
                bucket, prefix = _choose_export_destination(
                    s3_client, export_config.get("bucket"), prefix or export_config.get("prefix", "")
                )
        except typer.Abort:
            finish(Cancelled())

    outcome = result.outcome
    if bucket:
        try:
            key = asyncio.run(
                upload_result(
                    s3_client,
                    result,
                    bucket,
                    prefix if prefix is not None else export_config.get("prefix", ""),
                    context.executor,
                )
            )
            status_console.print(f"  [green]✓[/green] Successfully uploaded to s3://{bucket}/{key}")
        except S3Error as e:
            outcome = Failure(error=e)

    finish(outcome, result.duration, status_console)


@app.command("update")
def update_contacts(
    accounts: str = accounts_argument(),
    contact_types: List[str] = contact_type_option(),
    email: Optional[str] = typer.Option(None, "--email", help="Contact email address"),
    name: Optional[str] = typer.Option(None, "--name", help="Contact name"),
    phone: Optional[str] = typer.Option(None, "--phone", help="Contact phone number"),
    title: Optional[str] = typer.Option(None, "--title", help="Contact title"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    profile: Optional[str] = profile_option(),
    region: Optional[str] = region_option(),
    verbose: bool = verbose_option(),
):
    """Create or replace an alternate contact on the selected accounts.

    The same contact is applied to every selected account and contact type.
    Missing fields are prompted for.
    """
    _, context = _start(accounts, profile, region, verbose, console)

    try:
        record = collect_contact_record(email, name, phone, title)
    except UserInputError as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
    except typer.Abort:
        finish(Cancelled())

    result = _run(
        context,
        BatchMode.UPDATE,
        contact_types,
        console,
        record=record,
        confirm=_confirm_hook(yes, "Update"),
    )
    if not isinstance(result.outcome, Cancelled):
        ReportGenerator(console).print_summary(result)
    finish(result.outcome, result.duration)


@app.command("delete")
def delete_contacts(
    accounts: str = accounts_argument(),
    contact_types: List[str] = contact_type_option(),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    profile: Optional[str] = profile_option(),
    region: Optional[str] = region_option(),
    verbose: bool = verbose_option(),
):
    """Delete alternate contacts from the selected accounts.

    Contacts that do not exist are treated as already deleted.
    """
    _, context = _start(accounts, profile, region, verbose, console)

    result = _run(
        context,
        BatchMode.DELETE,
        contact_types,
        console,
        confirm=_confirm_hook(yes, "Delete"),
    )
    if not isinstance(result.outcome, Cancelled):
        ReportGenerator(console).print_summary(result)
    finish(result.outcome, result.duration)
