"""Common command infrastructure for awscontactman CLI commands.

This module provides shared functionality for all CLI commands including:
- Standard profile, region, verbose and contact type options
- AWS client manager creation from options and configuration
- Logging setup and outcome reporting
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import typer
from rich.console import Console

from ..aws_clients.manager import AWSClientManager
from ..contacts.directory import get_caller_account_id, list_organization_accounts
from ..contacts.exceptions import ContactManagerError
from ..contacts.models import OperationOutcome
from ..contacts.reporting import ReportGenerator
from ..contacts.retry import RetryExecutor
from ..contacts.validator import parse_account_ids, validate_account_ids, validate_accounts
from ..utils.config import Config
from ..utils.logging_config import LoggingConfig, LogLevel, setup_logging

# Shared instances
console = Console()
logger = logging.getLogger(__name__)


def profile_option() -> Any:
    """Create a standardized --profile option for commands."""
    return typer.Option(
        None, "--profile", "-p", help="AWS profile to use (uses default profile if not specified)"
    )


def region_option() -> Any:
    """Create a standardized --region option for commands."""
    return typer.Option(
        None, "--region", "-r", help="AWS region to use (uses profile default if not specified)"
    )


def verbose_option() -> Any:
    """Create a verbose option for CLI commands."""
    return typer.Option(False, "--verbose", "-v", help="Show detailed output")


def contact_type_option() -> Any:
    """Create a repeatable --type option for alternate contact types."""
    return typer.Option(
        ["all"],
        "--type",
        "-t",
        help="Alternate contact type: billing, operations, security or all (repeatable)",
    )


def accounts_argument() -> Any:
    """Create the ACCOUNTS argument shared by the contact commands."""
    return typer.Argument(
        ..., help="Comma separated account IDs, or 'all' for every account in the organization"
    )


def setup_command_logging(verbose: bool = False, config: Optional[Config] = None) -> None:
    """Configure logging from the config file, forcing DEBUG when verbose."""
    logging_config = (config or Config()).get_logging_config()
    configured = LogLevel.__members__.get(str(logging_config["level"]).upper(), LogLevel.WARNING)
    level = LogLevel.DEBUG if verbose else configured
    setup_logging(LoggingConfig(level=level, log_file=logging_config.get("file")))


def get_aws_client_manager(
    profile: Optional[str] = None,
    region: Optional[str] = None,
    config: Optional[Config] = None,
) -> AWSClientManager:
    """
    Create an AWS client manager from options, falling back to configuration.

    Args:
        profile: AWS profile name from the command line
        region: AWS region from the command line
        config: Configuration to read defaults from

    Returns:
        AWSClientManager for the effective profile and region
    """
    config = config or Config()
    effective_profile = profile or config.get("default_profile")
    effective_region = region or config.get("default_region")
    logger.debug(f"Creating AWS client manager: profile={effective_profile}, region={effective_region}")
    return AWSClientManager(profile=effective_profile, region=effective_region)


@dataclass
class BatchContext:
    """Everything a contact command needs once its input has been validated."""

    client_manager: AWSClientManager
    executor: RetryExecutor
    accounts: List[str]
    current_account_id: str


async def prepare_batch(
    account_spec: str,
    client_manager: AWSClientManager,
    executor: RetryExecutor,
    status_console: Optional[Console] = None,
) -> BatchContext:
    """
    Resolve and validate the accounts of a batch.

    Malformed account IDs are rejected before any AWS call. The organization
    roster is then fetched once, used to expand 'all' and to check
    membership, and the caller account is resolved.

    Raises:
        ContactManagerError: If input is invalid or a directory lookup fails
    """
    status_console = status_console or console
    select_all = account_spec.strip().lower() == "all"
    accounts = [] if select_all else parse_account_ids(account_spec)
    if not select_all:
        validate_account_ids(accounts)

    status_console.print("Validating account IDs...")
    roster = await list_organization_accounts(client_manager.get_organizations_client(), executor)
    if select_all:
        accounts = list(roster)
    validate_accounts(accounts, roster)
    status_console.print(f"  [green]✓[/green] All {len(accounts)} accounts validated")

    current_account_id = await get_caller_account_id(client_manager.get_sts_client(), executor)
    return BatchContext(client_manager, executor, accounts, current_account_id)


def handle_error(error: ContactManagerError, verbose: bool = False) -> None:
    """Print a fatal error and its cause chain."""
    console.print(f"[red]Error: {error}[/red]", highlight=False)
    cause = error.__cause__
    while cause is not None:
        if verbose:
            console.print(f"  [dim]Caused by: {cause}[/dim]")
        logger.debug(f"Caused by: {cause}")
        cause = cause.__cause__


def finish(
    outcome: OperationOutcome,
    duration: Optional[float] = None,
    output_console: Optional[Console] = None,
) -> None:
    """Report the outcome and exit with its status code."""
    ReportGenerator(output_console or console).print_outcome(outcome, duration)
    raise typer.Exit(outcome.exit_code)
