"""Organization commands for awscontactman."""

import asyncio
import json
from typing import Optional

import typer
from rich.table import Table

from ..contacts.directory import fetch_organization_accounts
from ..contacts.exceptions import ContactManagerError
from ..contacts.retry import RetryExecutor
from ..utils.config import Config
from .common import (
    console,
    get_aws_client_manager,
    handle_error,
    profile_option,
    region_option,
    setup_command_logging,
    verbose_option,
)

app = typer.Typer(help="Query the AWS Organization that alternate contacts are managed in.")


@app.command("accounts")
def list_accounts(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
    profile: Optional[str] = profile_option(),
    region: Optional[str] = region_option(),
    verbose: bool = verbose_option(),
):
    """List the accounts of the organization."""
    config = Config()
    setup_command_logging(verbose, config)

    client_manager = get_aws_client_manager(profile, region, config)
    try:
        executor = RetryExecutor(config.retry_policy())
        accounts = asyncio.run(
            fetch_organization_accounts(client_manager.get_organizations_client(), executor)
        )
    except ValueError as e:
        console.print(f"[red]Error: Invalid retry configuration: {e}[/red]")
        raise typer.Exit(1)
    except ContactManagerError as e:
        handle_error(e, verbose)
        raise typer.Exit(1)

    if json_output:
        rows = [
            {
                "id": account["Id"],
                "name": account.get("Name", ""),
                "email": account.get("Email", ""),
                "status": account.get("Status", ""),
            }
            for account in accounts
        ]
        typer.echo(json.dumps(rows, indent=2))
        return

    if not accounts:
        console.print("[yellow]No accounts found in the organization.[/yellow]")
        return

    table = Table(title=f"Organization Accounts ({len(accounts)})")
    table.add_column("Account ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Email")
    table.add_column("Status")
    for account in accounts:
        status = account.get("Status", "")
        status_style = "green" if status == "ACTIVE" else "yellow"
        table.add_row(
            account["Id"],
            account.get("Name", ""),
            account.get("Email", ""),
            f"[{status_style}]{status}[/{status_style}]",
        )
    console.print(table)
