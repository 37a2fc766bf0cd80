#!/usr/bin/env python3
"""
awscontactman - AWS Organizations alternate contact manager

A CLI tool for listing, updating and deleting alternate contacts across the
accounts of an AWS Organization.
"""
import typer
from rich.console import Console

from awscontactman import __version__

from .commands import contacts, org

app = typer.Typer(
    help="AWS Alternate Contact Manager - A CLI tool for managing billing, operations and security contacts across AWS Organizations accounts.",
    add_completion=True,
    no_args_is_help=True,
)
console = Console()

# Add subcommands
app.add_typer(contacts.app, name="contact")
app.add_typer(org.app, name="org")


@app.command()
def version():
    """Show the application version and exit."""
    console.print(f"awscontactman version: {__version__}")
    raise typer.Exit()


if __name__ == "__main__":
    app()
