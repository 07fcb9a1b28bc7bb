"""
NoteHub CLI.

Command-line client for the backend API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    notehub --help                                  # Show help

    # Account
    notehub auth signup                             # Create an account
    notehub auth login -e ana@x.io                  # Log in
    notehub auth whoami                             # Show the cached user

    # Notes
    notehub notes list --search algebra --sort likes
    notehub notes upload --title T -f https://x.io/t.pdf -t Math
    notehub notes like NOTE_ID
    notehub notes comment NOTE_ID "Great summary"

    # Users
    notehub users profile                           # Your profile
    notehub users save NOTE_ID                      # Toggle a saved note

    # Moderation
    notehub admin reports
    notehub admin block USER_ID

    # Operators
    notehub server start --reload
    notehub db upgrade
    notehub db promote ana@x.io

Options:
    --api-url         Backend base URL (or NOTEHUB_API_URL)
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message
"""

import logging
from typing import Optional

import structlog
import typer
from rich.console import Console

from notehub.cli.client import set_api_url
from notehub.cli.commands import admin_app, auth_app, db_app, notes_app, server_app, users_app

# Create main app
app = typer.Typer(
    name="notehub",
    help="NoteHub CLI - share, discover and moderate study notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(notes_app, name="notes")
app.add_typer(users_app, name="users")
app.add_typer(admin_app, name="admin")
app.add_typer(server_app, name="server")
app.add_typer(db_app, name="db")


@app.callback()
def main(
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        envvar="NOTEHUB_API_URL",
        help="Backend base URL (defaults to server host/port in application.yaml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    NoteHub CLI.

    Talks to the NoteHub backend over HTTP. Your token and user are kept
    in ~/.notehub/session.json (override with NOTEHUB_SESSION_FILE).
    """
    set_api_url(api_url)

    # Configure logging based on flags
    if debug:
        from notehub.backend.core.logging import setup_logging
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        from notehub.backend.core.logging import setup_logging
        setup_logging(level="INFO", format_type="console")
    else:
        # Keep request logs off the terminal unless asked for
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        )


if __name__ == "__main__":
    app()
