"""
Database Commands.

Commands for database migrations using Alembic, and for granting admin
rights out of band.
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import typer
from rich.console import Console

from notehub.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

app = typer.Typer(help="Database commands")
console = Console()

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "backend" / "migrations" / "alembic.ini"


def _check_alembic() -> None:
    """Check that alembic.ini exists."""
    if not ALEMBIC_INI.exists():
        console.print("[red]Error: notehub/backend/migrations/alembic.ini not found[/red]")
        raise typer.Exit(1)


def _run_alembic(args: list[str]) -> None:
    """Run an alembic command."""
    from notehub.backend.core.config import find_project_root

    cmd = [sys.executable, "-m", "alembic", "-c", str(ALEMBIC_INI)] + args

    try:
        result = subprocess.run(cmd, cwd=find_project_root())
        if result.returncode != 0:
            raise typer.Exit(result.returncode)
    except FileNotFoundError:
        console.print("[red]Error: alembic not found. Install with: pip install alembic[/red]")
        raise typer.Exit(1)


@app.command()
def upgrade(
    revision: str = typer.Option("head", "--revision", "-r", help="Target revision"),
) -> None:
    """
    Upgrade database to a revision.

    Examples:
        notehub db upgrade                  # Upgrade to latest
        notehub db upgrade -r 0001          # Upgrade to specific revision
    """
    _check_alembic()
    console.print(f"[bold]Upgrading database to revision: {revision}[/bold]\n")
    _run_alembic(["upgrade", revision])
    console.print("\n[green]Upgrade completed[/green]")


@app.command()
def current() -> None:
    """
    Show current database revision.

    Examples:
        notehub db current
    """
    _check_alembic()
    console.print("[bold]Current database revision:[/bold]\n")
    _run_alembic(["current"])


@app.command()
def promote(email: str = typer.Argument(..., help="Email of the user to make admin")) -> None:
    """
    Grant admin rights to an existing user.

    Examples:
        notehub db promote ana@x.io
    """
    from notehub.backend.core.exceptions import UserNotFoundError

    try:
        user = asyncio.run(_promote(email))
    except UserNotFoundError:
        console.print(f"[red]No user with email {email}[/red]")
        raise typer.Exit(1)

    log_with_source(logger, "operator", "info", "Admin rights granted", user_id=user.id)

    console.print(f"[green]{user.name} <{user.email}> is now an admin[/green]")


async def _promote(email: str):
    """Async implementation of promote command."""
    from notehub.backend.core.database import dispose_engine, get_session_factory
    from notehub.backend.services.admin import AdminService

    try:
        async with get_session_factory()() as session:
            user = await AdminService(session).grant_admin(email)
            await session.commit()
            return user
    finally:
        await dispose_engine()
