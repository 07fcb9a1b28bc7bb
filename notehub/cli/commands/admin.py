"""
Admin Commands.

Moderation commands. The cached admin flag only short-circuits obvious
refusals; the backend enforces access on every call.
"""

import typer

from notehub.cli.output import (
    call_api,
    console,
    print_notes,
    print_reports,
    print_users,
    require_admin_hint,
)

app = typer.Typer(help="Moderation commands (admins only)")


@app.callback()
def _admin_only() -> None:
    require_admin_hint()


@app.command()
def users() -> None:
    """List every user."""
    print_users(call_api("GET", "/api/admin/users"))


@app.command()
def notes() -> None:
    """List every note."""
    print_notes(call_api("GET", "/api/admin/notes"), title="All notes")


@app.command()
def reports() -> None:
    """List reported notes with their reports."""
    print_reports(call_api("GET", "/api/admin/reports"))


@app.command()
def block(user_id: str = typer.Argument(..., help="User ID")) -> None:
    """Block a user, or unblock a blocked one."""
    result = call_api("PATCH", f"/api/admin/users/{user_id}/block")
    state = "blocked" if result["is_blocked"] else "unblocked"
    console.print(f"[green]User {result['id']} {state}[/green]")


@app.command("delete-note")
def delete_note(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete any note."""
    if not yes:
        typer.confirm(f"Delete note {note_id}?", abort=True)
    result = call_api("DELETE", f"/api/admin/notes/{note_id}")
    console.print(f"[green]Deleted note {result['deleted_note_id']}[/green]")
