"""
CLI Output and Request Helpers.

Runs one API call per command and renders results with Rich.
"""

import asyncio
from datetime import datetime
from typing import Any, NoReturn

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from notehub.cli.client import ApiRequestError, get_api_client, unwrap

console = Console()


def fail(error: Exception) -> NoReturn:
    """Print a failure notice and exit. A 401 asks the user to log in again."""
    if isinstance(error, ApiRequestError):
        if error.is_unauthorized:
            console.print(f"[red]{error.message}[/red]")
            console.print("[dim]Please log in again: notehub auth login[/dim]")
        else:
            console.print(f"[red]Request failed ({error.status_code}): {error.message}[/red]")
    elif isinstance(error, httpx.ConnectError):
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: notehub server start[/dim]")
    else:
        console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


async def _call(method: str, path: str, **kwargs: Any) -> Any:
    client = get_api_client()
    try:
        return unwrap(await client.request(method, path, **kwargs))
    except (ApiRequestError, httpx.HTTPError) as e:
        fail(e)
    finally:
        await client.close()


def call_api(method: str, path: str, **kwargs: Any) -> Any:
    """Perform one request and return the envelope's ``data``; exit on failure."""
    return asyncio.run(_call(method, path, **kwargs))


def require_login() -> dict[str, Any]:
    """Return the cached user, or exit with a login hint."""
    session = get_api_client().session
    if not session.is_authenticated or not session.user:
        console.print("[yellow]You are not logged in.[/yellow]")
        console.print("[dim]Log in with: notehub auth login[/dim]")
        raise typer.Exit(1)
    return session.user


def require_admin_hint() -> None:
    """Refuse early when the cached user is not an admin. The server still checks."""
    require_login()
    if not get_api_client().session.is_admin:
        console.print("[red]Admin access required[/red]")
        raise typer.Exit(1)


def _when(value: str | None) -> str:
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(value).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return value


def print_notes(notes: list[dict[str, Any]], title: str = "Notes") -> None:
    if not notes:
        console.print("[dim]No notes found[/dim]")
        return

    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Tags")
    table.add_column("Uploaded by")
    table.add_column("Likes", justify="right")
    table.add_column("Dislikes", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("Created")

    for note in notes:
        table.add_row(
            note["id"],
            note["title"],
            ", ".join(note.get("tags", [])) or "-",
            note["uploaded_by"]["name"],
            str(note["like_count"]),
            str(note["dislike_count"]),
            str(note["comment_count"]),
            _when(note.get("created_at")),
        )

    console.print(table)


def print_note(note: dict[str, Any]) -> None:
    lines = [
        f"[bold]{note['title']}[/bold]",
        note.get("description") or "[dim]No description[/dim]",
        "",
        f"File: {note['file_url']}",
        f"Tags: {', '.join(note.get('tags', [])) or '-'}",
        f"Uploaded by: {note['uploaded_by']['name']} <{note['uploaded_by']['email']}>",
        f"Likes: {note['like_count']}  Dislikes: {note['dislike_count']}  "
        f"Comments: {note['comment_count']}",
        f"Created: {_when(note.get('created_at'))}",
    ]
    console.print(Panel("\n".join(lines), title=note["id"]))


def print_comments(comments: list[dict[str, Any]]) -> None:
    if not comments:
        console.print("[dim]No comments yet[/dim]")
        return

    table = Table(title="Comments", show_header=True)
    table.add_column("When")
    table.add_column("Author", style="cyan")
    table.add_column("Comment")

    for comment in comments:
        table.add_row(
            _when(comment.get("created_at")),
            comment["author"]["name"],
            comment["text"],
        )

    console.print(table)


def print_users(users: list[dict[str, Any]]) -> None:
    table = Table(title="Users", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Admin")
    table.add_column("Blocked")

    for user in users:
        table.add_row(
            user["id"],
            user["name"],
            user["email"],
            "yes" if user["is_admin"] else "-",
            "[red]yes[/red]" if user["is_blocked"] else "-",
        )

    console.print(table)


def print_reports(notes: list[dict[str, Any]]) -> None:
    if not notes:
        console.print("[dim]No reported notes[/dim]")
        return

    table = Table(title="Reported notes", show_header=True)
    table.add_column("Note", style="cyan")
    table.add_column("Reports", justify="right")
    table.add_column("Reporter")
    table.add_column("Reason")

    for note in notes:
        for index, report in enumerate(note["reports"]):
            table.add_row(
                f"{note['title']} ({note['id']})" if index == 0 else "",
                str(note["report_count"]) if index == 0 else "",
                report["author"]["name"],
                report["reason"],
            )

    console.print(table)
