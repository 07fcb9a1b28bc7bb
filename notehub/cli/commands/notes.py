"""
Note Commands.

Browse, upload, react to, discuss and report notes.
"""

from typing import Optional

import typer

from notehub.cli.output import (
    call_api,
    console,
    print_comments,
    print_note,
    print_notes,
    require_login,
)

app = typer.Typer(help="Note commands")


@app.command("list")
def list_notes(
    search: Optional[str] = typer.Option(
        None, "--search", "-s", help="Match title, description or comments",
    ),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Exact tag"),
    sort: str = typer.Option("recent", "--sort", help="recent, likes or comments"),
) -> None:
    """
    List notes.

    Examples:
        notehub notes list
        notehub notes list --search algebra --sort likes
        notehub notes list -t Math
    """
    params = {"sort": sort}
    if search:
        params["search"] = search
    if tag:
        params["tag"] = tag

    print_notes(call_api("GET", "/api/notes", params=params))


@app.command()
def show(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Show one note."""
    print_note(call_api("GET", f"/api/notes/{note_id}"))


@app.command("by-user")
def by_user(user_id: str = typer.Argument(..., help="Uploader's user ID")) -> None:
    """List notes uploaded by a user."""
    print_notes(call_api("GET", f"/api/notes/user/{user_id}"), title="Uploaded notes")


@app.command()
def upload(
    title: str = typer.Option(..., "--title", help="Note title"),
    file_url: str = typer.Option(..., "--file-url", "-f", help="Link to the document"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
    tags: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
) -> None:
    """
    Upload a note.

    Examples:
        notehub notes upload --title "Linear Algebra" -f https://x.io/la.pdf -t Math
    """
    require_login()
    payload = {
        "title": title,
        "file_url": file_url,
        "description": description,
        "tags": tags or [],
    }
    note = call_api("POST", "/api/notes", json=payload)
    console.print(f"[green]Uploaded note {note['id']}[/green]")


@app.command()
def like(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Like a note, or remove your like."""
    require_login()
    note = call_api("POST", f"/api/notes/{note_id}/like")
    console.print(f"Likes: {note['like_count']}  Dislikes: {note['dislike_count']}")


@app.command()
def dislike(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Dislike a note, or remove your dislike."""
    require_login()
    note = call_api("POST", f"/api/notes/{note_id}/dislike")
    console.print(f"Likes: {note['like_count']}  Dislikes: {note['dislike_count']}")


@app.command()
def comment(
    note_id: str = typer.Argument(..., help="Note ID"),
    text: str = typer.Argument(..., help="Comment text"),
) -> None:
    """Comment on a note."""
    require_login()
    print_comments(call_api("POST", f"/api/notes/{note_id}/comments", json={"text": text}))


@app.command()
def comments(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """List a note's comments, oldest first."""
    print_comments(call_api("GET", f"/api/notes/{note_id}/comments"))


@app.command()
def report(
    note_id: str = typer.Argument(..., help="Note ID"),
    reason: str = typer.Argument(..., help="Why the note should be reviewed"),
) -> None:
    """Report a note to the moderators."""
    require_login()
    result = call_api("POST", f"/api/notes/{note_id}/report", json={"reason": reason})
    console.print(f"[green]Reported. This note now has {result['report_count']} report(s).[/green]")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete one of your own notes."""
    require_login()
    if not yes:
        typer.confirm(f"Delete note {note_id}?", abort=True)
    result = call_api("DELETE", f"/api/notes/{note_id}")
    console.print(f"[green]Deleted note {result['deleted_note_id']}[/green]")
