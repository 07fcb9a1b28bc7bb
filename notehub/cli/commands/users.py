"""
User Commands.

Profiles and saved notes.
"""

from typing import Optional

import typer

from notehub.cli.output import call_api, console, print_notes, require_login

app = typer.Typer(help="User commands")


@app.command()
def profile(
    user_id: Optional[str] = typer.Argument(None, help="User ID (defaults to you)"),
) -> None:
    """
    Show a profile with uploaded, liked, disliked and saved notes.

    Examples:
        notehub users profile
        notehub users profile 0b6f...
    """
    if user_id is None:
        user_id = require_login()["id"]

    data = call_api("GET", f"/api/users/{user_id}")
    user = data["user"]
    console.print(f"[bold]{user['name']}[/bold] <{user['email']}>")

    print_notes(data["uploaded_notes"], title="Uploaded")
    print_notes(data["liked_notes"], title="Liked")
    print_notes(data["disliked_notes"], title="Disliked")
    print_notes(data["saved_notes"], title="Saved")


@app.command()
def save(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Save a note, or unsave it if already saved."""
    user = require_login()
    data = call_api("POST", f"/api/users/{user['id']}/save", json={"note_id": note_id})
    state = "Saved" if data["saved"] else "Removed from saved"
    console.print(f"[green]{state}: {note_id}[/green] ({len(data['saved_note_ids'])} saved)")
