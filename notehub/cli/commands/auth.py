"""
Auth Commands.

Sign up, log in and out. A successful signup or login stores the token
and user in the local session file.
"""

import typer

from notehub.cli.client import get_api_client
from notehub.cli.output import call_api, console

app = typer.Typer(help="Account commands")


def _store_session(data: dict) -> None:
    get_api_client().session.save(data["token"], data["user"])
    user = data["user"]
    console.print(f"[green]Logged in as {user['name']} <{user['email']}>[/green]")


@app.command()
def signup(
    name: str = typer.Option(..., "--name", "-n", prompt=True, help="Display name"),
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email address"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True,
        help="Password",
    ),
) -> None:
    """
    Create an account and log in.

    Examples:
        notehub auth signup -n Ana -e ana@x.io
    """
    data = call_api(
        "POST",
        "/api/auth/signup",
        json={"name": name, "email": email, "password": password},
    )
    _store_session(data)


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Email address"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password",
    ),
) -> None:
    """
    Log in with email and password.

    Examples:
        notehub auth login -e ana@x.io
    """
    data = call_api("POST", "/api/auth/login", json={"email": email, "password": password})
    _store_session(data)


@app.command()
def logout() -> None:
    """Forget the stored token and user."""
    get_api_client().session.clear()
    console.print("[green]Logged out[/green]")


@app.command()
def whoami() -> None:
    """Show the cached user of the current session."""
    user = get_api_client().session.user
    if not user:
        console.print("[yellow]Not logged in[/yellow]")
        raise typer.Exit(1)

    role = " [magenta](admin)[/magenta]" if user.get("is_admin") else ""
    console.print(f"{user['name']} <{user['email']}>{role}")
    console.print(f"[dim]id: {user['id']}[/dim]")
