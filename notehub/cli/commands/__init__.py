"""
CLI Commands.

Organized by domain/feature area.
"""

from notehub.cli.commands.admin import app as admin_app
from notehub.cli.commands.auth import app as auth_app
from notehub.cli.commands.db import app as db_app
from notehub.cli.commands.notes import app as notes_app
from notehub.cli.commands.server import app as server_app
from notehub.cli.commands.users import app as users_app

__all__ = [
    "admin_app",
    "auth_app",
    "db_app",
    "notes_app",
    "server_app",
    "users_app",
]
