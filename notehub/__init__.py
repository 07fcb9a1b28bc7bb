"""
NoteHub.

- backend/: REST API, database, configuration
- cli/: Command-line client (Typer + Rich)
"""
