"""
CLI Client Module.

Command-line client built with Typer for sharing and moderating notes
through the backend API.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the backend
- CLI calls backend via HTTP (httpx)
- Sends X-Frontend-ID: cli header for log routing
- Keeps the bearer token and a cached user object in a local session file

Usage:
    notehub --help
    notehub auth login -e ana@x.io
    notehub notes list --sort likes
"""
