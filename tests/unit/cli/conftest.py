"""
CLI Test Fixtures.

Commands run against an in-process fake backend served through
httpx.MockTransport, with the session file under tmp_path.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from notehub.cli import client as client_module
from notehub.cli.client import APIClient
from notehub.cli.session import SessionStore

ANA = {"id": "user-ana", "name": "Ana", "email": "ana@x.com", "is_admin": False, "is_blocked": False}
ROOT = {"id": "user-root", "name": "Root", "email": "root@x.com", "is_admin": True, "is_blocked": False}


def envelope(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data, "error": None, "metadata": {"request_id": "req-1"}}


def error_envelope(code: str, message: str) -> dict[str, Any]:
    return {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message, "details": None},
        "metadata": {"request_id": "req-1"},
    }


def note_payload(note_id: str = "note-1", title: str = "Calc I", **overrides: Any) -> dict[str, Any]:
    note = {
        "id": note_id,
        "title": title,
        "description": "",
        "file_url": "http://x/doc",
        "tags": ["Math"],
        "uploaded_by": {"id": ANA["id"], "name": ANA["name"], "email": ANA["email"]},
        "liked_by": [],
        "disliked_by": [],
        "like_count": 0,
        "dislike_count": 0,
        "comment_count": 0,
        "report_count": 0,
        "created_at": "2026-01-02T10:00:00+00:00",
        "updated_at": "2026-01-02T10:00:00+00:00",
    }
    note.update(overrides)
    return note


class FakeBackend:
    """Routes ``(method, path)`` to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, data: Any = None, status: int = 200) -> None:
        payload = envelope(data)
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=payload)

    def fail(self, method: str, path: str, status: int, code: str, message: str) -> None:
        payload = error_envelope(code, message)
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=payload)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json=error_envelope("RES_NOT_FOUND", "No route"))
        return route(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session_store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def api_client(backend: FakeBackend, session_store: SessionStore, monkeypatch) -> APIClient:
    """Make every CLI command use a client wired to the fake backend."""
    client = APIClient(
        base_url="http://test",
        session=session_store,
        transport=httpx.MockTransport(backend.handle),
    )
    monkeypatch.setattr(client_module, "APIClient", lambda base_url=None: client)
    monkeypatch.setattr(client_module, "_client", None)
    return client


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def ana() -> dict[str, Any]:
    return dict(ANA)


@pytest.fixture
def root() -> dict[str, Any]:
    return dict(ROOT)


@pytest.fixture
def make_note_payload() -> Callable[..., dict[str, Any]]:
    return note_payload


@pytest.fixture
def logged_in(session_store: SessionStore, ana: dict[str, Any]) -> dict[str, Any]:
    session_store.save("ana-token", ana)
    return ana


@pytest.fixture
def logged_in_admin(session_store: SessionStore, root: dict[str, Any]) -> dict[str, Any]:
    session_store.save("root-token", root)
    return root
