"""
Local Session Storage.

Persists the bearer token and a copy of the signed-in user between CLI
invocations. The cached user, including ``is_admin``, is only a hint for
the client; the server decides every permission.
"""

import json
import os
from pathlib import Path
from typing import Any

from notehub.backend.core.logging import get_logger

logger = get_logger(__name__)

SESSION_ENV_VAR = "NOTEHUB_SESSION_FILE"
DEFAULT_SESSION_FILE = Path.home() / ".notehub" / "session.json"
SESSION_FILE_MODE = 0o600


def default_session_path() -> Path:
    """Session file location, honouring NOTEHUB_SESSION_FILE."""
    override = os.environ.get(SESSION_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_SESSION_FILE


class SessionStore:
    """JSON file holding ``{"token": ..., "user": {...}}``."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_session_path()
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            self._data = {}
            if self.path.exists():
                try:
                    data = json.loads(self.path.read_text(encoding="utf-8"))
                    if not isinstance(data, dict):
                        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
                    self._data = data
                except (OSError, ValueError) as e:
                    logger.warning(
                        "Ignoring unreadable session file",
                        extra={"path": str(self.path), "error": str(e)},
                    )
        return self._data

    @property
    def token(self) -> str | None:
        return self._load().get("token")

    @property
    def user(self) -> dict[str, Any] | None:
        user = self._load().get("user")
        return user if isinstance(user, dict) else None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        user = self.user or {}
        return bool(user.get("is_admin"))

    def save(self, token: str, user: dict[str, Any]) -> None:
        """Store a fresh token and user, replacing any previous session."""
        self._data = {"token": token, "user": user}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # owner-only from creation; fchmod also tightens an existing file
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SESSION_FILE_MODE)
        os.fchmod(fd, SESSION_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)

    def clear(self) -> None:
        """Forget the session."""
        self._data = {}
        if self.path.exists():
            self.path.unlink()
