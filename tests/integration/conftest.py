"""
Integration Test Fixtures.

Fixtures for integration tests - uses real database and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.config import AppConfig, get_app_config
from notehub.backend.core.database import get_db_session
from notehub.backend.repositories.user import UserRepository

DEFAULT_PASSWORD = "correct-horse-battery"


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    The client uses the test database session, so every request in a
    test sees the same data.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from notehub.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def app_config() -> AppConfig:
    """The configuration instance the app under test reads."""
    return get_app_config()


@pytest.fixture
def enforce_blocks(app_config: AppConfig) -> AppConfig:
    """Turn on the policy that locks blocked users out."""
    app_config.features = app_config.features.model_copy(
        update={"auth_block_enforced": True},
    )
    return app_config


# =============================================================================
# User Helpers
# =============================================================================


class Account:
    """A signed-up user as seen by the tests."""

    def __init__(self, user: dict[str, Any], token: str) -> None:
        self.user = user
        self.token = token

    @property
    def id(self) -> str:
        return self.user["id"]

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def signup(client: AsyncClient):
    """
    Sign a user up through the API.

    Usage:
        async def test_x(signup):
            ana = await signup("Ana", "ana@x.io")
            await client.post("/api/notes", json=..., headers=ana.headers)
    """

    async def _signup(name: str, email: str, password: str = DEFAULT_PASSWORD) -> Account:
        response = await client.post(
            "/api/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return Account(data["user"], data["token"])

    return _signup


@pytest.fixture
def promote(db_session: AsyncSession):
    """Grant admin rights directly in the database, as an operator would."""

    async def _promote(account: Account) -> Account:
        user = await UserRepository(db_session).get_by_id_or_none(account.id)
        user.is_admin = True
        await db_session.flush()
        account.user["is_admin"] = True
        return account

    return _promote


@pytest.fixture
def upload(client: AsyncClient):
    """Upload a note as ``account`` and return its representation."""

    async def _upload(account: Account, title: str, **fields: Any) -> dict[str, Any]:
        payload = {"title": title, "file_url": f"https://files.example.com/{title}.pdf", **fields}
        response = await client.post("/api/notes", json=payload, headers=account.headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _upload


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
