"""
Unit Tests for Health Check Endpoints.

Tests the health check functionality including:
- Root check (/)
- Liveness check (/health)
- Readiness check (/health/ready)
- Database connectivity check
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from notehub.backend.api.health import check_database, health_check, readiness_check, root


def _config(host: str = "localhost", name: str = "notehub", timeout: float = 5):
    return SimpleNamespace(
        database=SimpleNamespace(host=host, name=name),
        application=SimpleNamespace(name="NoteHub", health=SimpleNamespace(database_timeout=timeout)),
    )


class TestHealthChecks:
    @pytest.mark.asyncio
    async def test_root_names_service(self):
        with patch("notehub.backend.api.health.get_app_config", return_value=_config()):
            assert await root() == {"status": "OK", "service": "NoteHub"}

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self):
        assert await health_check() == {"status": "healthy"}


class TestCheckDatabase:
    """Tests for the database health check function."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("host,name", [("", "notehub"), ("localhost", "")])
    async def test_not_configured(self, mock_db_session, host, name):
        with patch("notehub.backend.api.health.get_app_config", return_value=_config(host, name)):
            result = await check_database(mock_db_session)

        assert result == {"status": "not_configured"}
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_healthy(self, mock_db_session):
        with patch("notehub.backend.api.health.get_app_config", return_value=_config()):
            result = await check_database(mock_db_session)

        assert result["status"] == "healthy"
        assert "latency_ms" in result

    @pytest.mark.asyncio
    async def test_unhealthy_on_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
        )

        with patch("notehub.backend.api.health.get_app_config", return_value=_config()):
            result = await check_database(mock_db_session)

        assert result["status"] == "unhealthy"
        assert "connection refused" in result["error"]


class TestReadinessCheck:
    @pytest.mark.asyncio
    async def test_ready(self, mock_db_session):
        with patch("notehub.backend.api.health.get_app_config", return_value=_config()):
            result = await readiness_check(mock_db_session)

        assert result["status"] == "healthy"
        assert result["checks"]["database"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_not_configured_is_still_ready(self, mock_db_session):
        with patch("notehub.backend.api.health.get_app_config", return_value=_config(host="")):
            result = await readiness_check(mock_db_session)

        assert result["checks"]["database"] == {"status": "not_configured"}

    @pytest.mark.asyncio
    async def test_unhealthy_raises_503(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down")))

        with patch("notehub.backend.api.health.get_app_config", return_value=_config()):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check(mock_db_session)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["checks"]["database"]["status"] == "unhealthy"
