"""Unit tests for CLI HTTP client."""

import httpx
import pytest

from notehub.cli import client as client_module
from notehub.cli.client import APIClient, ApiRequestError, close_api_client, get_api_client, set_api_url, unwrap
from notehub.cli.session import SessionStore


class TestUnwrap:
    """Tests for envelope unwrapping."""

    def test_returns_data_of_success_envelope(self):
        response = httpx.Response(200, json={"success": True, "data": {"id": "n1"}, "error": None})
        assert unwrap(response) == {"id": "n1"}

    def test_returns_plain_body(self):
        assert unwrap(httpx.Response(200, json={"status": "healthy"})) == {"status": "healthy"}

    def test_error_envelope_raises_with_message_and_code(self):
        response = httpx.Response(
            403,
            json={"success": False, "data": None, "error": {"code": "AUTHZ_FORBIDDEN", "message": "Forbidden"}},
        )

        with pytest.raises(ApiRequestError) as exc_info:
            unwrap(response)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Forbidden"
        assert exc_info.value.code == "AUTHZ_FORBIDDEN"
        assert exc_info.value.is_unauthorized is False

    def test_detail_body_raises(self):
        with pytest.raises(ApiRequestError, match="unhealthy"):
            unwrap(httpx.Response(503, json={"detail": "unhealthy"}))

    def test_non_json_error_uses_reason_phrase(self):
        with pytest.raises(ApiRequestError) as exc_info:
            unwrap(httpx.Response(502, text="<html>bad gateway</html>"))

        assert exc_info.value.message == "Bad Gateway"

    def test_unauthorized_flag(self):
        with pytest.raises(ApiRequestError) as exc_info:
            unwrap(httpx.Response(401, json={"success": False, "error": {"message": "Not authorized"}}))

        assert exc_info.value.is_unauthorized is True


class TestAPIClient:
    """Tests for APIClient class."""

    @pytest.fixture
    def seen(self) -> list[httpx.Request]:
        return []

    @pytest.fixture
    def client(self, tmp_path, seen) -> APIClient:
        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "data": None})

        return APIClient(
            base_url="http://test:5000/",
            session=SessionStore(tmp_path / "session.json"),
            transport=httpx.MockTransport(handler),
        )

    def test_strips_trailing_slash(self, client):
        assert client.base_url == "http://test:5000"

    def test_default_timeout_from_config(self, client):
        assert client.timeout == 30.0

    @pytest.mark.asyncio
    async def test_sends_frontend_header_without_token(self, client, seen):
        await client.get("/api/notes")
        await client.close()

        assert seen[0].headers["X-Frontend-ID"] == "cli"
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_sends_bearer_token_from_session(self, client, seen):
        client.session.save("tok-123", {"id": "u1"})

        await client.post("/api/notes/n1/like")
        await client.close()

        assert seen[0].headers["Authorization"] == "Bearer tok-123"
        assert seen[0].method == "POST"

    @pytest.mark.asyncio
    async def test_patch_and_delete(self, client, seen):
        await client.patch("/api/admin/users/u1/block")
        await client.delete("/api/notes/n1")
        await client.close()

        assert [(r.method, r.url.path) for r in seen] == [
            ("PATCH", "/api/admin/users/u1/block"),
            ("DELETE", "/api/notes/n1"),
        ]

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, tmp_path):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = APIClient(
            base_url="http://test",
            session=SessionStore(tmp_path / "s.json"),
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(httpx.ConnectError):
            await client.get("/health")
        await client.close()


class TestClientSingleton:
    """Tests for the module-level client."""

    @pytest.fixture(autouse=True)
    def _reset(self, monkeypatch, tmp_path):
        monkeypatch.setenv("NOTEHUB_SESSION_FILE", str(tmp_path / "session.json"))
        monkeypatch.setattr(client_module, "_client", None)
        monkeypatch.setattr(client_module, "_api_url", None)

    def test_singleton(self):
        assert get_api_client() is get_api_client()

    def test_set_api_url_replaces_client(self):
        first = get_api_client()

        set_api_url("http://elsewhere:9000")
        second = get_api_client()

        assert second is not first
        assert second.base_url == "http://elsewhere:9000"

    @pytest.mark.asyncio
    async def test_close_resets(self):
        first = get_api_client()
        await close_api_client()
        assert get_api_client() is not first
