"""
Unit Tests for Security Module.

Black box tests against the public interface of security.py.
All cryptographic operations (bcrypt, JWT) execute for real.
Only the config boundary is stubbed with real Pydantic schema objects.
"""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from jose import jwt

from notehub.backend.core.config_schema import JwtSchema
from notehub.backend.core.exceptions import AuthenticationError
from notehub.backend.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    parse_bearer_header,
    verify_password,
)

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-testing-purposes"


@pytest.fixture
def jwt_config():
    """Real Pydantic JwtSchema with test values."""
    return JwtSchema(
        algorithm="HS256",
        audience="test-api",
        access_token_expire_days=7,
    )


@pytest.fixture
def _stub_config(jwt_config):
    """Stub the config boundary so security functions can resolve settings."""
    settings = SimpleNamespace(jwt_secret=TEST_JWT_SECRET)
    app_config = SimpleNamespace(security=SimpleNamespace(jwt=jwt_config))
    with (
        patch("notehub.backend.core.security.get_settings", return_value=settings),
        patch("notehub.backend.core.security.get_app_config", return_value=app_config),
    ):
        yield


# =============================================================================
# Password Hashing
# =============================================================================


class TestHashPassword:
    """Tests for password hashing, no mocks."""

    def test_returns_hash_different_from_input(self):
        assert hash_password("my-secret-password") != "my-secret-password"

    def test_returns_bcrypt_formatted_hash(self):
        assert hash_password("password123").startswith("$2b$")

    def test_same_password_produces_different_hashes(self):
        """Bcrypt salts each hash, so two calls must differ."""
        assert hash_password("identical") != hash_password("identical")


class TestVerifyPassword:
    """Tests for password verification, no mocks."""

    def test_correct_password_verifies(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("correct-horse-battery-staple", hashed) is True

    def test_wrong_password_fails(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("wrong-password", hashed) is False

    def test_round_trip_with_unicode(self):
        password = "contraseña-sécurité-пароль"
        assert verify_password(password, hash_password(password)) is True


# =============================================================================
# JWT Access Tokens
# =============================================================================


@pytest.mark.usefixtures("_stub_config")
class TestCreateAccessToken:
    """Tests for token creation and decoding, real JWT operations."""

    def test_subject_is_user_id(self):
        payload = decode_token(create_access_token("user-42"))
        assert payload["sub"] == "user-42"

    def test_claims_include_audience_and_times(self):
        payload = decode_token(create_access_token("user-1"))
        assert payload["aud"] == "test-api"
        assert "iat" in payload
        assert "exp" in payload

    def test_default_lifetime_is_configured_days(self):
        payload = decode_token(create_access_token("user-1"))
        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

    def test_custom_expiration_delta(self):
        short = decode_token(create_access_token("u", expires_delta=timedelta(minutes=5)))
        long = decode_token(create_access_token("u", expires_delta=timedelta(hours=24)))
        assert long["exp"] > short["exp"]


@pytest.mark.usefixtures("_stub_config")
class TestDecodeToken:
    """Tests for token validation failures."""

    def test_expired_token_rejected(self):
        token = create_access_token("user-1", expires_delta=timedelta(seconds=-1))
        with pytest.raises(AuthenticationError, match="invalid token"):
            decode_token(token)

    def test_wrong_secret_rejected(self):
        token = jwt.encode({"sub": "user-1", "aud": "test-api"}, "other-secret", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_wrong_audience_rejected(self):
        token = jwt.encode({"sub": "user-1", "aud": "other-api"}, TEST_JWT_SECRET, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_missing_subject_rejected(self):
        token = jwt.encode({"aud": "test-api"}, TEST_JWT_SECRET, algorithm="HS256")
        with pytest.raises(AuthenticationError, match="invalid token"):
            decode_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError):
            decode_token("not.a.jwt")


# =============================================================================
# Bearer Header
# =============================================================================


class TestParseBearerHeader:
    """Tests for Authorization header parsing."""

    def test_extracts_token(self):
        assert parse_bearer_header("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic abc", "bearer abc", "abc"])
    def test_missing_or_malformed(self, header):
        with pytest.raises(AuthenticationError, match="token missing"):
            parse_bearer_header(header)
