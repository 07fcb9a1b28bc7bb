"""
Configuration Schemas.

One strict Pydantic model per file in config/settings/. Unknown keys,
missing keys and out-of-range values fail at startup rather than in the
middle of a request.

    application.yaml -> ApplicationSchema
    database.yaml    -> DatabaseSchema
    logging.yaml     -> LoggingSchema
    features.yaml    -> FeaturesSchema
    security.yaml    -> SecuritySchema
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


class _StrictBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


# application.yaml


class ServerSchema(_StrictBase):
    """Where uvicorn listens; the CLI derives its default API URL from it."""

    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_StrictBase):
    """Browser origins allowed to call the API (the web client)."""

    origins: list[str]

    @field_validator("origins")
    @classmethod
    def _strip_trailing_slash(cls, origins: list[str]) -> list[str]:
        # the browser sends Origin without a trailing slash
        return [origin.rstrip("/") for origin in origins]


class ClientSchema(_StrictBase):
    """Defaults for the notehub command-line client."""

    request_timeout: float = Field(gt=0)


class HealthSchema(_StrictBase):
    """Limits for the readiness check."""

    database_timeout: float = Field(gt=0)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: Literal["development", "test", "staging", "production"]
    debug: bool
    server: ServerSchema
    cors: CorsSchema
    client: ClientSchema
    health: HealthSchema


# database.yaml


class DatabaseSchema(_StrictBase):
    driver: str
    host: str
    port: int = Field(ge=1, le=65535)
    name: str
    user: str
    pool_size: int = Field(ge=1)
    max_overflow: int = Field(ge=0)
    pool_timeout: int = Field(gt=0)
    pool_recycle: int
    echo: bool


# logging.yaml


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["json", "console"]
    handlers: HandlersSchema

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


# features.yaml


class FeaturesSchema(_StrictBase):
    """Policy switches."""

    # echo unexpected exception messages in 500 responses
    api_detailed_errors: bool
    # blocked users cannot log in or use protected routes
    auth_block_enforced: bool
    db_create_tables_on_startup: bool


# security.yaml


class JwtSchema(_StrictBase):
    algorithm: Literal["HS256", "HS384", "HS512"]
    audience: str
    access_token_expire_days: int = Field(gt=0)


class PasswordSchema(_StrictBase):
    max_bytes: int = Field(gt=0, le=BCRYPT_MAX_PASSWORD_BYTES)


class SecuritySchema(_StrictBase):
    jwt: JwtSchema
    password: PasswordSchema
