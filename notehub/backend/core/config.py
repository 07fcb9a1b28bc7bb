"""
Configuration Management.

Secrets come from config/.env (or the process environment) through
``Settings``. Everything else comes from config/settings/*.yaml and is
assembled into one validated ``AppConfig``. Both are built once per
process by the cached accessors and injected into the services.

Secrets (.env):
    JWT_SECRET, DB_PASSWORD

Settings (YAML):
    application.yaml - identity, server, CORS, CLI and health defaults
    database.yaml    - database connection and pool
    logging.yaml     - level, format, handlers
    features.yaml    - policy switches (error detail, block enforcement)
    security.yaml    - token and password limits
"""

from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notehub.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
)

PROJECT_ROOT_MARKER = ".project_root"

# AppConfig section -> (file under config/settings, schema)
SETTINGS_FILES: dict[str, tuple[str, type[BaseModel]]] = {
    "application": ("application.yaml", ApplicationSchema),
    "database": ("database.yaml", DatabaseSchema),
    "logging": ("logging.yaml", LoggingSchema),
    "features": ("features.yaml", FeaturesSchema),
    "security": ("security.yaml", SecuritySchema),
}


def find_project_root() -> Path:
    """Walk up from the working directory to the .project_root marker."""
    current = Path.cwd()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_ROOT_MARKER).exists():
            return candidate
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def settings_dir() -> Path:
    return find_project_root() / "config" / "settings"


def load_yaml_config(filename: str, directory: Path | None = None) -> dict[str, Any]:
    """Read one YAML file from config/settings/ (or ``directory``)."""
    config_path = (directory or settings_dir()) / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env or the environment."""

    jwt_secret: str
    db_password: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppConfig(BaseModel):
    """
    Validated non-secret configuration.

    One attribute per YAML file, plus the values NoteHub derives from
    them. Build it with ``AppConfig.load()``.
    """

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    features: FeaturesSchema
    security: SecuritySchema

    @classmethod
    def load(cls, directory: Path | None = None) -> "AppConfig":
        """
        Load and validate every settings file.

        Raises:
            FileNotFoundError: If a settings file is missing
            ValueError: If a file fails validation; the message names the file
        """
        directory = directory or settings_dir()
        sections: dict[str, Any] = {}
        for section, (filename, schema) in SETTINGS_FILES.items():
            raw = load_yaml_config(filename, directory)
            try:
                sections[section] = schema.model_validate(raw)
            except ValidationError as e:
                raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e
        return cls(**sections)

    @property
    def blocks_enforced(self) -> bool:
        """Whether blocked users lose access (features.auth_block_enforced)."""
        return self.features.auth_block_enforced

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(days=self.security.jwt.access_token_expire_days)

    @property
    def api_base_url(self) -> str:
        """URL the CLI uses when no --api-url is given."""
        server = self.application.server
        return f"http://{server.host}:{server.port}"

    def database_url(self, password: str) -> str:
        db = self.database
        return f"{db.driver}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig.load()


def get_database_url() -> str:
    """Connection URL from database.yaml and DB_PASSWORD."""
    return get_app_config().database_url(get_settings().db_password)


def get_server_base_url() -> tuple[str, float]:
    """Default API base URL and request timeout for the CLI."""
    config = get_app_config()
    return config.api_base_url, config.application.client.request_timeout
