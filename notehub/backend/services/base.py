"""
Base Service.

Shared plumbing for the NoteHub services: the request's database session,
the injected configuration, translation of SQLAlchemy failures into
application errors, and blank-field checks.

Usage:
    from notehub.backend.services.base import BaseService

    class UserService(BaseService):
        def __init__(self, session: AsyncSession, app_config: AppConfig | None = None) -> None:
            super().__init__(session, app_config)
            self.users = UserRepository(session)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.config import AppConfig, get_app_config
from notehub.backend.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    ValidationError,
)
from notehub.backend.core.logging import get_logger

T = TypeVar("T")


def _is_unique_violation(error: IntegrityError) -> bool:
    # asyncpg: "duplicate key value violates unique constraint"
    # sqlite: "UNIQUE constraint failed"
    text = str(error.orig if error.orig is not None else error).lower()
    return "unique" in text or "duplicate" in text


def blank_fields(fields: dict[str, Any], names: list[str]) -> list[str]:
    """Names from ``names`` whose value is None or whitespace only."""
    return [
        name
        for name in names
        if fields.get(name) is None
        or (isinstance(fields[name], str) and not fields[name].strip())
    ]


class BaseService:
    """
    Base class for all services.

    Services receive the request-scoped session and never commit it;
    ``get_db_session`` commits once the endpoint returns.
    """

    def __init__(self, session: AsyncSession, app_config: AppConfig | None = None) -> None:
        """
        Initialize the service.

        Args:
            session: SQLAlchemy async session for database operations
            app_config: Application configuration; the process-wide instance if omitted
        """
        self._session = session
        self._app_config = app_config
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def config(self) -> AppConfig:
        if self._app_config is None:
            self._app_config = get_app_config()
        return self._app_config

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
        on_conflict: ApplicationError | None = None,
    ) -> T:
        """
        Await a repository call, translating database failures.

        Args:
            operation: Name used in logs and error messages
            coro: The repository awaitable
            on_conflict: Raised instead of the generic ConflictError when a
                unique constraint rejects the write

        Raises:
            ConflictError: For unique constraint violations (or ``on_conflict``)
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e.orig)},
            )
            if _is_unique_violation(e):
                raise (on_conflict or ConflictError("Resource already exists")) from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
        message: str = "Required fields missing",
    ) -> None:
        """
        Reject missing or blank required fields.

        Raises:
            ValidationError: With the offending names under ``missing_fields``
        """
        missing = blank_fields(fields, field_names)
        if missing:
            raise ValidationError(message, details={"missing_fields": missing})

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a state change at INFO. Pass identifiers only, never credentials."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
