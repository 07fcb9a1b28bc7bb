"""
Auth Service.

Signup and login. Issues bearer tokens for authenticated users.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.config import AppConfig
from notehub.backend.core.exceptions import (
    AccountBlockedError,
    EmailTakenError,
    InvalidCredentialsError,
    ValidationError,
)
from notehub.backend.core.security import create_access_token, hash_password, verify_password
from notehub.backend.models.user import User
from notehub.backend.repositories.user import UserRepository
from notehub.backend.schemas.auth import LoginRequest, SignupRequest
from notehub.backend.services.base import BaseService


class AuthService(BaseService):
    """Service for credential checks and token issuance."""

    def __init__(self, session: AsyncSession, app_config: AppConfig | None = None) -> None:
        super().__init__(session, app_config)
        self.users = UserRepository(session)

    async def signup(self, data: SignupRequest) -> tuple[User, str]:
        """
        Register a new user.

        Returns:
            The created user and a bearer token

        Raises:
            ValidationError: If name, email or password is blank, or the password is too long
            EmailTakenError: If the email is already registered
        """
        self._validate_required(
            data.model_dump(),
            ["name", "email", "password"],
            message="All fields are required",
        )
        self._check_password_length(data.password)

        if await self.users.email_exists(data.email):
            raise EmailTakenError()

        user = await self._execute_db_operation(
            "signup",
            self.users.create_user(
                name=data.name.strip(),
                email=data.email,
                hashed_password=hash_password(data.password),
            ),
            on_conflict=EmailTakenError(),
        )

        self._log_operation("User signed up", user_id=user.id)
        return user, create_access_token(user.id)

    async def login(self, data: LoginRequest) -> tuple[User, str]:
        """
        Verify credentials.

        Returns:
            The user and a fresh bearer token

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
            AccountBlockedError: If blocks are enforced and the user is blocked
        """
        self._validate_required(
            data.model_dump(),
            ["email", "password"],
            message="Email and password are required",
        )

        user = await self.users.get_by_email(data.email)
        if user is None or not self._password_matches(data.password, user.hashed_password):
            self._logger.warning("Login failed", extra={"reason": "invalid_credentials"})
            raise InvalidCredentialsError()

        if user.is_blocked and self.config.blocks_enforced:
            raise AccountBlockedError()

        self._log_operation("User logged in", user_id=user.id)
        return user, create_access_token(user.id)

    def _check_password_length(self, password: str) -> None:
        max_bytes = self.config.security.password.max_bytes
        if len(password.encode("utf-8")) > max_bytes:
            raise ValidationError(
                "Password too long",
                details={"password": f"Maximum length is {max_bytes} bytes"},
            )

    def _password_matches(self, password: str, hashed_password: str) -> bool:
        if len(password.encode("utf-8")) > self.config.security.password.max_bytes:
            return False
        return verify_password(password, hashed_password)
