"""
FastAPI Dependencies.

Shared dependencies for request handling: the database session, the
injected configuration, the request id, the bearer-token auth gate and
the admin check.
"""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.config import AppConfig, get_app_config
from notehub.backend.core.database import get_db_session
from notehub.backend.core.exceptions import (
    AccountBlockedError,
    AdminRequiredError,
    AuthenticationError,
)
from notehub.backend.core.logging import bind_actor, get_logger
from notehub.backend.core.middleware import request_id_for, resolve_request_id
from notehub.backend.core.security import decode_token, parse_bearer_header
from notehub.backend.models.user import User
from notehub.backend.repositories.user import UserRepository

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]

Config = Annotated[AppConfig, Depends(get_app_config)]


async def get_request_id(request: Request) -> str:
    """
    The id RequestContextMiddleware assigned, so the envelope metadata
    matches the X-Request-ID response header.
    """
    return request_id_for(request) or resolve_request_id(None)


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user(
    db: DbSession,
    config: Config,
    authorization: str | None = Header(None),
) -> User:
    """
    Resolve the bearer token to a live user.

    Raises:
        AuthenticationError: If the header is missing or malformed, the token
            fails verification, or the user no longer exists
        AccountBlockedError: If blocks are enforced and the user is blocked
    """
    token = parse_bearer_header(authorization)
    payload = decode_token(token)

    user = await UserRepository(db).get_by_id_or_none(payload["sub"])
    if user is None:
        logger.warning("Token subject not found", extra={"user_id": payload["sub"]})
        raise AuthenticationError("Not authorized, user not found")

    if user.is_blocked and config.blocks_enforced:
        logger.warning("Blocked user refused", extra={"user_id": user.id})
        raise AccountBlockedError()

    bind_actor(user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUser) -> User:
    """
    Allow only users with the admin flag. Uses the user already resolved
    by the auth gate.

    Raises:
        AdminRequiredError: If the authenticated user is not an admin
    """
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUser = Annotated[User, Depends(require_admin)]
