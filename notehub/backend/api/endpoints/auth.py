"""
Auth API Endpoints.

Signup and login, both returning a bearer token.
"""

from fastapi import APIRouter

from notehub.backend.core.dependencies import Config, DbSession, RequestId
from notehub.backend.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from notehub.backend.schemas.base import ApiResponse
from notehub.backend.schemas.user import UserResponse
from notehub.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/signup",
    response_model=ApiResponse[AuthResponse],
    status_code=201,
    summary="Create an account",
    description="Register with name, email and password. Emails are stored lowercased.",
)
async def signup(
    data: SignupRequest,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[AuthResponse]:
    """Register a new user and issue a token."""
    user, token = await AuthService(db, config).signup(data)
    return ApiResponse[AuthResponse].ok(
        AuthResponse(user=UserResponse.model_validate(user), token=token),
        request_id,
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Log in",
    description="Exchange email and password for a bearer token.",
)
async def login(
    data: LoginRequest,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[AuthResponse]:
    """Authenticate and issue a token."""
    user, token = await AuthService(db, config).login(data)
    return ApiResponse[AuthResponse].ok(
        AuthResponse(user=UserResponse.model_validate(user), token=token),
        request_id,
    )
