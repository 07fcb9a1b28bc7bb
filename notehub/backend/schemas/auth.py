"""
Auth Schemas.

Signup/login payloads and the token response.
"""

from pydantic import BaseModel, Field

from notehub.backend.schemas.user import UserResponse


class SignupRequest(BaseModel):
    name: str = Field(default="", max_length=120, examples=["Ana"])
    email: str = Field(default="", max_length=320, examples=["ana@example.com"])
    password: str = Field(default="", examples=["secret123"])


class LoginRequest(BaseModel):
    email: str = Field(default="", max_length=320)
    password: str = Field(default="")


class AuthResponse(BaseModel):
    """Authenticated user and bearer token (valid for 7 days)."""

    user: UserResponse
    token: str
