"""
User Schemas.

Pydantic schemas for user representations. None of them carries the
password credential.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from notehub.backend.schemas.note import NoteResponse


class UserResponse(BaseModel):
    """User as returned by signup and login."""

    id: str = Field(description="User unique identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Lowercased email address")
    is_admin: bool = Field(description="Grants moderation capability")
    is_blocked: bool = Field(description="Moderation flag")
    created_at: datetime = Field(description="Signup timestamp")

    model_config = ConfigDict(from_attributes=True)


class AdminUserResponse(UserResponse):
    """Full user record for moderators."""

    avatar_url: str
    saved_note_ids: list[str]
    updated_at: datetime

    @field_validator("saved_note_ids", mode="before")
    @classmethod
    def _sorted_ids(cls, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            return sorted(value)
        return value


class ProfileUser(BaseModel):
    """Public profile header."""

    id: str
    name: str
    email: str
    avatar_url: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    """Profile with the user's related note lists, each newest first."""

    user: ProfileUser
    uploaded_notes: list[NoteResponse]
    liked_notes: list[NoteResponse]
    disliked_notes: list[NoteResponse]
    saved_notes: list[NoteResponse]

    model_config = ConfigDict(from_attributes=True)


class SaveToggleRequest(BaseModel):
    """Body for toggling a saved note."""

    note_id: str = Field(default="", description="Note to save or unsave")


class SaveToggleResponse(BaseModel):
    """Saved notes after a toggle."""

    saved: bool = Field(description="Whether the note is saved after the call")
    saved_notes: list[NoteResponse]
    saved_note_ids: list[str]

    model_config = ConfigDict(from_attributes=True)

    @field_validator("saved_note_ids", mode="before")
    @classmethod
    def _sorted_ids(cls, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            return sorted(value)
        return value


class BlockToggleResponse(BaseModel):
    """Block flag after a toggle."""

    id: str
    is_blocked: bool
