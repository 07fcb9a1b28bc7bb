"""
Note Schemas.

Pydantic schemas for note API request/response validation.

Required strings default to empty so that a missing or blank value reaches
the service layer and is reported as a 400 validation error.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteAuthor(BaseModel):
    """Owner/author reference resolved to name and email."""

    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class NoteCreate(BaseModel):
    """Schema for uploading a note."""

    title: str = Field(
        default="",
        max_length=255,
        description="Note title",
        examples=["Linear Algebra Notes"],
    )
    description: str | None = Field(
        default=None,
        description="Optional description",
    )
    file_url: str = Field(
        default="",
        max_length=2048,
        description="Link to the note document",
        examples=["https://example.com/linear-algebra.pdf"],
    )
    tags: list[Any] | None = Field(
        default=None,
        description="Subject tags, e.g. Math, Physics",
        examples=[["Math", "Semester 2"]],
    )


class CommentCreate(BaseModel):
    """Schema for adding a comment."""

    text: str = Field(default="", description="Comment text")


class ReportCreate(BaseModel):
    """Schema for reporting a note."""

    reason: str = Field(default="", description="Why the note is being reported")


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str
    description: str
    file_url: str
    tags: list[str]
    uploaded_by: NoteAuthor
    liked_by: list[str] = Field(validation_alias="liked_by_ids", description="IDs of users who liked")
    disliked_by: list[str] = Field(validation_alias="disliked_by_ids", description="IDs of users who disliked")
    like_count: int
    dislike_count: int
    comment_count: int
    report_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("liked_by", "disliked_by", mode="before")
    @classmethod
    def _sorted_ids(cls, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            return sorted(value)
        return value


class CommentResponse(BaseModel):
    """A comment with its author resolved."""

    id: str
    text: str
    author: NoteAuthor
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportResponse(BaseModel):
    """A report with its author resolved."""

    id: str
    reason: str
    author: NoteAuthor
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportedNoteResponse(BaseModel):
    """A reported note with every report, for moderators."""

    id: str
    title: str
    description: str
    file_url: str
    uploaded_by: NoteAuthor
    created_at: datetime
    report_count: int
    reports: list[ReportResponse]

    model_config = ConfigDict(from_attributes=True)


class ReportResult(BaseModel):
    """Result of reporting a note."""

    report_count: int


class DeleteResult(BaseModel):
    """Result of deleting a note."""

    deleted_note_id: str
