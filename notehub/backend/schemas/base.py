"""
Response Envelope.

Every NoteHub response, success or error, has the same shape:

    {"success": ..., "data": ..., "error": {"code", "message", "details"},
     "metadata": {"timestamp", "request_id"}}

Endpoints build it with ``ApiResponse.ok``; the exception handlers build
the error form with ``ErrorResponse.from_error``.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from notehub.backend.core.exceptions import ApplicationError
from notehub.backend.core.utils import utc_now

DataT = TypeVar("DataT")


class ResponseMetadata(BaseModel):
    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    code: str = Field(description="Stable machine-readable code, e.g. RES_NOT_FOUND")
    message: str = Field(description="Human-readable message shown by clients")
    details: dict[str, Any] | None = None

    @classmethod
    def from_exception(cls, exc: ApplicationError) -> "ErrorDetail":
        return cls(code=exc.code, message=exc.message, details=exc.details or None)


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope; ``data`` holds the endpoint's payload."""

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def ok(cls, data: Any, request_id: str | None) -> "ApiResponse[Any]":
        """Wrap ``data`` for the request identified by ``request_id``."""
        return cls(data=data, metadata=ResponseMetadata(request_id=request_id))


class ErrorResponse(BaseModel):
    """Error envelope; ``data`` is always null."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    @classmethod
    def from_error(cls, error: ErrorDetail, request_id: str | None) -> "ErrorResponse":
        return cls(error=error, metadata=ResponseMetadata(request_id=request_id))
