"""
Exception Handlers.

Turn exceptions into the standard error envelope.

    ApplicationError subclasses -> their own ``status_code`` and ``code``
    RequestValidationError      -> 422 VAL_REQUEST_INVALID
    anything else               -> 500 SYS_INTERNAL_ERROR

A 401 also carries ``WWW-Authenticate: Bearer``. Unexpected exception
messages reach the caller only with features.api_detailed_errors on.

Usage:
    from notehub.backend.core.exception_handlers import register_exception_handlers

    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notehub.backend.core.config import get_app_config
from notehub.backend.core.exceptions import ApplicationError, AuthenticationError
from notehub.backend.core.logging import get_logger
from notehub.backend.core.middleware import request_id_for
from notehub.backend.schemas.base import ErrorDetail, ErrorResponse

logger = get_logger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred"


def _error_response(
    status_code: int,
    error: ErrorDetail,
    request: Request,
) -> JSONResponse:
    body = ErrorResponse.from_error(error, request_id_for(request))
    headers = {"WWW-Authenticate": "Bearer"} if status_code == AuthenticationError.status_code else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Render an ApplicationError with the status it declares."""
    log_extra = {
        "code": exc.code,
        "error_type": type(exc).__name__,
        "message": exc.message,
        "status": exc.status_code,
    }
    if exc.status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    return _error_response(exc.status_code, ErrorDetail.from_exception(exc), request)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Malformed payloads: wrong JSON types, non-object bodies.

    Blank strings pass the request schemas and are rejected by the
    services with a 400 instead.
    """
    errors = exc.errors()
    logger.warning("Request validation failed", extra={"error_count": len(errors)})

    return _error_response(
        422,
        ErrorDetail(
            code="VAL_REQUEST_INVALID",
            message="Request validation failed",
            details={
                "validation_errors": [
                    {
                        "field": ".".join(str(loc) for loc in err.get("loc", [])),
                        "message": err.get("msg", "Validation error"),
                        "type": err.get("type", "unknown"),
                    }
                    for err in errors
                ]
            },
        ),
        request,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    message = GENERIC_SERVER_ERROR
    if get_app_config().features.api_detailed_errors:
        message = f"{message}: {exc}"

    return _error_response(500, ErrorDetail(code="SYS_INTERNAL_ERROR", message=message), request)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
