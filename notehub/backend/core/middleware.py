"""
Request Context Middleware.

Gives every request a correlation id, identifies the calling client,
tags the API area it targets, and times it. All of that is bound to the
structlog context so service logs carry it without passing it around.

Headers read:
    X-Request-ID   - reused when printable and at most 128 characters
    X-Frontend-ID  - ``web`` (browser client) or ``cli`` (notehub CLI)

Headers written:
    X-Request-ID, X-Response-Time
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notehub.backend.core.logging import get_logger

logger = get_logger(__name__)

MAX_REQUEST_ID_LENGTH = 128

KNOWN_FRONTENDS = frozenset({"web", "cli"})

# first path segment after /api/
API_AREAS = frozenset({"auth", "notes", "users", "admin"})

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def resolve_request_id(header_value: str | None) -> str:
    """The caller's X-Request-ID if usable, else a new UUID4."""
    candidate = (header_value or "").strip()
    if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH and candidate.isprintable():
        return candidate
    return str(uuid.uuid4())


def resolve_frontend(header_value: str | None) -> str:
    frontend = (header_value or "").strip().lower()
    return frontend if frontend in KNOWN_FRONTENDS else "unknown"


def api_area(path: str) -> str:
    """
    Classify a path for log filtering.

    ``/api/notes/42/like`` is ``notes``; ``/`` and ``/health/...`` are
    ``health``; anything else is ``other``.
    """
    segments = [segment for segment in path.split("/") if segment]
    if not segments or segments[0] == "health":
        return "health"
    if segments[0] == "api" and len(segments) > 1 and segments[1] in API_AREAS:
        return segments[1]
    return "other"


def request_id_for(request: Request) -> str | None:
    """Request id assigned by the middleware, or the raw header outside it."""
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    return request.headers.get("x-request-id")


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request context and adds the tracing headers."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = resolve_request_id(request.headers.get("X-Request-ID"))
        frontend = resolve_frontend(request.headers.get("X-Frontend-ID"))
        area = api_area(request.url.path)

        request.state.request_id = request_id
        request.state.frontend = frontend

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            area=area,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            # writes are logged at INFO, reads at DEBUG
            log = logger.info if request.method in MUTATING_METHODS else logger.debug
            log(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
