"""Problem+json rendering for everything that escapes a route.

Every error body is an RFC 7807 document. ``instance`` defaults to the
request path, and ``request_id`` is added when the middleware set one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog_service.app.middleware.metrics import route_template
from catalog_service.core.exceptions import AppException, CommandValidationException
from catalog_service.core.schemas.error import (
    ProblemDetail,
    ValidationProblemDetail,
    default_title,
)
from catalog_service.infra.metrics import tracking

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"

_LOCATION_ROOTS = frozenset({"body", "query", "path", "header", "cookie"})


def field_key(loc: Sequence[str | int]) -> str:
    """Render a pydantic error location the way rule violations are keyed.

    >>> field_key(("body", "tags", 3))
    'tags[3]'
    >>> field_key(("body",))
    'body'
    """
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _LOCATION_ROOTS:
        del parts[0]

    key = ""
    for part in parts:
        if isinstance(part, int):
            key += f"[{part}]"
        else:
            key = f"{key}.{part}" if key else str(part)
    return key


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _log_fields(request: Request, **fields: Any) -> dict[str, Any]:
    return {
        "request_id": _request_id(request),
        "method": request.method,
        "path": request.url.path,
        **fields,
    }


def _respond(request: Request, problem: ProblemDetail, extra: dict[str, Any] | None = None) -> JSONResponse:
    body = problem.model_dump(exclude_none=True)
    body.update(extra or {})
    if request_id := _request_id(request):
        body["request_id"] = request_id
    return JSONResponse(body, status_code=problem.status, media_type=PROBLEM_JSON)


def _validation_response(
    request: Request,
    errors: dict[str, list[str]],
    *,
    detail: str,
    title: str = "Validation Error",
    type_: str = "validation-error",
    instance: str | None = None,
) -> JSONResponse:
    for field in errors:
        tracking.track_validation_error(route_template(request), field)
    logger.warning(detail, extra=_log_fields(request, fields=sorted(errors)))

    problem = ValidationProblemDetail(
        type=type_,
        title=title,
        status=status.HTTP_400_BAD_REQUEST,
        detail=detail,
        instance=instance or request.url.path,
        errors=errors,
    )
    return _respond(request, problem)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    tracking.track_error(
        error_type=exc.type,
        endpoint=route_template(request),
        status_code=exc.status_code,
        extra={"detail": exc.detail},
    )
    logger.warning(
        "%s: %s",
        exc.type,
        exc.detail,
        extra=_log_fields(request, status_code=exc.status_code),
    )

    problem = ProblemDetail(
        type=exc.type,
        title=exc.title,
        status=exc.status_code,
        detail=exc.detail,
        instance=exc.instance or request.url.path,
    )
    return _respond(request, problem, exc.extra)


async def command_validation_exception_handler(
    request: Request, exc: CommandValidationException
) -> JSONResponse:
    """400 listing every violated rule, grouped by field."""
    return _validation_response(
        request,
        exc.errors,
        detail=exc.detail,
        title=exc.title,
        type_=exc.type,
        instance=exc.instance,
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed input (wrong JSON types, bad UUIDs, missing fields) as a 400.

    Uses the same ``errors`` shape as rule violations, so clients handle
    both the same way.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(field_key(error["loc"]), []).append(error["msg"])

    return _validation_response(
        request,
        errors,
        detail=f"Request validation failed for {len(errors)} field(s)",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    tracking.track_unhandled_exception(
        exception_type=type(exc).__name__,
        endpoint=route_template(request),
    )
    logger.error(
        "Unhandled %s",
        type(exc).__name__,
        extra=_log_fields(request),
        exc_info=exc,
    )

    # The message may hold internals; it only goes to the log
    problem = ProblemDetail(
        type="internal-error",
        title=default_title(status.HTTP_500_INTERNAL_SERVER_ERROR),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        instance=request.url.path,
    )
    return _respond(request, problem)


def configure_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CommandValidationException, command_validation_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)


__all__ = [
    "PROBLEM_JSON",
    "app_exception_handler",
    "command_validation_exception_handler",
    "configure_exception_handlers",
    "field_key",
    "generic_exception_handler",
    "request_validation_exception_handler",
]
