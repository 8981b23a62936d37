"""Exception handlers turning framework-level failures into ProblemDetails.

Domain failures never reach these handlers: route handlers render them with
ErrorResponseBuilder. What arrives here is
- HTTPException from dependencies (actor resolution) and routing (404/405),
- RequestValidationError from FastAPI body/query parsing (422),
- anything unexpected (500, logged with the trace ID).
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from erp_identity.presentation.routers.api.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)
from erp_identity.presentation.routers.api.middleware.trace_middleware import get_trace_id

# status -> (title, problem type slug)
_STATUS_TITLES: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    409: ("Resource Conflict", "conflict"),
    415: ("Unsupported Media Type", "unsupported-media-type"),
    422: ("Validation Failed", "validation-failed"),
    423: ("Account Locked", "locked"),
    500: ("Internal Server Error", "internal-server-error"),
    502: ("Bad Gateway", "bad-gateway"),
    503: ("Service Unavailable", "service-unavailable"),
}


def _problem(
    request: Request,
    status_code: int,
    detail: str,
    *,
    headers: dict[str, str] | None = None,
    **extensions: Any,
) -> JSONResponse:
    title, slug = _STATUS_TITLES.get(status_code, ("Error", "error"))
    problem = ProblemDetails(
        type=f"{request.app.state.settings.api_base_url}/errors/{slug}",
        title=title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        trace_id=get_trace_id(),
        **extensions,
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


def _field_name(loc: Any) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query")]
    return ".".join(parts) or "request"


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """HTTPException (FastAPI or Starlette) as a problem document; headers kept."""
    assert isinstance(exc, StarletteHTTPException)
    return _problem(
        request,
        exc.status_code,
        exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Request parsing failures, one ErrorDetail per offending field.

    Locations drop their "body"/"query" prefix, so a malformed email on
    POST /accounts is reported as field "email".
    """
    assert isinstance(exc, RequestValidationError)
    field_errors = [
        ErrorDetail(
            field=_field_name(error.get("loc", ())),
            code=error.get("type", "validation_error"),
            message=error.get("msg", "Invalid value"),
        )
        for error in exc.errors()
    ]
    return _problem(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed. Check 'errors' for details.",
        code="validation_failed",
        errors=field_errors or None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with the trace ID, answer a bare 500."""
    request.app.state.services.logger.error(
        "Unhandled exception",
        error=exc,
        trace_id=get_trace_id(),
        request_path=request.url.path,
        request_method=request.method,
    )
    return _problem(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please contact support with the trace ID.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the three handlers on `app`."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
