"""RFC 9457 response body used for every error the API returns."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """One offending field: which, why (code) and a readable message."""

    field: str
    code: str
    message: str


class ProblemDetails(BaseModel):
    """Problem document plus the extension members this API adds.

    `code` carries the stable ErrorCode value, `context` carries
    error-specific data such as locked_until, and `trace_id` matches the
    X-Trace-Id response header.
    """

    type: str = Field(..., description="Problem type URI ({api_base_url}/errors/{code})")
    title: str
    status: int
    detail: str
    instance: str = Field(..., description="Request path")
    code: str | None = None
    errors: list[ErrorDetail] | None = None
    context: dict[str, str] | None = None
    trace_id: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "https://api.acme.com/errors/account_locked",
                "title": "Account Locked",
                "status": 423,
                "detail": "Account locked after too many failed login attempts",
                "instance": "/api/v1/sessions",
                "code": "account_locked",
                "context": {"locked_until": "2026-01-15T11:00:00+00:00"},
                "trace_id": "0192b6c4-7d2e-7c41-9a55-3f0e1d2c4b6a",
            }
        }
    )
