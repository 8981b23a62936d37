"""Error response builder for RFC 9457 Problem Details.

Converts DomainError values returned by the application layer into RFC 9457
JSON responses.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 9457 responses
"""

from datetime import UTC, datetime
from math import ceil

from fastapi import Request, status
from fastapi.responses import JSONResponse

from erp_identity.core.enums import ErrorCode
from erp_identity.core.errors import DomainError
from erp_identity.domain.errors import AccountLockedError
from erp_identity.presentation.routers.api.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_WEAK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STATUS_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTHENTICATION_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.SELF_DELETION_FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_DISABLED: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.EMPLOYEE_ID_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.RESOURCE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    ErrorCode.NOTIFICATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_TITLES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Validation Failed",
    ErrorCode.PASSWORD_TOO_WEAK: "Validation Failed",
    ErrorCode.INVALID_STATUS_TRANSITION: "Invalid Status Transition",
    ErrorCode.TOKEN_INVALID: "Invalid Token",
    ErrorCode.TOKEN_EXPIRED: "Token Expired",
    ErrorCode.INVALID_CREDENTIALS: "Invalid Credentials",
    ErrorCode.AUTHENTICATION_REQUIRED: "Authentication Required",
    ErrorCode.PERMISSION_DENIED: "Access Denied",
    ErrorCode.SELF_DELETION_FORBIDDEN: "Access Denied",
    ErrorCode.ACCOUNT_DISABLED: "Account Disabled",
    ErrorCode.ACCOUNT_NOT_FOUND: "Resource Not Found",
    ErrorCode.EMAIL_ALREADY_EXISTS: "Resource Conflict",
    ErrorCode.EMPLOYEE_ID_ALREADY_EXISTS: "Resource Conflict",
    ErrorCode.RESOURCE_CONFLICT: "Resource Conflict",
    ErrorCode.ACCOUNT_LOCKED: "Account Locked",
    ErrorCode.NOTIFICATION_FAILED: "Notification Failed",
    ErrorCode.STORE_UNAVAILABLE: "Service Unavailable",
}


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> error = NotFoundError(
        ...     code=ErrorCode.ACCOUNT_NOT_FOUND,
        ...     message="Account not found",
        ...     resource_type="Account",
        ...     resource_id="0192...",
        ... )
        >>> response = ErrorResponseBuilder.from_domain_error(
        ...     error=error,
        ...     request=request,
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    @staticmethod
    def from_domain_error(
        error: DomainError,
        request: Request,
        trace_id: str,
    ) -> JSONResponse:
        """Convert a DomainError to an RFC 9457 JSON response.

        Args:
            error: Error returned by the application layer
            request: FastAPI Request object (for instance URL)
            trace_id: Request trace ID for debugging

        Returns:
            JSONResponse with RFC 9457 ProblemDetails content
        """
        status_code = ErrorResponseBuilder.get_status_code(error.code)

        problem = ProblemDetails(
            type=f"{request.app.state.settings.api_base_url}/errors/{error.code.value}",
            title=ErrorResponseBuilder._get_title(error.code),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            code=error.code.value,
            errors=None,
            context=dict(error.details) if error.details else None,
            trace_id=trace_id or None,
        )

        # Validation and conflict errors name the offending field
        field_name = getattr(error, "field", None) or getattr(error, "conflicting_field", None)
        if field_name:
            problem.errors = [
                ErrorDetail(
                    field=field_name,
                    code=error.code.value,
                    message=error.message,
                )
            ]

        headers: dict[str, str] | None = None
        if isinstance(error, AccountLockedError):
            retry_after = (error.locked_until - datetime.now(UTC)).total_seconds()
            headers = {"Retry-After": str(max(ceil(retry_after), 0))}

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers,
        )

    @staticmethod
    def get_status_code(code: ErrorCode) -> int:
        """Map an error code to an HTTP status code.

        Example:
            >>> ErrorResponseBuilder.get_status_code(ErrorCode.ACCOUNT_LOCKED)
            423
        """
        return _STATUS_CODES.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def _get_title(code: ErrorCode) -> str:
        return _TITLES.get(code, "Internal Server Error")
