"""RFC 9457 error response schemas and exception handlers.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 compliant error response schema
    ErrorResponseBuilder: Utility for building RFC 9457 responses
    register_exception_handlers: Register global exception handlers with FastAPI
"""

from erp_identity.presentation.routers.api.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from erp_identity.presentation.routers.api.errors.exception_handlers import (
    register_exception_handlers,
)
from erp_identity.presentation.routers.api.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
