"""Core errors package.

Usage:
    from erp_identity.core.errors import DomainError, ValidationError, NotFoundError
"""

from erp_identity.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from erp_identity.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
]
