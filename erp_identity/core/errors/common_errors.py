"""Common error classes used across the service.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- ConflictError: Resource conflicts (duplicate email, employee id)
- AuthenticationError: Authentication failures
- AuthorizationError: Missing capability or forbidden action

Usage:
    return Failure(error=ValidationError(
        code=ErrorCode.VALIDATION_FAILED,
        message="First name cannot exceed 50 characters",
        field="first_name",
    ))
"""

from dataclasses import dataclass

from erp_identity.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (Account).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate unique value).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (email, employee_id).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (invalid credentials, disabled account)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure.

    Attributes:
        required_permission: Capability that was required, if any.
    """

    required_permission: str | None = None
