"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention. Values are part of
the public contract: the request-handling layer renders messages from them,
so existing values must never change.

Categories:
- Validation errors (VALIDATION_*, *_TOO_WEAK, INVALID_STATUS_TRANSITION)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS, RESOURCE_CONFLICT)
- Authentication errors (INVALID_CREDENTIALS, ACCOUNT_LOCKED, ACCOUNT_DISABLED, TOKEN_*)
- Authorization errors (PERMISSION_DENIED, SELF_DELETION_FORBIDDEN)
- Collaborator errors (NOTIFICATION_FAILED, STORE_UNAVAILABLE, ACTIVITY_RECORD_FAILED)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    PASSWORD_TOO_WEAK = "password_too_weak"
    INVALID_STATUS_TRANSITION = "invalid_status_transition"

    # Resource errors
    ACCOUNT_NOT_FOUND = "account_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    EMPLOYEE_ID_ALREADY_EXISTS = "employee_id_already_exists"
    RESOURCE_CONFLICT = "resource_conflict"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_DISABLED = "account_disabled"
    TOKEN_INVALID = "token_invalid"
    TOKEN_EXPIRED = "token_expired"
    AUTHENTICATION_REQUIRED = "authentication_required"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"
    SELF_DELETION_FORBIDDEN = "self_deletion_forbidden"

    # Collaborator errors
    NOTIFICATION_FAILED = "notification_failed"
    STORE_UNAVAILABLE = "store_unavailable"
    ACTIVITY_RECORD_FAILED = "activity_record_failed"
