"""Account domain errors.

AccountError holds the human-readable messages returned alongside error
codes; AccountLockedError carries the lock expiry so callers can tell the
user when to retry.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)
"""

from dataclasses import dataclass
from datetime import datetime

from erp_identity.core.errors import AuthenticationError


class AccountError:
    """Account error message constants."""

    # -------------------------------------------------------------------------
    # Lookup / Conflict
    # -------------------------------------------------------------------------

    ACCOUNT_NOT_FOUND = "Account not found"
    EMAIL_ALREADY_EXISTS = "An account with this email already exists"
    EMPLOYEE_ID_ALREADY_EXISTS = "An account with this employee ID already exists"

    # -------------------------------------------------------------------------
    # Authorization
    # -------------------------------------------------------------------------

    PERMISSION_DENIED = "Actor lacks the required capability"
    SELF_DELETION_FORBIDDEN = "Cannot delete your own account"

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    INVALID_CREDENTIALS = "Invalid email or password"
    ACCOUNT_LOCKED = "Account locked after too many failed login attempts"
    ACCOUNT_DISABLED = "Account is not active"

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    DELETED_IS_TERMINAL = "Deleted accounts cannot change status"
    DELETE_VIA_SOFT_DELETE = "Use the delete operation to delete an account"

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    TOKEN_INVALID = "Verification token is invalid"
    TOKEN_EXPIRED = "Verification token has expired"

    # -------------------------------------------------------------------------
    # Notification
    # -------------------------------------------------------------------------

    RESET_NOT_DELIVERED = (
        "Credential was reset but the new temporary password could not be delivered"
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountLockedError(AuthenticationError):
    """Authentication rejected because the lockout window is still open.

    Attributes:
        locked_until: When the lock expires (UTC).
    """

    locked_until: datetime
