"""Activity log action types.

Every lifecycle operation records one of these actions through the activity
logger. Values are stored as plain strings, so new actions need no schema
change.
"""

from enum import Enum


class ActivityAction(str, Enum):
    """Auditable account activity."""

    # Administrative lifecycle
    ACCOUNT_CREATED = "account_created"
    ACCOUNT_UPDATED = "account_updated"
    ACCOUNT_DELETED = "account_deleted"
    ACCOUNT_UNLOCKED = "account_unlocked"
    CREDENTIAL_RESET = "credential_reset"
    CREDENTIAL_RESET_NOTIFICATION_FAILED = "credential_reset_notification_failed"

    # Self-service
    CREDENTIAL_CHANGED = "credential_changed"
    EMAIL_VERIFIED = "email_verified"

    # Authentication
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    ACCOUNT_LOCKED = "account_locked"
