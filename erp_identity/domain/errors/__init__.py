"""Domain errors package.

Usage:
    from erp_identity.domain.errors import AccountError, AccountLockedError, StoreError
"""

from erp_identity.domain.errors.account_error import AccountError, AccountLockedError
from erp_identity.domain.errors.activity_error import ActivityLogError
from erp_identity.domain.errors.notification_error import NotificationError
from erp_identity.domain.errors.store_error import StoreError

__all__ = [
    "AccountError",
    "AccountLockedError",
    "ActivityLogError",
    "NotificationError",
    "StoreError",
]
