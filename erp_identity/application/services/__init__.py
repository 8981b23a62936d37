"""Application services."""

from erp_identity.application.services.account_lifecycle_manager import (
    AccountLifecycleManager,
    utc_now,
)

__all__ = ["AccountLifecycleManager", "utc_now"]
