"""Capabilities gating account operations.

A capability is a `resource:action` permission string. An actor's effective
capabilities are the ones its role grants plus the fine-grained permissions
stored on its own account.

Usage:
    if Capability.ACCOUNT_DELETE in effective_capabilities:
        ...
"""

from enum import Enum


class Capability(str, Enum):
    """Named permissions checked inside lifecycle operations."""

    ACCOUNT_CREATE = "account:create"
    ACCOUNT_EDIT = "account:edit"
    ACCOUNT_DELETE = "account:delete"
    ACCOUNT_RESET_CREDENTIAL = "account:reset-credential"
    ACCOUNT_UNLOCK = "account:unlock"
    ACCOUNT_READ = "account:read"

    @classmethod
    def values(cls) -> list[str]:
        """Get all capability values as strings."""
        return [capability.value for capability in cls]
