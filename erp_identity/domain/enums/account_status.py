"""Account status values.

Closed set of lifecycle states. DELETED is terminal: a soft-deleted account
keeps its row (and its email reservation) but never changes state again.

Transitions:
    ACTIVE <-> INACTIVE <-> SUSPENDED (any order, administrative)
    ACTIVE | INACTIVE | SUSPENDED -> DELETED (soft delete only)
    DELETED -> (none)
"""

from enum import Enum


class AccountStatus(str, Enum):
    """Lifecycle status of an account."""

    ACTIVE = "active"
    """Account may authenticate."""

    INACTIVE = "inactive"
    """Disabled by an administrator; cannot authenticate."""

    SUSPENDED = "suspended"
    """Temporarily barred (e.g. pending investigation); cannot authenticate."""

    DELETED = "deleted"
    """Soft-deleted; terminal and excluded from normal lookups."""

    @property
    def can_authenticate(self) -> bool:
        """Only active accounts may log in."""
        return self is AccountStatus.ACTIVE

    @property
    def is_terminal(self) -> bool:
        """True for states with no outgoing transition."""
        return self is AccountStatus.DELETED

    @classmethod
    def values(cls) -> list[str]:
        """Get all status values as strings."""
        return [status.value for status in cls]
