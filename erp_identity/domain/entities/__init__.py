"""Domain entities."""

from erp_identity.domain.entities.account import Account, LoginAttemptState

__all__ = ["Account", "LoginAttemptState"]
