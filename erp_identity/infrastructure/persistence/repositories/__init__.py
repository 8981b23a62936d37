"""SQLAlchemy repositories."""

from erp_identity.infrastructure.persistence.repositories.account_repository import (
    SQLAlchemyAccountRepository,
    live_accounts_filter,
)

__all__ = ["SQLAlchemyAccountRepository", "live_accounts_filter"]
