"""Activity logger protocol (port).

Records who did what to which account. Entries are append-only.

Usage:
    result = await activity_logger.record(
        action=ActivityAction.ACCOUNT_DELETED,
        account_id=account.id,
        actor_id=actor.id,
        source_address="203.0.113.7",
        context={"email": account.email},
    )
"""

from typing import Any, Protocol
from uuid import UUID

from erp_identity.core.result import Result
from erp_identity.domain.enums import ActivityAction
from erp_identity.domain.errors import ActivityLogError


class ActivityLoggerProtocol(Protocol):
    """Protocol for account activity trails.

    Error Handling:
        Returns Failure(ActivityLogError) instead of raising. Callers treat
        activity recording as best-effort.
    """

    async def record(
        self,
        *,
        action: ActivityAction,
        account_id: UUID | None,
        actor_id: UUID | None = None,
        source_address: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> Result[None, ActivityLogError]:
        """Append an activity entry.

        Args:
            action: What happened.
            account_id: Account affected (None for unknown-email logins).
            actor_id: Who did it (None for anonymous logins).
            source_address: Client address, when known.
            context: Extra JSON-serializable details. Never secrets.
        """
        ...
