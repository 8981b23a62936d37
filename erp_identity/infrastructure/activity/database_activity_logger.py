"""Database activity logger (adapter).

Implements ActivityLoggerProtocol by appending ActivityLogModel rows. Each
entry is committed in its own session, independent of the lifecycle write it
describes.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from erp_identity.core.enums import ErrorCode
from erp_identity.core.result import Failure, Result, Success
from erp_identity.domain.enums import ActivityAction
from erp_identity.domain.errors import ActivityLogError
from erp_identity.infrastructure.persistence.database import Database
from erp_identity.infrastructure.persistence.models.activity_log import (
    ActivityLogModel,
)


class DatabaseActivityLogger:
    """Append-only activity trail stored in the activity_logs table.

    This adapter is stateless; all state lives in the database.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

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

        Returns:
            Success(None) if recorded, Failure(ActivityLogError) if the
            database operation failed.
        """
        try:
            async with self._database.get_session() as session:
                session.add(
                    ActivityLogModel(
                        action=action.value,
                        account_id=account_id,
                        actor_id=actor_id,
                        source_address=source_address,
                        context=context,
                    )
                )
            return Success(value=None)

        except (SQLAlchemyError, OSError, TimeoutError) as e:
            return Failure(
                error=ActivityLogError(
                    code=ErrorCode.ACTIVITY_RECORD_FAILED,
                    message=f"Failed to record activity: {e}",
                    details={
                        "action": action.value,
                        "error_type": type(e).__name__,
                    },
                )
            )
