"""Activity log database model.

Append-only trail of account lifecycle events. Inherits from BaseModel (NOT
BaseMutableModel): entries have no updated_at because they are never changed.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from erp_identity.infrastructure.persistence.base import BaseModel


class ActivityLogModel(BaseModel):
    """Activity log entry.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at: When it happened (from BaseModel)
        action: ActivityAction value (e.g. "account_deleted")
        account_id: Account affected (null for unknown-email logins)
        actor_id: Account that acted (null for anonymous logins)
        source_address: Client address
        context: JSON details (never secrets)

    Indexes:
        - ix_activity_logs_account_action: (account_id, action)
        - ix_activity_logs_actor: (actor_id)
    """

    __tablename__ = "activity_logs"

    action: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    actor_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    source_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    context: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        Index("ix_activity_logs_account_action", "account_id", "action"),
        Index("ix_activity_logs_actor", "actor_id"),
    )
