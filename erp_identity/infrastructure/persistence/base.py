"""Declarative bases for the account tables.

    BaseModel          id (UUIDv7) + created_at; used as-is by ActivityLogModel
    BaseMutableModel   adds updated_at; used by AccountModel

ORM models never leave the persistence package: repositories map them to and
from domain entities. Column types are the generic Uuid and
DateTime(timezone=True) so the same models run on PostgreSQL and on the
SQLite databases used by the integration tests.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Root of every table; append-only tables use it directly."""

    __abstract__ = True

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid7)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


class BaseMutableModel(BaseModel):
    """Base for rows that are updated in place.

    Repositories set updated_at from the domain entity; the server default
    and onupdate only apply when a statement leaves it out (e.g. the
    failed-login counter UPDATE).
    """

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
