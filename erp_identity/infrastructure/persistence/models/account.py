"""Account database model.

Security:
    - credential_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - verification_token: single use, cleared once consumed
    - failed_login_count / locked_until: lockout counters, written only by
      single-statement updates in the repository

Soft delete:
    status = 'deleted' keeps the row. Its email stays reserved by the unique
    constraint.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from erp_identity.core.constants import (
    DEPARTMENT_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    EMPLOYEE_ID_MAX_LENGTH,
    NAME_MAX_LENGTH,
    POSITION_MAX_LENGTH,
    TOKEN_HEX_LENGTH,
)
from erp_identity.infrastructure.persistence.base import BaseMutableModel


class AccountModel(BaseMutableModel):
    """Account row.

    Fields:
        id, created_at, updated_at: from BaseMutableModel
        email: Unique, stored lower-cased
        employee_id: Unique when present
        status: active | inactive | suspended | deleted
        permissions: JSON list of capability strings
        preferences: JSON object (language, timezone, theme, notifications)

    Indexes:
        - uq_accounts_email: (email) unique
        - uq_accounts_employee_id: (employee_id) unique
        - ix_accounts_status_role: (status, role) for listings
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        nullable=False,
        comment="Email address (unique, lowercase)",
    )
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    role: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Reference to an externally managed role",
    )
    credential_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        comment="active | inactive | suspended | deleted",
    )
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Profile
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    department: Mapped[str | None] = mapped_column(
        String(DEPARTMENT_MAX_LENGTH), nullable=True
    )
    position: Mapped[str | None] = mapped_column(String(POSITION_MAX_LENGTH), nullable=True)
    employee_id: Mapped[str | None] = mapped_column(
        String(EMPLOYEE_ID_MAX_LENGTH), nullable=True
    )
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    preferences: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Verification
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verification_token: Mapped[str | None] = mapped_column(
        String(TOKEN_HEX_LENGTH), nullable=True, index=True
    )
    verification_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Credential lifecycle
    must_change_credential: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    credential_changed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    credential_reset_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    credential_reset_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)

    # Login tracking
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_login_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    failed_login_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Consecutive failed logins in the current window",
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Lockout expiry (null when unlocked)",
    )

    # Audit
    created_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    updated_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    deleted_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index("uq_accounts_email", "email", unique=True),
        Index("uq_accounts_employee_id", "employee_id", unique=True),
        Index("ix_accounts_status_role", "status", "role"),
    )

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, email={self.email!r}, status={self.status!r})>"
