"""Account DTOs (Data Transfer Objects).

Result dataclasses carried from the lifecycle manager and query service back
to the presentation layer. None of them carry a credential hash.
"""

from dataclasses import dataclass, field
from datetime import datetime
from math import ceil
from typing import Any
from uuid import UUID

from erp_identity.domain.entities import Account


@dataclass(frozen=True, kw_only=True)
class Actor:
    """Resolved caller of an operation.

    Attributes:
        id: Account id of the caller.
        role: Caller's role reference.
        capabilities: Effective capabilities (role grants plus the caller's
            own permissions).
    """

    id: UUID
    role: str = ""
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        """Check for a capability."""
        return capability in self.capabilities


@dataclass(frozen=True, kw_only=True)
class AccountView:
    """Externally visible account fields."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: str
    status: str
    permissions: list[str]
    phone_number: str | None
    department: str | None
    position: str | None
    employee_id: str | None
    avatar_url: str | None
    preferences: dict[str, Any]
    is_verified: bool
    must_change_credential: bool
    is_locked: bool
    failed_login_count: int
    locked_until: datetime | None
    last_login_at: datetime | None
    credential_changed_at: datetime | None
    created_by: UUID | None
    updated_by: UUID | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, account: Account, now: datetime | None = None) -> "AccountView":
        """Project an entity, dropping credential and token fields."""
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            full_name=account.full_name,
            role=account.role,
            status=account.status.value,
            permissions=sorted(account.permissions),
            phone_number=account.phone_number,
            department=account.department,
            position=account.position,
            employee_id=account.employee_id,
            avatar_url=account.avatar_url,
            preferences=account.preferences.to_dict(),
            is_verified=account.is_verified,
            must_change_credential=account.must_change_credential,
            is_locked=account.is_locked(now),
            failed_login_count=account.failed_login_count,
            locked_until=account.locked_until,
            last_login_at=account.last_login_at,
            credential_changed_at=account.credential_changed_at,
            created_by=account.created_by,
            updated_by=account.updated_by,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


@dataclass(frozen=True, kw_only=True)
class CreateAccountResult:
    """Outcome of account creation.

    Notification problems never fail the creation; they surface here.

    Attributes:
        account: The new account.
        notification_delivered: True when the welcome message was accepted.
        notification_error_code: Error code when delivery failed, else None.
    """

    account: AccountView
    notification_delivered: bool
    notification_error_code: str | None = None


@dataclass(frozen=True, kw_only=True)
class AuthResult:
    """Response from successful authentication.

    Attributes:
        account_id: Authenticated account.
        email: Normalized email.
        role: Role reference.
        permissions: Effective capabilities (role grants plus account
            permissions).
        must_change_credential: True while a temporary password is in use.
    """

    account_id: UUID
    email: str
    role: str
    permissions: frozenset[str]
    must_change_credential: bool


@dataclass(frozen=True, kw_only=True)
class Pagination:
    """Page position within a listing."""

    current_page: int
    total_pages: int
    total: int
    limit: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        """Compute page counts from a total.

        Example:
            >>> Pagination.build(page=2, limit=10, total=25).has_next_page
            True
        """
        total_pages = ceil(total / limit) if total else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total=total,
            limit=limit,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


@dataclass(frozen=True, kw_only=True)
class AccountPage:
    """One page of accounts."""

    items: list[AccountView]
    pagination: Pagination
