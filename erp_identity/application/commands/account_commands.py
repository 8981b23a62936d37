"""Account lifecycle commands (write operations).

Commands represent intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- AccountLifecycleManager executes business logic
- Commands carry raw input; validation happens in the manager's pipeline
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class CreateAccount:
    """Create a new account with a generated temporary password.

    Attributes:
        first_name: Given name (1-50 characters after trimming).
        last_name: Family name (1-50 characters after trimming).
        email: Email address (validated, lower-cased).
        role: Reference to an externally managed role.
        send_welcome: Deliver the temporary password through the notifier.

    Example:
        >>> command = CreateAccount(
        ...     first_name="Jane",
        ...     last_name="Doe",
        ...     email="jane.doe@acme.com",
        ...     role="staff",
        ... )
        >>> result = await manager.create(actor, command)
    """

    first_name: str
    last_name: str
    email: str
    role: str
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    employee_id: str | None = None
    avatar_url: str | None = None
    permissions: tuple[str, ...] = ()
    preferences: Mapping[str, Any] | None = None
    send_welcome: bool = True
    source_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateAccount:
    """Apply an administrative patch to a live account.

    Attributes:
        account_id: Account to change.
        changes: Field name to new value. Limited to profile, role,
            permissions, preferences and status.
    """

    account_id: UUID
    changes: Mapping[str, Any] = field(default_factory=dict)
    source_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class SoftDeleteAccount:
    """Mark an account deleted. The row is kept."""

    account_id: UUID
    source_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResetCredential:
    """Replace an account's password with a new temporary one."""

    account_id: UUID
    source_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class UnlockAccount:
    """Clear a login lockout before it expires."""

    account_id: UUID
    source_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class ChangeCredential:
    """Account holder replaces their own password.

    Attributes:
        current_credential: Current password (plain text, verified).
        new_credential: New password (plain text, strength-checked, hashed).
    """

    current_credential: str = field(repr=False)
    new_credential: str = field(repr=False)
    source_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    """Consume a single-use email verification token."""

    token: str = field(repr=False)
    source_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class AuthenticateAccount:
    """Check an email and password against the lockout state machine.

    Attributes:
        email: Email as typed (normalized before lookup).
        credential: Password (plain text).
        source_address: Client address recorded on success.

    Example:
        >>> command = AuthenticateAccount(
        ...     email="jane.doe@acme.com",
        ...     credential="SecurePass123!",
        ...     source_address="203.0.113.7",
        ... )
        >>> result = await manager.authenticate(command)
    """

    email: str
    credential: str = field(repr=False)
    source_address: str | None = None
