"""Account domain entity.

Pure business logic, no framework dependencies.

The entity reads its lockout state (is_locked, lock_expired) but never
advances it: failed and successful logins are applied by the repository in
single conditional statements, see AccountRepository.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from erp_identity.domain.enums import AccountStatus
from erp_identity.domain.value_objects.preferences import Preferences


@dataclass(frozen=True, slots=True)
class LoginAttemptState:
    """Lockout counters after a login attempt was applied.

    Attributes:
        failed_login_count: Consecutive failures in the current window.
        locked_until: Lock expiry, None when unlocked.
    """

    failed_login_count: int
    locked_until: datetime | None


@dataclass
class Account:
    """Account domain entity with lifecycle and lockout rules.

    Business Rules:
        - Email is unique across all accounts, deleted ones included
        - Only ACTIVE accounts can authenticate
        - DELETED is terminal
        - Account locks after 5 consecutive failed logins, for 2 hours
        - An expired lock is cleared by the next attempt

    The credential hash and verification token are excluded from repr so
    they never end up in logs.
    """

    id: UUID
    email: str
    first_name: str
    last_name: str
    role: str
    credential_hash: str = field(repr=False)
    created_at: datetime
    updated_at: datetime

    # Profile
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    employee_id: str | None = None
    avatar_url: str | None = None
    preferences: Preferences = field(default_factory=Preferences)

    # Authorization
    permissions: frozenset[str] = field(default_factory=frozenset)

    # Status and verification
    status: AccountStatus = AccountStatus.ACTIVE
    is_verified: bool = False
    verification_token: str | None = field(default=None, repr=False)
    verification_expires_at: datetime | None = None

    # Credential lifecycle
    must_change_credential: bool = False
    credential_changed_at: datetime | None = None
    credential_reset_at: datetime | None = None
    credential_reset_by: UUID | None = None

    # Login tracking
    last_login_at: datetime | None = None
    last_login_address: str | None = None
    failed_login_count: int = 0
    locked_until: datetime | None = None

    # Audit
    created_by: UUID | None = None
    updated_by: UUID | None = None
    deleted_at: datetime | None = None
    deleted_by: UUID | None = None

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name} {self.last_name}"

    @property
    def is_deleted(self) -> bool:
        """True once the account has been soft-deleted."""
        return self.status is AccountStatus.DELETED

    def is_locked(self, now: datetime | None = None) -> bool:
        """Check whether the lockout window is still open.

        Example:
            >>> account.locked_until = datetime.now(UTC) + timedelta(minutes=10)
            >>> account.is_locked()
            True
        """
        if self.locked_until is None:
            return False
        return (now or datetime.now(UTC)) < self.locked_until

    def lock_expired(self, now: datetime | None = None) -> bool:
        """True when a lock was set and its window has passed."""
        if self.locked_until is None:
            return False
        return self.locked_until <= (now or datetime.now(UTC))

    @property
    def login_attempt_state(self) -> LoginAttemptState:
        """Snapshot of the lockout counters."""
        return LoginAttemptState(
            failed_login_count=self.failed_login_count,
            locked_until=self.locked_until,
        )

    def can_transition_to(self, status: AccountStatus) -> bool:
        """Check whether an administrative status change is allowed.

        DELETED accounts never move; DELETED itself is only reachable through
        soft_delete().
        """
        if self.status.is_terminal:
            return False
        return status is not AccountStatus.DELETED

    def soft_delete(self, actor_id: UUID, now: datetime | None = None) -> None:
        """Mark the account deleted, keeping the row."""
        now = now or datetime.now(UTC)
        self.status = AccountStatus.DELETED
        self.deleted_at = now
        self.deleted_by = actor_id
        self.updated_by = actor_id
        self.updated_at = now

    def rotate_credential(
        self,
        credential_hash: str,
        *,
        reset_by: UUID | None,
        now: datetime | None = None,
    ) -> None:
        """Replace the credential hash.

        Args:
            credential_hash: New hash (never plaintext).
            reset_by: Administrator performing a reset, or None when the
                account holder changes their own password.
        """
        now = now or datetime.now(UTC)
        self.credential_hash = credential_hash
        self.credential_changed_at = now
        self.updated_at = now
        if reset_by is None:
            self.must_change_credential = False
            self.updated_by = self.id
        else:
            self.must_change_credential = True
            self.credential_reset_at = now
            self.credential_reset_by = reset_by
            self.updated_by = reset_by

    def verification_expired(self, now: datetime | None = None) -> bool:
        """True when the pending verification token can no longer be used."""
        if self.verification_expires_at is None:
            return True
        return self.verification_expires_at <= (now or datetime.now(UTC))

    def mark_verified(self, now: datetime | None = None) -> None:
        """Mark the email verified and consume the token."""
        self.is_verified = True
        self.verification_token = None
        self.verification_expires_at = None
        self.updated_at = now or datetime.now(UTC)
