"""AccountRepository protocol for account persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.

Every method returns a Result: driver failures come back as
Failure(StoreError) instead of raised exceptions.
"""

from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal, Protocol
from uuid import UUID

from erp_identity.core.result import Result
from erp_identity.domain.entities.account import Account, LoginAttemptState
from erp_identity.domain.enums import AccountStatus
from erp_identity.domain.errors import StoreError

CREDENTIAL_FIELDS = frozenset(
    {
        "credential_hash",
        "must_change_credential",
        "credential_changed_at",
        "credential_reset_at",
        "credential_reset_by",
    }
)
VERIFICATION_FIELDS = frozenset(
    {"is_verified", "verification_token", "verification_expires_at"}
)
DELETION_FIELDS = frozenset({"status", "deleted_at", "deleted_by"})
AUDIT_FIELDS = frozenset({"updated_by", "updated_at"})

SortField = Literal["created_at", "last_name", "email", "last_login_at"]
SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountFilters:
    """Listing criteria.

    Deleted accounts are excluded unless status is DELETED.

    Attributes:
        search: Case-insensitive match on first name, last name or email.
        role: Exact role reference.
        status: Exact status.
        sort_by: Column to sort by.
        sort_order: "asc" or "desc".
        offset: Rows to skip.
        limit: Maximum rows returned.
    """

    search: str | None = None
    role: str | None = None
    status: AccountStatus | None = None
    sort_by: SortField = "created_at"
    sort_order: SortOrder = "desc"
    offset: int = 0
    limit: int = 10


class AccountRepository(Protocol):
    """Account repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Live accounts are those whose status is not DELETED. Lookups by id and
    verification token see live accounts only; email lookups see every
    account because emails stay reserved after deletion.

    Every write touches only the columns its operation owns. update() writes
    the fields it is given (profile patch, CREDENTIAL_FIELDS,
    VERIFICATION_FIELDS or DELETION_FIELDS, each with AUDIT_FIELDS), so a
    stale entity read before a concurrent write cannot put old values back.
    Login counters (failed_login_count, locked_until, last_login_*) are
    written only by record_failed_login, record_successful_login and
    clear_lockout.

    Lockout state machine applied by record_failed_login and
    record_successful_login, one statement each:
        Unlocked(n) --success-->                      Unlocked(0), login recorded
        Unlocked(n) --failure, n + 1 < threshold-->   Unlocked(n + 1)
        Unlocked(n) --failure, n + 1 >= threshold-->  Locked(now + lockout)
        Locked(t)   --any attempt, t > now-->         rejected, state unchanged
        Locked(t)   --failure, t <= now-->            Unlocked(1)
        Locked(t)   --success, t <= now-->            Unlocked(0), login recorded
    """

    async def find_by_id(
        self,
        account_id: UUID,
        *,
        include_deleted: bool = False,
    ) -> Result[Account | None, StoreError]:
        """Find account by ID.

        Args:
            account_id: Account identifier.
            include_deleted: Also return soft-deleted accounts.

        Returns:
            Success(Account) if found, Success(None) otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> Result[Account | None, StoreError]:
        """Find account by email (case-insensitive, any status)."""
        ...

    async def find_by_verification_token(
        self, token: str
    ) -> Result[Account | None, StoreError]:
        """Find a live account holding the given verification token."""
        ...

    async def exists_by_email(self, email: str) -> Result[bool, StoreError]:
        """Check whether any account (deleted included) uses the email.

        Example:
            >>> match await repo.exists_by_email("jane@acme.com"):
            ...     case Success(value=True):
            ...         ...  # duplicate
        """
        ...

    async def exists_by_employee_id(
        self,
        employee_id: str,
        *,
        exclude_id: UUID | None = None,
    ) -> Result[bool, StoreError]:
        """Check whether another account uses the employee ID.

        Args:
            employee_id: Employee identifier to look for.
            exclude_id: Account to ignore (the one being updated).
        """
        ...

    async def save(self, account: Account) -> Result[None, StoreError]:
        """Insert a new account.

        Returns:
            Failure(StoreError) with EMAIL_ALREADY_EXISTS or
            EMPLOYEE_ID_ALREADY_EXISTS when a unique constraint is hit.
        """
        ...

    async def update(
        self, account: Account, *, fields: Collection[str]
    ) -> Result[bool, StoreError]:
        """Write the named fields of `account`, leaving every other column alone.

        The write is conditional on the stored row still being live, so two
        concurrent soft deletes cannot both succeed.

        Args:
            account: Entity holding the new values.
            fields: Attribute names to write, e.g. CREDENTIAL_FIELDS | AUDIT_FIELDS.

        Returns:
            Success(True) if a live row was updated, Success(False) if the
            account is missing or already deleted.
        """
        ...

    async def record_failed_login(
        self,
        account_id: UUID,
        *,
        now: datetime,
        threshold: int,
        lockout_duration: timedelta,
    ) -> Result[LoginAttemptState | None, StoreError]:
        """Atomically apply a failed login to the lockout counters.

        Executed as one statement so concurrent failures cannot under-count:
        two failures racing from count threshold - 1 leave the account locked.

        Returns:
            Success(LoginAttemptState) after the update, Success(None) if the
            account no longer exists.
        """
        ...

    async def record_successful_login(
        self,
        account_id: UUID,
        *,
        now: datetime,
        source_address: str | None,
    ) -> Result[bool, StoreError]:
        """Reset the lockout counters and store the login time and address.

        Conditional on the account being ACTIVE and not locked at `now`.

        Returns:
            Success(False) if the account stopped being ACTIVE or became
            locked since it was read; nothing is written then.
        """
        ...

    async def clear_lockout(
        self,
        account_id: UUID,
        *,
        updated_by: UUID,
        now: datetime,
    ) -> Result[bool, StoreError]:
        """Clear locked_until and failed_login_count on a live account.

        Returns:
            Success(False) if the account is missing or deleted.
        """
        ...

    async def search(
        self, filters: AccountFilters
    ) -> Result[tuple[list[Account], int], StoreError]:
        """List accounts matching the filters.

        Returns:
            Success((page_items, total_matching)).
        """
        ...
