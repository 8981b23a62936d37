"""AccountRepository - SQLAlchemy implementation of AccountRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Account entities and AccountModel rows.

Every method opens its own short session from Database, so each call is one
transaction. Driver failures are returned as Failure(StoreError), never
raised.
"""

from collections.abc import Awaitable, Callable, Collection
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import (
    ColumnElement,
    DateTime,
    and_,
    case,
    func,
    literal,
    null,
    or_,
    select,
    update,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from erp_identity.core.enums import ErrorCode
from erp_identity.core.result import Failure, Result, Success
from erp_identity.domain.entities import Account, LoginAttemptState
from erp_identity.domain.enums import AccountStatus
from erp_identity.domain.errors import StoreError
from erp_identity.domain.protocols import AccountFilters
from erp_identity.domain.value_objects.preferences import Preferences
from erp_identity.infrastructure.persistence.database import Database
from erp_identity.infrastructure.persistence.models.account import AccountModel

T = TypeVar("T")

_SORT_COLUMNS = {
    "created_at": AccountModel.created_at,
    "last_name": AccountModel.last_name,
    "email": AccountModel.email,
    "last_login_at": AccountModel.last_login_at,
}


def live_accounts_filter() -> ColumnElement[bool]:
    """Predicate selecting accounts that are not soft-deleted.

    Applied to every id/token lookup and every conditional write.

    Example:
        >>> select(AccountModel).where(live_accounts_filter())
    """
    return AccountModel.status != AccountStatus.DELETED.value


def _as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite returns them without tzinfo)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _store_error(error: Exception, operation: str) -> StoreError:
    """Map a driver exception to StoreError."""
    details = {"operation": operation, "error_type": type(error).__name__}
    if isinstance(error, IntegrityError):
        message = str(error.orig).lower()
        if "employee_id" in message:
            return StoreError(
                code=ErrorCode.EMPLOYEE_ID_ALREADY_EXISTS,
                message="Employee ID already in use",
                conflicting_field="employee_id",
                details=details,
            )
        if "email" in message:
            return StoreError(
                code=ErrorCode.EMAIL_ALREADY_EXISTS,
                message="Email already in use",
                conflicting_field="email",
                details=details,
            )
        return StoreError(
            code=ErrorCode.RESOURCE_CONFLICT,
            message="Write conflicts with existing data",
            details=details,
        )
    return StoreError(
        code=ErrorCode.STORE_UNAVAILABLE,
        message=f"Account store unavailable during {operation}",
        details=details,
    )


class SQLAlchemyAccountRepository:
    """SQLAlchemy implementation of AccountRepository protocol.

    This class does NOT inherit from AccountRepository protocol (Protocol
    uses structural typing).

    Example:
        >>> repo = SQLAlchemyAccountRepository(database)
        >>> match await repo.find_by_email("jane.doe@acme.com"):
        ...     case Success(value=account):
        ...         ...
    """

    def __init__(self, database: Database) -> None:
        """Initialize repository.

        Args:
            database: Session factory owner.
        """
        self._database = database

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
    ) -> Result[T, StoreError]:
        try:
            async with self._database.get_session() as session:
                value = await work(session)
            return Success(value=value)
        except (SQLAlchemyError, OSError, TimeoutError) as e:
            return Failure(error=_store_error(e, operation))

    # =========================================================================
    # Lookups
    # =========================================================================

    async def find_by_id(
        self,
        account_id: UUID,
        *,
        include_deleted: bool = False,
    ) -> Result[Account | None, StoreError]:
        """Find account by ID (live accounts unless include_deleted)."""
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        if not include_deleted:
            stmt = stmt.where(live_accounts_filter())
        return await self._run("find_by_id", lambda s: self._fetch_one(s, stmt))

    async def find_by_email(self, email: str) -> Result[Account | None, StoreError]:
        """Find account by email (case-insensitive, any status)."""
        stmt = select(AccountModel).where(
            AccountModel.email == email.strip().lower()
        )
        return await self._run("find_by_email", lambda s: self._fetch_one(s, stmt))

    async def find_by_verification_token(
        self, token: str
    ) -> Result[Account | None, StoreError]:
        """Find a live account holding the verification token."""
        stmt = select(AccountModel).where(
            AccountModel.verification_token == token,
            live_accounts_filter(),
        )
        return await self._run(
            "find_by_verification_token", lambda s: self._fetch_one(s, stmt)
        )

    async def exists_by_email(self, email: str) -> Result[bool, StoreError]:
        """Check whether any account, deleted ones included, uses the email."""
        stmt = select(AccountModel.id).where(
            AccountModel.email == email.strip().lower()
        )
        return await self._run("exists_by_email", lambda s: self._exists(s, stmt))

    async def exists_by_employee_id(
        self,
        employee_id: str,
        *,
        exclude_id: UUID | None = None,
    ) -> Result[bool, StoreError]:
        """Check whether another account uses the employee ID."""
        stmt = select(AccountModel.id).where(AccountModel.employee_id == employee_id)
        if exclude_id is not None:
            stmt = stmt.where(AccountModel.id != exclude_id)
        return await self._run("exists_by_employee_id", lambda s: self._exists(s, stmt))

    async def search(
        self, filters: AccountFilters
    ) -> Result[tuple[list[Account], int], StoreError]:
        """List accounts matching the filters, plus the total match count."""
        conditions: list[ColumnElement[bool]] = []
        if filters.status is None:
            conditions.append(live_accounts_filter())
        else:
            conditions.append(AccountModel.status == filters.status.value)
        if filters.role:
            conditions.append(AccountModel.role == filters.role)
        if filters.search:
            pattern = _like_pattern(filters.search)
            conditions.append(
                or_(
                    AccountModel.first_name.ilike(pattern, escape="\\"),
                    AccountModel.last_name.ilike(pattern, escape="\\"),
                    AccountModel.email.ilike(pattern, escape="\\"),
                )
            )

        column = _SORT_COLUMNS[filters.sort_by]
        order = column.asc() if filters.sort_order == "asc" else column.desc()
        page_stmt = (
            select(AccountModel)
            .where(*conditions)
            .order_by(order, AccountModel.id.asc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        count_stmt = select(func.count()).select_from(AccountModel).where(*conditions)

        async def work(session: AsyncSession) -> tuple[list[Account], int]:
            total = (await session.execute(count_stmt)).scalar_one()
            rows = (await session.execute(page_stmt)).scalars().all()
            return [self._to_domain(row) for row in rows], int(total)

        return await self._run("search", work)

    # =========================================================================
    # Writes
    # =========================================================================

    async def save(self, account: Account) -> Result[None, StoreError]:
        """Insert a new account.

        The unique indexes on email and employee_id close the race between
        the pre-check and this insert.
        """

        async def work(session: AsyncSession) -> None:
            session.add(self._to_model(account))
            await session.flush()

        return await self._run("save", work)

    async def update(
        self, account: Account, *, fields: Collection[str]
    ) -> Result[bool, StoreError]:
        """Write only the named columns, only while the stored row is live.

        Raises:
            KeyError: If a name is not a writable column (programming error).
        """
        writable = self._mutable_values(account)
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account.id, live_accounts_filter())
            .values({name: writable[name] for name in sorted(fields)})
        )

        async def work(session: AsyncSession) -> bool:
            result = await session.execute(stmt)
            return result.rowcount == 1

        return await self._run("update", work)

    async def record_failed_login(
        self,
        account_id: UUID,
        *,
        now: datetime,
        threshold: int,
        lockout_duration: timedelta,
    ) -> Result[LoginAttemptState | None, StoreError]:
        """Apply a failed login in one UPDATE ... RETURNING.

        Every CASE branch reads the pre-update row, so the increment and the
        lock decision are made together under the row lock.
        """
        locked = and_(
            AccountModel.locked_until.is_not(None), AccountModel.locked_until > now
        )
        expired = and_(
            AccountModel.locked_until.is_not(None), AccountModel.locked_until <= now
        )
        next_count = AccountModel.failed_login_count + 1
        lock_expiry = literal(now + lockout_duration, DateTime(timezone=True))

        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(
                failed_login_count=case(
                    (locked, AccountModel.failed_login_count),
                    (expired, 1),
                    else_=next_count,
                ),
                locked_until=case(
                    (locked, AccountModel.locked_until),
                    (expired, null()),
                    (next_count >= threshold, lock_expiry),
                    else_=null(),
                ),
            )
            .returning(AccountModel.failed_login_count, AccountModel.locked_until)
        )

        async def work(session: AsyncSession) -> LoginAttemptState | None:
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                return None
            return LoginAttemptState(
                failed_login_count=row.failed_login_count,
                locked_until=_as_utc(row.locked_until),
            )

        return await self._run("record_failed_login", work)

    async def record_successful_login(
        self,
        account_id: UUID,
        *,
        now: datetime,
        source_address: str | None,
    ) -> Result[bool, StoreError]:
        """Reset lockout counters and record the login.

        Matches only an ACTIVE row whose lock is absent or expired at `now`.
        A row that changed after the caller read it gets Success(False) and
        stays untouched.
        """
        stmt = (
            update(AccountModel)
            .where(
                AccountModel.id == account_id,
                AccountModel.status == AccountStatus.ACTIVE.value,
                or_(
                    AccountModel.locked_until.is_(None),
                    AccountModel.locked_until <= now,
                ),
            )
            .values(
                failed_login_count=0,
                locked_until=None,
                last_login_at=now,
                last_login_address=source_address,
            )
        )

        async def work(session: AsyncSession) -> bool:
            result = await session.execute(stmt)
            return result.rowcount == 1

        return await self._run("record_successful_login", work)

    async def clear_lockout(
        self,
        account_id: UUID,
        *,
        updated_by: UUID,
        now: datetime,
    ) -> Result[bool, StoreError]:
        """Clear lock and failure counter on a live account."""
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id, live_accounts_filter())
            .values(
                failed_login_count=0,
                locked_until=None,
                updated_by=updated_by,
                updated_at=now,
            )
        )

        async def work(session: AsyncSession) -> bool:
            result = await session.execute(stmt)
            return result.rowcount == 1

        return await self._run("clear_lockout", work)

    # =========================================================================
    # Mapping
    # =========================================================================

    async def _fetch_one(self, session: AsyncSession, stmt: Any) -> Account | None:
        model = (await session.execute(stmt)).scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def _exists(self, session: AsyncSession, stmt: Any) -> bool:
        return (await session.execute(stmt.limit(1))).first() is not None

    def _mutable_values(self, account: Account) -> dict[str, Any]:
        """Every column update() may write, keyed by entity attribute.

        Login counters are excluded; email is insert-only.
        """
        return {
            "first_name": account.first_name,
            "last_name": account.last_name,
            "role": account.role,
            "status": account.status.value,
            "permissions": sorted(account.permissions),
            "phone_number": account.phone_number,
            "department": account.department,
            "position": account.position,
            "employee_id": account.employee_id,
            "avatar_url": account.avatar_url,
            "preferences": account.preferences.to_dict(),
            "credential_hash": account.credential_hash,
            "must_change_credential": account.must_change_credential,
            "credential_changed_at": account.credential_changed_at,
            "credential_reset_at": account.credential_reset_at,
            "credential_reset_by": account.credential_reset_by,
            "is_verified": account.is_verified,
            "verification_token": account.verification_token,
            "verification_expires_at": account.verification_expires_at,
            "updated_by": account.updated_by,
            "updated_at": account.updated_at,
            "deleted_at": account.deleted_at,
            "deleted_by": account.deleted_by,
        }

    def _to_domain(self, model: AccountModel) -> Account:
        """Convert database model to domain entity."""
        return Account(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            credential_hash=model.credential_hash,
            created_at=_as_utc(model.created_at),  # type: ignore[arg-type]
            updated_at=_as_utc(model.updated_at),  # type: ignore[arg-type]
            phone_number=model.phone_number,
            department=model.department,
            position=model.position,
            employee_id=model.employee_id,
            avatar_url=model.avatar_url,
            preferences=Preferences.from_dict(model.preferences),
            permissions=frozenset(model.permissions or ()),
            status=AccountStatus(model.status),
            is_verified=model.is_verified,
            verification_token=model.verification_token,
            verification_expires_at=_as_utc(model.verification_expires_at),
            must_change_credential=model.must_change_credential,
            credential_changed_at=_as_utc(model.credential_changed_at),
            credential_reset_at=_as_utc(model.credential_reset_at),
            credential_reset_by=model.credential_reset_by,
            last_login_at=_as_utc(model.last_login_at),
            last_login_address=model.last_login_address,
            failed_login_count=model.failed_login_count,
            locked_until=_as_utc(model.locked_until),
            created_by=model.created_by,
            updated_by=model.updated_by,
            deleted_at=_as_utc(model.deleted_at),
            deleted_by=model.deleted_by,
        )

    def _to_model(self, account: Account) -> AccountModel:
        """Convert domain entity to a new database model."""
        return AccountModel(
            id=account.id,
            email=account.email,
            created_at=account.created_at,
            created_by=account.created_by,
            failed_login_count=account.failed_login_count,
            locked_until=account.locked_until,
            last_login_at=account.last_login_at,
            last_login_address=account.last_login_address,
            **self._mutable_values(account),
        )
