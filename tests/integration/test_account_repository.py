"""Integration tests for SQLAlchemyAccountRepository and DatabaseActivityLogger.

Tests run against a throwaway SQLite database (aiosqlite) created per test
with Database.create_all().

Tests cover:
- Round trip of every mapped field
- Live filter on id/token lookups; email reserved after deletion
- Unique email and employee_id surfaced as StoreError conflicts
- Atomic failed-login CASE update (threshold, open lock, expiry, concurrent failures)
- Conditional successful-login write (deleted, suspended, locked rows untouched)
- update() writing only the named columns (stale entities cannot undo other writes)
- search() filters, ordering and counts
- Activity log rows
- Store outage returned as STORE_UNAVAILABLE
"""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy import select
from uuid_extensions import uuid7

from erp_identity.core.enums import ErrorCode
from erp_identity.core.result import Failure, Success
from erp_identity.domain.entities import Account, LoginAttemptState
from erp_identity.domain.enums import AccountStatus, ActivityAction
from erp_identity.domain.protocols import (
    AUDIT_FIELDS,
    CREDENTIAL_FIELDS,
    DELETION_FIELDS,
    VERIFICATION_FIELDS,
    AccountFilters,
)
from erp_identity.domain.value_objects import Preferences
from erp_identity.infrastructure.activity import DatabaseActivityLogger
from erp_identity.infrastructure.persistence.database import Database
from erp_identity.infrastructure.persistence.models.activity_log import ActivityLogModel
from erp_identity.infrastructure.persistence.repositories import (
    SQLAlchemyAccountRepository,
)

NOW = datetime(2026, 1, 15, 9, 0, tzinfo=UTC)
TWO_HOURS = timedelta(hours=2)


def make_account(email: str = "jane.doe@acme.com", **overrides) -> Account:
    values = {
        "id": uuid7(),
        "email": email,
        "first_name": "Jane",
        "last_name": "Doe",
        "role": "staff",
        "credential_hash": "$2b$10$hash",
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Account(**values)


@pytest_asyncio.fixture
async def repo(database: Database) -> SQLAlchemyAccountRepository:
    return SQLAlchemyAccountRepository(database)


@pytest.mark.integration
class TestLookups:
    """Reads and the live filter."""

    async def test_round_trip_preserves_fields(self, repo):
        """Test every mapped field survives save and load."""
        # Arrange
        actor_id = uuid7()
        account = make_account(
            employee_id="E-1",
            department="Finance",
            permissions=frozenset({"report:export"}),
            preferences=Preferences(theme="dark", language="fr"),
            verification_token="tok",
            verification_expires_at=NOW + timedelta(hours=24),
            must_change_credential=True,
            created_by=actor_id,
        )

        # Act
        await repo.save(account)
        result = await repo.find_by_id(account.id)

        # Assert
        loaded = result.value
        assert loaded.email == "jane.doe@acme.com"
        assert loaded.employee_id == "E-1"
        assert loaded.permissions == frozenset({"report:export"})
        assert loaded.preferences.theme == "dark"
        assert loaded.verification_expires_at == NOW + timedelta(hours=24)
        assert loaded.must_change_credential is True
        assert loaded.created_by == actor_id
        assert loaded.created_at == NOW
        assert loaded.status is AccountStatus.ACTIVE

    async def test_deleted_account_hidden_from_id_lookup(self, repo):
        account = make_account(status=AccountStatus.DELETED, deleted_at=NOW)
        await repo.save(account)

        assert (await repo.find_by_id(account.id)).value is None
        assert (await repo.find_by_id(account.id, include_deleted=True)).value is not None

    async def test_email_lookup_sees_deleted_accounts(self, repo):
        await repo.save(make_account(status=AccountStatus.DELETED))

        assert (await repo.exists_by_email("JANE.DOE@acme.com")).value is True
        assert (await repo.find_by_email("jane.doe@acme.com")).value is not None

    async def test_verification_token_lookup_is_live_only(self, repo):
        await repo.save(make_account(verification_token="tok", status=AccountStatus.DELETED))

        assert (await repo.find_by_verification_token("tok")).value is None

    async def test_employee_id_exists_excluding_self(self, repo):
        account = make_account(employee_id="E-1")
        await repo.save(account)

        assert (await repo.exists_by_employee_id("E-1")).value is True
        assert (await repo.exists_by_employee_id("E-1", exclude_id=account.id)).value is False


@pytest.mark.integration
class TestWrites:
    """Inserts and conditional updates."""

    async def test_duplicate_email_is_conflict(self, repo):
        await repo.save(make_account())

        result = await repo.save(make_account())

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.EMAIL_ALREADY_EXISTS
        assert result.error.conflicting_field == "email"

    async def test_duplicate_employee_id_is_conflict(self, repo):
        await repo.save(make_account("a@acme.com", employee_id="E-1"))

        result = await repo.save(make_account("b@acme.com", employee_id="E-1"))

        assert result.error.code is ErrorCode.EMPLOYEE_ID_ALREADY_EXISTS

    async def test_many_accounts_without_employee_id(self, repo):
        await repo.save(make_account("a@acme.com"))

        result = await repo.save(make_account("b@acme.com"))

        assert isinstance(result, Success)

    async def test_update_leaves_login_counters_alone(self, repo):
        """Test an administrative write cannot reset a concurrent failure count."""
        # Arrange
        account = make_account()
        await repo.save(account)
        await repo.record_failed_login(
            account.id, now=NOW, threshold=5, lockout_duration=TWO_HOURS
        )

        # Act
        account.department = "Ops"
        account.failed_login_count = 0
        result = await repo.update(account, fields={"department"} | AUDIT_FIELDS)

        # Assert
        assert result.value is True
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.department == "Ops"
        assert loaded.failed_login_count == 1

    async def test_update_of_deleted_row_reports_false(self, repo):
        account = make_account(status=AccountStatus.DELETED)
        await repo.save(account)

        account.department = "Ops"
        result = await repo.update(account, fields={"department"})

        assert result.value is False

    async def test_soft_delete_through_update(self, repo):
        account = make_account()
        await repo.save(account)
        actor_id = uuid7()

        account.soft_delete(actor_id, NOW)
        await repo.update(account, fields=DELETION_FIELDS | AUDIT_FIELDS)

        loaded = (await repo.find_by_id(account.id, include_deleted=True)).value
        assert loaded.status is AccountStatus.DELETED
        assert loaded.deleted_by == actor_id

    async def test_unknown_column_name_is_rejected(self, repo):
        account = make_account()
        await repo.save(account)

        with pytest.raises(KeyError):
            await repo.update(account, fields={"email"})


@pytest.mark.integration
class TestStaleWrites:
    """An entity read before another write must not undo that write."""

    async def test_profile_write_keeps_rotated_credential(self, repo):
        # Arrange
        account = make_account()
        await repo.save(account)
        stale = (await repo.find_by_id(account.id)).value
        fresh = (await repo.find_by_id(account.id)).value
        admin_id = uuid7()
        fresh.rotate_credential("$2b$10$ROTATED", reset_by=admin_id, now=NOW)
        await repo.update(fresh, fields=CREDENTIAL_FIELDS | AUDIT_FIELDS)

        # Act
        stale.department = "Ops"
        result = await repo.update(stale, fields={"department"} | AUDIT_FIELDS)

        # Assert
        assert result.value is True
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.credential_hash == "$2b$10$ROTATED"
        assert loaded.must_change_credential is True
        assert loaded.credential_reset_by == admin_id
        assert loaded.department == "Ops"

    async def test_verification_write_keeps_changed_password(self, repo):
        # Arrange
        account = make_account(
            verification_token="tok",
            verification_expires_at=NOW + timedelta(hours=24),
        )
        await repo.save(account)
        stale = (await repo.find_by_id(account.id)).value
        fresh = (await repo.find_by_id(account.id)).value
        fresh.rotate_credential("$2b$10$OWN", reset_by=None, now=NOW)
        await repo.update(fresh, fields=CREDENTIAL_FIELDS | AUDIT_FIELDS)

        # Act
        stale.mark_verified(NOW)
        await repo.update(stale, fields=VERIFICATION_FIELDS | {"updated_at"})

        # Assert
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.credential_hash == "$2b$10$OWN"
        assert loaded.is_verified is True
        assert loaded.verification_token is None

    async def test_rotation_keeps_concurrent_profile_patch(self, repo):
        account = make_account()
        await repo.save(account)
        stale = (await repo.find_by_id(account.id)).value
        fresh = (await repo.find_by_id(account.id)).value
        fresh.department = "Finance"
        await repo.update(fresh, fields={"department"} | AUDIT_FIELDS)

        stale.rotate_credential("$2b$10$ROTATED", reset_by=uuid7(), now=NOW)
        await repo.update(stale, fields=CREDENTIAL_FIELDS | AUDIT_FIELDS)

        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.department == "Finance"
        assert loaded.credential_hash == "$2b$10$ROTATED"

    async def test_delete_keeps_profile_written_after_read(self, repo):
        account = make_account()
        await repo.save(account)
        stale = (await repo.find_by_id(account.id)).value
        fresh = (await repo.find_by_id(account.id)).value
        fresh.position = "Controller"
        await repo.update(fresh, fields={"position"} | AUDIT_FIELDS)

        stale.soft_delete(uuid7(), NOW)
        await repo.update(stale, fields=DELETION_FIELDS | AUDIT_FIELDS)

        loaded = (await repo.find_by_id(account.id, include_deleted=True)).value
        assert loaded.status is AccountStatus.DELETED
        assert loaded.position == "Controller"


@pytest.mark.integration
class TestLoginCounters:
    """Atomic lockout bookkeeping."""

    async def test_failures_lock_at_threshold(self, repo):
        account = make_account()
        await repo.save(account)

        for _ in range(4):
            state = (
                await repo.record_failed_login(
                    account.id, now=NOW, threshold=5, lockout_duration=TWO_HOURS
                )
            ).value
        assert state == LoginAttemptState(failed_login_count=4, locked_until=None)

        state = (
            await repo.record_failed_login(
                account.id, now=NOW, threshold=5, lockout_duration=TWO_HOURS
            )
        ).value

        assert state == LoginAttemptState(failed_login_count=5, locked_until=NOW + TWO_HOURS)

    async def test_open_lock_unchanged(self, repo):
        account = make_account(failed_login_count=5, locked_until=NOW + TWO_HOURS)
        await repo.save(account)

        state = (
            await repo.record_failed_login(
                account.id,
                now=NOW + timedelta(hours=1),
                threshold=5,
                lockout_duration=TWO_HOURS,
            )
        ).value

        assert state == LoginAttemptState(failed_login_count=5, locked_until=NOW + TWO_HOURS)

    async def test_expired_lock_restarts_at_one(self, repo):
        account = make_account(failed_login_count=5, locked_until=NOW)
        await repo.save(account)

        state = (
            await repo.record_failed_login(
                account.id, now=NOW, threshold=5, lockout_duration=TWO_HOURS
            )
        ).value

        assert state == LoginAttemptState(failed_login_count=1, locked_until=None)

    async def test_unknown_account_returns_none(self, repo):
        result = await repo.record_failed_login(
            uuid7(), now=NOW, threshold=5, lockout_duration=TWO_HOURS
        )

        assert result.value is None

    async def test_successful_login_resets(self, repo):
        account = make_account(failed_login_count=3)
        await repo.save(account)

        result = await repo.record_successful_login(
            account.id, now=NOW, source_address="203.0.113.7"
        )

        assert result.value is True
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.failed_login_count == 0
        assert loaded.last_login_at == NOW
        assert loaded.last_login_address == "203.0.113.7"

    async def test_clear_lockout(self, repo):
        account = make_account(failed_login_count=5, locked_until=NOW + TWO_HOURS)
        await repo.save(account)
        admin_id = uuid7()

        result = await repo.clear_lockout(account.id, updated_by=admin_id, now=NOW)

        assert result.value is True
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.locked_until is None
        assert loaded.failed_login_count == 0
        assert loaded.updated_by == admin_id

    async def test_clear_lockout_of_deleted_account(self, repo):
        account = make_account(status=AccountStatus.DELETED)
        await repo.save(account)

        result = await repo.clear_lockout(account.id, updated_by=uuid7(), now=NOW)

        assert result.value is False

    async def test_concurrent_failures_from_four_lock(self, repo):
        """Test two failures racing from count 4 leave the account locked."""
        # Arrange
        account = make_account(failed_login_count=4)
        await repo.save(account)

        # Act
        results = await asyncio.gather(
            *(
                repo.record_failed_login(
                    account.id, now=NOW, threshold=5, lockout_duration=TWO_HOURS
                )
                for _ in range(2)
            )
        )

        # Assert
        assert all(isinstance(result, Success) for result in results)
        assert [result.value.failed_login_count for result in results] == [5, 5]
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.failed_login_count == 5
        assert loaded.locked_until == NOW + TWO_HOURS

    async def test_concurrent_failures_are_all_counted(self, repo):
        account = make_account()
        await repo.save(account)

        await asyncio.gather(
            *(
                repo.record_failed_login(
                    account.id, now=NOW, threshold=5, lockout_duration=TWO_HOURS
                )
                for _ in range(5)
            )
        )

        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.failed_login_count == 5
        assert loaded.locked_until == NOW + TWO_HOURS

    @pytest.mark.parametrize(
        "status",
        [AccountStatus.DELETED, AccountStatus.SUSPENDED, AccountStatus.INACTIVE],
    )
    async def test_successful_login_skips_non_active_rows(self, repo, status):
        account = make_account(status=status, failed_login_count=2)
        await repo.save(account)

        result = await repo.record_successful_login(
            account.id, now=NOW, source_address="203.0.113.7"
        )

        assert result.value is False
        loaded = (await repo.find_by_id(account.id, include_deleted=True)).value
        assert loaded.last_login_at is None
        assert loaded.failed_login_count == 2

    async def test_successful_login_skips_open_lock(self, repo):
        account = make_account(failed_login_count=5, locked_until=NOW + TWO_HOURS)
        await repo.save(account)

        result = await repo.record_successful_login(account.id, now=NOW, source_address=None)

        assert result.value is False
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.locked_until == NOW + TWO_HOURS
        assert loaded.failed_login_count == 5

    async def test_successful_login_at_lock_expiry_clears_it(self, repo):
        account = make_account(failed_login_count=5, locked_until=NOW)
        await repo.save(account)

        result = await repo.record_successful_login(account.id, now=NOW, source_address=None)

        assert result.value is True
        loaded = (await repo.find_by_id(account.id)).value
        assert loaded.locked_until is None
        assert loaded.failed_login_count == 0


@pytest.mark.integration
class TestSearch:
    """Listing queries."""

    async def test_filters_sorting_and_total(self, repo):
        # Arrange
        await repo.save(make_account("carol@acme.com", first_name="Carol", role="manager"))
        await repo.save(make_account("alice@acme.com", first_name="Alice", role="manager"))
        await repo.save(make_account("bob@acme.com", first_name="Bob", role="staff"))
        await repo.save(
            make_account("dave@acme.com", role="manager", status=AccountStatus.DELETED)
        )

        # Act
        result = await repo.search(
            AccountFilters(role="manager", sort_by="email", sort_order="asc", limit=1)
        )

        # Assert
        accounts, total = result.value
        assert total == 2
        assert [a.email for a in accounts] == ["alice@acme.com"]

    async def test_search_is_case_insensitive(self, repo):
        await repo.save(make_account("jane.doe@acme.com"))
        await repo.save(make_account("max@acme.com", first_name="Max", last_name="Power"))

        accounts, total = (await repo.search(AccountFilters(search="DOE"))).value

        assert total == 1
        assert accounts[0].email == "jane.doe@acme.com"

    async def test_search_treats_wildcards_literally(self, repo):
        await repo.save(make_account("jane.doe@acme.com"))

        _, total = (await repo.search(AccountFilters(search="%"))).value

        assert total == 0

    async def test_deleted_listed_when_requested(self, repo):
        await repo.save(make_account("live@acme.com"))
        await repo.save(make_account("gone@acme.com", status=AccountStatus.DELETED))

        accounts, total = (
            await repo.search(AccountFilters(status=AccountStatus.DELETED))
        ).value

        assert total == 1
        assert accounts[0].email == "gone@acme.com"


@pytest.mark.integration
class TestActivityLogger:
    """Activity rows."""

    async def test_record_appends_row(self, database):
        logger = DatabaseActivityLogger(database)
        account_id = uuid7()

        result = await logger.record(
            action=ActivityAction.ACCOUNT_LOCKED,
            account_id=account_id,
            source_address="203.0.113.7",
            context={"locked_until": "2026-01-15T11:00:00+00:00"},
        )

        assert isinstance(result, Success)
        async with database.get_session() as session:
            rows = (await session.execute(select(ActivityLogModel))).scalars().all()
        assert len(rows) == 1
        assert rows[0].action == "account_locked"
        assert rows[0].account_id == account_id
        assert rows[0].context == {"locked_until": "2026-01-15T11:00:00+00:00"}


@pytest.mark.integration
class TestStoreOutage:
    """Driver failures come back as results."""

    async def test_missing_tables_are_store_unavailable(self, settings):
        database = Database(settings.database_url)
        try:
            result = await SQLAlchemyAccountRepository(database).find_by_email(
                "jane.doe@acme.com"
            )
            logged = await DatabaseActivityLogger(database).record(
                action=ActivityAction.LOGIN_FAILED, account_id=None
            )
        finally:
            await database.close()

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.STORE_UNAVAILABLE
        assert logged.error.code is ErrorCode.ACTIVITY_RECORD_FAILED
