"""Shared pytest fixtures.

Fixture families:
1. Collaborator fakes (repository, notifier, activity logger, role directory)
2. A fully wired AccountLifecycleManager over those fakes
3. Seed helpers for accounts and actors
4. A throwaway SQLite database for integration tests

pytest-asyncio runs in auto mode (see pyproject.toml), so async tests and
async fixtures need no explicit marker.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import timedelta
from typing import Any
from unittest.mock import Mock

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

from erp_identity.application.dtos import Actor
from erp_identity.application.queries import AccountQueryService
from erp_identity.application.services import AccountLifecycleManager
from erp_identity.core.config import Settings
from erp_identity.core.enums import Environment
from erp_identity.domain.entities import Account
from erp_identity.domain.enums import AccountStatus, Capability
from erp_identity.infrastructure.persistence.database import Database
from tests.utils.fakes import (
    FakeClock,
    FakePasswordService,
    FakeRoleDirectory,
    InMemoryAccountRepository,
    RecordingActivityLogger,
    RecordingNotifier,
    SequenceCredentialGenerator,
)

ALL_CAPABILITIES = frozenset(Capability.values())


# =============================================================================
# Collaborators
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def account_repo() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def password_service() -> FakePasswordService:
    return FakePasswordService()


@pytest.fixture
def credential_generator() -> SequenceCredentialGenerator:
    return SequenceCredentialGenerator()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def activity_logger() -> RecordingActivityLogger:
    return RecordingActivityLogger()


@pytest.fixture
def role_directory() -> FakeRoleDirectory:
    return FakeRoleDirectory(
        grants={
            "admin": ALL_CAPABILITIES,
            "manager": frozenset({"account:create", "account:edit", "account:read"}),
            "staff": frozenset({"account:read"}),
        }
    )


@pytest.fixture
def logger() -> Mock:
    return Mock()


@pytest.fixture
def build_manager(
    account_repo: InMemoryAccountRepository,
    password_service: FakePasswordService,
    credential_generator: SequenceCredentialGenerator,
    notifier: RecordingNotifier,
    activity_logger: RecordingActivityLogger,
    role_directory: FakeRoleDirectory,
    logger: Mock,
    clock: FakeClock,
) -> Callable[..., AccountLifecycleManager]:
    """Factory for a manager; keyword arguments replace single collaborators."""

    def build(**overrides: Any) -> AccountLifecycleManager:
        kwargs: dict[str, Any] = {
            "account_repo": account_repo,
            "password_service": password_service,
            "credential_generator": credential_generator,
            "notifier": notifier,
            "activity_logger": activity_logger,
            "role_directory": role_directory,
            "logger": logger,
            "max_failed_logins": 5,
            "lockout_duration": timedelta(hours=2),
            "clock": clock,
        }
        kwargs.update(overrides)
        return AccountLifecycleManager(**kwargs)

    return build


@pytest.fixture
def manager(build_manager: Callable[..., AccountLifecycleManager]) -> AccountLifecycleManager:
    return build_manager()


@pytest.fixture
def query_service(
    account_repo: InMemoryAccountRepository, clock: FakeClock
) -> AccountQueryService:
    return AccountQueryService(account_repo, clock=clock)


# =============================================================================
# Seed helpers
# =============================================================================


@pytest.fixture
def admin() -> Actor:
    return Actor(id=uuid7(), role="admin", capabilities=ALL_CAPABILITIES)


@pytest.fixture
def staff() -> Actor:
    return Actor(id=uuid7(), role="staff", capabilities=frozenset({"account:read"}))


@pytest.fixture
def seed_account(
    account_repo: InMemoryAccountRepository,
    clock: FakeClock,
) -> Callable[..., Awaitable[Account]]:
    """Insert an account directly into the in-memory store.

    The stored password is "Correct#Pass1" unless `password` is given.
    """

    async def seed(
        email: str = "jane.doe@acme.com",
        *,
        password: str = "Correct#Pass1",
        role: str = "staff",
        status: AccountStatus = AccountStatus.ACTIVE,
        **fields: Any,
    ) -> Account:
        account = Account(
            id=fields.pop("id", None) or uuid7(),
            email=email,
            first_name=fields.pop("first_name", "Jane"),
            last_name=fields.pop("last_name", "Doe"),
            role=role,
            credential_hash=f"hashed::{password}",
            created_at=clock.now,
            updated_at=clock.now,
            status=status,
            **fields,
        )
        await account_repo.save(account)
        return account

    return seed


# =============================================================================
# Settings and database
# =============================================================================


@pytest.fixture
def settings(tmp_path: Any) -> Settings:
    return Settings(
        environment=Environment.TESTING,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'accounts.db'}",
        bcrypt_rounds=10,
        notifier_backend="stub",
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """Fresh SQLite database with all tables created."""
    db = Database(settings.database_url)
    await db.create_all()
    yield db
    await db.close()
