"""Fixtures for API tests.

The app is built with create_app() around an AppServices graph whose
manager runs over the in-memory fakes from tests/conftest.py; no database
is opened (services.database is None).

The clock starts at the current wall-clock time so that Retry-After
headers computed by the error builder line up with lock expiries.
"""

import asyncio
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from typing import Any
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from erp_identity.application.queries import AccountQueryService
from erp_identity.application.services import AccountLifecycleManager
from erp_identity.core.config import Settings
from erp_identity.core.container import AppServices
from erp_identity.domain.entities import Account
from erp_identity.main import create_app
from tests.utils.fakes import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime.now(UTC).replace(microsecond=0))


@pytest.fixture
def seed(seed_account: Callable[..., Any]) -> Callable[..., Account]:
    """Synchronous wrapper around seed_account for TestClient tests."""

    def run(*args: Any, **kwargs: Any) -> Account:
        return asyncio.run(seed_account(*args, **kwargs))

    return run


@pytest.fixture
def make_client(
    settings: Settings,
    query_service: AccountQueryService,
) -> Generator[Callable[[AccountLifecycleManager], TestClient], None, None]:
    """Factory for a TestClient around a given manager."""
    clients: list[TestClient] = []

    def build(manager: AccountLifecycleManager) -> TestClient:
        services = AppServices(
            settings=settings,
            logger=Mock(),
            database=None,
            accounts=manager,
            queries=query_service,
        )
        client = TestClient(create_app(services=services))
        client.__enter__()
        clients.append(client)
        return client

    yield build

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(
    make_client: Callable[[AccountLifecycleManager], TestClient],
    manager: AccountLifecycleManager,
) -> TestClient:
    return make_client(manager)


@pytest.fixture
def admin_account(seed: Callable[..., Account]) -> Account:
    return seed("admin@acme.com", role="admin", first_name="Ada", last_name="Admin")


@pytest.fixture
def admin_headers(admin_account: Account) -> dict[str, str]:
    return {"X-Actor-Id": str(admin_account.id)}


@pytest.fixture
def staff_headers(seed: Callable[..., Account]) -> dict[str, str]:
    account = seed("staff@acme.com", role="staff", first_name="Sam", last_name="Staff")
    return {"X-Actor-Id": str(account.id)}
