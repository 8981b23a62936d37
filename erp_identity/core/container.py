"""Composition root.

Builds every adapter and service explicitly from Settings. Nothing here is a
module-level singleton: the app factory calls build_services() once and keeps
the result on app.state; tests build their own graph with fakes.

Adapter selection is centralized here:
- Logger: ConsoleAdapter (colored in development, JSON elsewhere)
- Notifier: StubNotifier ('stub') or HttpNotifier ('http')
- Persistence: SQLAlchemy repository + activity logger over one Database
"""

from dataclasses import dataclass

from erp_identity.application.queries import AccountQueryService
from erp_identity.application.services import AccountLifecycleManager
from erp_identity.core.config import Settings
from erp_identity.domain.protocols import LoggerProtocol, NotifierProtocol
from erp_identity.infrastructure.activity import DatabaseActivityLogger
from erp_identity.infrastructure.authorization import StaticRoleDirectory
from erp_identity.infrastructure.logging import ConsoleAdapter
from erp_identity.infrastructure.notifications import HttpNotifier, StubNotifier
from erp_identity.infrastructure.persistence.database import Database
from erp_identity.infrastructure.persistence.repositories import (
    SQLAlchemyAccountRepository,
)
from erp_identity.infrastructure.security import (
    BcryptPasswordService,
    SecretsCredentialGenerator,
)


@dataclass(frozen=True, kw_only=True)
class AppServices:
    """Everything the presentation layer needs."""

    settings: Settings
    logger: LoggerProtocol
    database: Database | None
    accounts: AccountLifecycleManager
    queries: AccountQueryService


def build_logger(settings: Settings) -> LoggerProtocol:
    """Console logger; JSON outside development."""
    return ConsoleAdapter(use_json=not settings.is_development, level=settings.log_level)


def build_database(settings: Settings) -> Database:
    """Database from settings (URL, echo, timeouts)."""
    return Database(
        settings.database_url,
        echo=settings.db_echo,
        connect_timeout=settings.db_connect_timeout_seconds,
        command_timeout=settings.db_command_timeout_seconds,
    )


def build_notifier(settings: Settings, logger: LoggerProtocol) -> NotifierProtocol:
    """Notifier selected by NOTIFIER_BACKEND.

    Raises:
        ValueError: If the backend is unsupported or 'http' lacks NOTIFIER_URL.
    """
    backend = settings.notifier_backend.lower()
    if backend == "stub":
        return StubNotifier(logger=logger)
    if backend == "http":
        if not settings.notifier_url:
            raise ValueError("NOTIFIER_URL is required when NOTIFIER_BACKEND=http")
        return HttpNotifier(
            relay_url=settings.notifier_url,
            api_key=settings.notifier_api_key,
            timeout=settings.notifier_timeout_seconds,
            logger=logger,
        )
    raise ValueError(
        f"Unsupported NOTIFIER_BACKEND: {settings.notifier_backend}. Supported: 'stub', 'http'"
    )


def build_services(settings: Settings) -> AppServices:
    """Wire the full production object graph."""
    logger = build_logger(settings)
    database = build_database(settings)
    account_repo = SQLAlchemyAccountRepository(database)

    accounts = AccountLifecycleManager(
        account_repo=account_repo,
        password_service=BcryptPasswordService(cost_factor=settings.bcrypt_rounds),
        credential_generator=SecretsCredentialGenerator(
            length=settings.temporary_credential_length
        ),
        notifier=build_notifier(settings, logger),
        activity_logger=DatabaseActivityLogger(database),
        role_directory=StaticRoleDirectory(settings.role_capabilities),
        logger=logger,
        max_failed_logins=settings.max_failed_logins,
        lockout_duration=settings.lockout_duration,
        verification_token_lifetime=settings.verification_token_lifetime,
        notifier_timeout_seconds=settings.notifier_timeout_seconds,
        activity_timeout_seconds=settings.activity_timeout_seconds,
        login_url=f"{settings.frontend_url}/login",
    )
    return AppServices(
        settings=settings,
        logger=logger,
        database=database,
        accounts=accounts,
        queries=AccountQueryService(account_repo),
    )
