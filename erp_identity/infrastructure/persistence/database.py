"""Async engine and unit-of-work sessions for the account store.

One Database per process; repositories and the activity logger share it and
open a session per operation. PostgreSQL (asyncpg) in deployments, SQLite
(aiosqlite) in the integration tests.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

_POOL_SIZE = 20


def _engine_options(
    url: str, echo: bool, connect_timeout: float, command_timeout: float
) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # aiosqlite has no pool sizing; "timeout" is the busy-wait on locks
        options["connect_args"] = {"timeout": command_timeout}
        return options

    options.update(pool_size=_POOL_SIZE, max_overflow=0, pool_timeout=connect_timeout)
    if url.startswith("postgresql"):
        options["connect_args"] = {
            "timeout": connect_timeout,
            "command_timeout": command_timeout,
            "server_settings": {"jit": "off"},
        }
    return options


class Database:
    """Engine plus session factory.

    Example:
        >>> database = Database("sqlite+aiosqlite:///accounts.db")
        >>> async with database.get_session() as session:
        ...     await session.execute(...)
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        connect_timeout: float = 10.0,
        command_timeout: float = 30.0,
    ) -> None:
        self.engine = create_async_engine(
            database_url,
            **_engine_options(database_url, echo, connect_timeout, command_timeout),
        )
        self._sessions = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session committed when the block exits cleanly, rolled back otherwise."""
        async with self._sessions() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            await session.commit()

    async def create_all(self) -> None:
        """Create every mapped table (tests and local runs; deployments migrate)."""
        from erp_identity.infrastructure.persistence import models  # noqa: F401
        from erp_identity.infrastructure.persistence.base import BaseModel

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def check_connection(self) -> bool:
        """True when a trivial query round-trips; used by /health."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()
