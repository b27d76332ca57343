"""
Database connection pool and query execution.

One ``Database`` is built per process by the app factory and handed to the
route handlers through ``get_database``. Every query acquires a pooled
connection, runs in its own transaction and releases the connection.
"""
import datetime
import logging
import os
import signal
import time
from typing import Any, Callable, Dict, List, Optional, Union

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.expression import Executable

from .config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def _terminate_process() -> None:
    os.kill(os.getpid(), signal.SIGTERM)


class Database:
    """Pooled access to the relational store."""

    def __init__(
        self,
        url: str,
        pool_size: int = 20,
        idle_timeout_ms: int = 30000,
        connection_timeout_ms: int = 2000,
        require_ssl: bool = False,
        log_queries: bool = False,
        echo: bool = False,
        on_fatal: Callable[[], None] = _terminate_process,
    ):
        self.url = make_url(url)
        self.log_queries = log_queries
        self.on_fatal = on_fatal
        self.engine: AsyncEngine = create_async_engine(
            self.url,
            echo=echo,
            **self._engine_options(
                pool_size, idle_timeout_ms, connection_timeout_ms, require_ssl
            ),
        )
        event.listen(self.engine.sync_engine, "handle_error", self._handle_error)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.DB_POOL_SIZE,
            idle_timeout_ms=settings.DB_IDLE_TIMEOUT,
            connection_timeout_ms=settings.DB_CONNECTION_TIMEOUT,
            require_ssl=settings.is_production,
            log_queries=settings.is_development,
            echo=settings.DEBUG,
            **kwargs,
        )

    def _engine_options(
        self,
        pool_size: int,
        idle_timeout_ms: int,
        connection_timeout_ms: int,
        require_ssl: bool,
    ) -> Dict[str, Any]:
        if self.url.get_backend_name() == "sqlite":
            return {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        connect_args: Dict[str, Any] = {"timeout": connection_timeout_ms / 1000}
        if require_ssl:
            connect_args["ssl"] = "require"
        return {
            "pool_size": pool_size,
            "max_overflow": 0,
            "pool_timeout": connection_timeout_ms / 1000,
            # Closest pool knob: recycles connections by age, not by idle time
            "pool_recycle": idle_timeout_ms / 1000,
            "pool_pre_ping": True,
            "connect_args": connect_args,
        }

    def _handle_error(self, context) -> None:
        # A dropped connection leaves the pool in an unknown state: stop the process.
        if context.is_disconnect:
            logger.critical(
                "Database connection lost, shutting down: %s", context.original_exception
            )
            self.on_fatal()

    async def connect(self) -> None:
        """Verify the store is reachable and create missing tables."""
        from . import models  # noqa: F401  registers the tables on Base

        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database connected (%s)", self.url.render_as_string(hide_password=True))

    async def execute(
        self,
        statement: Union[str, Executable],
        params: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run one statement in its own transaction.

        Args:
            statement: SQL text with ``:name`` placeholders, or a SQLAlchemy Core statement
            params: Bound parameter values

        Returns:
            Result rows as dicts; empty for statements that return no rows

        Raises:
            sqlalchemy.exc.SQLAlchemyError: Whatever the store raised, unchanged
        """
        if isinstance(statement, str):
            statement = text(statement)
        start = time.monotonic()
        try:
            async with self.engine.begin() as conn:
                if params:
                    result = await conn.execute(statement, params)
                else:
                    result = await conn.execute(statement)
                rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
        except Exception as e:
            logger.error("Database query error: %s", e)
            raise
        if self.log_queries:
            logger.debug(
                "Executed query %s (%.1fms, %d rows)",
                statement,
                (time.monotonic() - start) * 1000,
                len(rows),
            )
        return rows

    async def health_check(self) -> Dict[str, str]:
        now = datetime.datetime.now(datetime.timezone.utc).isoformat()
        try:
            await self.execute("SELECT 1 AS health_check")
            return {"status": "healthy", "timestamp": now}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e) or type(e).__name__, "timestamp": now}

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database pool closed")


def get_database(request: Request) -> Database:
    """Dependency returning the process-wide database handle."""
    return request.app.state.database
