"""Database session management utilities."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from postboard_backend.database.base import BaseSchema
from postboard_backend.settings import BackendSettings, get_settings

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def _enable_sqlite_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
    """Make SQLite enforce foreign keys and match LIKE case-sensitively."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


class DatabaseService:
    """Wraps SQLAlchemy engine and session factory."""

    def __init__(
        self,
        url: str | None = None,
        *,
        settings: BackendSettings | None = None,
        **engine_options: Any,
    ) -> None:
        config = settings or get_settings()
        engine_options.setdefault("echo", config.database_echo)
        self._engine = create_engine(url or config.database_url, **engine_options)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine, "connect", _enable_sqlite_pragmas)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            class_=Session,
        )

    @property
    def engine(self) -> Engine:
        """Expose the SQLAlchemy engine."""

        return self._engine

    def create_schema(self) -> None:
        """Create all tables known to :class:`BaseSchema` (local runs and tests)."""

        BaseSchema.metadata.create_all(self._engine)

    def dispose(self) -> None:
        """Release pooled connections."""

        self._engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide a transactional session scope."""

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
