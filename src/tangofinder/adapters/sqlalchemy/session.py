"""Engine construction and per-read session scopes for the catalog store.

The hosting process builds one engine from a :class:`DatabaseConfig`, owns its
lifecycle and hands a session factory to the domain; nothing here keeps
process-wide connection state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from tangofinder.adapters.sqlalchemy.mappings import start_mappers
from tangofinder.adapters.sqlalchemy.store import SqlAlchemyCatalogStore

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

    from sqlalchemy.engine import Engine

    from tangofinder.config import DatabaseConfig

log = logging.getLogger(__name__)


class SessionScopeError(RuntimeError):
    """Raised when a catalog session is used outside its ``with`` block."""


def _sqlite_url(config: DatabaseConfig) -> str:
    path = config.sqlite_path
    if not config.read_only or path is None:
        return config.uri
    return f"sqlite+pysqlite:///file:{path}?mode=ro&uri=true"


def build_engine(config: DatabaseConfig) -> Engine:
    """Create an engine for the snapshot and apply SQLite connection pragmas."""

    start_mappers()
    if not config.is_sqlite:
        log.info("Creating catalog engine for %s", config.uri.split(":", 1)[0])
        return create_engine(config.uri, future=True)

    engine = create_engine(_sqlite_url(config), future=True)
    pragmas = [
        f"PRAGMA busy_timeout = {int(config.busy_timeout_ms)}",
        "PRAGMA foreign_keys = ON",
        "PRAGMA temp_store = MEMORY",
    ]
    if config.read_only:
        pragmas.append("PRAGMA query_only = ON")

    def _apply_pragmas(dbapi_connection: Any, _connection_record: object) -> None:
        cursor = dbapi_connection.cursor()
        try:
            for pragma in pragmas:
                cursor.execute(pragma)
        finally:
            cursor.close()

    event.listen(engine, "connect", _apply_pragmas)

    log.info(
        "Creating catalog engine for %s (read_only=%s, busy_timeout_ms=%s)",
        config.sqlite_path or "in-memory sqlite",
        config.read_only,
        config.busy_timeout_ms,
    )
    return engine


class SqlAlchemyCatalogSession:
    """Owns one SQLAlchemy session (and store) for the duration of a ``with`` block."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        snapshot_path: Path | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.snapshot_path = snapshot_path
        self._session: Session | None = None
        self._catalog: SqlAlchemyCatalogStore | None = None

    def __enter__(self) -> SqlAlchemyCatalogSession:
        if self._session is not None:
            raise SessionScopeError("Catalog session already open")
        self._session = self.session_factory()
        self._catalog = SqlAlchemyCatalogStore(self._session, snapshot_path=self.snapshot_path)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if self._session is not None:
            # reads only: roll back whatever transaction the reads opened
            self._session.rollback()
            self._session.close()
        self._session = None
        self._catalog = None
        return False

    @property
    def catalog(self) -> SqlAlchemyCatalogStore:
        if self._catalog is None:
            raise SessionScopeError("Catalog session not open")
        return self._catalog


class SqlAlchemyCatalogSessionFactory:
    """Callable producing fresh catalog sessions bound to one engine."""

    def __init__(self, engine: Engine, *, snapshot_path: Path | None = None) -> None:
        self.engine = engine
        self.snapshot_path = snapshot_path
        self._sessionmaker = sessionmaker(bind=engine, expire_on_commit=False)

    def __call__(self) -> SqlAlchemyCatalogSession:
        return SqlAlchemyCatalogSession(self._sessionmaker, snapshot_path=self.snapshot_path)

    def dispose(self) -> None:
        self.engine.dispose()


def session_factory_for(config: DatabaseConfig) -> SqlAlchemyCatalogSessionFactory:
    return SqlAlchemyCatalogSessionFactory(build_engine(config), snapshot_path=config.sqlite_path)


if TYPE_CHECKING:
    from tangofinder.domain.ports import CatalogSession, CatalogSessionFactory

    _session_check: CatalogSession = SqlAlchemyCatalogSession(sessionmaker())
    _factory_check: CatalogSessionFactory = SqlAlchemyCatalogSessionFactory(
        create_engine("sqlite://")
    )
