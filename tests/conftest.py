from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from tangofinder.adapters.sqlalchemy import (
    SqlAlchemyCatalogSessionFactory,
    SqlAlchemyCatalogStore,
    build_engine,
    create_all_tables,
)
from tangofinder.config import DatabaseConfig
from tangofinder.config.storage import sqlite_uri
from tests.helpers.catalog import seed_catalog

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    return tmp_path / "tango_videos.db"


@pytest.fixture
def sqlite_engine(catalog_path: Path) -> Iterator[Engine]:
    # file-backed so that concurrent reads on other threads see the same rows
    engine = build_engine(DatabaseConfig(uri=sqlite_uri(catalog_path)))
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_engine(sqlite_engine: Engine) -> Engine:
    with Session(sqlite_engine) as session:
        seed_catalog(session)
        session.commit()
    return sqlite_engine


@pytest.fixture
def catalog_sessions(
    seeded_engine: Engine, catalog_path: Path
) -> SqlAlchemyCatalogSessionFactory:
    return SqlAlchemyCatalogSessionFactory(seeded_engine, snapshot_path=catalog_path)


@pytest.fixture
def catalog_store(
    catalog_sessions: SqlAlchemyCatalogSessionFactory,
) -> Iterator[SqlAlchemyCatalogStore]:
    with catalog_sessions() as session:
        yield session.catalog
