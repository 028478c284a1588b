"""SQLAlchemy adapter package for the catalog snapshot."""

from __future__ import annotations

from .criteria import compile_criterion, curation_filter
from .mappings import create_all_tables, mapper_registry, start_mappers
from .session import (
    SessionScopeError,
    SqlAlchemyCatalogSession,
    SqlAlchemyCatalogSessionFactory,
    build_engine,
    session_factory_for,
)
from .store import SqlAlchemyCatalogStore

__all__ = [
    "SessionScopeError",
    "SqlAlchemyCatalogSession",
    "SqlAlchemyCatalogSessionFactory",
    "SqlAlchemyCatalogStore",
    "build_engine",
    "compile_criterion",
    "create_all_tables",
    "curation_filter",
    "mapper_registry",
    "session_factory_for",
    "start_mappers",
]
