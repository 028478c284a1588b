"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogSession, CatalogSessionFactory, CatalogStore, CatalogStoreError

__all__ = [
    "CatalogSession",
    "CatalogSessionFactory",
    "CatalogStore",
    "CatalogStoreError",
]
