"""Ports for reading the curated catalog snapshot."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime
    from types import TracebackType

    from tangofinder.domain.criteria import AllOf
    from tangofinder.domain.model import FilterOption, VideoSortKey, VideoSummary


class CatalogStoreError(RuntimeError):
    """Raised when the underlying store cannot answer a read."""


@runtime_checkable
class CatalogStore(Protocol):
    """Set-based reads over curations, grouped and counted by the store.

    Every method receives the curation criteria already built by the caller;
    stores only evaluate them.
    """

    def dancer_counts(
        self, criteria: AllOf, *, exclude: frozenset[str] = frozenset()
    ) -> list[FilterOption]:
        """Matching curation count per linked dancer, except names keyed in ``exclude``."""
        ...

    def orchestra_counts(self, criteria: AllOf) -> list[FilterOption]:
        """Distinct matching curations per orchestra."""
        ...

    def count_videos(self, criteria: AllOf) -> int:
        """Distinct videos reachable through a matching curation."""
        ...

    def list_videos(
        self,
        criteria: AllOf,
        *,
        sort: VideoSortKey,
        limit: int,
        offset: int = 0,
    ) -> list[VideoSummary]:
        """Distinct matching videos, ordered by ``sort`` descending then video id."""
        ...

    def last_modified(self) -> datetime | None:
        """When the snapshot last changed, or ``None`` if the store cannot tell."""
        ...


@runtime_checkable
class CatalogSession(Protocol):
    """Scope owning one store handle; closed when the ``with`` block exits."""

    @property
    def catalog(self) -> CatalogStore: ...

    def __enter__(self) -> CatalogSession: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...


type CatalogSessionFactory = Callable[[], CatalogSession]
