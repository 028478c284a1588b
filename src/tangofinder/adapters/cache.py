"""Cross-request result cache keyed on normalized filter criteria.

Entries are keyed on the snapshot timestamp plus the compiled criteria (which
only hold normalized names) and paging and sort arguments. The whole cache is
dropped as soon as the store reports a different snapshot timestamp.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING, Literal, cast

from cachetools import LRUCache

from tangofinder.domain.ports import CatalogStoreError

if TYPE_CHECKING:
    from datetime import datetime
    from types import TracebackType

    from tangofinder.domain.criteria import AllOf
    from tangofinder.domain.model import FilterOption, VideoSortKey, VideoSummary
    from tangofinder.domain.ports import CatalogSession, CatalogSessionFactory, CatalogStore

log = logging.getLogger(__name__)

_UNSET: object = object()


class SnapshotCache:
    """Thread-safe LRU of read results for one catalog snapshot at a time."""

    def __init__(self, maxsize: int) -> None:
        self._entries: LRUCache[Hashable, object] = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()
        self._marker: object = _UNSET

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def sync(self, marker: datetime | None) -> None:
        """Clear every entry when the snapshot marker differs from the last one seen."""

        with self._lock:
            if self._marker is not _UNSET and self._marker != marker:
                log.info(
                    "Catalog snapshot changed (%s); dropping %d cached results",
                    marker,
                    len(self._entries),
                )
                self._entries.clear()
            self._marker = marker

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_or_compute[T](self, key: Hashable, compute: Callable[[], T]) -> T:
        with self._lock:
            if key in self._entries:
                log.debug("Cache hit for %r", key)
                return cast("T", self._entries[key])
        value = compute()
        with self._lock:
            self._entries[key] = value
        return value


class CachingCatalogStore:
    """Catalog store decorator answering repeated reads from a :class:`SnapshotCache`.

    Keys carry the snapshot marker read when the store was opened, so a result
    computed against an older snapshot is never served for a newer one. Stores
    that cannot report a marker are read through without caching.
    """

    def __init__(self, inner: CatalogStore, cache: SnapshotCache) -> None:
        self.inner = inner
        self.cache = cache
        self.marker: datetime | None
        try:
            self.marker = inner.last_modified()
        except CatalogStoreError:
            log.warning("Snapshot marker unavailable; clearing result cache", exc_info=True)
            cache.clear()
            self.marker = None
        if self.marker is not None:
            cache.sync(self.marker)

    def _cached[T](self, key: tuple[Hashable, ...], compute: Callable[[], T]) -> T:
        if self.marker is None:
            return compute()
        return self.cache.get_or_compute((self.marker, *key), compute)

    def dancer_counts(
        self, criteria: AllOf, *, exclude: frozenset[str] = frozenset()
    ) -> list[FilterOption]:
        return list(
            self._cached(
                ("dancers", criteria, exclude),
                lambda: tuple(self.inner.dancer_counts(criteria, exclude=exclude)),
            )
        )

    def orchestra_counts(self, criteria: AllOf) -> list[FilterOption]:
        return list(
            self._cached(
                ("orchestras", criteria),
                lambda: tuple(self.inner.orchestra_counts(criteria)),
            )
        )

    def count_videos(self, criteria: AllOf) -> int:
        return self._cached(
            ("video_count", criteria),
            lambda: self.inner.count_videos(criteria),
        )

    def list_videos(
        self,
        criteria: AllOf,
        *,
        sort: VideoSortKey,
        limit: int,
        offset: int = 0,
    ) -> list[VideoSummary]:
        return list(
            self._cached(
                ("videos", criteria, sort, limit, offset),
                lambda: tuple(
                    self.inner.list_videos(criteria, sort=sort, limit=limit, offset=offset)
                ),
            )
        )

    def last_modified(self) -> datetime | None:
        return self.inner.last_modified()


class CachedCatalogSession:
    """Wrap a catalog session so its store reads through the shared cache."""

    def __init__(self, inner: CatalogSession, cache: SnapshotCache) -> None:
        self.inner = inner
        self.cache = cache
        self._catalog: CachingCatalogStore | None = None

    def __enter__(self) -> CachedCatalogSession:
        self.inner.__enter__()
        try:
            self._catalog = CachingCatalogStore(self.inner.catalog, self.cache)
        except BaseException as exc:
            self.inner.__exit__(type(exc), exc, exc.__traceback__)
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self._catalog = None
        self.inner.__exit__(exc_type, exc_value, traceback)
        return False

    @property
    def catalog(self) -> CachingCatalogStore:
        if self._catalog is None:
            raise RuntimeError("Cached catalog session not open")
        return self._catalog


def cached_sessions(
    session_factory: CatalogSessionFactory, cache: SnapshotCache
) -> CatalogSessionFactory:
    """Session factory whose stores share ``cache`` across requests."""

    def factory() -> CatalogSession:
        return CachedCatalogSession(session_factory(), cache)

    return factory
