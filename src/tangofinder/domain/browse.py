"""One browse request: option lists, video page and freshness for a filter state.

The four independent reads (both dancer lists, the orchestra list and the video
count) run concurrently, each on its own store session, and are joined before
the page of videos is fetched with the clamped page number.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import UTC
from typing import TYPE_CHECKING, Final

from tangofinder.domain.model import VideoSortKey
from tangofinder.domain.options import resolve_dancer_options, resolve_orchestra_options
from tangofinder.domain.ports import CatalogStoreError
from tangofinder.domain.videos import count_videos, query_videos

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from tangofinder.domain.filter_state import FilterState
    from tangofinder.domain.model import FilterOption, VideoPage
    from tangofinder.domain.ports import CatalogSessionFactory, CatalogStore

log = logging.getLogger(__name__)

UNKNOWN_FRESHNESS: Final[str] = "Unknown"


@dataclass(frozen=True, slots=True, kw_only=True)
class BrowseResult:
    state: FilterState
    dancer1_options: tuple[FilterOption, ...]
    dancer2_options: tuple[FilterOption, ...]
    orchestra_options: tuple[FilterOption, ...]
    videos: VideoPage
    last_updated: datetime | None

    @property
    def formatted_last_update(self) -> str:
        return format_freshness(self.last_updated)


def format_freshness(value: datetime | None) -> str:
    """Render the snapshot timestamp as e.g. ``March 5, 2025`` (UTC)."""

    if value is None:
        return UNKNOWN_FRESHNESS
    moment = value.astimezone(UTC) if value.tzinfo else value.replace(tzinfo=UTC)
    return f"{moment:%B} {moment.day}, {moment.year}"


def read_last_modified(store: CatalogStore) -> datetime | None:
    """Snapshot timestamp, or ``None`` when the store cannot provide it."""

    try:
        return store.last_modified()
    except CatalogStoreError:
        log.warning("Could not read catalog freshness; reporting it as unknown", exc_info=True)
        return None


def _read[T](session_factory: CatalogSessionFactory, read: Callable[[CatalogStore], T]) -> T:
    with session_factory() as session:
        return read(session.catalog)


async def browse_async(
    session_factory: CatalogSessionFactory,
    state: FilterState,
    *,
    page_size: int,
    sort: VideoSortKey = VideoSortKey.PUBLISHED_AT,
) -> BrowseResult:
    async def run[T](read: Callable[[CatalogStore], T]) -> T:
        return await asyncio.to_thread(_read, session_factory, read)

    dancer1_options, dancer2_options, orchestra_options, total = await asyncio.gather(
        run(lambda store: resolve_dancer_options(store, state.dancer2, state.orchestra)),
        run(lambda store: resolve_dancer_options(store, state.dancer1, state.orchestra)),
        run(lambda store: resolve_orchestra_options(store, state.dancer1, state.dancer2)),
        run(lambda store: count_videos(store, state.dancer1, state.dancer2, state.orchestra)),
    )
    page, last_updated = await asyncio.gather(
        run(
            lambda store: query_videos(
                store,
                state.dancer1,
                state.dancer2,
                state.orchestra,
                state.page,
                page_size,
                sort=sort,
                total_count=total,
            )
        ),
        run(read_last_modified),
    )
    log.info(
        "Browse finished: dancer1=%r dancer2=%r orchestra=%r page=%d/%d total=%d",
        state.dancer1,
        state.dancer2,
        state.orchestra,
        page.page,
        page.total_pages,
        page.total_count,
    )
    return BrowseResult(
        state=replace(state, page=page.page),
        dancer1_options=tuple(dancer1_options),
        dancer2_options=tuple(dancer2_options),
        orchestra_options=tuple(orchestra_options),
        videos=page,
        last_updated=last_updated,
    )


def browse(
    session_factory: CatalogSessionFactory,
    state: FilterState,
    *,
    page_size: int,
    sort: VideoSortKey = VideoSortKey.PUBLISHED_AT,
) -> BrowseResult:
    """Synchronous wrapper around :func:`browse_async` for non-async callers."""

    return asyncio.run(browse_async(session_factory, state, page_size=page_size, sort=sort))
