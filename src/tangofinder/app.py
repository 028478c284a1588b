"""Application orchestration entry points."""

from __future__ import annotations

from functools import cache
from logging import getLogger
from typing import TYPE_CHECKING

from tangofinder.adapters.cache import SnapshotCache, cached_sessions
from tangofinder.adapters.schema import BrowseQuery
from tangofinder.adapters.sqlalchemy import session_factory_for
from tangofinder.config import get_browse_config, get_database_config
from tangofinder.domain import browse as browse_flow
from tangofinder.domain import options, videos
from tangofinder.domain.filter_state import FilterState, apply_filter_pick
from tangofinder.domain.model import coerce_filter_value

if TYPE_CHECKING:
    from datetime import datetime

    from tangofinder.config import BrowseConfig
    from tangofinder.domain.browse import BrowseResult
    from tangofinder.domain.model import FilterOption, VideoPage, VideoSortKey, VideoSummary
    from tangofinder.domain.ports import CatalogSessionFactory

__all__ = [
    "apply_filter_pick",
    "browse",
    "default_session_factory",
    "get_dancer_options",
    "get_filtered_videos",
    "get_last_update_time",
    "get_orchestra_options",
    "list_all_videos",
]

log = getLogger(__name__)


@cache
def default_session_factory() -> CatalogSessionFactory:
    """Session factory for the configured snapshot, built once per process."""

    database = get_database_config()
    browse_config = get_browse_config()
    factory = session_factory_for(database)
    if browse_config.cache_size == 0:
        log.info("Result cache disabled")
        return factory
    if database.sqlite_path is None:
        log.info("Result cache disabled: no snapshot file to detect changes with")
        return factory
    log.info("Result cache enabled: maxsize=%d", browse_config.cache_size)
    return cached_sessions(factory, SnapshotCache(browse_config.cache_size))


def _sessions(session_factory: CatalogSessionFactory | None) -> CatalogSessionFactory:
    return session_factory or default_session_factory()


def get_dancer_options(
    other_dancer: str | None = None,
    orchestra: str | None = None,
    *,
    session_factory: CatalogSessionFactory | None = None,
) -> list[FilterOption]:
    """Dancers selectable alongside ``other_dancer`` under the orchestra filter."""

    with _sessions(session_factory)() as session:
        return options.resolve_dancer_options(
            session.catalog,
            coerce_filter_value(other_dancer),
            coerce_filter_value(orchestra),
        )


def get_orchestra_options(
    dancer1: str | None = None,
    dancer2: str | None = None,
    *,
    session_factory: CatalogSessionFactory | None = None,
) -> list[FilterOption]:
    with _sessions(session_factory)() as session:
        return options.resolve_orchestra_options(
            session.catalog,
            coerce_filter_value(dancer1),
            coerce_filter_value(dancer2),
        )


def get_filtered_videos(  # noqa: PLR0913
    dancer1: str | None = None,
    dancer2: str | None = None,
    orchestra: str | None = None,
    page: object = 1,
    page_size: int | None = None,
    *,
    sort: VideoSortKey | None = None,
    session_factory: CatalogSessionFactory | None = None,
    config: BrowseConfig | None = None,
) -> VideoPage:
    """One page of deduplicated videos for the selection, plus the overall total."""

    effective = config or get_browse_config()
    with _sessions(session_factory)() as session:
        return videos.query_videos(
            session.catalog,
            coerce_filter_value(dancer1),
            coerce_filter_value(dancer2),
            coerce_filter_value(orchestra),
            page,
            effective.page_size if page_size is None else page_size,
            sort=sort or effective.sort,
        )


def list_all_videos(  # noqa: PLR0913
    dancer1: str | None = None,
    dancer2: str | None = None,
    orchestra: str | None = None,
    *,
    cap: int | None = None,
    sort: VideoSortKey | None = None,
    session_factory: CatalogSessionFactory | None = None,
    config: BrowseConfig | None = None,
) -> list[VideoSummary]:
    effective = config or get_browse_config()
    with _sessions(session_factory)() as session:
        return videos.list_all_videos(
            session.catalog,
            coerce_filter_value(dancer1),
            coerce_filter_value(dancer2),
            coerce_filter_value(orchestra),
            cap=effective.result_cap if cap is None else cap,
            sort=sort or effective.sort,
        )


def browse(
    request: BrowseQuery | FilterState | None = None,
    *,
    session_factory: CatalogSessionFactory | None = None,
    config: BrowseConfig | None = None,
) -> BrowseResult:
    """Everything one filter view needs: three option lists, a video page and freshness."""

    if request is None:
        state = FilterState()
    elif isinstance(request, BrowseQuery):
        state = request.to_state()
    else:
        state = request
    effective = config or get_browse_config()
    log.info(
        "Browsing: dancer1=%r dancer2=%r orchestra=%r page=%d",
        state.dancer1,
        state.dancer2,
        state.orchestra,
        state.page,
    )
    return browse_flow.browse(
        _sessions(session_factory),
        state,
        page_size=effective.page_size,
        sort=effective.sort,
    )


def get_last_update_time(
    *,
    session_factory: CatalogSessionFactory | None = None,
) -> datetime | None:
    """Snapshot freshness timestamp, or ``None`` when it cannot be determined."""

    with _sessions(session_factory)() as session:
        return browse_flow.read_last_modified(session.catalog)
