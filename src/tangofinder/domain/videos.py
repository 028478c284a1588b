"""Filtered, deduplicated and paginated video results."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from tangofinder.domain.criteria import curation_criteria
from tangofinder.domain.model import VideoPage, VideoSortKey, total_pages

if TYPE_CHECKING:
    from tangofinder.domain.model import FilterValue, VideoSummary
    from tangofinder.domain.ports import CatalogStore

log = logging.getLogger(__name__)

FIRST_PAGE: Final[int] = 1


def coerce_page(value: object) -> int:
    """Parse a requested page number; anything non-numeric or below 1 becomes 1."""

    if isinstance(value, bool):
        return FIRST_PAGE
    if isinstance(value, int):
        page = value
    elif isinstance(value, str):
        try:
            page = int(value.strip())
        except ValueError:
            return FIRST_PAGE
    else:
        return FIRST_PAGE
    return max(FIRST_PAGE, page)


def clamp_page(requested: int, total_count: int, page_size: int) -> int:
    return min(max(FIRST_PAGE, requested), total_pages(total_count, page_size))


def _require_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def query_videos(  # noqa: PLR0913
    store: CatalogStore,
    dancer1: FilterValue,
    dancer2: FilterValue,
    orchestra: FilterValue,
    page: object,
    page_size: int,
    *,
    sort: VideoSortKey = VideoSortKey.PUBLISHED_AT,
    total_count: int | None = None,
) -> VideoPage:
    """Return one page of videos matching the filters.

    The total is computed over the whole deduplicated result so callers can
    derive the page count; a page past the end is clamped to the last page.
    Pass ``total_count`` when it was already counted for the same filters.
    """

    _require_positive("page_size", page_size)
    criteria = curation_criteria(dancer1, dancer2, orchestra)
    total = store.count_videos(criteria) if total_count is None else total_count
    current = clamp_page(coerce_page(page), total, page_size)
    if total == 0:
        return VideoPage(videos=(), total_count=0, page=current, page_size=page_size)

    videos = store.list_videos(
        criteria,
        sort=sort,
        limit=page_size,
        offset=(current - 1) * page_size,
    )
    log.debug(
        "Video page %d/%d (%d rows of %d) for dancer1=%r dancer2=%r orchestra=%r",
        current,
        total_pages(total, page_size),
        len(videos),
        total,
        dancer1,
        dancer2,
        orchestra,
    )
    return VideoPage(videos=tuple(videos), total_count=total, page=current, page_size=page_size)


def count_videos(
    store: CatalogStore,
    dancer1: FilterValue,
    dancer2: FilterValue,
    orchestra: FilterValue,
) -> int:
    return store.count_videos(curation_criteria(dancer1, dancer2, orchestra))


def list_all_videos(
    store: CatalogStore,
    dancer1: FilterValue,
    dancer2: FilterValue,
    orchestra: FilterValue,
    *,
    cap: int,
    sort: VideoSortKey = VideoSortKey.PUBLISHED_AT,
) -> list[VideoSummary]:
    """Unpaginated variant: every matching video up to ``cap``, in page order."""

    _require_positive("cap", cap)
    criteria = curation_criteria(dancer1, dancer2, orchestra)
    return store.list_videos(criteria, sort=sort, limit=cap)
