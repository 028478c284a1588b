"""Catalog store backed by a SQLAlchemy session."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import wraps
from typing import TYPE_CHECKING, cast

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from tangofinder.adapters.sqlalchemy.criteria import curation_filter
from tangofinder.adapters.sqlalchemy.mappings import (
    curation_table,
    dancer_curation_table,
    dancer_table,
    orchestra_table,
    performance_table,
    video_table,
)
from tangofinder.domain.model import (
    FilterOption,
    Performance,
    Video,
    VideoSortKey,
    VideoSummary,
)
from tangofinder.domain.ports import CatalogStoreError

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import InstrumentedAttribute, Session

    from tangofinder.domain.criteria import AllOf

log = logging.getLogger(__name__)

_SORT_COLUMNS = {
    VideoSortKey.PUBLISHED_AT: video_table.c.published_at,
    VideoSortKey.VIEW_COUNT: video_table.c.view_count,
}


def _store_errors[**P, R](method: Callable[P, R]) -> Callable[P, R]:
    """Re-raise SQLAlchemy failures as :class:`CatalogStoreError`."""

    @wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return method(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise CatalogStoreError(f"Catalog read failed in {method.__name__}: {exc}") from exc

    return wrapper


def matching_video_ids(criteria: AllOf) -> Select[tuple[str]]:
    """Video ids reachable through a curation satisfying ``criteria``."""

    return (
        select(performance_table.c.video_id)
        .select_from(
            curation_table.join(
                performance_table, performance_table.c.id == curation_table.c.performance_id
            )
        )
        .where(curation_filter(criteria))
    )


class SqlAlchemyCatalogStore:
    def __init__(self, session: Session, *, snapshot_path: Path | None = None) -> None:
        self.session = session
        self.snapshot_path = snapshot_path

    @_store_errors
    def dancer_counts(
        self, criteria: AllOf, *, exclude: frozenset[str] = frozenset()
    ) -> list[FilterOption]:
        count = func.count(distinct(dancer_curation_table.c.curation_id))
        stmt = (
            select(dancer_table.c.id, dancer_table.c.name, count.label("curation_count"))
            .select_from(
                dancer_curation_table.join(
                    dancer_table, dancer_table.c.id == dancer_curation_table.c.dancer_id
                ).join(curation_table, curation_table.c.id == dancer_curation_table.c.curation_id)
            )
            .where(curation_filter(criteria))
            .group_by(dancer_table.c.id, dancer_table.c.name)
        )
        if exclude:
            stmt = stmt.where(dancer_table.c.normalized.not_in(sorted(exclude)))
        return self._options(stmt)

    @_store_errors
    def orchestra_counts(self, criteria: AllOf) -> list[FilterOption]:
        count = func.count(distinct(curation_table.c.id))
        stmt = (
            select(orchestra_table.c.id, orchestra_table.c.name, count.label("curation_count"))
            .select_from(
                curation_table.join(
                    orchestra_table, orchestra_table.c.id == curation_table.c.orchestra_id
                )
            )
            .where(curation_filter(criteria))
            .group_by(orchestra_table.c.id, orchestra_table.c.name)
        )
        return self._options(stmt)

    @_store_errors
    def count_videos(self, criteria: AllOf) -> int:
        stmt = (
            select(func.count())
            .select_from(video_table)
            .where(video_table.c.id.in_(matching_video_ids(criteria)))
        )
        return int(self.session.execute(stmt).scalar_one())

    @_store_errors
    def list_videos(
        self,
        criteria: AllOf,
        *,
        sort: VideoSortKey,
        limit: int,
        offset: int = 0,
    ) -> list[VideoSummary]:
        sort_column: ColumnElement[object] = _SORT_COLUMNS[sort]
        id_stmt = (
            select(video_table.c.id)
            .where(video_table.c.id.in_(matching_video_ids(criteria)))
            .order_by(sort_column.desc(), video_table.c.id.asc())
            .limit(limit)
            .offset(offset)
        )
        video_ids = list(self.session.execute(id_stmt).scalars())
        if not video_ids:
            return []

        videos_by_id = self._load_videos(video_ids)
        return [VideoSummary.from_video(videos_by_id[video_id]) for video_id in video_ids]

    def last_modified(self) -> datetime | None:
        if self.snapshot_path is None:
            return None
        try:
            modified = self.snapshot_path.stat().st_mtime
        except OSError as exc:
            raise CatalogStoreError(f"Cannot stat catalog snapshot {self.snapshot_path}") from exc
        return datetime.fromtimestamp(modified, tz=UTC)

    def _options(self, stmt: Select[tuple[int, str, int]]) -> list[FilterOption]:
        rows = self.session.execute(stmt).all()
        return [
            FilterOption(id=option_id, name=name, count=int(curation_count))
            for option_id, name, curation_count in rows
        ]

    def _load_videos(self, video_ids: list[str]) -> dict[str, Video]:
        video_id_column = cast("InstrumentedAttribute[str]", Video.id)
        performance = cast("InstrumentedAttribute[Performance]", Video.performance)
        curations = cast(
            "InstrumentedAttribute[list[object]]",
            Performance._curations,  # noqa: SLF001
        )
        stmt = (
            select(Video)
            .where(video_id_column.in_(video_ids))
            .options(selectinload(performance).selectinload(curations))
        )
        videos = self.session.execute(stmt).scalars().all()
        log.debug("Loaded %d video rows for a page of %d ids", len(videos), len(video_ids))
        return {video.id: video for video in videos}


if TYPE_CHECKING:
    from tangofinder.domain.ports import CatalogStore

    _session_stub = cast("Session", object())
    _store_check: CatalogStore = SqlAlchemyCatalogStore(_session_stub)
