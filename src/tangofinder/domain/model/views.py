"""Read models handed back to the UI collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime

    from tangofinder.domain.model.catalog import Video

UNKNOWN: Final[str] = "Unknown"


@dataclass(frozen=True, slots=True)
class FilterOption:
    """One selectable value for a filter axis with its curation count."""

    id: int
    name: str
    count: int


@dataclass(frozen=True, slots=True, kw_only=True)
class VideoSummary:
    id: str
    title: str
    channel_title: str
    channel_id: str
    dancers: tuple[str, ...] = ()
    song_title: str = UNKNOWN
    orchestra: str = UNKNOWN
    singers: tuple[str, ...] = ()
    year: int = 0
    status: str = ""
    published_at: datetime | None = None
    view_count: int = 0

    @classmethod
    def from_video(cls, video: Video) -> VideoSummary:
        performance = video.performance
        curation = video.latest_curation
        status = str(curation.status) if curation is not None else ""
        if performance is None:
            return cls(
                id=video.id,
                title=video.title,
                channel_title=video.channel_title,
                channel_id=video.channel_id,
                status=status,
                published_at=video.published_at,
                view_count=video.view_count,
            )
        return cls(
            id=video.id,
            title=video.title,
            channel_title=video.channel_title,
            channel_id=video.channel_id,
            dancers=tuple(name for name in performance.dancers if name and name.strip()),
            song_title=performance.song_title or UNKNOWN,
            orchestra=performance.orchestra or UNKNOWN,
            singers=tuple(name.strip() for name in performance.singers if name and name.strip()),
            year=performance.performance_year or 0,
            status=status,
            published_at=video.published_at,
            view_count=video.view_count,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class VideoPage:
    """One page of filtered videos plus what the caller needs to paginate."""

    videos: tuple[VideoSummary, ...] = field(default_factory=tuple)
    total_count: int = 0
    page: int = 1
    page_size: int = 1

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.page_size)

    @property
    def start_index(self) -> int:
        if self.total_count == 0:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        return min(self.page * self.page_size, self.total_count)


def total_pages(total_count: int, page_size: int) -> int:
    """Pages needed for ``total_count`` rows; an empty result still has one page."""

    if total_count <= 0:
        return 1
    return -(-total_count // page_size)
