"""Pydantic models for the request/response contract with the UI layer.

Incoming query parameters are loose strings; outgoing payloads use the
camelCase keys the UI already consumes.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tangofinder.domain.filter_state import FilterState
from tangofinder.domain.model import (
    ANY,
    FilterOption,
    VideoPage,
    VideoSummary,
    coerce_filter_value,
)
from tangofinder.domain.videos import coerce_page

if TYPE_CHECKING:
    from tangofinder.domain.browse import BrowseResult


class ContractModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class BrowseQuery(BaseModel):
    """Raw filter/page query parameters; never rejects, only coerces."""

    model_config = ConfigDict(extra="ignore")

    dancer1: str = ANY
    dancer2: str = ANY
    orchestra: str = ANY
    page: int = 1

    @field_validator("dancer1", "dancer2", "orchestra", mode="before")
    @classmethod
    def _blank_to_any(cls, value: object) -> str:
        if value is None or isinstance(value, str):
            return coerce_filter_value(value)
        return coerce_filter_value(str(value))

    @field_validator("page", mode="before")
    @classmethod
    def _coerce_page(cls, value: object) -> int:
        return coerce_page(value)

    def to_state(self) -> FilterState:
        return FilterState(
            dancer1=self.dancer1,
            dancer2=self.dancer2,
            orchestra=self.orchestra,
            page=self.page,
        )


class OptionOut(ContractModel):
    id: int
    name: str
    count: int

    @classmethod
    def from_option(cls, option: FilterOption) -> OptionOut:
        return cls(id=option.id, name=option.name, count=option.count)


class VideoOut(ContractModel):
    id: str
    title: str
    channel_title: str
    channel_id: str
    dancers: list[str] = Field(default_factory=list)
    song_title: str
    orchestra: str
    singers: list[str] = Field(default_factory=list)
    year: int
    status: str
    published_at: datetime | None = None
    view_count: int = 0

    @classmethod
    def from_summary(cls, video: VideoSummary) -> VideoOut:
        return cls(
            id=video.id,
            title=video.title,
            channel_title=video.channel_title,
            channel_id=video.channel_id,
            dancers=list(video.dancers),
            song_title=video.song_title,
            orchestra=video.orchestra,
            singers=list(video.singers),
            year=video.year,
            status=video.status,
            published_at=video.published_at,
            view_count=video.view_count,
        )


class VideoPageOut(ContractModel):
    videos: list[VideoOut]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    start_index: int
    end_index: int

    @classmethod
    def from_page(cls, page: VideoPage) -> VideoPageOut:
        return cls(
            videos=[VideoOut.from_summary(video) for video in page.videos],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            start_index=page.start_index,
            end_index=page.end_index,
        )


class BrowseResponse(ContractModel):
    dancer1: str
    dancer2: str
    orchestra: str
    dancer_one_options: list[OptionOut]
    dancer_two_options: list[OptionOut]
    orchestra_options: list[OptionOut]
    initial_videos: list[VideoOut]
    formatted_last_update: str
    page: int
    total_pages: int
    total_videos: int
    start_index: int
    end_index: int

    @classmethod
    def from_result(cls, result: BrowseResult) -> BrowseResponse:
        page = result.videos
        return cls(
            dancer1=result.state.dancer1,
            dancer2=result.state.dancer2,
            orchestra=result.state.orchestra,
            dancer_one_options=options_out(result.dancer1_options),
            dancer_two_options=options_out(result.dancer2_options),
            orchestra_options=options_out(result.orchestra_options),
            initial_videos=[VideoOut.from_summary(video) for video in page.videos],
            formatted_last_update=result.formatted_last_update,
            page=page.page,
            total_pages=page.total_pages,
            total_videos=page.total_count,
            start_index=page.start_index,
            end_index=page.end_index,
        )


def options_out(options: list[FilterOption] | tuple[FilterOption, ...]) -> list[OptionOut]:
    return [OptionOut.from_option(option) for option in options]
