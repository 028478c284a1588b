"""Public domain model surface."""

from __future__ import annotations

from tangofinder.domain.model.catalog import (
    Curation,
    Dancer,
    NamedEntity,
    Orchestra,
    Performance,
    Singer,
    Song,
    Video,
)
from tangofinder.domain.model.enums import CurationStatus, PickAxis, VideoSortKey
from tangofinder.domain.model.primitives import ANY, FilterValue, coerce_filter_value, is_any
from tangofinder.domain.model.views import (
    UNKNOWN,
    FilterOption,
    VideoPage,
    VideoSummary,
    total_pages,
)

__all__ = [
    "ANY",
    "UNKNOWN",
    "Curation",
    "CurationStatus",
    "Dancer",
    "FilterOption",
    "FilterValue",
    "NamedEntity",
    "Orchestra",
    "Performance",
    "PickAxis",
    "Singer",
    "Song",
    "Video",
    "VideoPage",
    "VideoSortKey",
    "VideoSummary",
    "coerce_filter_value",
    "is_any",
    "total_pages",
]
