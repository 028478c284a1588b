"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CurationStatus(StrEnum):
    AUTO_PROCESSED = "auto_processed"
    IN_REVIEW = "in_review"
    NEEDS_CORRECTION = "needs_correction"
    VERIFIED = "verified"
    REJECTED = "rejected"


class VideoSortKey(StrEnum):
    """Ordering applied to video results; always descending, ties by video id."""

    PUBLISHED_AT = "published_at"
    VIEW_COUNT = "view_count"


class PickAxis(StrEnum):
    DANCER = "dancer"
    ORCHESTRA = "orchestra"
