"""Settings for option lists, video paging and result caching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from tangofinder.domain.model import VideoSortKey

from .env import env_int, optional_env_var
from .errors import ConfigurationError

DEFAULT_PAGE_SIZE: Final[int] = 42
DEFAULT_RESULT_CAP: Final[int] = 1000
DEFAULT_CACHE_SIZE: Final[int] = 256


@dataclass(frozen=True, slots=True)
class BrowseConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    sort: VideoSortKey = VideoSortKey.PUBLISHED_AT
    result_cap: int = DEFAULT_RESULT_CAP
    cache_size: int = DEFAULT_CACHE_SIZE

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ConfigurationError(f"page_size must be positive, got {self.page_size}")
        if self.result_cap <= 0:
            raise ConfigurationError(f"result_cap must be positive, got {self.result_cap}")
        if self.cache_size < 0:
            raise ConfigurationError(f"cache_size must be >= 0, got {self.cache_size}")


def _sort_from_env() -> VideoSortKey:
    raw = optional_env_var("TANGOFINDER_SORT")
    if raw is None:
        return VideoSortKey.PUBLISHED_AT
    try:
        return VideoSortKey(raw.lower())
    except ValueError as exc:
        choices = ", ".join(key.value for key in VideoSortKey)
        raise ConfigurationError(f"TANGOFINDER_SORT must be one of: {choices}") from exc


def get_browse_config() -> BrowseConfig:
    return BrowseConfig(
        page_size=env_int("TANGOFINDER_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
        sort=_sort_from_env(),
        result_cap=env_int("TANGOFINDER_RESULT_CAP", DEFAULT_RESULT_CAP, minimum=1),
        cache_size=env_int("TANGOFINDER_CACHE_SIZE", DEFAULT_CACHE_SIZE, minimum=0),
    )
