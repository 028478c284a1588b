from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from tangofinder.adapters.schema import BrowseQuery, OptionOut, VideoOut, VideoPageOut
from tangofinder.domain.filter_state import FilterState
from tangofinder.domain.model import ANY, FilterOption, VideoPage, VideoSummary


def test_browse_query_defaults_to_any() -> None:
    query = BrowseQuery.model_validate({})

    assert query.to_state() == FilterState()


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ({"dancer1": "", "page": "abc"}, FilterState()),
        ({"dancer1": " Juan ", "page": "3"}, FilterState(dancer1="Juan", page=3)),
        ({"orchestra": None, "page": -1}, FilterState()),
        ({"dancer2": "Maria", "unexpected": "x"}, FilterState(dancer2="Maria")),
    ],
)
def test_browse_query_coerces_loose_input(
    params: dict[str, object], expected: FilterState
) -> None:
    assert BrowseQuery.model_validate(params).to_state() == expected


def test_browse_query_keeps_any() -> None:
    assert BrowseQuery(dancer1=ANY).dancer1 == ANY


def test_video_out_uses_camel_case_keys() -> None:
    summary = VideoSummary(
        id="v1",
        title="Bahía Blanca",
        channel_title="Milonga Channel",
        channel_id="UC-milonga",
        dancers=("Juan", "Maria"),
        song_title="Bahía Blanca",
        orchestra="Di Sarli",
        year=2023,
        status="verified",
        published_at=datetime(2024, 1, 1, tzinfo=UTC),
        view_count=12,
    )

    payload = json.loads(VideoOut.from_summary(summary).model_dump_json(by_alias=True))

    assert payload["channelTitle"] == "Milonga Channel"
    assert payload["channelId"] == "UC-milonga"
    assert payload["songTitle"] == "Bahía Blanca"
    assert payload["viewCount"] == 12
    assert payload["dancers"] == ["Juan", "Maria"]
    assert payload["publishedAt"].startswith("2024-01-01T00:00:00")


def test_video_page_out_carries_paging_fields() -> None:
    page = VideoPage(videos=(), total_count=50, page=2, page_size=42)

    payload = VideoPageOut.from_page(page).model_dump(by_alias=True)

    assert payload["totalPages"] == 2
    assert payload["startIndex"] == 43
    assert payload["endIndex"] == 50


def test_option_out() -> None:
    option = OptionOut.from_option(FilterOption(id=7, name="Pugliese", count=4))

    assert option.model_dump() == {"id": 7, "name": "Pugliese", "count": 4}
