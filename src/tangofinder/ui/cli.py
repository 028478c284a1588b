# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import TypeAdapter

from tangofinder.adapters.schema import (
    BrowseQuery,
    BrowseResponse,
    OptionOut,
    VideoOut,
    VideoPageOut,
    options_out,
)
from tangofinder.app import (
    apply_filter_pick,
    browse,
    get_dancer_options,
    get_filtered_videos,
    get_last_update_time,
    get_orchestra_options,
    list_all_videos,
)
from tangofinder.config import ConfigurationError, configure_logging
from tangofinder.domain.browse import format_freshness
from tangofinder.domain.model import PickAxis, VideoSortKey

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from tangofinder.domain.filter_state import FilterState

log = logging.getLogger(__name__)

_OPTIONS_JSON = TypeAdapter(list[OptionOut])
_VIDEOS_JSON = TypeAdapter(list[VideoOut])


def _add_filter_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dancer1", type=str, help="First dancer (default: any)")
    parser.add_argument("--dancer2", type=str, help="Second dancer (default: any)")
    parser.add_argument("--orchestra", type=str, help="Orchestra (default: any)")


def _sort_key(value: str) -> VideoSortKey:
    try:
        return VideoSortKey(value.strip().lower())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Unknown sort key: {value}") from exc


def _parse_pick(value: str) -> tuple[PickAxis, str]:
    axis, sep, name = value.partition(":")
    if not sep or not name.strip():
        raise ValueError(f"Invalid pick {value!r}; expected AXIS:NAME")
    try:
        return PickAxis(axis.strip().lower()), name
    except ValueError as exc:
        choices = ", ".join(item.value for item in PickAxis)
        raise ValueError(f"Invalid pick axis {axis!r}; expected one of: {choices}") from exc


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse the tango video catalog")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (defaults to TANGOFINDER_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    videos = subparsers.add_parser("videos", help="List filtered videos")
    _add_filter_flags(videos)
    videos.add_argument("--page", type=str, default="1", help="Page number (default: 1)")
    videos.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Videos per page (defaults to config)",
    )
    videos.add_argument(
        "--sort",
        type=_sort_key,
        default=None,
        help="published_at or view_count (defaults to config)",
    )
    videos.add_argument(
        "--all",
        action="store_true",
        help="Ignore paging and list every match up to the result cap",
    )
    videos.add_argument(
        "--cap",
        type=int,
        default=None,
        help="Result cap for --all (defaults to config)",
    )

    dancers = subparsers.add_parser("dancers", help="List dancer options")
    dancers.add_argument("--other-dancer", type=str, help="Dancer already selected")
    dancers.add_argument("--orchestra", type=str, help="Orchestra (default: any)")

    orchestras = subparsers.add_parser("orchestras", help="List orchestra options")
    orchestras.add_argument("--dancer1", type=str, help="First dancer (default: any)")
    orchestras.add_argument("--dancer2", type=str, help="Second dancer (default: any)")

    browse_parser = subparsers.add_parser(
        "browse",
        help="Option lists, one video page and freshness for a selection",
    )
    _add_filter_flags(browse_parser)
    browse_parser.add_argument("--page", type=str, default="1", help="Page number (default: 1)")
    browse_parser.add_argument(
        "--pick",
        action="append",
        default=[],
        metavar="AXIS:NAME",
        help="Apply a dancer/orchestra click before browsing (repeatable)",
    )

    subparsers.add_parser("freshness", help="Show when the catalog snapshot was last updated")

    return parser.parse_args(list(argv))


def _browse_state(args: argparse.Namespace) -> FilterState:
    query = BrowseQuery.model_validate(
        {
            "dancer1": args.dancer1,
            "dancer2": args.dancer2,
            "orchestra": args.orchestra,
            "page": args.page,
        }
    )
    state = query.to_state()
    for pick in args.pick:
        axis, name = _parse_pick(pick)
        state = apply_filter_pick(state, axis, name)
    return state


def _run(args: argparse.Namespace) -> str:
    if args.command == "videos":
        if args.all:
            found = list_all_videos(
                args.dancer1,
                args.dancer2,
                args.orchestra,
                cap=args.cap,
                sort=args.sort,
            )
            return _VIDEOS_JSON.dump_json(
                [VideoOut.from_summary(video) for video in found], by_alias=True, indent=2
            ).decode()
        page = get_filtered_videos(
            args.dancer1,
            args.dancer2,
            args.orchestra,
            args.page,
            args.page_size,
            sort=args.sort,
        )
        return VideoPageOut.from_page(page).model_dump_json(by_alias=True, indent=2)
    if args.command == "dancers":
        found_options = get_dancer_options(args.other_dancer, args.orchestra)
        return _OPTIONS_JSON.dump_json(options_out(found_options), indent=2).decode()
    if args.command == "orchestras":
        found_options = get_orchestra_options(args.dancer1, args.dancer2)
        return _OPTIONS_JSON.dump_json(options_out(found_options), indent=2).decode()
    if args.command == "browse":
        result = browse(_browse_state(args))
        return BrowseResponse.from_result(result).model_dump_json(by_alias=True, indent=2)
    if args.command == "freshness":
        return format_freshness(get_last_update_time())
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=parsed_args.log_level)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        output = _run(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("Invalid request")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while reading the catalog")
        sys.exit(1)

    print(output)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
