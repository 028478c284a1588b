"""Filter value primitives shared by the resolver, query engine and reducer."""

from __future__ import annotations

from typing import Final

ANY: Final[str] = "any"

type FilterValue = str
"""A display name, or :data:`ANY` for "no constraint on this axis"."""


def is_any(value: FilterValue) -> bool:
    return value == ANY


def coerce_filter_value(value: str | None) -> FilterValue:
    """Map missing or blank input onto :data:`ANY`; keep everything else verbatim."""

    if value is None:
        return ANY
    stripped = value.strip()
    return stripped or ANY
