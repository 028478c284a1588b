"""Option lists for the dancer and orchestra axes.

Each axis is narrowed by the *other* axes only; an axis's own selection never
narrows its own list, so the UI can always switch to a sibling value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tangofinder.domain.criteria import (
    all_of,
    curation_criteria,
    dancer_keys,
    has_orchestra,
    links_dancer,
)
from tangofinder.domain.model.primitives import ANY
from tangofinder.domain.normalization import normalize

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tangofinder.domain.model import FilterOption, FilterValue
    from tangofinder.domain.ports import CatalogStore

log = logging.getLogger(__name__)


def rank_options(options: Iterable[FilterOption]) -> list[FilterOption]:
    """Drop empty options and order by count, then normalized name, then id."""

    return sorted(
        (option for option in options if option.count > 0),
        key=lambda option: (-option.count, normalize(option.name), option.id),
    )


def resolve_dancer_options(
    store: CatalogStore,
    other_dancer: FilterValue,
    orchestra: FilterValue,
) -> list[FilterOption]:
    """Dancers selectable next to ``other_dancer`` under the ``orchestra`` filter.

    With ``other_dancer`` set, only dancers sharing at least one curation with
    them are returned, counted by shared curations; the other dancer is not
    offered as their own partner.
    """

    partner = links_dancer(other_dancer)
    criteria = all_of(curation_criteria(ANY, ANY, ANY), partner, has_orchestra(orchestra))
    options = rank_options(store.dancer_counts(criteria, exclude=dancer_keys(all_of(partner))))
    log.debug(
        "Resolved %d dancer options for other_dancer=%r orchestra=%r",
        len(options),
        other_dancer,
        orchestra,
    )
    return options


def resolve_orchestra_options(
    store: CatalogStore,
    dancer1: FilterValue,
    dancer2: FilterValue,
) -> list[FilterOption]:
    """Orchestras of curations linking every selected dancer (both at once when both are set)."""

    criteria = curation_criteria(dancer1, dancer2, ANY)
    options = rank_options(store.orchestra_counts(criteria))
    log.debug(
        "Resolved %d orchestra options for dancer1=%r dancer2=%r",
        len(options),
        dancer1,
        dancer2,
    )
    return options