"""Composable constraints over curations.

A filter selection is expressed as a small boolean tree instead of assembled
query text. Leaves describe one constraint on a single curation; ``AllOf``
joins them with logical AND. Store adapters compile the tree once into their
own query language.

Because every leaf is evaluated against the *same* curation, two
``LinksDancer`` leaves under one ``AllOf`` mean "both dancers are linked to one
curation" (co-occurrence), never "each dancer has some curation".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tangofinder.domain.model.primitives import is_any
from tangofinder.domain.normalization import normalize

if TYPE_CHECKING:
    from tangofinder.domain.model.primitives import FilterValue


@dataclass(frozen=True, slots=True)
class IsFilterable:
    """The curation links at least one dancer."""


@dataclass(frozen=True, slots=True)
class LinksDancer:
    """The curation links the dancer whose normalized name is ``key``."""

    key: str


@dataclass(frozen=True, slots=True)
class HasOrchestra:
    """The curation's orchestra has normalized name ``key``."""

    key: str


@dataclass(frozen=True, slots=True)
class AllOf:
    criteria: tuple[Criterion, ...] = ()


type Criterion = IsFilterable | LinksDancer | HasOrchestra | AllOf


def all_of(*criteria: Criterion | None) -> AllOf:
    """AND together the given criteria, skipping ``None`` and flattening nested ``AllOf``."""

    flattened: list[Criterion] = []
    for criterion in criteria:
        if criterion is None:
            continue
        if isinstance(criterion, AllOf):
            flattened.extend(criterion.criteria)
        elif criterion not in flattened:
            flattened.append(criterion)
    return AllOf(tuple(flattened))


def links_dancer(value: FilterValue) -> LinksDancer | None:
    if is_any(value):
        return None
    return LinksDancer(normalize(value))


def has_orchestra(value: FilterValue) -> HasOrchestra | None:
    if is_any(value):
        return None
    return HasOrchestra(normalize(value))


def curation_criteria(
    dancer1: FilterValue,
    dancer2: FilterValue,
    orchestra: FilterValue,
) -> AllOf:
    """Criteria for curations matching a full filter selection."""

    return all_of(
        IsFilterable(),
        links_dancer(dancer1),
        links_dancer(dancer2),
        has_orchestra(orchestra),
    )


def dancer_keys(criterion: Criterion) -> frozenset[str]:
    """Normalized names of every dancer the criteria require."""

    if isinstance(criterion, LinksDancer):
        return frozenset({criterion.key})
    if isinstance(criterion, AllOf):
        keys: set[str] = set()
        for child in criterion.criteria:
            keys |= dancer_keys(child)
        return frozenset(keys)
    return frozenset()
