"""Pure transitions of the two-dancer plus one-orchestra filter selection."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from tangofinder.domain.model.enums import PickAxis
from tangofinder.domain.model.primitives import ANY, FilterValue, coerce_filter_value, is_any
from tangofinder.domain.normalization import same_name
from tangofinder.domain.videos import FIRST_PAGE, coerce_page


class FilterSlot(StrEnum):
    DANCER1 = "dancer1"
    DANCER2 = "dancer2"
    ORCHESTRA = "orchestra"


@dataclass(frozen=True, slots=True, kw_only=True)
class FilterState:
    dancer1: FilterValue = ANY
    dancer2: FilterValue = ANY
    orchestra: FilterValue = ANY
    page: int = FIRST_PAGE

    @classmethod
    def from_params(
        cls,
        *,
        dancer1: str | None = None,
        dancer2: str | None = None,
        orchestra: str | None = None,
        page: object = None,
    ) -> FilterState:
        return cls(
            dancer1=coerce_filter_value(dancer1),
            dancer2=coerce_filter_value(dancer2),
            orchestra=coerce_filter_value(orchestra),
            page=coerce_page(page),
        )

    @property
    def is_filtered(self) -> bool:
        return not (is_any(self.dancer1) and is_any(self.dancer2) and is_any(self.orchestra))

    def value_of(self, slot: FilterSlot) -> FilterValue:
        return getattr(self, slot.value)

    def set_axis(self, slot: FilterSlot, value: str | None) -> FilterState:
        """Set (or clear with ``any``/blank) one slot directly, as a dropdown does."""

        return replace(self, **{slot.value: coerce_filter_value(value)}, page=FIRST_PAGE)

    def with_page(self, page: object) -> FilterState:
        return replace(self, page=coerce_page(page))


def _holds(current: FilterValue, candidate: FilterValue) -> bool:
    return not is_any(current) and same_name(current, candidate)


def apply_filter_pick(state: FilterState, axis: PickAxis | str, value: str) -> FilterState:
    """Apply a click on a dancer or orchestra name to the current selection.

    Orchestra picks toggle. Dancer picks clear a slot already holding the name,
    otherwise fill dancer1 first and dancer2 second; with both slots taken by
    other dancers the pick is ignored. Any change returns to the first page.
    """

    axis = PickAxis(axis)
    picked = coerce_filter_value(value)
    if is_any(picked):
        return state

    if axis is PickAxis.ORCHESTRA:
        orchestra = ANY if _holds(state.orchestra, picked) else picked
        return replace(state, orchestra=orchestra, page=FIRST_PAGE)

    if _holds(state.dancer1, picked):
        return replace(state, dancer1=ANY, page=FIRST_PAGE)
    if _holds(state.dancer2, picked):
        return replace(state, dancer2=ANY, page=FIRST_PAGE)
    if is_any(state.dancer1) and is_any(state.dancer2):
        return replace(state, dancer1=picked, page=FIRST_PAGE)
    if is_any(state.dancer2):
        return replace(state, dancer2=picked, page=FIRST_PAGE)
    if is_any(state.dancer1):
        return replace(state, dancer1=picked, page=FIRST_PAGE)
    return state


def reset_filters() -> FilterState:
    return FilterState()
