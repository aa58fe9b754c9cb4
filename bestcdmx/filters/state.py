from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable


class PriceTier(str, Enum):
    budget = "$"
    moderate = "$$"
    upscale = "$$$"
    luxury = "$$$$"


PRICE_ORDER = [tier.value for tier in PriceTier]


def _ids(values: Iterable[str]) -> frozenset[str]:
    return frozenset(v for v in values if v)


def _tiers(values: Iterable[PriceTier | str]) -> frozenset[PriceTier]:
    return frozenset(PriceTier(v) for v in values)


@dataclass(frozen=True)
class FilterState:
    """Current filter selection for one listing page view.

    Dimensions are OR-combined internally and AND-combined with each other.
    An empty dimension imposes no constraint.
    """

    search: str = ""
    categories: frozenset[str] = field(default_factory=frozenset)
    neighborhoods: frozenset[str] = field(default_factory=frozenset)
    price_tiers: frozenset[PriceTier] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", _ids(self.categories))
        object.__setattr__(self, "neighborhoods", _ids(self.neighborhoods))
        object.__setattr__(self, "price_tiers", _tiers(self.price_tiers))


@dataclass(frozen=True)
class FilterPatch:
    """A partial edit. ``None`` means the dimension is left untouched."""

    search: str | None = None
    categories: Iterable[str] | None = None
    neighborhoods: Iterable[str] | None = None
    price_tiers: Iterable[PriceTier | str] | None = None

    def changes(self) -> dict:
        return {
            name: getattr(self, name)
            for name in ("search", "categories", "neighborhoods", "price_tiers")
            if getattr(self, name) is not None
        }


@dataclass(frozen=True)
class LockedFilters:
    """Values imposed by the page context that the visitor cannot remove."""

    categories: frozenset[str] = field(default_factory=frozenset)
    neighborhoods: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", _ids(self.categories))
        object.__setattr__(self, "neighborhoods", _ids(self.neighborhoods))

    def is_locked_category(self, category_id: str) -> bool:
        return category_id in self.categories

    def is_locked_neighborhood(self, neighborhood_id: str) -> bool:
        return neighborhood_id in self.neighborhoods


NO_LOCKS = LockedFilters()


def merge(base: FilterState, patch: FilterPatch) -> FilterState:
    """Replace the dimensions present in *patch*, keep the rest of *base*."""
    changes = patch.changes()
    if not changes:
        return base
    return replace(base, **changes)


def is_empty(state: FilterState) -> bool:
    return (
        not state.search.strip()
        and not state.categories
        and not state.neighborhoods
        and not state.price_tiers
    )


def enforce_locked(state: FilterState, locked: LockedFilters = NO_LOCKS) -> FilterState:
    """Return *state* with every locked value present. Never removes values."""
    if locked.categories <= state.categories and locked.neighborhoods <= state.neighborhoods:
        return state
    return replace(
        state,
        categories=state.categories | locked.categories,
        neighborhoods=state.neighborhoods | locked.neighborhoods,
    )


def sorted_tiers(tiers: Iterable[PriceTier]) -> list[PriceTier]:
    return sorted(tiers, key=lambda t: PRICE_ORDER.index(t.value))
