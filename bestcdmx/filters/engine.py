from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from ..catalog.models import Restaurant
from ..i18n import DEFAULT_LOCALE
from .state import FilterState, is_empty


def _build_frame(restaurants: Sequence[Restaurant], lang: str) -> pd.DataFrame:
    # One row per restaurant, positional index matches the input sequence.
    fields = [r.search_fields(lang) for r in restaurants]
    return pd.DataFrame({
        "name_lower": [f[0].lower() for f in fields],
        "description_lower": [f[1].lower() for f in fields],
        "category_ids": [frozenset(r.category_ids) for r in restaurants],
        "neighborhood_id": [r.neighborhood_id for r in restaurants],
        "price_range": [r.price_range.value for r in restaurants],
    })


class FilterEngine:
    """Applies a FilterState to an immutable, ordered restaurant sequence.

    The sequence is indexed once at construction. ``apply`` returns an
    order-preserving subsequence; with no active filters it returns the input
    sequence object itself.
    """

    def __init__(self, restaurants: Sequence[Restaurant], lang: str = DEFAULT_LOCALE) -> None:
        self._restaurants = restaurants
        self._lang = lang
        self._frame = _build_frame(restaurants, lang)

    @property
    def restaurants(self) -> Sequence[Restaurant]:
        return self._restaurants

    @property
    def lang(self) -> str:
        return self._lang

    def mask(self, state: FilterState) -> pd.Series:
        df = self._frame
        mask = pd.Series(True, index=df.index)
        if df.empty:
            return mask

        if state.search.strip():
            term = state.search.lower()
            mask = mask & (
                df["name_lower"].str.contains(term, regex=False)
                | df["description_lower"].str.contains(term, regex=False)
            )

        if state.categories:
            selected = state.categories
            mask = mask & df["category_ids"].apply(lambda ids: not selected.isdisjoint(ids))

        if state.neighborhoods:
            mask = mask & df["neighborhood_id"].isin(list(state.neighborhoods))

        if state.price_tiers:
            mask = mask & df["price_range"].isin([t.value for t in state.price_tiers])

        return mask.astype(bool)

    def apply(self, state: FilterState) -> Sequence[Restaurant]:
        if is_empty(state):
            return self._restaurants
        positions = np.flatnonzero(self.mask(state).to_numpy())
        return [self._restaurants[i] for i in positions]


def apply_filters(
    restaurants: Sequence[Restaurant],
    state: FilterState,
    lang: str = DEFAULT_LOCALE,
) -> Sequence[Restaurant]:
    """One-shot form of ``FilterEngine(restaurants, lang).apply(state)``."""
    if is_empty(state):
        return restaurants
    return FilterEngine(restaurants, lang).apply(state)
