from __future__ import annotations

from typing import Protocol

from .state import FilterPatch, FilterState, LockedFilters, PriceTier


class EditTarget(Protocol):
    @property
    def state(self) -> FilterState: ...

    @property
    def locked(self) -> LockedFilters: ...

    def edit(self, patch: FilterPatch) -> None: ...


class FilterEditor:
    """Translates visitor actions into whole-dimension FilterPatch edits.

    Locked category / neighborhood values cannot be removed; such attempts are
    no-ops and return ``False``.
    """

    def __init__(self, target: EditTarget) -> None:
        self._target = target

    @property
    def state(self) -> FilterState:
        return self._target.state

    @property
    def locked(self) -> LockedFilters:
        return self._target.locked

    def set_search(self, text: str) -> bool:
        if text == self.state.search:
            return False
        self._target.edit(FilterPatch(search=text))
        return True

    # ── Categories ───────────────────────────────────────────────────────

    def toggle_category(self, category_id: str) -> bool:
        current = self.state.categories
        if category_id in current:
            return self.remove_category(category_id)
        self._target.edit(FilterPatch(categories=current | {category_id}))
        return True

    def remove_category(self, category_id: str) -> bool:
        current = self.state.categories
        if self.locked.is_locked_category(category_id) or category_id not in current:
            return False
        self._target.edit(FilterPatch(categories=current - {category_id}))
        return True

    # ── Neighborhoods ────────────────────────────────────────────────────

    def toggle_neighborhood(self, neighborhood_id: str) -> bool:
        current = self.state.neighborhoods
        if neighborhood_id in current:
            return self.remove_neighborhood(neighborhood_id)
        self._target.edit(FilterPatch(neighborhoods=current | {neighborhood_id}))
        return True

    def remove_neighborhood(self, neighborhood_id: str) -> bool:
        current = self.state.neighborhoods
        if self.locked.is_locked_neighborhood(neighborhood_id) or neighborhood_id not in current:
            return False
        self._target.edit(FilterPatch(neighborhoods=current - {neighborhood_id}))
        return True

    # ── Price tiers ──────────────────────────────────────────────────────

    def toggle_price_tier(self, tier: PriceTier | str) -> bool:
        tier = PriceTier(tier)
        current = self.state.price_tiers
        if tier in current:
            return self.remove_price_tier(tier)
        self._target.edit(FilterPatch(price_tiers=current | {tier}))
        return True

    def remove_price_tier(self, tier: PriceTier | str) -> bool:
        tier = PriceTier(tier)
        current = self.state.price_tiers
        if tier not in current:
            return False
        self._target.edit(FilterPatch(price_tiers=current - {tier}))
        return True

    def clear(self) -> bool:
        """Reset every dimension to the page's locked defaults."""
        self._target.edit(FilterPatch(
            search="",
            categories=self.locked.categories,
            neighborhoods=self.locked.neighborhoods,
            price_tiers=(),
        ))
        return True
