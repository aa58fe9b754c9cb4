"""
Listing controller.

Owns the canonical FilterState of one page view and moves between three
phases:

* ``idle``: the visible set reflects the last committed state.
* ``debouncing``: an edit is pending; the visible set is unchanged and the
  listing reports itself busy.
* ``recomputing``: transient, while the engine runs on the settled state.

The initial state is decoded from the URL and computed synchronously, so a
controller is born ``idle`` and never debounces its first render.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence

from ..catalog.models import Restaurant
from ..filters.codec import build_url, decode
from ..filters.debounce import Debouncer, Scheduler
from ..filters.editor import FilterEditor
from ..filters.engine import FilterEngine
from ..filters.state import (
    NO_LOCKS,
    FilterPatch,
    FilterState,
    LockedFilters,
    enforce_locked,
    merge,
)
from ..i18n import DEFAULT_LOCALE
from .config import DEFAULT_LISTING_CONFIG

logger = logging.getLogger(__name__)


class ListingPhase(str, Enum):
    idle = "idle"
    debouncing = "debouncing"
    recomputing = "recomputing"


class ListingController:
    def __init__(
        self,
        restaurants: Sequence[Restaurant],
        scheduler: Scheduler,
        *,
        path: str = "",
        query: str = "",
        lang: str = DEFAULT_LOCALE,
        locked: LockedFilters = NO_LOCKS,
        debounce_seconds: float = DEFAULT_LISTING_CONFIG.debounce_seconds,
        on_navigate: Callable[[str], None] | None = None,
        on_change: Callable[[ListingController], None] | None = None,
        on_commit: Callable[[FilterState], None] | None = None,
    ) -> None:
        self._path = path
        self._lang = lang
        self._locked = locked
        self._engine = FilterEngine(restaurants, lang)
        self._on_navigate = on_navigate
        self._on_change = on_change
        self._on_commit = on_commit
        self._debouncer: Debouncer[FilterState] = Debouncer(
            scheduler, debounce_seconds, self._settle,
        )
        self._closed = False

        initial = decode(query, locked)
        self._state = initial
        self._committed = initial
        self._visible = self._engine.apply(initial)
        self._url = build_url(path, initial, locked)
        self._phase = ListingPhase.idle

    # ── Read side ────────────────────────────────────────────────────────

    @property
    def state(self) -> FilterState:
        """Canonical state, including edits that have not settled yet."""
        return self._state

    @property
    def committed_state(self) -> FilterState:
        return self._committed

    @property
    def locked(self) -> LockedFilters:
        return self._locked

    @property
    def lang(self) -> str:
        return self._lang

    @property
    def path(self) -> str:
        return self._path

    @property
    def visible(self) -> Sequence[Restaurant]:
        return self._visible

    @property
    def phase(self) -> ListingPhase:
        return self._phase

    @property
    def is_busy(self) -> bool:
        return self._phase is not ListingPhase.idle

    @property
    def url(self) -> str:
        """URL of the last committed state."""
        return self._url

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def editor(self) -> FilterEditor:
        return FilterEditor(self)

    # ── Write side ───────────────────────────────────────────────────────

    def edit(self, patch: FilterPatch) -> None:
        if self._closed:
            logger.debug("Ignoring edit on closed listing %s", self._path)
            return

        updated = enforce_locked(merge(self._state, patch), self._locked)
        if updated == self._state and self._phase is ListingPhase.idle:
            return

        self._state = updated
        self._debouncer.push(updated)
        if self._phase is not ListingPhase.debouncing:
            self._phase = ListingPhase.debouncing
            self._notify()

    def flush(self) -> None:
        """Settle a pending edit immediately."""
        self._debouncer.flush()

    def close(self) -> None:
        """Tear down: a pending edit is dropped without recompute or URL write."""
        if self._closed:
            return
        self._closed = True
        if self._debouncer.cancel():
            logger.debug("Cancelled pending edit on %s", self._path)
        self._phase = ListingPhase.idle

    def _settle(self, state: FilterState) -> None:
        if self._closed:
            return

        self._phase = ListingPhase.recomputing
        self._visible = self._engine.apply(state)
        self._committed = state
        self._phase = ListingPhase.idle
        logger.debug("Settled %s: %d visible", self._path, len(self._visible))

        if self._on_commit is not None:
            self._on_commit(state)
        self._notify()

        url = build_url(self._path, state, self._locked)
        if url != self._url:
            self._url = url
            if self._on_navigate is not None:
                self._on_navigate(url)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
