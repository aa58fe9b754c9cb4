from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable

import pytest

from bestcdmx.catalog.models import Restaurant


class _Handle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for an event loop's ``call_later``.

    Time only moves through ``advance``; times are kept in whole
    milliseconds to avoid float drift.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[tuple[int, int, _Handle, Callable[[], Any]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _Handle:
        handle = _Handle()
        due = self.now_ms + round(delay * 1000)
        heapq.heappush(self._queue, (due, next(self._seq), handle, callback))
        return handle

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            self.now_ms = due
            if not handle.cancelled:
                callback()
        self.now_ms = target

    def advance_to(self, ms: int) -> None:
        self.advance(ms - self.now_ms)

    @property
    def armed(self) -> int:
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


def make_restaurant(
    name: str,
    categories: list[str],
    neighborhood: str,
    tier: str,
    description_en: str = "",
    description_es: str = "",
) -> Restaurant:
    slug = name.lower().replace(" ", "-")
    return Restaurant(
        id=f"r-{slug}",
        slug=slug,
        name=name,
        description={"en": description_en, "es": description_es},
        category_ids=categories,
        neighborhood_id=neighborhood,
        price_range=tier,
    )


@pytest.fixture
def pujol_and_taco_stand() -> tuple[Restaurant, ...]:
    return (
        make_restaurant(
            "Pujol", ["fine-dining"], "polanco", "$$$$",
            "Tasting menu with mole madre.", "Menú de degustación con mole madre.",
        ),
        make_restaurant(
            "Taco Stand", ["street-food"], "roma", "$",
            "Late-night tacos.", "Tacos nocturnos.",
        ),
    )
