from __future__ import annotations

import time
from typing import Any

from ..filters.state import FilterState, sorted_tiers

_events: list[dict[str, Any]] = []


def record_event(event_type: str, data: dict[str, Any]) -> None:
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })


def filter_fields(state: FilterState) -> dict[str, Any]:
    """Flatten a FilterState into event fields."""
    return {
        "search": state.search.strip(),
        "categories": sorted(state.categories),
        "neighborhoods": sorted(state.neighborhoods),
        "price_tiers": [t.value for t in sorted_tiers(state.price_tiers)],
    }


def get_events() -> list[dict[str, Any]]:
    return _events


def clear_events() -> None:
    _events.clear()
