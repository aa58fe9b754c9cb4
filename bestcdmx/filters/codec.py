"""
Query-string codec for listing filters.

URL contract:
- ``q``: search text
- ``c``: comma-joined category ids
- ``n``: comma-joined neighborhood ids
- ``p``: comma-joined price tiers (``$`` .. ``$$$$``)

Each token is percent-encoded before joining, so an identifier that itself
contains a comma is written as ``%2C`` and survives the round trip. Only bare
commas separate tokens. URLs written with raw comma-joined values still decode.
"""
from __future__ import annotations

import logging
from urllib.parse import quote, unquote_plus

from .state import (
    NO_LOCKS,
    PRICE_ORDER,
    FilterState,
    LockedFilters,
    PriceTier,
    enforce_locked,
    sorted_tiers,
)

logger = logging.getLogger(__name__)

SEARCH_KEY = "q"
CATEGORY_KEY = "c"
NEIGHBORHOOD_KEY = "n"
PRICE_KEY = "p"

_DELIMITER = ","


def _join(tokens: list[str]) -> str:
    return _DELIMITER.join(quote(token, safe="$") for token in tokens)


def _split(raw: str) -> list[str]:
    tokens = (unquote_plus(token) for token in raw.split(_DELIMITER))
    return [token for token in tokens if token]


def _parse_query(query: str) -> dict[str, str]:
    """Map each key to its raw (still encoded) value. First occurrence wins."""
    params: dict[str, str] = {}
    for pair in query.lstrip("?").split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params.setdefault(unquote_plus(key), value)
    return params


def encode(state: FilterState, locked: LockedFilters = NO_LOCKS) -> str:
    """Serialise *state* to a query string without the leading ``?``.

    Empty dimensions are omitted, and so are category / neighborhood values
    that equal the locked default of the page.
    """
    state = enforce_locked(state, locked)
    params: list[tuple[str, str]] = []

    if state.search:
        params.append((SEARCH_KEY, quote(state.search, safe="")))
    if state.categories and state.categories != locked.categories:
        params.append((CATEGORY_KEY, _join(sorted(state.categories))))
    if state.neighborhoods and state.neighborhoods != locked.neighborhoods:
        params.append((NEIGHBORHOOD_KEY, _join(sorted(state.neighborhoods))))
    if state.price_tiers:
        params.append((PRICE_KEY, _join([t.value for t in sorted_tiers(state.price_tiers)])))

    return "&".join(f"{key}={value}" for key, value in params)


def decode(query: str | None, locked: LockedFilters = NO_LOCKS) -> FilterState:
    """Parse a raw query string into a FilterState with *locked* enforced.

    Never raises: malformed or unknown input falls back to defaults.
    """
    params = _parse_query(query or "")

    search = unquote_plus(params[SEARCH_KEY]) if SEARCH_KEY in params else ""

    if CATEGORY_KEY in params:
        categories = _split(params[CATEGORY_KEY])
    else:
        categories = list(locked.categories)

    if NEIGHBORHOOD_KEY in params:
        neighborhoods = _split(params[NEIGHBORHOOD_KEY])
    else:
        neighborhoods = list(locked.neighborhoods)

    tiers: list[PriceTier] = []
    for token in _split(params.get(PRICE_KEY, "")):
        if token in PRICE_ORDER:
            tiers.append(PriceTier(token))
        else:
            logger.debug("Dropping unknown price tier token %r", token)

    state = FilterState(
        search=search,
        categories=categories,
        neighborhoods=neighborhoods,
        price_tiers=tiers,
    )
    return enforce_locked(state, locked)


def build_url(path: str, state: FilterState, locked: LockedFilters = NO_LOCKS) -> str:
    query = encode(state, locked)
    return f"{path}?{query}" if query else path
