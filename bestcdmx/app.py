from __future__ import annotations

import asyncio
import logging
import time
from contextlib import suppress
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from .analytics.aggregator import compute_analytics
from .analytics.store import filter_fields, get_events, record_event
from .auth.dependencies import require_admin
from .catalog import data_store
from .filters.codec import decode, encode
from .filters.editor import FilterEditor
from .filters.engine import apply_filters
from .filters.state import PRICE_ORDER, FilterState
from .i18n import DEFAULT_LOCALE, LOCALES, is_locale, negotiate_locale, translate
from .listing.cache import get_listing_cache
from .listing.config import DEFAULT_LISTING_CONFIG
from .listing.controller import ListingController
from .listing.models import LiveAction, LiveMessage, ListingResponse
from .listing.pages import (
    ListingPage,
    cuisine_page,
    neighborhood_page,
    render_listing,
    restaurants_page,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Best CDMX Restaurant Directory", version="1.0.0")
app.state.listing_config = DEFAULT_LISTING_CONFIG

# Paths served without a locale prefix
_UNLOCALIZED = ("/health", "/metadata", "/analytics", "/cache", "/docs", "/redoc", "/openapi.json")


def _is_unlocalized(path: str) -> bool:
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in _UNLOCALIZED)


@app.middleware("http")
async def locale_redirect(request: Request, call_next):
    path = request.url.path
    if _is_unlocalized(path) or any(
        path == f"/{locale}" or path.startswith(f"/{locale}/") for locale in LOCALES
    ):
        return await call_next(request)

    locale = negotiate_locale(path, request.headers.get("accept-language"))
    target = f"/{locale}" + ("" if path == "/" else path)
    if request.url.query:
        target = f"{target}?{request.url.query}"
    return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


def _require_locale(lang: str) -> str:
    if not is_locale(lang):
        raise HTTPException(status_code=404, detail=f"Unknown locale: {lang}")
    return lang


def _require_page(page: ListingPage | None) -> ListingPage:
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return page


def _render_page(page: ListingPage, request: Request) -> ListingResponse:
    """Initial render: decode the URL and filter synchronously, no debounce."""
    start_time = time.time()
    state = decode(request.url.query, page.locked)
    canonical = encode(state, page.locked)

    cache = get_listing_cache()
    response = cache.get(page.path, canonical)
    cache_hit = response is not None
    if response is None:
        visible = apply_filters(page.restaurants, state, page.lang)
        response = render_listing(page, state, visible)
        cache.set(page.path, canonical, response)

    elapsed_ms = round((time.time() - start_time) * 1000, 3)
    record_event("listing_view", {
        "page": page.kind,
        "lang": page.lang,
        **filter_fields(state),
        "results_count": response.count,
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })
    return response


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "locales": list(LOCALES),
        "default_locale": DEFAULT_LOCALE,
        "price_tiers": PRICE_ORDER,
        "categories": [
            {"id": c.id, "slug": c.slug, "names": c.names}
            for c in data_store.categories()
        ],
        "neighborhoods": [
            {"id": n.id, "slug": n.slug, "name": n.name}
            for n in data_store.active_neighborhoods()
        ],
    }


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(token: str = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats(token: str = Depends(require_admin)) -> dict:
    return get_listing_cache().stats()


# ── Listing pages ────────────────────────────────────────────────────────


@app.get("/{lang}")
def home(lang: str = Depends(_require_locale)) -> dict:
    return {
        "lang": lang,
        "title": translate(lang, "listing.title"),
        "restaurants": f"/{lang}/restaurants",
        "cuisines": [
            {"name": c.name_for(lang), "url": f"/{lang}/cuisines/{c.slug}"}
            for c in data_store.categories()
        ],
        "neighborhoods": [
            {"name": n.name, "url": f"/{lang}/neighborhoods/{n.slug}"}
            for n in data_store.active_neighborhoods()
        ],
    }


@app.get("/{lang}/restaurants", response_model=ListingResponse)
def restaurants(request: Request, lang: str = Depends(_require_locale)) -> ListingResponse:
    return _render_page(restaurants_page(lang), request)


@app.get("/{lang}/restaurants/{slug}")
def restaurant_detail(slug: str, lang: str = Depends(_require_locale)) -> dict:
    for restaurant in data_store.published_restaurants():
        if restaurant.slug == slug:
            page = restaurants_page(lang)
            card = render_listing(page, FilterState(), [restaurant]).restaurants[0]
            return card.model_dump()
    raise HTTPException(status_code=404, detail="Restaurant not found")


@app.get("/{lang}/cuisines/{slug}", response_model=ListingResponse)
def cuisine(slug: str, request: Request, lang: str = Depends(_require_locale)) -> ListingResponse:
    return _render_page(_require_page(cuisine_page(lang, slug)), request)


@app.get("/{lang}/neighborhoods/{slug}", response_model=ListingResponse)
def neighborhood(slug: str, request: Request, lang: str = Depends(_require_locale)) -> ListingResponse:
    return _render_page(_require_page(neighborhood_page(lang, slug)), request)


# ── Live listing sessions ────────────────────────────────────────────────


def _dispatch(editor: FilterEditor, message: LiveMessage) -> None:
    action, value = message.action, message.value
    if action is LiveAction.search:
        editor.set_search(value)
    elif action is LiveAction.toggle_category:
        editor.toggle_category(value)
    elif action is LiveAction.remove_category:
        editor.remove_category(value)
    elif action is LiveAction.toggle_neighborhood:
        editor.toggle_neighborhood(value)
    elif action is LiveAction.remove_neighborhood:
        editor.remove_neighborhood(value)
    elif action is LiveAction.toggle_price:
        editor.toggle_price_tier(value)
    elif action is LiveAction.remove_price:
        editor.remove_price_tier(value)
    elif action is LiveAction.clear:
        editor.clear()


async def _drain(websocket: WebSocket, outbox: asyncio.Queue) -> None:
    while True:
        message = await outbox.get()
        try:
            await websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError):
            logger.debug("Live listing socket closed while sending")
            return


async def _serve_live_listing(websocket: WebSocket, page: ListingPage | None) -> None:
    if page is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()

    outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    def on_change(controller: ListingController) -> None:
        snapshot = render_listing(page, controller.state, controller.visible, busy=controller.is_busy)
        outbox.put_nowait({"type": "listing", **snapshot.model_dump(mode="json")})

    def on_navigate(url: str) -> None:
        outbox.put_nowait({"type": "navigate", "url": url})

    def on_commit(state: FilterState) -> None:
        record_event("filter_commit", {
            "page": page.kind,
            "lang": page.lang,
            **filter_fields(state),
            "results_count": len(controller.visible),
        })

    config = websocket.app.state.listing_config
    controller = ListingController(
        page.restaurants,
        asyncio.get_running_loop(),
        path=page.path,
        query=websocket.url.query,
        lang=page.lang,
        locked=page.locked,
        debounce_seconds=config.debounce_seconds,
        on_navigate=on_navigate,
        on_change=on_change,
        on_commit=on_commit,
    )
    editor = controller.editor
    on_change(controller)

    sender = asyncio.create_task(_drain(websocket, outbox))
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                _dispatch(editor, LiveMessage.model_validate_json(raw))
            except (ValidationError, ValueError) as exc:
                logger.warning("Invalid live listing message on %s: %s", page.path, exc)
                outbox.put_nowait({"type": "error", "detail": "Invalid message"})
    except WebSocketDisconnect:
        logger.debug("Live listing client left %s", page.path)
    finally:
        controller.close()
        sender.cancel()
        with suppress(asyncio.CancelledError):
            await sender


@app.websocket("/{lang}/restaurants/live")
async def restaurants_live(websocket: WebSocket, lang: str) -> None:
    page = restaurants_page(lang) if is_locale(lang) else None
    await _serve_live_listing(websocket, page)


@app.websocket("/{lang}/cuisines/{slug}/live")
async def cuisine_live(websocket: WebSocket, lang: str, slug: str) -> None:
    page = cuisine_page(lang, slug) if is_locale(lang) else None
    await _serve_live_listing(websocket, page)


@app.websocket("/{lang}/neighborhoods/{slug}/live")
async def neighborhood_live(websocket: WebSocket, lang: str, slug: str) -> None:
    page = neighborhood_page(lang, slug) if is_locale(lang) else None
    await _serve_live_listing(websocket, page)

