"""
Listing pages and their JSON rendering.

A page bundles what a listing needs from the catalog: the ordered restaurant
sequence, the locked filters imposed by its context, and its localized title.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..catalog import data_store
from ..catalog.models import Restaurant
from ..filters.codec import build_url, encode
from ..filters.state import (
    NO_LOCKS,
    PRICE_ORDER,
    FilterState,
    LockedFilters,
    is_empty,
    sorted_tiers,
)
from ..i18n import count_label, translate
from .models import (
    Dimension,
    FacetOption,
    Facets,
    FilterChip,
    FilterStateOut,
    ListingResponse,
    RestaurantCard,
)


@dataclass(frozen=True)
class ListingPage:
    kind: str
    lang: str
    path: str
    title: str
    restaurants: Sequence[Restaurant]
    description: str | None = None
    locked: LockedFilters = field(default=NO_LOCKS)


def restaurants_page(lang: str) -> ListingPage:
    return ListingPage(
        kind="restaurants",
        lang=lang,
        path=f"/{lang}/restaurants",
        title=translate(lang, "listing.title"),
        restaurants=data_store.published_restaurants(),
    )


def cuisine_page(lang: str, slug: str) -> ListingPage | None:
    category = data_store.category_by_slug(slug)
    if category is None:
        return None
    return ListingPage(
        kind="cuisine",
        lang=lang,
        path=f"/{lang}/cuisines/{category.slug}",
        title=category.name_for(lang),
        description=category.description_for(lang),
        restaurants=data_store.restaurants_in_category(category.id),
        locked=LockedFilters(categories={category.id}),
    )


def neighborhood_page(lang: str, slug: str) -> ListingPage | None:
    neighborhood = data_store.neighborhood_by_slug(slug)
    if neighborhood is None:
        return None
    return ListingPage(
        kind="neighborhood",
        lang=lang,
        path=f"/{lang}/neighborhoods/{neighborhood.slug}",
        title=neighborhood.name,
        restaurants=data_store.restaurants_in_neighborhood(neighborhood.id),
        locked=LockedFilters(neighborhoods={neighborhood.id}),
    )


def _ordered(selected: frozenset[str], known_order: list[str]) -> list[str]:
    known = [value for value in known_order if value in selected]
    unknown = sorted(selected - set(known_order))
    return known + unknown


def render_listing(
    page: ListingPage,
    state: FilterState,
    visible: Sequence[Restaurant],
    busy: bool = False,
) -> ListingResponse:
    lang = page.lang
    categories = data_store.categories()
    neighborhoods = data_store.active_neighborhoods()
    category_names = {c.id: c.name_for(lang) for c in categories}
    neighborhood_names = {n.id: n.name for n in data_store.get_catalog().neighborhoods}

    category_ids = _ordered(state.categories, [c.id for c in categories])
    neighborhood_ids = _ordered(state.neighborhoods, [n.id for n in neighborhoods])
    tiers = [t.value for t in sorted_tiers(state.price_tiers)]

    chips: list[FilterChip] = []
    for cid in category_ids:
        chips.append(FilterChip(
            dimension=Dimension.category,
            value=cid,
            label=category_names.get(cid, cid),
            locked=page.locked.is_locked_category(cid),
        ))
    for nid in neighborhood_ids:
        chips.append(FilterChip(
            dimension=Dimension.neighborhood,
            value=nid,
            label=neighborhood_names.get(nid, nid),
            locked=page.locked.is_locked_neighborhood(nid),
        ))
    for tier in tiers:
        chips.append(FilterChip(dimension=Dimension.price, value=tier, label=tier))

    facets = Facets(
        categories=[
            FacetOption(
                value=c.id,
                label=c.name_for(lang),
                selected=c.id in state.categories,
                locked=page.locked.is_locked_category(c.id),
            )
            for c in categories
        ],
        neighborhoods=[
            FacetOption(
                value=n.id,
                label=n.name,
                selected=n.id in state.neighborhoods,
                locked=page.locked.is_locked_neighborhood(n.id),
            )
            for n in neighborhoods
        ],
        price_tiers=[
            FacetOption(value=tier, label=tier, selected=tier in tiers)
            for tier in PRICE_ORDER
        ],
    )

    cards = [
        RestaurantCard(
            id=r.id,
            slug=r.slug,
            url=f"/{lang}/restaurants/{r.slug}",
            name=r.name,
            description=r.description_for(lang),
            tagline=r.tagline,
            image_url=r.image_url,
            neighborhood=neighborhood_names.get(r.neighborhood_id, ""),
            price_range=r.price_range.value,
            rating=r.rating,
            custom_score=r.custom_score,
            categories=[category_names[cid] for cid in r.category_ids if cid in category_names],
        )
        for r in visible
    ]

    return ListingResponse(
        lang=lang,
        title=page.title,
        description=page.description,
        url=build_url(page.path, state, page.locked),
        query=encode(state, page.locked),
        state=FilterStateOut(
            search=state.search,
            categories=category_ids,
            neighborhoods=neighborhood_ids,
            price_tiers=tiers,
        ),
        chips=chips,
        facets=facets,
        restaurants=cards,
        count=len(cards),
        count_label=count_label(lang, len(cards), filtered=not is_empty(state)),
        busy=busy,
    )
