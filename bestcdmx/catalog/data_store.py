from __future__ import annotations

import logging

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import Catalog, Category, Neighborhood, Restaurant

logger = logging.getLogger(__name__)

PUBLISHED = "published"

_catalog: Catalog | None = None


def _load(config: CatalogConfig) -> Catalog:
    catalog = Catalog.model_validate_json(config.catalog_path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded catalog from %s: %d restaurants, %d categories, %d neighborhoods",
        config.catalog_path,
        len(catalog.restaurants),
        len(catalog.categories),
        len(catalog.neighborhoods),
    )
    return catalog


def get_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Catalog:
    """Return the in-memory catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = _load(config)
    return _catalog


def set_catalog(catalog: Catalog | None) -> None:
    """Replace the in-memory catalog (``None`` forces a reload on next access)."""
    global _catalog
    _catalog = catalog


def published_restaurants() -> tuple[Restaurant, ...]:
    """Published restaurants ordered by name."""
    restaurants = [r for r in get_catalog().restaurants if r.status == PUBLISHED]
    return tuple(sorted(restaurants, key=lambda r: r.name.casefold()))


def categories() -> list[Category]:
    return sorted(get_catalog().categories, key=lambda c: c.name_for("en").casefold())


def active_neighborhoods() -> list[Neighborhood]:
    """Neighborhoods with at least one published restaurant, ordered by name."""
    active_ids = {r.neighborhood_id for r in published_restaurants()}
    unique = {n.id: n for n in get_catalog().neighborhoods if n.id in active_ids}
    return sorted(unique.values(), key=lambda n: n.name.casefold())


def category_by_slug(slug: str) -> Category | None:
    for category in get_catalog().categories:
        if category.slug == slug:
            return category
    return None


def neighborhood_by_slug(slug: str) -> Neighborhood | None:
    for neighborhood in get_catalog().neighborhoods:
        if neighborhood.slug == slug:
            return neighborhood
    return None


def restaurants_in_category(category_id: str) -> tuple[Restaurant, ...]:
    return tuple(r for r in published_restaurants() if category_id in r.category_ids)


def restaurants_in_neighborhood(neighborhood_id: str) -> tuple[Restaurant, ...]:
    return tuple(r for r in published_restaurants() if r.neighborhood_id == neighborhood_id)
