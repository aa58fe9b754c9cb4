from __future__ import annotations

DEFAULT_LOCALE = "en"
LOCALES = ("en", "es")

DICTIONARY: dict[str, dict[str, str]] = {
    "en": {
        "listing.title": "Restaurants in Mexico City",
        "listing.restaurant": "restaurant",
        "listing.restaurants": "restaurants",
        "listing.found": "found",
        "filters.search": "Search",
        "filters.price_range": "Price Range",
        "filters.categories": "Categories",
        "filters.neighborhood": "Neighborhood",
    },
    "es": {
        "listing.title": "Restaurantes en Ciudad de México",
        "listing.restaurant": "restaurante",
        "listing.restaurants": "restaurantes",
        "listing.found": "encontrados",
        "filters.search": "Buscar",
        "filters.price_range": "Rango de Precio",
        "filters.categories": "Categorías",
        "filters.neighborhood": "Colonia",
    },
}


def is_locale(value: str) -> bool:
    return value in LOCALES


def translate(lang: str, key: str) -> str:
    table = DICTIONARY.get(lang, DICTIONARY[DEFAULT_LOCALE])
    return table.get(key, DICTIONARY[DEFAULT_LOCALE].get(key, key))


def negotiate_locale(path: str, accept_language: str | None) -> str:
    """Pick the locale for a request: path prefix, then Accept-Language, then default."""
    for locale in LOCALES:
        if path == f"/{locale}" or path.startswith(f"/{locale}/"):
            return locale

    if accept_language:
        preferred = accept_language.split(",")[0].split(";")[0].strip()
        primary = preferred.split("-")[0].lower()
        if primary in LOCALES:
            return primary

    return DEFAULT_LOCALE


def count_label(lang: str, count: int, filtered: bool) -> str:
    noun = translate(lang, "listing.restaurant" if count == 1 else "listing.restaurants")
    label = f"{count} {noun}"
    if filtered:
        label = f"{label} {translate(lang, 'listing.found')}"
    return label
