from __future__ import annotations

from fastapi.testclient import TestClient

from bestcdmx.app import app

client = TestClient(app)


def _names(body):
    return [r["name"] for r in body["restaurants"]]


ALL_PUBLISHED = [
    "Cafe Nin",
    "Contramar",
    "El Huequito",
    "Lardo",
    "Panadería Rosetta",
    "Pujol",
    "Quintonil",
    "Taco Stand",
]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata():
    body = client.get("/metadata").json()
    assert body["locales"] == ["en", "es"]
    assert body["price_tiers"] == ["$", "$$", "$$$", "$$$$"]
    assert [c["id"] for c in body["categories"]] == [
        "cafe", "fine-dining", "mexican", "seafood", "street-food",
    ]
    # Coyoacán only has an unpublished restaurant
    assert [n["id"] for n in body["neighborhoods"]] == ["centro", "condesa", "polanco", "roma"]


# ── All restaurants ──────────────────────────────────────────────────────


def test_unfiltered_listing_shows_published_restaurants_by_name():
    body = client.get("/en/restaurants").json()
    assert _names(body) == ALL_PUBLISHED
    assert body["count"] == 8
    assert body["count_label"] == "8 restaurants"
    assert body["url"] == "/en/restaurants"
    assert body["chips"] == []
    assert body["busy"] is False


def test_listing_applies_url_filters():
    body = client.get("/en/restaurants?q=taco").json()
    assert _names(body) == ["El Huequito", "Taco Stand"]
    assert body["count_label"] == "2 restaurants found"
    assert body["state"]["search"] == "taco"


def test_listing_combines_dimensions():
    body = client.get("/en/restaurants?c=cafe,mexican&n=roma&p=$$,$$$").json()
    assert _names(body) == ["Cafe Nin", "Contramar", "Panadería Rosetta"]
    assert body["state"]["categories"] == ["cafe", "mexican"]
    assert body["state"]["price_tiers"] == ["$$", "$$$"]


def test_spanish_listing_searches_spanish_descriptions():
    body = client.get("/es/restaurants?q=mariscos").json()
    assert _names(body) == ["Contramar"]
    assert body["count_label"] == "1 restaurante encontrados"
    assert body["title"] == "Restaurantes en Ciudad de México"

    assert _names(client.get("/en/restaurants?q=mariscos").json()) == []


def test_chips_carry_localized_labels():
    body = client.get("/es/restaurants?c=street-food&p=$").json()
    assert body["chips"] == [
        {"dimension": "category", "value": "street-food", "label": "Comida Callejera", "locked": False},
        {"dimension": "price", "value": "$", "label": "$", "locked": False},
    ]


def test_malformed_query_degrades_to_defaults():
    resp = client.get("/en/restaurants?p=cheap&utm_source=x&c=")
    assert resp.status_code == 200
    assert _names(resp.json()) == ALL_PUBLISHED


def test_canonical_url_normalizes_order():
    body = client.get("/en/restaurants?p=$$$$,$&c=seafood,cafe").json()
    assert body["url"] == "/en/restaurants?c=cafe,seafood&p=$,$$$$"


def test_unknown_locale_is_404():
    assert client.get("/fr/restaurants", follow_redirects=False).status_code == 307
    assert client.get("/de").status_code == 404


# ── Locked pages ─────────────────────────────────────────────────────────


def test_cuisine_page_locks_its_category():
    body = client.get("/en/cuisines/fine-dining").json()
    assert body["title"] == "Fine Dining"
    assert _names(body) == ["Pujol", "Quintonil"]
    assert body["url"] == "/en/cuisines/fine-dining"
    assert body["chips"][0] == {
        "dimension": "category", "value": "fine-dining", "label": "Fine Dining", "locked": True,
    }
    locked_facets = [f["value"] for f in body["facets"]["categories"] if f["locked"]]
    assert locked_facets == ["fine-dining"]


def test_cuisine_page_does_not_grow_redundant_query():
    body = client.get("/en/cuisines/fine-dining?c=fine-dining").json()
    assert body["url"] == "/en/cuisines/fine-dining"
    assert body["query"] == ""


def test_cuisine_page_slug_differs_from_id():
    body = client.get("/es/cuisines/cafes").json()
    assert body["title"] == "Cafeterías"
    assert _names(body) == ["Cafe Nin", "Lardo", "Panadería Rosetta"]
    assert body["state"]["categories"] == ["cafe"]


def test_cuisine_page_keeps_lock_when_url_sets_other_categories():
    body = client.get("/en/cuisines/fine-dining?c=mexican").json()
    assert body["state"]["categories"] == ["fine-dining", "mexican"]
    assert body["url"] == "/en/cuisines/fine-dining?c=fine-dining,mexican"


def test_neighborhood_page_locks_its_neighborhood():
    body = client.get("/en/neighborhoods/roma-norte?p=$").json()
    assert body["title"] == "Roma Norte"
    assert _names(body) == ["Taco Stand"]
    assert body["state"]["neighborhoods"] == ["roma"]
    assert body["url"] == "/en/neighborhoods/roma-norte?p=$"


def test_unknown_slugs_are_404():
    assert client.get("/en/cuisines/does-not-exist").status_code == 404
    assert client.get("/en/neighborhoods/does-not-exist").status_code == 404
    assert client.get("/en/restaurants/does-not-exist").status_code == 404


def test_restaurant_detail():
    body = client.get("/es/restaurants/pujol").json()
    assert body["name"] == "Pujol"
    assert body["neighborhood"] == "Polanco"
    assert body["categories"] == ["Alta Cocina", "Mexicana"]
    assert body["description"].startswith("Menú de degustación")


# ── Locale negotiation ───────────────────────────────────────────────────


def test_root_redirects_to_accept_language_locale():
    resp = client.get("/", headers={"accept-language": "es-MX,es;q=0.9"}, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/es"


def test_unprefixed_path_redirects_with_query():
    resp = client.get("/restaurants?q=taco", headers={"accept-language": "fr-FR"}, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/en/restaurants?q=taco"


def test_lookalike_operational_paths_still_redirect():
    for path in ("/healthz", "/cachefoo"):
        resp = client.get(path, follow_redirects=False)
        assert resp.status_code == 307
        assert resp.headers["location"] == f"/en{path}"
    assert client.get("/health", follow_redirects=False).status_code == 200


def test_home_lists_cuisines_and_neighborhoods():
    body = client.get("/es").json()
    assert body["restaurants"] == "/es/restaurants"
    assert {"name": "Alta Cocina", "url": "/es/cuisines/fine-dining"} in body["cuisines"]
    assert {"name": "Roma Norte", "url": "/es/neighborhoods/roma-norte"} in body["neighborhoods"]
