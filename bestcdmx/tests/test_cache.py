from __future__ import annotations

from fastapi.testclient import TestClient

from bestcdmx.app import app
from bestcdmx.auth.dependencies import AdminConfig, configure_admin
from bestcdmx.listing.cache import ListingCache, get_listing_cache
from bestcdmx.listing.models import Facets, FilterStateOut, ListingResponse

client = TestClient(app)


def _response(title: str) -> ListingResponse:
    return ListingResponse(
        lang="en", title=title, url="/en/restaurants", query="",
        state=FilterStateOut(), facets=Facets(), restaurants=[],
        count=0, count_label="0 restaurants",
    )


def test_cache_miss_then_hit():
    get_listing_cache().clear()
    client.get("/en/restaurants?q=taco")
    stats = get_listing_cache().stats()
    assert stats["misses"] == 1

    client.get("/en/restaurants?q=taco")
    stats = get_listing_cache().stats()
    assert stats["hits"] == 1


def test_equivalent_urls_share_an_entry():
    get_listing_cache().clear()
    client.get("/en/restaurants?c=seafood,cafe")
    client.get("/en/restaurants?c=cafe,seafood&utm_source=mail")
    stats = get_listing_cache().stats()
    assert stats["size"] == 1
    assert stats["hits"] == 1


def test_pages_do_not_share_entries():
    get_listing_cache().clear()
    client.get("/en/cuisines/fine-dining")
    client.get("/es/cuisines/fine-dining")
    client.get("/en/restaurants?c=fine-dining")
    stats = get_listing_cache().stats()
    assert stats["misses"] == 3
    assert stats["hits"] == 0


def test_entries_expire_after_ttl():
    now = [0.0]
    cache = ListingCache(ttl=10, clock=lambda: now[0])
    cache.set("/en/restaurants", "", _response("first"))

    now[0] = 9.9
    assert cache.get("/en/restaurants", "").title == "first"

    now[0] = 10.0
    assert cache.get("/en/restaurants", "") is None
    assert cache.stats()["size"] == 0
    assert cache.stats()["hit_rate"] == 50.0


def test_cache_stats_endpoint():
    configure_admin(AdminConfig(admin_token="letmein"))
    try:
        get_listing_cache().clear()
        client.get("/en/restaurants")
        client.get("/en/restaurants")
        resp = client.get("/cache/stats", headers={"X-Admin-Token": "letmein"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["hits"] == 1
        assert "hit_rate" in body
    finally:
        configure_admin(AdminConfig())


def test_oldest_entries_are_evicted_at_capacity():
    cache = ListingCache(ttl=300, max_entries=3, clock=lambda: 0.0)
    for i in range(5):
        cache.set("/en/restaurants", f"q=zz{i}", _response(f"r{i}"))

    assert cache.stats()["size"] == 3
    assert cache.get("/en/restaurants", "q=zz0") is None
    assert cache.get("/en/restaurants", "q=zz1") is None
    assert cache.get("/en/restaurants", "q=zz4").title == "r4"


def test_expired_entries_are_swept_before_evicting_live_ones():
    now = [0.0]
    cache = ListingCache(ttl=10, max_entries=2, clock=lambda: now[0])
    cache.set("/en/restaurants", "q=old", _response("old"))
    now[0] = 5.0
    cache.set("/en/restaurants", "q=fresh", _response("fresh"))

    now[0] = 12.0
    cache.set("/en/restaurants", "q=new", _response("new"))

    assert cache.stats()["size"] == 2
    assert cache.get("/en/restaurants", "q=fresh").title == "fresh"
    assert cache.get("/en/restaurants", "q=new").title == "new"


def test_many_distinct_searches_stay_bounded():
    cache = get_listing_cache()
    cache.clear()
    for i in range(cache.max_entries + 20):
        client.get(f"/en/restaurants?q=zz{i}")
    assert cache.stats()["size"] == cache.max_entries
