from __future__ import annotations

from collections import Counter
from typing import Any

_FILTER_EVENTS = ("listing_view", "filter_commit")


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    views = [e for e in events if e["type"] == "listing_view"]
    commits = [e for e in events if e["type"] == "filter_commit"]
    filtered = [e for e in events if e["type"] in _FILTER_EVENTS]
    total = len(filtered)

    # Average server render time
    times = [v["response_time_ms"] for v in views if "response_time_ms" in v]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    search_counter: Counter[str] = Counter()
    category_counter: Counter[str] = Counter()
    neighborhood_counter: Counter[str] = Counter()
    price_counter: Counter[str] = Counter()
    page_counter: Counter[str] = Counter()
    locale_counter: Counter[str] = Counter()
    filter_counts = {"search": 0, "category": 0, "neighborhood": 0, "price": 0}
    empty_results = 0

    for e in filtered:
        term = (e.get("search") or "").lower()
        if term:
            search_counter[term] += 1
            filter_counts["search"] += 1
        for c in e.get("categories", []) or []:
            category_counter[c] += 1
        for n in e.get("neighborhoods", []) or []:
            neighborhood_counter[n] += 1
        for p in e.get("price_tiers", []) or []:
            price_counter[p] += 1
        if e.get("categories"):
            filter_counts["category"] += 1
        if e.get("neighborhoods"):
            filter_counts["neighborhood"] += 1
        if e.get("price_tiers"):
            filter_counts["price"] += 1
        if e.get("results_count") == 0:
            empty_results += 1
        page_counter[e.get("page", "unknown")] += 1
        locale_counter[e.get("lang", "unknown")] += 1

    filter_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in filter_counts.items()
    }

    cache_hits = sum(1 for v in views if v.get("cache_hit"))

    return {
        "total_views": len(views),
        "total_commits": len(commits),
        "avg_response_time_ms": avg_time,
        "top_searches": _top(search_counter),
        "top_categories": _top(category_counter),
        "top_neighborhoods": _top(neighborhood_counter),
        "price_tier_usage": dict(price_counter),
        "filter_usage": filter_usage,
        "empty_result_rate": round(empty_results / total * 100, 1) if total else 0.0,
        "pages": dict(page_counter),
        "locales": dict(locale_counter),
        "cache_stats": {
            "hits": cache_hits,
            "misses": len(views) - cache_hits,
            "hit_rate": round(cache_hits / len(views) * 100, 1) if views else 0.0,
        },
    }
