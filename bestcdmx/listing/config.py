from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ListingConfig:
    debounce_seconds: float = float(os.getenv("BESTCDMX_DEBOUNCE_MS", "300")) / 1000.0
    cache_ttl_seconds: float = float(os.getenv("BESTCDMX_CACHE_TTL", "300"))
    cache_max_entries: int = int(os.getenv("BESTCDMX_CACHE_MAX_ENTRIES", "1024"))


DEFAULT_LISTING_CONFIG = ListingConfig()
