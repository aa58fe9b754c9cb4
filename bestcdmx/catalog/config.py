from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PACKAGED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Location of the catalog export produced by the external data store.
    """

    catalog_path: Path = Path(os.getenv("BESTCDMX_CATALOG_PATH", str(_PACKAGED_CATALOG)))


DEFAULT_CATALOG_CONFIG = CatalogConfig()
