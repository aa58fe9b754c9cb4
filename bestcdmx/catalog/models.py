from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..filters.state import PriceTier
from ..i18n import DEFAULT_LOCALE


def _localized(values: dict[str, str], lang: str) -> str:
    return values.get(lang) or values.get(DEFAULT_LOCALE, "")


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    names: dict[str, str]
    descriptions: dict[str, str] = Field(default_factory=dict)

    def name_for(self, lang: str) -> str:
        return _localized(self.names, lang)

    def description_for(self, lang: str) -> str | None:
        return _localized(self.descriptions, lang) or None


class Neighborhood(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    name: str


class Restaurant(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    name: str
    description: dict[str, str] = Field(default_factory=dict)
    category_ids: list[str] = Field(default_factory=list)
    neighborhood_id: str = Field(..., min_length=1)
    price_range: PriceTier
    tagline: str | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    custom_score: float | None = None
    image_url: str | None = None
    status: str = "published"

    def description_for(self, lang: str) -> str:
        """Localized description, falling back to the default locale."""
        return _localized(self.description, lang)

    def search_fields(self, lang: str) -> list[str]:
        """Free-text fields matched by the search dimension for *lang*."""
        return [self.name, self.description_for(lang)]


class Catalog(BaseModel):
    categories: list[Category] = Field(default_factory=list)
    neighborhoods: list[Neighborhood] = Field(default_factory=list)
    restaurants: list[Restaurant] = Field(default_factory=list)
