from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Dimension(str, Enum):
    search = "search"
    category = "category"
    neighborhood = "neighborhood"
    price = "price"


class FilterStateOut(BaseModel):
    search: str = ""
    categories: list[str] = Field(default_factory=list)
    neighborhoods: list[str] = Field(default_factory=list)
    price_tiers: list[str] = Field(default_factory=list)


class FilterChip(BaseModel):
    dimension: Dimension
    value: str
    label: str
    locked: bool = False


class FacetOption(BaseModel):
    value: str
    label: str
    selected: bool = False
    locked: bool = False


class Facets(BaseModel):
    categories: list[FacetOption] = Field(default_factory=list)
    neighborhoods: list[FacetOption] = Field(default_factory=list)
    price_tiers: list[FacetOption] = Field(default_factory=list)


class RestaurantCard(BaseModel):
    id: str
    slug: str
    url: str
    name: str
    description: str
    tagline: str | None = None
    image_url: str | None = None
    neighborhood: str
    price_range: str
    rating: float | None = None
    custom_score: float | None = None
    categories: list[str] = Field(default_factory=list)


class ListingResponse(BaseModel):
    lang: str
    title: str
    description: str | None = None
    url: str
    query: str
    state: FilterStateOut
    chips: list[FilterChip] = Field(default_factory=list)
    facets: Facets
    restaurants: list[RestaurantCard]
    count: int
    count_label: str
    busy: bool = False


class LiveAction(str, Enum):
    search = "search"
    toggle_category = "toggle_category"
    remove_category = "remove_category"
    toggle_neighborhood = "toggle_neighborhood"
    remove_neighborhood = "remove_neighborhood"
    toggle_price = "toggle_price"
    remove_price = "remove_price"
    clear = "clear"


class LiveMessage(BaseModel):
    action: LiveAction
    value: str = Field(default="", max_length=200)
