"""View models produced by the listing pipeline."""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from karasu_listings.models.filters import SortStrategy
from karasu_listings.models.listing import Listing


class SearchPage(BaseModel):
    """One page of a sorted listing sequence."""
    items: list[Listing] = Field(default_factory=list)
    page: int = Field(..., description="Requested 1-based page number")
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)


class PriceComparison(BaseModel):
    """Price of one listing relative to the average of a set."""
    price: Optional[float] = None
    average_price: Optional[float] = None
    delta_percent: Optional[float] = Field(
        None,
        description="(price - average) / average * 100, None when there is nothing to compare"
    )
    direction: Optional[Literal["above", "below", "equal"]] = None


class ListingStatistics(BaseModel):
    """Summary numbers over a filtered listing set."""
    count: int = 0
    priced_count: int = 0
    average_price: Optional[float] = None
    total_value: float = 0.0
    average_price_per_m2: Optional[float] = None
    for_sale: int = 0
    for_rent: int = 0
    published: int = 0
    drafts: int = 0
    featured: int = 0
    by_property_type: dict[str, int] = Field(default_factory=dict)
    by_neighborhood: dict[str, int] = Field(default_factory=dict)


class SearchResult(SearchPage):
    """Page plus the statistics of the whole filtered set."""
    sort: SortStrategy
    statistics: ListingStatistics
    price_comparison: Optional[PriceComparison] = None
