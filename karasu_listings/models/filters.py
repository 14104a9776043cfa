"""Filter and sort option models."""

import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from karasu_listings.models.listing import (
    ListingStatus,
    clean_integer,
    clean_number,
    parse_status,
)


FEATURE_NAME_ALIASES = {
    "seaView": "sea_view",
    "sea-view": "sea_view",
}


class SortStrategy(str, Enum):
    """Named sort orders."""
    SIMILARITY = "similarity"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    SIZE_ASC = "size-asc"
    SIZE_DESC = "size-desc"
    NEWEST = "newest"


class RelatedFilter(str, Enum):
    """Quick filters offered next to related listings."""
    ALL = "all"
    SAME_NEIGHBORHOOD = "same-neighborhood"
    SAME_PRICE_RANGE = "same-price-range"
    SAME_FEATURES = "same-features"


# "1.500.000" or "1.500.000,50": dots group thousands, a comma marks decimals
THOUSANDS_PATTERN = re.compile(r"^\d{1,3}(\.\d{3})+(,\d+)?$")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _strip_thousands(value: Any) -> Any:
    if isinstance(value, str) and THOUSANDS_PATTERN.match(value.strip()):
        return value.strip().replace(".", "")
    return value


class FilterSpec(BaseModel):
    """
    User-selected listing filters.

    Every field is optional; an absent field imposes no constraint and
    present fields combine with AND. Malformed numeric bounds are dropped
    rather than rejected, so a spec built from raw query parameters never
    fails validation on them.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    status: Optional[ListingStatus] = None
    property_type: Optional[str] = Field(None, alias="propertyType")
    neighborhood_query: Optional[str] = Field(None, alias="neighborhoodQuery")
    price_min: Optional[float] = Field(None, alias="priceMin")
    price_max: Optional[float] = Field(None, alias="priceMax")
    size_min: Optional[float] = Field(None, alias="sizeMin")
    size_max: Optional[float] = Field(None, alias="sizeMax")
    rooms: Optional[frozenset[int]] = None
    bathrooms: Optional[frozenset[int]] = None
    boolean_features: Optional[frozenset[str]] = Field(None, alias="booleanFeatures")
    query: Optional[str] = Field(None, alias="freeTextQuery")

    # Advanced filters
    city: Optional[str] = None
    district: Optional[str] = None
    featured: Optional[bool] = None
    heating: Optional[str] = None
    building_age_max: Optional[int] = Field(None, alias="buildingAgeMax")

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> Optional[ListingStatus]:
        return parse_status(value)

    @field_validator(
        "property_type", "neighborhood_query", "query", "city", "district", "heating",
        mode="before",
    )
    @classmethod
    def _drop_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("price_min", "price_max", "size_min", "size_max", mode="before")
    @classmethod
    def _clean_bounds(cls, value: Any) -> Optional[float]:
        return clean_number(_strip_thousands(value))

    @field_validator("building_age_max", mode="before")
    @classmethod
    def _clean_age(cls, value: Any) -> Optional[int]:
        return clean_integer(value)

    @field_validator("rooms", "bathrooms", mode="before")
    @classmethod
    def _clean_counts(cls, value: Any) -> Optional[frozenset[int]]:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.split(",")
        elif isinstance(value, (int, float)):
            value = [value]
        counts = {clean_integer(item) for item in value}
        counts.discard(None)
        return frozenset(counts) or None

    @field_validator("boolean_features", mode="before")
    @classmethod
    def _clean_feature_names(cls, value: Any) -> Optional[frozenset[str]]:
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        names = {
            FEATURE_NAME_ALIASES.get(name.strip(), name.strip())
            for name in value
            if isinstance(name, str) and name.strip()
        }
        return frozenset(names) or None

    @field_validator("featured", mode="before")
    @classmethod
    def _clean_featured(cls, value: Any) -> Optional[bool]:
        if isinstance(value, bool) or value is None:
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        return None

    def is_empty(self) -> bool:
        """True when no field constrains the result."""
        return all(value is None for value in self.model_dump().values())
