"""Listing models."""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator


class ListingStatus(str, Enum):
    """Listing status values."""
    FOR_SALE = "satilik"
    FOR_RENT = "kiralik"


STATUS_ALIASES = {
    "satilik": ListingStatus.FOR_SALE,
    "for-sale": ListingStatus.FOR_SALE,
    "sale": ListingStatus.FOR_SALE,
    "kiralik": ListingStatus.FOR_RENT,
    "for-rent": ListingStatus.FOR_RENT,
    "rent": ListingStatus.FOR_RENT,
}


BOOLEAN_FEATURES = ("furnished", "balcony", "parking", "elevator", "sea_view")


def parse_status(value: Any) -> Optional[ListingStatus]:
    """Map a status string (Turkish or English form) to ListingStatus, or None."""
    if isinstance(value, ListingStatus):
        return value
    if not isinstance(value, str):
        return None
    return STATUS_ALIASES.get(value.strip().lower())


def clean_number(value: Any, allow_negative: bool = False) -> Optional[float]:
    """
    Normalize a loosely typed numeric value.

    NaN, infinities, booleans, unparseable strings and (unless allowed)
    negative numbers all become None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    if number < 0 and not allow_negative:
        return None
    return number


def clean_integer(value: Any, allow_negative: bool = False) -> Optional[int]:
    """Like clean_number, but only integral values survive."""
    number = clean_number(value, allow_negative=allow_negative)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _load_json(value: Any) -> Any:
    if isinstance(value, (str, bytes)):
        try:
            return json.loads(value)
        except ValueError:
            return None
    return value


class ListingFeatures(BaseModel):
    """Structured feature bag; every field is optional and None means unknown."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    size_m2: Optional[float] = Field(None, alias="sizeM2", description="Gross size in m2")
    rooms: Optional[int] = Field(None, description="Room count")
    bathrooms: Optional[int] = Field(None, description="Bathroom count")
    floor: Optional[int] = Field(None, description="Floor (negative for basements)")
    building_age: Optional[int] = Field(None, alias="buildingAge", description="Building age in years")
    heating: Optional[str] = Field(None, description="Heating type")
    furnished: Optional[bool] = None
    balcony: Optional[bool] = None
    parking: Optional[bool] = None
    elevator: Optional[bool] = None
    sea_view: Optional[bool] = Field(None, alias="seaView")

    @field_validator("size_m2", mode="before")
    @classmethod
    def _clean_size(cls, value: Any) -> Optional[float]:
        return clean_number(value)

    @field_validator("rooms", "bathrooms", "building_age", mode="before")
    @classmethod
    def _clean_counts(cls, value: Any) -> Optional[int]:
        return clean_integer(value)

    @field_validator("floor", mode="before")
    @classmethod
    def _clean_floor(cls, value: Any) -> Optional[int]:
        return clean_integer(value, allow_negative=True)

    @field_validator(*BOOLEAN_FEATURES, mode="before")
    @classmethod
    def _clean_flags(cls, value: Any) -> Optional[bool]:
        if isinstance(value, bool) or value is None:
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        return None


class ListingImage(BaseModel):
    """Image reference attached to a listing."""
    model_config = ConfigDict(extra="ignore")

    public_id: Optional[str] = None
    url: str
    alt: Optional[str] = None
    order: int = 0


class Listing(BaseModel):
    """Published property listing, read-only for the pipeline."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Listing ID")
    slug: str = Field(..., description="Unique URL-safe slug")
    title: str = Field("", description="Listing title")
    description_short: Optional[str] = None
    description_long: Optional[str] = None
    status: ListingStatus = Field(..., description="satilik (for sale) or kiralik (for rent)")
    property_type: Optional[str] = Field(None, description="daire, villa, ev, yazlik, arsa, isyeri, dukkan")
    location_city: Optional[str] = None
    location_district: Optional[str] = None
    location_neighborhood: Optional[str] = None
    price_amount: Optional[float] = Field(None, description="Asking price, None when unknown")
    price_currency: str = "TRY"
    features: ListingFeatures = Field(default_factory=ListingFeatures)
    images: list[ListingImage] = Field(default_factory=list)
    featured: bool = False
    published: bool = True
    available: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        return parse_status(value) or value

    @field_validator("title", "price_currency", "featured", "published", "available", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("price_amount", mode="before")
    @classmethod
    def _clean_price(cls, value: Any) -> Optional[float]:
        return clean_number(value)

    @field_validator("features", mode="before")
    @classmethod
    def _parse_features(cls, value: Any) -> Any:
        value = _load_json(value)
        if isinstance(value, (dict, ListingFeatures)):
            return value
        return {}

    @field_validator("images", mode="before")
    @classmethod
    def _parse_images(cls, value: Any) -> Any:
        value = _load_json(value)
        if not isinstance(value, list):
            return []
        return [image for image in value if isinstance(image, (dict, ListingImage))]

    @field_validator("images")
    @classmethod
    def _order_images(cls, value: list[ListingImage]) -> list[ListingImage]:
        return sorted(value, key=lambda image: image.order)

    @field_validator("created_at", "updated_at", mode="wrap")
    @classmethod
    def _parse_timestamp(cls, value: Any, handler) -> Optional[datetime]:
        if isinstance(value, str):
            value = value.strip()
        try:
            return handler(value)
        except ValidationError:
            return None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
