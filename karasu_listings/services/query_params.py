"""Parsing of listing page query parameters."""

from typing import Any, Optional

from karasu_listings.models.filters import FilterSpec

# query param -> boolean feature name
FEATURE_PARAMS = {
    "balcony": "balcony",
    "parking": "parking",
    "elevator": "elevator",
    "seaView": "sea_view",
    "sea_view": "sea_view",
    "furnished": "furnished",
}


def first_param(params: dict, *names: str) -> Optional[Any]:
    """First non-empty value among the given parameter names."""
    for name in names:
        value = params.get(name)
        if isinstance(value, list):
            value = value[0] if value else None
        if value not in (None, ""):
            return value
    return None


def split_list(value: Any) -> Optional[list[str]]:
    """Split a comma separated parameter ("2,3,4") into its items."""
    if value is None:
        return None
    return [item for item in str(value).split(",") if item.strip()]


def parse_page(value: Any) -> int:
    """Page number from a parameter, 1 when missing or malformed."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 1


def filter_spec_from_params(params: dict) -> FilterSpec:
    """Build a FilterSpec from search page query parameters."""
    features = [
        feature for param, feature in FEATURE_PARAMS.items()
        if str(first_param(params, param) or "").lower() == "true"
    ]
    return FilterSpec(
        status=first_param(params, "status", "tip"),
        property_type=first_param(params, "property_type", "emlak"),
        neighborhood_query=first_param(params, "neighborhood", "mahalle"),
        price_min=first_param(params, "min_price"),
        price_max=first_param(params, "max_price"),
        size_min=first_param(params, "min_size"),
        size_max=first_param(params, "max_size"),
        rooms=split_list(first_param(params, "rooms")),
        bathrooms=split_list(first_param(params, "bathrooms")),
        boolean_features=features or None,
        query=first_param(params, "q", "query"),
        city=first_param(params, "city"),
        district=first_param(params, "district"),
        featured=first_param(params, "featured"),
        heating=first_param(params, "heating"),
        building_age_max=first_param(params, "max_building_age"),
    )
