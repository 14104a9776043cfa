"""Listing filter predicates."""

from typing import Callable, Iterable, Optional

from karasu_listings.models.filters import FilterSpec, RelatedFilter
from karasu_listings.models.listing import Listing
from karasu_listings.services.slugs import generate_slug

Predicate = Callable[[Listing], bool]

# Related listings within this share of the reference price count as "same price range"
PRICE_RANGE_TOLERANCE = 0.20


def _in_range(value: Optional[float], minimum: Optional[float], maximum: Optional[float]) -> bool:
    """Range check where an unknown listing value never satisfies a bound."""
    if minimum is None and maximum is None:
        return True
    if value is None:
        return False
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


def neighborhood_matches(neighborhood: Optional[str], query: str) -> bool:
    """
    Slug containment in either direction.

    "yali" matches "Yalı Mahallesi" and "Karasu Yalı Mahallesi" matches
    "yali-mahallesi", so abbreviated and over-specified names both hit.
    """
    query_slug = generate_slug(query)
    if not query_slug:
        return True
    candidate_slug = generate_slug(neighborhood or "")
    if not candidate_slug:
        return False
    return query_slug in candidate_slug or candidate_slug in query_slug


def text_matches(listing: Listing, query: str) -> bool:
    """Case-insensitive substring match over title, short description, neighborhood and type."""
    needle = query.strip().casefold()
    if not needle:
        return True
    haystacks = (
        listing.title,
        listing.description_short,
        listing.location_neighborhood,
        listing.property_type,
    )
    return any(needle in (field or "").casefold() for field in haystacks)


def _same_text(left: Optional[str], right: str) -> bool:
    return (left or "").strip().casefold() == right.strip().casefold()


def build_predicates(spec: FilterSpec) -> list[Predicate]:
    """Turn every present field of the filter spec into one predicate."""
    predicates: list[Predicate] = []

    if spec.status is not None:
        predicates.append(lambda l: l.status == spec.status)

    if spec.property_type is not None:
        predicates.append(lambda l: l.property_type == spec.property_type)

    if spec.neighborhood_query is not None:
        predicates.append(lambda l: neighborhood_matches(l.location_neighborhood, spec.neighborhood_query))

    if spec.city is not None:
        predicates.append(lambda l: _same_text(l.location_city, spec.city))

    if spec.district is not None:
        predicates.append(lambda l: _same_text(l.location_district, spec.district))

    if spec.price_min is not None or spec.price_max is not None:
        predicates.append(lambda l: _in_range(l.price_amount, spec.price_min, spec.price_max))

    if spec.size_min is not None or spec.size_max is not None:
        predicates.append(lambda l: _in_range(l.features.size_m2, spec.size_min, spec.size_max))

    if spec.rooms:
        predicates.append(lambda l: l.features.rooms in spec.rooms)

    if spec.bathrooms:
        predicates.append(lambda l: l.features.bathrooms in spec.bathrooms)

    if spec.boolean_features:
        predicates.append(
            lambda l: all(getattr(l.features, name, None) is True for name in spec.boolean_features)
        )

    if spec.featured is not None:
        predicates.append(lambda l: l.featured is spec.featured)

    if spec.heating is not None:
        predicates.append(
            lambda l: l.features.heating is not None and _same_text(l.features.heating, spec.heating)
        )

    if spec.building_age_max is not None:
        predicates.append(lambda l: _in_range(l.features.building_age, None, spec.building_age_max))

    if spec.query is not None:
        predicates.append(lambda l: text_matches(l, spec.query))

    return predicates


def matches_filters(listing: Listing, spec: Optional[FilterSpec]) -> bool:
    """True when the listing satisfies every present field of the filter spec."""
    if spec is None:
        return True
    return all(predicate(listing) for predicate in build_predicates(spec))


def filter_listings(listings: Iterable[Listing], spec: Optional[FilterSpec]) -> list[Listing]:
    """Return the matching listings in their original order."""
    if spec is None:
        return list(listings)
    predicates = build_predicates(spec)
    return [listing for listing in listings if all(predicate(listing) for predicate in predicates)]


def _same_price_range(candidate: Listing, reference: Listing) -> bool:
    if not reference.price_amount or candidate.price_amount is None:
        return False
    tolerance = reference.price_amount * PRICE_RANGE_TOLERANCE
    return abs(candidate.price_amount - reference.price_amount) <= tolerance


def _both_equal(left, right) -> bool:
    return left is not None and right is not None and left == right


def _same_features(candidate: Listing, reference: Listing) -> bool:
    return (
        _both_equal(candidate.features.rooms, reference.features.rooms)
        or _both_equal(candidate.features.bathrooms, reference.features.bathrooms)
        or _both_equal(candidate.property_type, reference.property_type)
    )


def apply_related_filter(
    listings: Iterable[Listing],
    reference: Listing,
    option: Optional[RelatedFilter] = None,
) -> list[Listing]:
    """Narrow related-listing candidates with one of the quick filters."""
    if option is None or option == RelatedFilter.ALL:
        return list(listings)

    if option == RelatedFilter.SAME_NEIGHBORHOOD:
        return [
            l for l in listings
            if _both_equal(l.location_neighborhood, reference.location_neighborhood)
        ]
    if option == RelatedFilter.SAME_PRICE_RANGE:
        return [l for l in listings if _same_price_range(l, reference)]
    return [l for l in listings if _same_features(l, reference)]
