"""Aggregate statistics over filtered listing sets."""

from collections import Counter
from typing import Iterable, Optional, Sequence

from karasu_listings.models.listing import Listing, ListingStatus
from karasu_listings.models.results import ListingStatistics, PriceComparison


def average_price(listings: Iterable[Listing]) -> Optional[float]:
    """Mean price over listings that have one; unpriced listings are left out entirely."""
    prices = [listing.price_amount for listing in listings if listing.price_amount is not None]
    if not prices:
        return None
    return sum(prices) / len(prices)


def price_delta_percent(price: Optional[float], average: Optional[float]) -> Optional[float]:
    """Percentage difference from the average, or None when there is nothing to compare."""
    if price is None or not average:
        return None
    return (price - average) / average * 100


def compare_price(listing: Listing, listings: Sequence[Listing]) -> PriceComparison:
    average = average_price(listings)
    delta = price_delta_percent(listing.price_amount, average)

    direction = None
    if delta is not None:
        if delta > 0:
            direction = "above"
        elif delta < 0:
            direction = "below"
        else:
            direction = "equal"

    return PriceComparison(
        price=listing.price_amount,
        average_price=average,
        delta_percent=delta,
        direction=direction,
    )


def average_price_per_m2(listings: Iterable[Listing]) -> Optional[float]:
    """Mean of price / size over listings with a price and a positive size."""
    ratios = [
        listing.price_amount / listing.features.size_m2
        for listing in listings
        if listing.price_amount is not None and listing.features.size_m2
    ]
    if not ratios:
        return None
    return sum(ratios) / len(ratios)


def compute_statistics(listings: Sequence[Listing]) -> ListingStatistics:
    """Recompute every counter from scratch over the given set."""
    priced = [listing.price_amount for listing in listings if listing.price_amount is not None]
    published = sum(1 for listing in listings if listing.published)

    return ListingStatistics(
        count=len(listings),
        priced_count=len(priced),
        average_price=average_price(listings),
        total_value=float(sum(priced)),
        average_price_per_m2=average_price_per_m2(listings),
        for_sale=sum(1 for listing in listings if listing.status == ListingStatus.FOR_SALE),
        for_rent=sum(1 for listing in listings if listing.status == ListingStatus.FOR_RENT),
        published=published,
        drafts=len(listings) - published,
        featured=sum(1 for listing in listings if listing.featured),
        by_property_type=dict(Counter(
            listing.property_type for listing in listings if listing.property_type
        )),
        by_neighborhood=dict(Counter(
            listing.location_neighborhood for listing in listings if listing.location_neighborhood
        )),
    )
