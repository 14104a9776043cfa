"""Similarity scoring for related listings."""

from typing import Iterable

from karasu_listings.models.listing import Listing

NEIGHBORHOOD_POINTS = 3
PRICE_POINTS = 2
ROOMS_POINTS = 1

# Relative price difference below which two listings count as similarly priced
PRICE_PROXIMITY = 0.20

MAX_SCORE = NEIGHBORHOOD_POINTS + PRICE_POINTS + ROOMS_POINTS


def similarity_score(candidate: Listing, reference: Listing) -> int:
    """
    Additive similarity of a candidate to the reference listing.

    +3 same neighborhood, +2 price within 20% of the reference price,
    +1 same room count. Each rule needs both values present; a reference
    price of 0 disables the price rule.
    """
    score = 0

    neighborhood = reference.location_neighborhood
    if neighborhood is not None and candidate.location_neighborhood == neighborhood:
        score += NEIGHBORHOOD_POINTS

    reference_price = reference.price_amount
    if candidate.price_amount is not None and reference_price:
        if abs(candidate.price_amount - reference_price) / reference_price < PRICE_PROXIMITY:
            score += PRICE_POINTS

    rooms = reference.features.rooms
    if rooms is not None and candidate.features.rooms == rooms:
        score += ROOMS_POINTS

    return score


def exclude_reference(listings: Iterable[Listing], reference: Listing) -> list[Listing]:
    """Drop the reference listing itself from a candidate list."""
    return [listing for listing in listings if listing.id != reference.id]
