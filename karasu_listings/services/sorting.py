"""Named sort strategies for listing sequences."""

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional, Union

from karasu_listings.models.filters import SortStrategy
from karasu_listings.models.listing import Listing
from karasu_listings.services.similarity import similarity_score

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Names used by the search page and the related-listings widget
STRATEGY_ALIASES = {
    "similar": SortStrategy.SIMILARITY,
    "price-low": SortStrategy.PRICE_ASC,
    "price-high": SortStrategy.PRICE_DESC,
    "size-small": SortStrategy.SIZE_ASC,
    "size-large": SortStrategy.SIZE_DESC,
    "date-desc": SortStrategy.NEWEST,
    "created_at-desc": SortStrategy.NEWEST,
    "price_amount-asc": SortStrategy.PRICE_ASC,
    "price_amount-desc": SortStrategy.PRICE_DESC,
}


def _price_key(listing: Listing) -> float:
    return listing.price_amount or 0.0


def _size_key(listing: Listing) -> float:
    return listing.features.size_m2 or 0.0


def _created_key(listing: Listing) -> datetime:
    return listing.created_at or EPOCH


# strategy -> (key, descending); similarity keys are built per reference
SORT_KEYS: dict[SortStrategy, tuple[Callable[[Listing], Any], bool]] = {
    SortStrategy.PRICE_ASC: (_price_key, False),
    SortStrategy.PRICE_DESC: (_price_key, True),
    SortStrategy.SIZE_ASC: (_size_key, False),
    SortStrategy.SIZE_DESC: (_size_key, True),
    SortStrategy.NEWEST: (_created_key, True),
}


def resolve_strategy(
    value: Union[str, SortStrategy, None],
    default: SortStrategy = SortStrategy.SIMILARITY,
) -> SortStrategy:
    """Map a strategy name or alias to a SortStrategy; unknown names give the default."""
    if isinstance(value, SortStrategy):
        return value
    if not value:
        return default
    name = value.strip().lower()
    try:
        return SortStrategy(name)
    except ValueError:
        return STRATEGY_ALIASES.get(name, default)


def sort_listings(
    listings: Iterable[Listing],
    strategy: Union[str, SortStrategy, None] = SortStrategy.SIMILARITY,
    reference: Optional[Listing] = None,
) -> list[Listing]:
    """
    Return a new list ordered by the strategy.

    Sorting is stable for every strategy, descending ones included, so equal
    keys keep their input order and repeated calls give identical pages.
    Similarity needs a reference listing; without one the order is unchanged.
    """
    strategy = resolve_strategy(strategy)
    items = list(listings)

    if strategy == SortStrategy.SIMILARITY:
        if reference is None:
            return items
        return sorted(items, key=lambda l: similarity_score(l, reference), reverse=True)

    key, descending = SORT_KEYS[strategy]
    return sorted(items, key=key, reverse=descending)
