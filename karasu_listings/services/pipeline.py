"""Search and related-listing pipelines: filter, sort, paginate, summarize."""

from typing import Optional, Sequence, Union

from karasu_listings.models.filters import FilterSpec, RelatedFilter, SortStrategy
from karasu_listings.models.listing import Listing
from karasu_listings.models.results import SearchResult
from karasu_listings.services.listing_filters import apply_related_filter, filter_listings
from karasu_listings.services.pagination import paginate
from karasu_listings.services.similarity import exclude_reference
from karasu_listings.services.sorting import resolve_strategy, sort_listings
from karasu_listings.services.statistics import compare_price, compute_statistics
from karasu_listings.utils.logging import (
    get_structured_logger,
    log_timing,
    sanitize_query_text,
)
from karasu_listings.utils.settings import PipelineSettings

logger = get_structured_logger(__name__)


def search_listings(
    listings: Sequence[Listing],
    spec: Optional[FilterSpec] = None,
    sort: Union[str, SortStrategy, None] = None,
    page: int = 1,
    page_size: Optional[int] = None,
    reference: Optional[Listing] = None,
) -> SearchResult:
    """
    Run the search page pipeline over an in-memory snapshot.

    Applies the filter spec, sorts (newest first unless told otherwise),
    slices the requested page and summarizes the whole filtered set.
    The snapshot is never modified; every call starts from scratch.
    """
    strategy = resolve_strategy(sort, default=SortStrategy.NEWEST)
    if page_size is None:
        page_size = PipelineSettings.SEARCH_PAGE_SIZE

    with log_timing("search_listings", logger=logger, snapshot_size=len(listings)):
        filtered = filter_listings(listings, spec)
        ordered = sort_listings(filtered, strategy, reference=reference)
        result_page = paginate(ordered, page, page_size)
        statistics = compute_statistics(filtered)

    logger.info(
        "Listing search completed",
        snapshot_size=len(listings),
        filtered_count=len(filtered),
        filters_applied=spec is not None and not spec.is_empty(),
        query=sanitize_query_text(spec.query) if spec else None,
        sort=strategy.value,
        page=page,
        total_pages=result_page.total_pages,
    )

    return SearchResult(
        **result_page.model_dump(exclude={"items"}),
        items=result_page.items,
        sort=strategy,
        statistics=statistics,
    )


def related_listings(
    listings: Sequence[Listing],
    reference: Listing,
    sort: Union[str, SortStrategy, None] = None,
    related_filter: Union[str, RelatedFilter, None] = None,
    page: int = 1,
    page_size: Optional[int] = None,
) -> SearchResult:
    """
    Rank other listings against a reference listing.

    The reference itself is dropped, a quick filter is applied, the rest is
    sorted (most similar first by default) and paginated. The result carries
    the reference price compared with the average of the filtered set.
    """
    strategy = resolve_strategy(sort, default=SortStrategy.SIMILARITY)
    if page_size is None:
        page_size = PipelineSettings.RELATED_PAGE_SIZE
    option = _resolve_related_filter(related_filter)

    with log_timing("related_listings", logger=logger, reference_id=reference.id):
        candidates = exclude_reference(listings, reference)
        filtered = apply_related_filter(candidates, reference, option)
        ordered = sort_listings(filtered, strategy, reference=reference)
        result_page = paginate(ordered, page, page_size)
        statistics = compute_statistics(filtered)
        comparison = compare_price(reference, filtered)

    logger.info(
        "Related listings ranked",
        reference_id=reference.id,
        candidate_count=len(candidates),
        filtered_count=len(filtered),
        related_filter=option.value,
        sort=strategy.value,
        page=page,
    )

    return SearchResult(
        **result_page.model_dump(exclude={"items"}),
        items=result_page.items,
        sort=strategy,
        statistics=statistics,
        price_comparison=comparison,
    )


def _resolve_related_filter(value: Union[str, RelatedFilter, None]) -> RelatedFilter:
    if isinstance(value, RelatedFilter):
        return value
    if not value:
        return RelatedFilter.ALL
    try:
        return RelatedFilter(value.strip().lower())
    except ValueError:
        logger.warning("Unknown related filter, showing all", related_filter=value)
        return RelatedFilter.ALL
