"""Page slicing over sorted listing sequences."""

import math
from typing import Sequence

from karasu_listings.models.listing import Listing
from karasu_listings.models.results import SearchPage
from karasu_listings.utils.errors import PaginationError
from karasu_listings.utils.settings import PipelineSettings

SEARCH_PAGE_SIZE = PipelineSettings.SEARCH_PAGE_SIZE
RELATED_PAGE_SIZE = PipelineSettings.RELATED_PAGE_SIZE


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise PaginationError(f"page_size must be >= 1, got {page_size}")
    return math.ceil(count / page_size)


def page_slice(items: Sequence, page: int, page_size: int) -> list:
    """Items of a 1-based page; pages outside the range are empty."""
    if page_size < 1:
        raise PaginationError(f"page_size must be >= 1, got {page_size}")
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def clamp_page(page: int, pages: int) -> int:
    """Clamp a requested page into [1, pages] (1 when there are no pages)."""
    return max(1, min(page, pages))


def paginate(items: Sequence[Listing], page: int = 1, page_size: int = SEARCH_PAGE_SIZE) -> SearchPage:
    """
    Slice one page out of an already sorted sequence.

    The requested page is not clamped: a page past the end comes back with
    no items but the correct totals, and callers decide whether to clamp.
    """
    return SearchPage(
        items=page_slice(items, page, page_size),
        page=page,
        page_size=page_size,
        total_pages=total_pages(len(items), page_size),
        total_count=len(items),
    )
