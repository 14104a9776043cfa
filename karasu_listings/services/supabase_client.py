"""Supabase client wrapper and listing snapshot queries."""

import asyncio
import os
from typing import Any, Optional

from pydantic import ValidationError
from supabase import create_client, Client
from supabase.client import ClientOptions

from karasu_listings.models.listing import Listing, ListingStatus
from karasu_listings.utils.errors import ListingParseError, SupabaseError
from karasu_listings.utils.logging import get_structured_logger
from karasu_listings.utils.settings import PipelineSettings

logger = get_structured_logger(__name__)

LISTINGS_TABLE = "listings"

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", supabase_url=url)

    return _client


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                error=str(exc_val),
                error_type=exc_type.__name__
            )
        return False


def parse_listing_row(row: dict[str, Any]) -> Listing:
    """Convert a database row into a Listing."""
    try:
        return Listing.model_validate(row)
    except ValidationError as e:
        raise ListingParseError(f"Invalid listing row {row.get('id')!r}: {e.error_count()} errors") from e


def parse_listing_rows(rows: list[dict[str, Any]]) -> list[Listing]:
    """Parse rows, skipping (and logging) the ones that do not validate."""
    listings = []
    for row in rows:
        try:
            listings.append(parse_listing_row(row))
        except ListingParseError as e:
            logger.warning("Skipping unparseable listing row", listing_id=row.get("id"), error=str(e))
    return listings


def _published_listings_query(client: Client):
    return (
        client.table(LISTINGS_TABLE)
        .select("*")
        .eq("published", True)
        .eq("available", True)
        .is_("deleted_at", "null")
    )


async def _query_listings(
    status: Optional[ListingStatus],
    property_types: Optional[list[str]],
    neighborhoods: Optional[list[str]],
    limit: int,
) -> list[dict[str, Any]]:
    async with SupabaseClient() as client:
        try:
            query = _published_listings_query(client)
            if status is not None:
                query = query.eq("status", status.value)
            if property_types:
                query = query.in_("property_type", property_types)
            if neighborhoods:
                query = query.in_("location_neighborhood", neighborhoods)
            query = query.order("created_at", desc=True).limit(limit)
            # execute() is synchronous
            result = await asyncio.to_thread(query.execute)
            return result.data or []
        except Exception as e:
            raise SupabaseError(f"Failed to fetch listings: {e}")


async def fetch_listings_snapshot(
    status: Optional[ListingStatus] = None,
    property_types: Optional[list[str]] = None,
    neighborhoods: Optional[list[str]] = None,
    limit: int = PipelineSettings.LISTINGS_FETCH_LIMIT,
    timeout: float = PipelineSettings.LISTINGS_FETCH_TIMEOUT_SECONDS,
) -> list[Listing]:
    """
    Fetch published listings with the coarse filters pushed down.

    Client-side refinement happens in the pipeline. A failed or timed out
    query returns an empty snapshot so pages render their empty state.
    """
    try:
        rows = await asyncio.wait_for(
            _query_listings(status, property_types, neighborhoods, limit),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.error("Listing snapshot fetch timed out", timeout_seconds=timeout)
        return []
    except SupabaseError as e:
        logger.error("Listing snapshot fetch failed", error=str(e))
        return []

    listings = parse_listing_rows(rows)
    logger.info(
        "Listing snapshot fetched",
        row_count=len(rows),
        listing_count=len(listings),
        status=status.value if status else None,
    )
    return listings


async def fetch_listing_by_slug(slug: str) -> Optional[Listing]:
    """Fetch one published listing by slug, None when missing or unparseable."""
    if not slug:
        return None

    async with SupabaseClient() as client:
        try:
            result = _published_listings_query(client).eq("slug", slug).limit(1).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to fetch listing {slug!r}: {e}")

    if not result.data:
        return None

    try:
        return parse_listing_row(result.data[0])
    except ListingParseError as e:
        logger.warning("Listing row failed validation", slug=slug, error=str(e))
        return None
