"""Listing search endpoint for Vercel."""

import asyncio
import json
import logging

from karasu_listings.services.pipeline import search_listings
from karasu_listings.services.query_params import filter_spec_from_params, first_param, parse_page
from karasu_listings.services.supabase_client import fetch_listings_snapshot
from karasu_listings.utils.logging import correlation_context, setup_logging

setup_logging()
logger = logging.getLogger(__name__)


async def _run_search(params: dict) -> dict:
    spec = filter_spec_from_params(params)
    snapshot = await fetch_listings_snapshot(
        status=spec.status,
        property_types=[spec.property_type] if spec.property_type else None,
    )
    result = search_listings(
        snapshot,
        spec=spec,
        sort=first_param(params, "sort"),
        page=parse_page(first_param(params, "page")),
    )
    return result.model_dump(mode="json")


def handler(request):
    """
    Return one page of search results.

    Query params: q, tip/status, emlak/property_type, mahalle/neighborhood,
    min_price, max_price, min_size, max_size, rooms, bathrooms, boolean
    feature flags (balcony=true ...), sort, page.
    """
    with correlation_context():
        try:
            query_params = request.get("query", {}) or {}
            body = asyncio.run(_run_search(query_params))

            return {
                "statusCode": 200,
                "headers": {"Content-Type": "application/json"},
                "body": json.dumps(body)
            }

        except Exception as e:
            logger.error(f"Error running listing search: {e}", exc_info=True)
            return {
                "statusCode": 500,
                "headers": {"Content-Type": "application/json"},
                "body": json.dumps({"error": str(e)})
            }
