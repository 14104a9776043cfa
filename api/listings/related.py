"""Related listings endpoint for Vercel."""

import asyncio
import json
import logging

from karasu_listings.services.pipeline import related_listings
from karasu_listings.services.query_params import first_param, parse_page
from karasu_listings.services.supabase_client import fetch_listing_by_slug, fetch_listings_snapshot
from karasu_listings.utils.logging import correlation_context, setup_logging

setup_logging()
logger = logging.getLogger(__name__)


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body)
    }


async def _run_related(slug: str, params: dict):
    reference = await fetch_listing_by_slug(slug)
    if reference is None:
        return None

    # Same status only: for-sale pages never suggest rentals
    snapshot = await fetch_listings_snapshot(status=reference.status)
    result = related_listings(
        snapshot,
        reference,
        sort=first_param(params, "sort"),
        related_filter=first_param(params, "filter"),
        page=parse_page(first_param(params, "page")),
    )
    return result.model_dump(mode="json")


def handler(request):
    """Return listings similar to the one identified by ?slug=."""
    with correlation_context():
        try:
            query_params = request.get("query", {}) or {}
            slug = first_param(query_params, "slug")
            if not slug:
                return _response(400, {"error": "slug is required"})

            body = asyncio.run(_run_related(slug, query_params))
            if body is None:
                return _response(404, {"error": f"listing {slug!r} not found"})

            return _response(200, body)

        except Exception as e:
            logger.error(f"Error ranking related listings: {e}", exc_info=True)
            return _response(500, {"error": str(e)})
