"""Test helper functions."""

from typing import Any, Dict, Optional
from unittest.mock import MagicMock


def create_vercel_request(query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Create a Vercel request object for testing."""
    return {
        "method": "GET",
        "headers": {"content-type": "application/json"},
        "body": "",
        "query": query or {},
    }


def mock_listings_table(rows: list) -> MagicMock:
    """
    Supabase client mock whose listings query returns the given rows.

    Every builder method returns the same query object, so any chain of
    eq/in_/is_/order/limit ends in execute() returning the rows.
    """
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "eq", "in_", "is_", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=rows)
    client.table.return_value = query
    return client
