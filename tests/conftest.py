"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.utils.factories import create_bare_listing  # noqa: E402


@pytest.fixture
def yali_listings():
    """Three listings: two similar ones in Yalı and a cheaper one in Merkez."""
    return [
        create_bare_listing("0", neighborhood="Yalı", price=1_000_000, rooms=3),
        create_bare_listing("1", neighborhood="Yalı", price=1_050_000, rooms=3),
        create_bare_listing("2", neighborhood="Merkez", price=500_000, rooms=2),
    ]


@pytest.fixture
def mixed_listings():
    """Listings with gaps in price, size and dates."""
    return [
        create_bare_listing("a", neighborhood="Yalı", price=2_000_000, size=120, rooms=3, created_days_ago=10),
        create_bare_listing("b", neighborhood="Merkez", price=None, size=90, rooms=2, created_days_ago=2),
        create_bare_listing("c", neighborhood="Aziziye", price=750_000, size=None, rooms=None, created_days_ago=30),
        create_bare_listing("d", neighborhood=None, price=750_000, size=60, rooms=1, created_days_ago=None),
        create_bare_listing(
            "e", neighborhood="Kabakoz", price=3_500_000, size=250, rooms=5, created_days_ago=1,
            status="kiralik", property_type="villa",
        ),
    ]


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time


@pytest.fixture(autouse=True)
def reset_supabase_singleton():
    """Make every test build its own Supabase client."""
    import karasu_listings.services.supabase_client as supabase_module
    supabase_module._client = None
    yield
    supabase_module._client = None
