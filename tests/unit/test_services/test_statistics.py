"""Tests for aggregate statistics."""

import pytest

from karasu_listings.services.statistics import (
    average_price,
    average_price_per_m2,
    compare_price,
    compute_statistics,
    price_delta_percent,
)
from tests.utils.factories import create_bare_listing


@pytest.mark.unit
def test_average_price_excludes_unpriced():
    """Test the unpriced listing is left out of numerator and denominator."""
    listings = [
        create_bare_listing("a", price=1_000_000),
        create_bare_listing("b", price=None),
        create_bare_listing("c", price=2_000_000),
    ]
    assert average_price(listings) == 1_500_000


@pytest.mark.unit
def test_average_price_counts_zero_prices():
    """Test a real price of 0 is a price."""
    listings = [create_bare_listing("a", price=0), create_bare_listing("b", price=100)]
    assert average_price(listings) == 50


@pytest.mark.unit
def test_average_price_empty():
    """Test no priced listings means no average."""
    assert average_price([]) is None
    assert average_price([create_bare_listing("a")]) is None


@pytest.mark.unit
@pytest.mark.parametrize("price,average,expected", [
    (1_100_000, 1_000_000, 10.0),
    (900_000, 1_000_000, -10.0),
    (100, 100, 0.0),
    (None, 100, None),
    (100, None, None),
    (100, 0, None),
])
def test_price_delta_percent(price, average, expected):
    """Test the delta and its guards."""
    result = price_delta_percent(price, average)
    if expected is None:
        assert result is None
    else:
        assert result == pytest.approx(expected)


@pytest.mark.unit
def test_compare_price_direction(yali_listings):
    """Test reference price compared to a set."""
    comparison = compare_price(yali_listings[0], yali_listings[1:])

    assert comparison.average_price == 775_000
    assert comparison.delta_percent == pytest.approx((1_000_000 - 775_000) / 775_000 * 100)
    assert comparison.direction == "above"


@pytest.mark.unit
def test_compare_price_without_comparison():
    """Test no direction when the reference has no price."""
    comparison = compare_price(create_bare_listing("ref"), [create_bare_listing("a", price=10)])
    assert comparison.delta_percent is None
    assert comparison.direction is None


@pytest.mark.unit
def test_average_price_per_m2_guards_size():
    """Test listings without size or with zero size are skipped."""
    listings = [
        create_bare_listing("a", price=1_000_000, size=100),
        create_bare_listing("b", price=1_000_000, size=None),
        create_bare_listing("c", price=1_000_000, size=0),
        create_bare_listing("d", price=None, size=100),
        create_bare_listing("e", price=3_000_000, size=100),
    ]
    assert average_price_per_m2(listings) == 20_000
    assert average_price_per_m2([listings[1]]) is None


@pytest.mark.unit
def test_compute_statistics(mixed_listings):
    """Test every counter over a mixed set."""
    stats = compute_statistics(mixed_listings)

    assert stats.count == 5
    assert stats.priced_count == 4
    assert stats.average_price == pytest.approx((2_000_000 + 750_000 + 750_000 + 3_500_000) / 4)
    assert stats.total_value == 7_000_000
    assert stats.for_sale == 4
    assert stats.for_rent == 1
    assert stats.published == 5
    assert stats.drafts == 0
    assert stats.featured == 0
    assert stats.by_property_type == {"villa": 1}
    assert stats.by_neighborhood == {"Yalı": 1, "Merkez": 1, "Aziziye": 1, "Kabakoz": 1}


@pytest.mark.unit
def test_compute_statistics_empty():
    """Test the empty set is a valid input."""
    stats = compute_statistics([])
    assert stats.count == 0
    assert stats.average_price is None
    assert stats.average_price_per_m2 is None
    assert stats.total_value == 0


@pytest.mark.unit
def test_compute_statistics_drafts_and_featured():
    """Test draft and featured tallies."""
    listings = [
        create_bare_listing("a", published=False, featured=True),
        create_bare_listing("b", published=True, featured=True),
        create_bare_listing("c", published=False),
    ]
    stats = compute_statistics(listings)
    assert stats.published == 1
    assert stats.drafts == 2
    assert stats.featured == 2
