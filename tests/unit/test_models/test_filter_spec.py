"""Tests for FilterSpec normalization."""

import pytest

from karasu_listings.models.filters import FilterSpec
from karasu_listings.models.listing import ListingStatus


@pytest.mark.unit
def test_filter_spec_empty():
    """Test a spec with nothing set constrains nothing."""
    assert FilterSpec().is_empty()


@pytest.mark.unit
def test_filter_spec_camel_case_keys():
    """Test the plain configuration object form is accepted."""
    spec = FilterSpec.model_validate({
        "status": "for-sale",
        "propertyType": "daire",
        "neighborhoodQuery": "Yalı",
        "priceMin": 600000,
        "freeTextQuery": "deniz",
        "booleanFeatures": ["seaView", "parking"],
    })

    assert spec.status == ListingStatus.FOR_SALE
    assert spec.property_type == "daire"
    assert spec.neighborhood_query == "Yalı"
    assert spec.price_min == 600000
    assert spec.query == "deniz"
    assert spec.boolean_features == frozenset({"sea_view", "parking"})
    assert not spec.is_empty()


@pytest.mark.unit
def test_filter_spec_unknown_keys_ignored():
    """Test unrecognized fields impose no constraint."""
    spec = FilterSpec.model_validate({"colour": "blue", "heatingType": "kombi"})
    assert spec.is_empty()


@pytest.mark.unit
@pytest.mark.parametrize("value", [float("nan"), -100, "abc", ""])
def test_filter_spec_malformed_bounds_dropped(value):
    """Test malformed numeric input means 'filter not applied'."""
    spec = FilterSpec(price_min=value, size_max=value)
    assert spec.price_min is None
    assert spec.size_max is None


@pytest.mark.unit
def test_filter_spec_min_greater_than_max_kept():
    """Test inverted ranges are not silently repaired."""
    spec = FilterSpec(price_min=900, price_max=100)
    assert spec.price_min == 900
    assert spec.price_max == 100


@pytest.mark.unit
def test_filter_spec_room_sets():
    """Test room sets accept strings and scalars and drop junk."""
    assert FilterSpec(rooms=["2", "3", "x"]).rooms == frozenset({2, 3})
    assert FilterSpec(rooms=4).rooms == frozenset({4})
    assert FilterSpec(rooms=["x"]).rooms is None


@pytest.mark.unit
def test_filter_spec_blank_strings_dropped():
    """Test blank text fields are treated as absent."""
    spec = FilterSpec(query="  ", neighborhood_query="", status="")
    assert spec.is_empty()


@pytest.mark.unit
def test_filter_spec_room_list_string_split():
    """Test a comma separated room string is read as a set."""
    assert FilterSpec(rooms="2,3").rooms == frozenset({2, 3})
    assert FilterSpec(bathrooms=" 1, 2 ,x").bathrooms == frozenset({1, 2})


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    ("1.500.000", 1_500_000),
    ("750.000", 750_000),
    ("1.250.000,50", 1_250_000.5),
    ("1250,5", 1250.5),
    ("1.5", 1.5),
])
def test_filter_spec_turkish_number_formats(value, expected):
    """Test thousands dots and decimal commas in price bounds."""
    assert FilterSpec(price_min=value).price_min == expected
