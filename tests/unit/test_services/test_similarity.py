"""Tests for similarity scoring."""

import itertools

import pytest

from karasu_listings.services.similarity import MAX_SCORE, exclude_reference, similarity_score
from tests.utils.assertions import assert_ids
from tests.utils.factories import create_bare_listing


@pytest.mark.unit
def test_similarity_scenario(yali_listings):
    """Test the Yalı example: full marks for the near twin, nothing for Merkez."""
    reference = yali_listings[0]
    assert similarity_score(yali_listings[1], reference) == 6
    assert similarity_score(yali_listings[2], reference) == 0


@pytest.mark.unit
def test_similarity_individual_rules():
    """Test each rule's points in isolation."""
    reference = create_bare_listing("ref", neighborhood="Yalı", price=1_000_000, rooms=3)

    assert similarity_score(create_bare_listing("n", neighborhood="Yalı"), reference) == 3
    assert similarity_score(create_bare_listing("p", price=1_150_000), reference) == 2
    assert similarity_score(create_bare_listing("r", rooms=3), reference) == 1


@pytest.mark.unit
def test_similarity_price_boundary_is_exclusive():
    """Test exactly 20% away earns no price points."""
    reference = create_bare_listing("ref", price=1_000_000)
    assert similarity_score(create_bare_listing("x", price=1_200_000), reference) == 0
    assert similarity_score(create_bare_listing("y", price=800_001), reference) == 2


@pytest.mark.unit
@pytest.mark.parametrize("reference_price", [0, None])
def test_similarity_reference_without_price(reference_price):
    """Test a zero or missing reference price disables the price rule."""
    reference = create_bare_listing("ref", price=reference_price, rooms=2)
    candidate = create_bare_listing("x", price=0, rooms=2)
    assert similarity_score(candidate, reference) == 1


@pytest.mark.unit
def test_similarity_missing_values_never_score():
    """Test unknown neighborhoods and room counts do not match each other."""
    reference = create_bare_listing("ref")
    candidate = create_bare_listing("x")
    assert similarity_score(candidate, reference) == 0


@pytest.mark.unit
def test_similarity_bounds_and_symmetry():
    """Test scores stay in 0..6 and non-price terms are symmetric."""
    listings = [
        create_bare_listing(str(i), neighborhood=hood, price=price, rooms=rooms)
        for i, (hood, price, rooms) in enumerate(itertools.product(
            ["Yalı", "Merkez", None],
            [None, 0, 500_000, 550_000, 1_000_000],
            [None, 2, 3],
        ))
    ]
    for a, b in itertools.product(listings, repeat=2):
        score = similarity_score(a, b)
        assert 0 <= score <= MAX_SCORE == 6

        without_price_a = a.model_copy(update={"price_amount": None})
        without_price_b = b.model_copy(update={"price_amount": None})
        assert similarity_score(without_price_a, b) == similarity_score(without_price_b, a)


@pytest.mark.unit
def test_similarity_price_term_is_asymmetric():
    """Test the price rule uses the reference price as denominator."""
    cheap = create_bare_listing("cheap", price=100)
    dear = create_bare_listing("dear", price=124)
    # 24/100 >= 0.2 but 24/124 < 0.2
    assert similarity_score(dear, cheap) == 0
    assert similarity_score(cheap, dear) == 2


@pytest.mark.unit
def test_exclude_reference(yali_listings):
    """Test the reference listing is removed by id."""
    assert_ids(exclude_reference(yali_listings, yali_listings[0]), ["1", "2"])
