"""
Unit tests for the listing snippet parser.

Tests cover:
  - Price extraction: crore/lakh families, currency prefixes, separators
  - Size extraction: cents and square feet
  - Tier classification thresholds
  - Inclusion policy (price OR size OR listing portal)
  - Adversarial strings where the first match wins
"""

import math

import pytest

from tvmrealty.listings import ListingParser, parse_property_markers
from tvmrealty.models import SearchResult


@pytest.fixture()
def parser():
    return ListingParser()


# =============================================================================
# Price extraction
# =============================================================================

class TestExtractPrice:

    @pytest.mark.parametrize("text,expected", [
        ("3 Cr Villa near Kowdiar", 300.0),
        ("₹1.5 Crore independent house", 150.0),
        ("2 crores negotiable", 200.0),
        ("1.25cr plot", 125.0),
        ("Rs. 45 Lakhs only", 45.0),
        ("Rs 45 lakh", 45.0),
        ("INR 60 lacs", 60.0),
        ("Price 85 L", 85.0),
        ("₹ 1,250 Lakhs", 1250.0),
    ])
    def test_units(self, parser, text, expected):
        assert parser.extract_price(text) == pytest.approx(expected)

    def test_no_price(self, parser):
        assert parser.extract_price("Beautiful plot for sale near Technopark") is None

    def test_zero_price_is_no_price(self, parser):
        assert parser.extract_price("0 Lakhs") is None

    def test_unit_inside_word_ignored(self, parser):
        # '3 luxury' and '2 level' are not lakh amounts
        assert parser.extract_price("3 luxury villas on 2 level plots") is None

    def test_full_width_digits(self, parser):
        assert parser.extract_price("５０ Lakhs") == 50.0


# =============================================================================
# Size extraction
# =============================================================================

class TestExtractSize:

    @pytest.mark.parametrize("text,expected", [
        ("8 cents plot", 8.0),
        ("5.5 cent land", 5.5),
        ("10cents", 10.0),
    ])
    def test_cents(self, parser, text, expected):
        assert parser.extract_size(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", [
        "4356 sqft house",
        "4356 sq ft house",
        "4356 sq. ft. house",
        "4,356 square feet house",
    ])
    def test_square_feet_converted(self, parser, text):
        assert parser.extract_size(text) == pytest.approx(10.0)

    def test_no_size(self, parser):
        assert parser.extract_size("Villa for sale, 3 BHK") is None

    def test_centre_is_not_cents(self, parser):
        assert parser.extract_size("5 Centre Road") is None


# =============================================================================
# Tier classification
# =============================================================================

class TestClassifyTier:

    @pytest.mark.parametrize("price,tier", [
        (None, "Unknown"),
        (300.0, "Premium"),
        (100.01, "Premium"),
        (100.0, "Mid-Range"),
        (40.01, "Mid-Range"),
        (40.0, "Budget"),
        (5.0, "Budget"),
    ])
    def test_thresholds(self, price, tier):
        assert ListingParser.classify_tier(price) == tier


# =============================================================================
# parse()
# =============================================================================

class TestParse:

    def test_reference_snippet(self, parser):
        markers = parser.parse([
            SearchResult(title="3 Cr Villa near Kowdiar, 8 cents plot", url="https://example.com/a"),
        ])
        assert len(markers) == 1
        m = markers[0]
        assert m.estimated_price == 300.0
        assert m.estimated_size == 8.0
        assert m.tier == "Premium"
        assert m.id == 1000
        assert m.link == "https://example.com/a"

    def test_size_only_is_kept(self, parser):
        markers = parser.parse([SearchResult(title="6 cents residential land", url="https://blog.example.com")])
        assert markers[0].estimated_price is None
        assert markers[0].tier == "Unknown"

    def test_no_facts_off_portal_dropped(self, parser):
        markers = parser.parse([SearchResult(title="Trivandrum news today", url="https://news.example.com")])
        assert markers == []

    def test_portal_without_facts_kept(self, parser):
        # allowlisted portals are kept even when nothing was extracted
        markers = parser.parse([
            SearchResult(title="Plots for sale in Pattom", url="https://www.99acres.com/plots-in-pattom"),
        ])
        assert len(markers) == 1
        assert markers[0].estimated_price is None
        assert markers[0].estimated_size is None
        assert markers[0].tier == "Unknown"

    def test_ids_follow_input_positions(self, parser):
        markers = parser.parse([
            SearchResult(title="Weather report", url="https://weather.example.com"),
            SearchResult(title="50 Lakhs plot", url="https://example.com/b"),
        ])
        assert [m.id for m in markers] == [1001]

    def test_price_in_url(self, parser):
        markers = parser.parse([
            SearchResult(title="House for sale", url="https://example.com/villa/75lakhs"),
        ])
        assert markers[0].estimated_price == 75.0

    def test_empty_input(self, parser):
        assert parser.parse([]) == []

    def test_module_helper(self):
        markers = parse_property_markers([SearchResult(title="1 Cr villa", url="https://x.example")])
        assert markers[0].tier == "Mid-Range"


# =============================================================================
# Adversarial strings: first match wins
# =============================================================================

class TestFirstMatchWins:

    def test_two_prices_takes_first(self, parser):
        assert parser.extract_price("Was 2 Cr now 95 Lakhs") == 200.0

    def test_rate_per_cent_read_as_price(self, parser):
        # a per-cent rate is misread as the asking price
        text = "12 Lakhs per cent, 10 cents plot in Pattom"
        assert parser.extract_price(text) == 12.0
        assert parser.extract_size(text) == 10.0

    def test_sqft_before_cents_takes_sqft(self, parser):
        assert parser.extract_size("2000 sqft house on 5 cents") == pytest.approx(2000 / 435.6)

    def test_lakh_and_sqft_in_same_string(self, parser):
        text = "1800 sqft villa 85 L"
        assert parser.extract_price(text) == 85.0
        assert parser.extract_size(text) == pytest.approx(1800 / 435.6)

    @pytest.mark.parametrize("text", [
        "",
        "cr lakh cents sqft",
        "₹₹₹ Rs. INR",
        "1.2.3 Cr",
        ",,, lakhs",
        "Cr 5",
        "9" * 400 + " Cr",
    ])
    def test_garbage_never_raises(self, parser, text):
        price = parser.extract_price(text)
        size = parser.extract_size(text)
        assert price is None or (price > 0 and math.isfinite(price))
        assert size is None or (size > 0 and math.isfinite(size))

    def test_overlong_digit_run_is_no_price(self, parser):
        text = "9" * 400 + " Cr"
        assert parser.extract_price(text) is None
        assert parser.classify_tier(parser.extract_price(text)) == "Unknown"

    def test_overlong_sqft_is_no_size(self, parser):
        assert parser.extract_size("9" * 400 + " sqft") is None
