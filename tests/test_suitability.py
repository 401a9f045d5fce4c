"""
Unit tests for villa suitability scoring.

Tests cover:
  - Component scoring and bounds of calculate_suitability
  - Fallbacks for localities without coordinates
  - Villa feasibility gate by tier
  - Nearest school/hospital lookup
  - generate_suitability_metrics assembly
"""

import itertools

import pytest

from tvmrealty.geo import LOCALITIES
from tvmrealty.scoring import (
    FALLBACK_SCORE,
    amenity_distances,
    assess_villa_feasibility,
    calculate_suitability,
    generate_suitability_metrics,
    nearest_social_infra,
)


# =============================================================================
# calculate_suitability
# =============================================================================

class TestCalculateSuitability:

    def test_kowdiar_five_cents(self):
        # airport < 10 km (3) + Premium (3) + 5 cents (2) + beach 7.5 km (1)
        assert calculate_suitability("Kowdiar", 5, 7.5) == 9.0

    def test_kovalam_three_cents(self):
        # airport 10-20 km (2) + Suburb (1) + 3 cents (1) + beach 0.5 km (2)
        assert calculate_suitability("Kovalam", 3, 0.5) == 6.0

    def test_small_plot_far_from_beach(self):
        # airport (3) + Premium (3) + 2 cents (0) + beach 12 km (0)
        assert calculate_suitability("Kowdiar", 2, 12) == 6.0

    def test_unknown_locality_falls_back(self):
        assert calculate_suitability("Atlantis", 10, 0) == FALLBACK_SCORE

    @pytest.mark.parametrize(
        "locality,plot,beach",
        list(itertools.product(LOCALITIES[::7], [0.5, 3, 5, 50], [0, 4.9, 9.9, 40])),
    )
    def test_always_bounded(self, locality, plot, beach):
        score = calculate_suitability(locality, plot, beach)
        assert 0 <= score <= 10
        assert score == round(score, 1)


# =============================================================================
# Distances and social infrastructure
# =============================================================================

class TestAmenities:

    def test_known_locality(self):
        distances = amenity_distances("Technopark Area")
        assert distances["techpark"] == 0.0
        assert distances["airport"] > 0

    def test_unknown_locality_fallback(self):
        assert amenity_distances("Atlantis") == {"airport": 15.0, "mall": 10.0, "techpark": 12.0}

    def test_social_infra_known(self):
        infra = nearest_social_infra("Pattom")
        assert infra.nearest_school.name
        assert infra.nearest_hospital.name
        assert infra.nearest_school.distance == round(infra.nearest_school.distance, 1)

    def test_social_infra_fallback(self):
        infra = nearest_social_infra("Atlantis")
        assert infra.nearest_school.name == "Local School"
        assert infra.nearest_school.distance == 2.5
        assert infra.nearest_hospital.name == "Community Hospital"
        assert infra.nearest_hospital.distance == 3.0


# =============================================================================
# Villa feasibility
# =============================================================================

class TestVillaFeasibility:

    @pytest.mark.parametrize("locality,plot,feasible", [
        ("Kowdiar", 5, True),
        ("Kowdiar", 4.9, False),
        ("Kazhakkoottam", 4, True),
        ("Kazhakkoottam", 3.5, False),
        ("Palayam", 4, True),
        ("Kovalam", 3, True),
        ("Kovalam", 2.5, False),
        ("Atlantis", 3, True),
    ])
    def test_minimum_plot_by_tier(self, locality, plot, feasible):
        ok, reason = assess_villa_feasibility(plot, locality)
        assert ok is feasible
        assert reason

    def test_reason_names_the_minimum(self):
        ok, reason = assess_villa_feasibility(2, "Kowdiar")
        assert not ok
        assert "5 cents" in reason


# =============================================================================
# generate_suitability_metrics
# =============================================================================

class TestSuitabilityMetrics:

    def test_assembly(self):
        metrics = generate_suitability_metrics("Kowdiar", 5, 7.5)
        assert metrics.suitability_score == 9.0
        assert metrics.is_villa_feasible
        assert metrics.airport_direction == "SW"
        assert metrics.airport_dist < 10
        assert metrics.social_infra.nearest_hospital.name

    def test_unknown_locality(self):
        metrics = generate_suitability_metrics("Atlantis", 5, 1)
        assert metrics.suitability_score == FALLBACK_SCORE
        assert metrics.airport_direction is None
        assert metrics.airport_dist == 15.0
