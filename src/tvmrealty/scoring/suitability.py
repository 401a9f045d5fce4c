"""
Suitability scoring for villa plots.

Deterministic 0-10 score from four independently bounded components:
- Airport proximity (max 3): <10 km = 3, <20 km = 2, else 1
- Locality tier (max 3): Premium 3, Tech 2.5, City 2, Suburb 1
- Plot size (max 2): >=5 cents = 2, >=3 cents = 1, else 0
- Beach proximity (max 2): <5 km = 2, <10 km = 1, else 0
"""

from typing import Optional

from tvmrealty.geo import (
    AIRPORT,
    LULU_MALL,
    MAJOR_HOSPITALS,
    TECHNOPARK,
    TOP_SCHOOLS,
    bearing,
    compass_direction,
    distance_km,
    get_locality,
    get_tier,
    nearest,
)
from tvmrealty.models import NearbyPlace, SocialInfra, SuitabilityMetrics

TIER_POINTS = {"Premium": 3.0, "Tech": 2.5, "City": 2.0, "Suburb": 1.0}

# Minimum plot size (cents) for a villa, by tier
MIN_VILLA_PLOT = {"Premium": 5.0, "Tech": 4.0, "City": 4.0, "Suburb": 3.0}

# Score used when the locality has no known coordinates
FALLBACK_SCORE = 5.0

FALLBACK_DISTANCES = {"airport": 15.0, "mall": 10.0, "techpark": 12.0}

FALLBACK_SOCIAL_INFRA = SocialInfra(
    nearest_school=NearbyPlace(name="Local School", distance=2.5),
    nearest_hospital=NearbyPlace(name="Community Hospital", distance=3.0),
)

FEASIBLE_REASONS = {
    "Premium": (
        "Excellent for luxury villa development in {locality}'s premium market. "
        "Plot size sufficient for high-end construction."
    ),
    "Tech": (
        "Good for modern villa development. "
        "High demand from IT professionals in {locality}."
    ),
    "City": (
        "Suitable for villa construction. "
        "{plot:g} cents provides adequate space for residential development."
    ),
    "Suburb": (
        "Suitable for villa construction. "
        "{plot:g} cents provides adequate space for residential development."
    ),
}

NOT_FEASIBLE_REASON = (
    "Plot size ({plot:g} cents) below recommended minimum of {required:g} cents "
    "for {locality}. Consider increasing land area or opting for compact design."
)


def _airport_points(airport_km: float) -> float:
    if airport_km < 10:
        return 3.0
    if airport_km < 20:
        return 2.0
    return 1.0


def _size_points(plot_area_cents: float) -> float:
    if plot_area_cents >= 5:
        return 2.0
    if plot_area_cents >= 3:
        return 1.0
    return 0.0


def _beach_points(beach_km: float) -> float:
    if beach_km < 5:
        return 2.0
    if beach_km < 10:
        return 1.0
    return 0.0


def calculate_suitability(
    locality: str, plot_area_cents: float, beach_distance_km: float
) -> float:
    """
    Suitability score in [0, 10], rounded to one decimal.

    Localities without known coordinates score FALLBACK_SCORE.
    """
    profile = get_locality(locality)
    if profile is None:
        return FALLBACK_SCORE

    airport_km = distance_km(profile.coords, AIRPORT.coords)
    total = (
        _airport_points(airport_km)
        + TIER_POINTS[get_tier(locality)]
        + _size_points(plot_area_cents)
        + _beach_points(beach_distance_km)
    )

    return round(max(0.0, min(10.0, total)), 1)


def amenity_distances(locality: str) -> dict[str, float]:
    """Distances (km) to the airport, Lulu Mall and Technopark."""
    profile = get_locality(locality)
    if profile is None:
        return dict(FALLBACK_DISTANCES)

    return {
        "airport": distance_km(profile.coords, AIRPORT.coords),
        "mall": distance_km(profile.coords, LULU_MALL.coords),
        "techpark": distance_km(profile.coords, TECHNOPARK.coords),
    }


def assess_villa_feasibility(plot_area_cents: float, locality: str) -> tuple[bool, str]:
    """
    Whether the plot is large enough for a villa in this locality's tier.

    Returns:
        (is_feasible, reason)
    """
    tier = get_tier(locality)
    required = MIN_VILLA_PLOT[tier]

    if plot_area_cents >= required:
        reason = FEASIBLE_REASONS[tier].format(locality=locality, plot=plot_area_cents)
        return True, reason

    reason = NOT_FEASIBLE_REASON.format(
        plot=plot_area_cents, required=required, locality=locality
    )
    return False, reason


def nearest_social_infra(locality: str) -> SocialInfra:
    """Nearest school and hospital to the locality center."""
    profile = get_locality(locality)
    if profile is None:
        return FALLBACK_SOCIAL_INFRA.model_copy(deep=True)

    school, school_km = nearest(profile.coords, TOP_SCHOOLS)
    hospital, hospital_km = nearest(profile.coords, MAJOR_HOSPITALS)

    return SocialInfra(
        nearest_school=NearbyPlace(name=school.name, distance=round(school_km, 1)),
        nearest_hospital=NearbyPlace(name=hospital.name, distance=round(hospital_km, 1)),
    )


def airport_direction(locality: str) -> Optional[str]:
    """Compass direction from the locality center to the airport."""
    profile = get_locality(locality)
    if profile is None:
        return None
    return compass_direction(bearing(profile.coords, AIRPORT.coords))


def generate_suitability_metrics(
    locality: str, plot_area_cents: float, beach_distance_km: float
) -> SuitabilityMetrics:
    """Full suitability block for a valuation result."""
    distances = amenity_distances(locality)
    is_feasible, reason = assess_villa_feasibility(plot_area_cents, locality)

    return SuitabilityMetrics(
        suitability_score=calculate_suitability(locality, plot_area_cents, beach_distance_km),
        airport_dist=round(distances["airport"], 1),
        mall_dist=round(distances["mall"], 1),
        techpark_dist=round(distances["techpark"], 1),
        airport_direction=airport_direction(locality),
        is_villa_feasible=is_feasible,
        villa_feasibility_reason=reason,
        social_infra=nearest_social_infra(locality),
    )
