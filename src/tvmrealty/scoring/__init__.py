"""
Scoring module.

Deterministic suitability scoring and baseline confidence rating.
"""

from tvmrealty.scoring.confidence import (
    confidence_level,
    confidence_score,
    rate_confidence,
)
from tvmrealty.scoring.suitability import (
    FALLBACK_SCORE,
    MIN_VILLA_PLOT,
    amenity_distances,
    assess_villa_feasibility,
    calculate_suitability,
    generate_suitability_metrics,
    nearest_social_infra,
)

__all__ = [
    # Confidence
    "confidence_level",
    "confidence_score",
    "rate_confidence",
    # Suitability
    "FALLBACK_SCORE",
    "MIN_VILLA_PLOT",
    "amenity_distances",
    "assess_villa_feasibility",
    "calculate_suitability",
    "generate_suitability_metrics",
    "nearest_social_infra",
]
