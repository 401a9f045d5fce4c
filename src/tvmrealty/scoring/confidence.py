"""
Confidence scoring for a locality baseline.

Score (0-100):
- Base 50
- Sample size: +30 (>=15), +20 (>=5), +10 (>=3), +5 otherwise
- Variance, only with >=3 samples: +20 (<=10%), +10 (<=20%), -10 (>20%)
- Capped at 55 below 5 samples, so a couple of lucky, tight samples
  never report more than Low confidence.
"""

from typing import Optional

from tvmrealty.models import ConfidenceRating, LocalityBaseline

BASE_SCORE = 50.0
SMALL_SAMPLE_CAP = 55.0
SMALL_SAMPLE_SIZE = 5

HIGH_THRESHOLD = 80.0
MEDIUM_THRESHOLD = 60.0


def confidence_score(sample_size: int, variance_pct: Optional[float] = None) -> float:
    """
    Confidence score for a baseline with the given sample size and variance.

    Args:
        sample_size: Number of observations behind the baseline
        variance_pct: Coefficient of variation in percent (None = unknown)

    Returns:
        Score clamped to [0, 100]
    """
    score = BASE_SCORE

    if sample_size >= 15:
        score += 30
    elif sample_size >= 5:
        score += 20
    elif sample_size >= 3:
        score += 10
    else:
        score += 5

    if sample_size >= 3 and variance_pct is not None:
        if variance_pct <= 10:
            score += 20
        elif variance_pct <= 20:
            score += 10
        else:
            score -= 10

    if sample_size < SMALL_SAMPLE_SIZE:
        score = min(score, SMALL_SAMPLE_CAP)

    return max(0.0, min(100.0, score))


def confidence_level(score: float) -> str:
    """High (>=80), Medium (>=60) or Low."""
    if score >= HIGH_THRESHOLD:
        return "High"
    if score >= MEDIUM_THRESHOLD:
        return "Medium"
    return "Low"


def rate_confidence(baseline: Optional[LocalityBaseline]) -> ConfidenceRating:
    """Confidence rating reported with an estimate. No baseline rates as zero samples."""
    if baseline is None:
        score = confidence_score(0)
        return ConfidenceRating(score=score, level=confidence_level(score), sample_size=0)

    score = confidence_score(baseline.sample_size, baseline.variance_pct)
    return ConfidenceRating(
        score=score,
        level=confidence_level(score),
        sample_size=baseline.sample_size,
        last_updated=baseline.last_updated,
    )
