"""
Data models.

- Static geography: LocalityProfile, PointOfInterest
- Persisted state: RateObservation, LocalityBaseline, CachedRate
- Request/response: ValuationInput, ValuationResult
"""

from tvmrealty.models.locality import (
    Coordinates,
    LocalityProfile,
    LocalityTier,
    PointOfInterest,
)
from tvmrealty.models.baseline import (
    CachedRate,
    LocalityBaseline,
    RateObservation,
    RateSource,
)
from tvmrealty.models.listing import MarkerTier, PropertyMarker, SearchResult
from tvmrealty.models.insights import (
    Comparable,
    DeveloperFeasibility,
    GeospatialAnalysis,
    InvestmentMetrics,
    MicroMarket,
    NearbyPlace,
    SocialInfra,
    SuitabilityMetrics,
)
from tvmrealty.models.valuation import (
    CalculationBreakdown,
    ConfidenceLevel,
    ConfidenceRating,
    PropertyKind,
    ValuationInput,
    ValuationResult,
)

__all__ = [
    # Geography
    "Coordinates",
    "LocalityProfile",
    "LocalityTier",
    "PointOfInterest",
    # Persisted state
    "CachedRate",
    "LocalityBaseline",
    "RateObservation",
    "RateSource",
    # Listings
    "MarkerTier",
    "PropertyMarker",
    "SearchResult",
    # Insights
    "Comparable",
    "DeveloperFeasibility",
    "GeospatialAnalysis",
    "InvestmentMetrics",
    "MicroMarket",
    "NearbyPlace",
    "SocialInfra",
    "SuitabilityMetrics",
    # Valuation
    "CalculationBreakdown",
    "ConfidenceLevel",
    "ConfidenceRating",
    "PropertyKind",
    "ValuationInput",
    "ValuationResult",
]
