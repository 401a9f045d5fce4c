"""
Valuation request and result.

All money amounts are in lakhs (1 lakh = 100,000 INR) unless the field
name says otherwise; all land areas are in cents.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from tvmrealty.models.baseline import RateSource
from tvmrealty.models.insights import (
    DeveloperFeasibility,
    GeospatialAnalysis,
    InvestmentMetrics,
    SuitabilityMetrics,
)
from tvmrealty.models.listing import PropertyMarker, SearchResult

PropertyKind = Literal["Plot", "House"]
ConfidenceLevel = Literal["High", "Medium", "Low"]


class ValuationInput(BaseModel):
    """What the caller wants valued."""

    property_kind: PropertyKind = Field(..., description="Plot (land only) or House")
    locality: str = Field(..., min_length=1)
    plot_area_cents: float = Field(..., gt=0, allow_inf_nan=False, description="Land area in cents")
    built_area_sqft: float = Field(
        0.0, ge=0, allow_inf_nan=False, description="Built-up area (House only)"
    )
    bedrooms: Optional[int] = Field(None, ge=0)
    property_age: Optional[str] = Field(
        None, description="Age band, e.g. 'Old (> 10 Years)'"
    )
    road_access: Optional[str] = Field(
        "Car Access", description="Road access band, e.g. 'Narrow / Bike Only'"
    )
    distance_to_beach_km: Optional[float] = Field(
        None, ge=0, allow_inf_nan=False, description="Overrides the locality's default beach distance"
    )
    construction_rate_per_sqft: Optional[float] = Field(
        None, gt=0, allow_inf_nan=False, description="Overrides the tier's default construction rate (INR)"
    )

    @property
    def is_house(self) -> bool:
        return self.property_kind == "House"


class CalculationBreakdown(BaseModel):
    """Every number that went into the price range."""

    land_rate_per_cent: float
    land_rate_min: float
    land_rate_max: float
    land_total: float
    construction_rate_per_sqft: float = Field(0.0, description="INR per sqft")
    structure_before_depreciation: float = 0.0
    depreciation_pct: float = Field(0.0, ge=0, le=100)
    final_structure_value: float = 0.0
    road_factor: float = 1.0
    road_access_adjustment: str = "0%"


class ConfidenceRating(BaseModel):
    score: float = Field(..., ge=0, le=100)
    level: ConfidenceLevel
    sample_size: int = 0
    last_updated: Optional[datetime] = None


class ValuationResult(BaseModel):
    """
    Price estimate for one request.

    Built fresh per request and never persisted by the engine.
    """

    locality: str
    property_kind: PropertyKind
    currency: str = "INR"

    price_range_min: float
    price_range_max: float
    land_value: float = Field(..., description="Land point estimate")
    structure_value: float = 0.0
    breakdown: CalculationBreakdown

    confidence: ConfidenceRating
    rate_source: RateSource
    degraded: bool = Field(
        False, description="True when the oracle failed and the baseline was used"
    )

    suitability: SuitabilityMetrics
    markers: list[PropertyMarker] = Field(default_factory=list)
    sources: list[SearchResult] = Field(default_factory=list)

    explanation: str = ""
    recommendation: str = ""
    investment: Optional[InvestmentMetrics] = None
    geo_spatial: Optional[GeospatialAnalysis] = None
    developer: Optional[DeveloperFeasibility] = None
