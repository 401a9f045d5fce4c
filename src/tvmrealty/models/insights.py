"""
Derived insights attached to a valuation.

Suitability metrics are computed locally; investment and geospatial
analyses come from the oracle and are decoded leniently.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class NearbyPlace(BaseModel):
    """Nearest school or hospital, with the distance in km."""

    name: str
    distance: float


class SocialInfra(BaseModel):
    """Nearest school and hospital for a locality."""

    nearest_school: NearbyPlace
    nearest_hospital: NearbyPlace


class SuitabilityMetrics(BaseModel):
    """
    Deterministic suitability of a plot for villa development
    by a buyer living abroad.
    """

    suitability_score: float = Field(..., ge=0, le=10)
    airport_dist: float = Field(..., description="km to the international airport")
    mall_dist: float = Field(..., description="km to Lulu Mall")
    techpark_dist: float = Field(..., description="km to Technopark Phase 1")
    airport_direction: Optional[str] = Field(
        None, description="Compass direction from the locality to the airport"
    )
    is_villa_feasible: bool
    villa_feasibility_reason: str
    social_infra: SocialInfra


class InvestmentMetrics(BaseModel):
    """Investment outlook reported by the oracle."""

    rental_yield: str = "N/A"
    appreciation_forecast: str = "N/A"
    demand_trend: Literal["High", "Moderate", "Low"] = "Moderate"
    market_sentiment: str = ""


class MicroMarket(BaseModel):
    name: str
    price_level: str = ""
    description: str = ""


class Comparable(BaseModel):
    """A simulated comparable listing for the market depth chart."""

    id: int
    size: float = 0.0
    price: float = 0.0
    type: Literal["Premium", "Mid-Range", "Budget"] = "Mid-Range"


class GeospatialAnalysis(BaseModel):
    """Terrain and micro-market description reported by the oracle."""

    terrain: str = ""
    neighborhood_vibe: str = ""
    price_gradient: str = ""
    growth_drivers: list[str] = Field(default_factory=list)
    micro_markets: list[MicroMarket] = Field(default_factory=list)
    market_depth: list[Comparable] = Field(default_factory=list)


class DeveloperFeasibility(BaseModel):
    """Villa project economics. All amounts in lakhs."""

    land_cost: float
    construction_rate_per_sqft: float
    villa_size_sqft: float
    num_villas: int
    sale_price_per_villa: float
    construction_cost: float
    total_project_cost: float
    total_revenue: float
    net_profit: float
    roi_pct: float
    verdict: Literal["Strong", "Marginal", "Loss-making"]
