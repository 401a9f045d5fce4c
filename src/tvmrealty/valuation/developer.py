"""
Developer feasibility.

Economics of building villas on a plot and selling them.
"""

import math

from tvmrealty.models import DeveloperFeasibility
from tvmrealty.scoring.suitability import MIN_VILLA_PLOT
from tvmrealty.units import RUPEES_PER_LAKH

DEFAULT_VILLA_SIZE_SQFT = 2000.0
STRONG_ROI_PCT = 20.0
SALE_MARKUP = 1.5


def _verdict(roi_pct: float) -> str:
    if roi_pct > STRONG_ROI_PCT:
        return "Strong"
    if roi_pct > 0:
        return "Marginal"
    return "Loss-making"


def project_feasibility(
    land_cost: float,
    construction_rate: float,
    sale_price_per_villa: float,
    num_villas: int,
    villa_size_sqft: float = DEFAULT_VILLA_SIZE_SQFT,
) -> DeveloperFeasibility:
    """
    Cost, revenue and ROI of a villa project.

    Args:
        land_cost: Land cost in lakhs
        construction_rate: INR per sqft
        sale_price_per_villa: Lakhs
        num_villas: Villas built on the plot
        villa_size_sqft: Built-up area of one villa
    """
    construction_cost = num_villas * villa_size_sqft * construction_rate / RUPEES_PER_LAKH
    total_cost = land_cost + construction_cost
    revenue = sale_price_per_villa * num_villas
    net_profit = revenue - total_cost
    roi_pct = net_profit / total_cost * 100 if total_cost > 0 else 0.0

    return DeveloperFeasibility(
        land_cost=round(land_cost, 2),
        construction_rate_per_sqft=construction_rate,
        villa_size_sqft=villa_size_sqft,
        num_villas=num_villas,
        sale_price_per_villa=round(sale_price_per_villa, 2),
        construction_cost=round(construction_cost, 2),
        total_project_cost=round(total_cost, 2),
        total_revenue=round(revenue, 2),
        net_profit=round(net_profit, 2),
        roi_pct=round(roi_pct, 1),
        verdict=_verdict(roi_pct),
    )


def default_scenario(
    land_value: float,
    plot_area_cents: float,
    tier: str,
    construction_rate: float,
    villa_size_sqft: float = DEFAULT_VILLA_SIZE_SQFT,
) -> DeveloperFeasibility:
    """
    Feasibility of the obvious project for a plot.

    One villa per minimum villa plot of the tier (at least one), each sold
    at 1.5x its share of the land plus its construction cost.
    """
    num_villas = max(1, math.floor(plot_area_cents / MIN_VILLA_PLOT.get(tier, MIN_VILLA_PLOT["Suburb"])))
    villa_construction = villa_size_sqft * construction_rate / RUPEES_PER_LAKH
    sale_price = SALE_MARKUP * (land_value / num_villas + villa_construction)

    return project_feasibility(
        land_cost=land_value,
        construction_rate=construction_rate,
        sale_price_per_villa=sale_price,
        num_villas=num_villas,
        villa_size_sqft=villa_size_sqft,
    )
