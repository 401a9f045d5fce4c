"""
Valuation module.

Deterministic pricing, developer feasibility and the engine that
resolves a land rate and assembles the result.
"""

from tvmrealty.valuation.pricing import (
    PriceEstimate,
    construction_rate_for,
    depreciation_for,
    price_estimate,
    road_factor,
)
from tvmrealty.valuation.developer import default_scenario, project_feasibility
from tvmrealty.valuation.engine import ValuationEngine

__all__ = [
    "PriceEstimate",
    "construction_rate_for",
    "depreciation_for",
    "price_estimate",
    "road_factor",
    "default_scenario",
    "project_feasibility",
    "ValuationEngine",
]
