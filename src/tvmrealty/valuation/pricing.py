"""
Deterministic pricing.

Turns an accepted land rate into a price range. No I/O and no randomness:
the same inputs always give the same output.
"""

from dataclasses import dataclass
from typing import Optional

from tvmrealty.config import Settings, get_settings
from tvmrealty.models import CalculationBreakdown
from tvmrealty.units import RUPEES_PER_LAKH, format_currency, normalize_to_lakhs

DEPRECIATION_OLD = 0.35
DEPRECIATION_RESALE = 0.15
DEPRECIATION_NEW = 0.0

ROAD_NARROW = (0.90, "-10%")
ROAD_WIDE = (1.05, "+5%")
ROAD_DEFAULT = (1.00, "0%")

DEFAULT_BAND_PCT = 0.10

__all__ = [
    "PriceEstimate",
    "depreciation_for",
    "road_factor",
    "construction_rate_for",
    "price_estimate",
    "normalize_to_lakhs",
    "format_currency",
]


@dataclass(frozen=True)
class PriceEstimate:
    price_range_min: float
    price_range_max: float
    land_value: float
    structure_value: float
    breakdown: CalculationBreakdown


def depreciation_for(age_band: Optional[str]) -> float:
    """
    Structure depreciation for an age band.

    '> 10 years' / Old -> 0.35, '< 10 years' / Resale -> 0.15.
    New, under construction and anything unrecognised -> 0.0.
    """
    if not age_band:
        return DEPRECIATION_NEW

    band = "".join(age_band.lower().split())
    if ">10" in band or band.startswith("old"):
        return DEPRECIATION_OLD
    if "<10" in band or "resale" in band:
        return DEPRECIATION_RESALE
    return DEPRECIATION_NEW


def road_factor(road_access: Optional[str]) -> tuple[float, str]:
    """Multiplier on land + structure, with its display label."""
    band = (road_access or "").lower()
    if "narrow" in band:
        return ROAD_NARROW
    if "wide" in band or "lorry" in band:
        return ROAD_WIDE
    return ROAD_DEFAULT


def construction_rate_for(tier: str, settings: Optional[Settings] = None) -> float:
    """Default construction rate (INR/sqft) for a locality tier."""
    settings = settings or get_settings()
    if tier == "Premium":
        return settings.construction_rate_premium
    return settings.construction_rate_standard


def price_estimate(
    land_rate: float,
    plot_area_cents: float,
    built_area_sqft: float = 0.0,
    construction_rate_per_sqft: float = 0.0,
    property_age: Optional[str] = None,
    road_access: Optional[str] = None,
    band_pct: float = DEFAULT_BAND_PCT,
) -> PriceEstimate:
    """
    Price range for a plot, optionally with a structure on it.

    The +/- band_pct land band only widens the displayed range; the land
    point estimate is rate x area. The road factor applies to the range.

    Args:
        land_rate: Accepted land rate in lakhs per cent
        plot_area_cents: Land area in cents
        built_area_sqft: Built-up area, 0 for a plot
        construction_rate_per_sqft: INR per sqft
        property_age: Age band of the structure
        road_access: Road access band
        band_pct: Half-width of the land rate band

    Returns:
        PriceEstimate with every amount in lakhs, rounded to 2 decimals
    """
    rate_min = land_rate * (1 - band_pct)
    rate_max = land_rate * (1 + band_pct)
    land_value = land_rate * plot_area_cents

    has_structure = built_area_sqft > 0
    depreciation = depreciation_for(property_age) if has_structure else 0.0
    structure_raw = (
        built_area_sqft * construction_rate_per_sqft / RUPEES_PER_LAKH if has_structure else 0.0
    )
    structure_value = structure_raw * (1 - depreciation)

    factor, label = road_factor(road_access)
    final_min = (rate_min * plot_area_cents + structure_value) * factor
    final_max = (rate_max * plot_area_cents + structure_value) * factor

    breakdown = CalculationBreakdown(
        land_rate_per_cent=round(land_rate, 2),
        land_rate_min=round(rate_min, 2),
        land_rate_max=round(rate_max, 2),
        land_total=round(land_value, 2),
        construction_rate_per_sqft=construction_rate_per_sqft if has_structure else 0.0,
        structure_before_depreciation=round(structure_raw, 2),
        depreciation_pct=round(depreciation * 100, 2),
        final_structure_value=round(structure_value, 2),
        road_factor=factor,
        road_access_adjustment=label,
    )

    return PriceEstimate(
        price_range_min=round(final_min, 2),
        price_range_max=round(final_max, 2),
        land_value=round(land_value, 2),
        structure_value=round(structure_value, 2),
        breakdown=breakdown,
    )
