"""
Currency units.

Every amount inside tvmrealty is in lakhs (1 lakh = 100,000 INR).
Values enter through normalize_to_lakhs exactly once, at ingestion.
"""

import math
from typing import Optional

RUPEES_PER_LAKH = 100_000
LAKHS_PER_CRORE = 100

# Anything above this is taken to be a raw rupee amount
RAW_RUPEE_THRESHOLD = 10_000


def normalize_to_lakhs(value: Optional[float]) -> float:
    """
    Bring an amount to lakhs.

    None, NaN and infinities become 0. Amounts above 10,000 are raw
    rupees (no land in the city costs 10,000 lakhs per cent) and are
    divided by 100,000.
    """
    if value is None:
        return 0.0
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    if value > RAW_RUPEE_THRESHOLD:
        return value / RUPEES_PER_LAKH
    return value


def rupees_to_lakhs(rupees: float) -> float:
    return rupees / RUPEES_PER_LAKH


def format_currency(lakhs: Optional[float]) -> str:
    """'₹1.50 Cr' from 100 lakhs upward, else '₹45.00 L'."""
    value = normalize_to_lakhs(lakhs)
    if value >= LAKHS_PER_CRORE:
        return f"₹{value / LAKHS_PER_CRORE:.2f} Cr"
    return f"₹{value:.2f} L"
