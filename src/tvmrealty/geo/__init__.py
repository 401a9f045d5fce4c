"""
Geospatial module.

Distance/bearing math and the static city geography.
"""

from tvmrealty.geo.calculations import (
    bearing,
    compass_direction,
    distance_km,
    is_within_radius,
    nearest,
    sort_by_distance,
)
from tvmrealty.geo.places import (
    AIRPORT,
    LANDMARKS,
    LOCALITIES,
    LOCALITY_PROFILES,
    LULU_MALL,
    MAJOR_HOSPITALS,
    TECHNOPARK,
    TOP_SCHOOLS,
    get_locality,
    get_tier,
)

__all__ = [
    # Math
    "bearing",
    "compass_direction",
    "distance_km",
    "is_within_radius",
    "nearest",
    "sort_by_distance",
    # Places
    "AIRPORT",
    "LANDMARKS",
    "LOCALITIES",
    "LOCALITY_PROFILES",
    "LULU_MALL",
    "MAJOR_HOSPITALS",
    "TECHNOPARK",
    "TOP_SCHOOLS",
    "get_locality",
    "get_tier",
]
