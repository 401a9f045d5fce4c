"""
Geospatial calculations.

Haversine distance, bearings and linear-scan nearest-neighbor search.
Candidate sets are small (< 20 points), so no spatial index is used.
"""

import math
from typing import Sequence, TypeVar

from tvmrealty.models import Coordinates, PointOfInterest

EARTH_RADIUS_KM = 6371.0

COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

P = TypeVar("P", bound=PointOfInterest)


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """
    Great-circle distance between two points in km, rounded to 0.1 km.

    Error is around 0.5%, fine for city-scale (< 40 km) distances.
    Identical points give exactly 0.0 and the result is symmetric.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return round(EARTH_RADIUS_KM * c, 1)


def is_within_radius(point: Coordinates, center: Coordinates, radius_km: float) -> bool:
    """Whether point lies within radius_km of center."""
    return distance_km(point, center) <= radius_km


def bearing(a: Coordinates, b: Coordinates) -> float:
    """Initial bearing from a to b in degrees: 0=N, 90=E, 180=S, 270=W."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    delta_lng = math.radians(b.lng - a.lng)

    y = math.sin(delta_lng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lng)

    return (math.degrees(math.atan2(y, x)) + 360) % 360


def compass_direction(degrees: float) -> str:
    """8-point compass direction for a bearing."""
    index = int(math.floor(degrees / 45 + 0.5)) % 8
    return COMPASS_POINTS[index]


def nearest(origin: Coordinates, candidates: Sequence[P]) -> tuple[P, float]:
    """
    Closest candidate to origin and its distance.

    Ties keep the first candidate in input order.

    Raises:
        ValueError: If candidates is empty
    """
    if not candidates:
        raise ValueError("nearest() needs at least one candidate")

    best = candidates[0]
    best_distance = math.inf
    for candidate in candidates:
        d = distance_km(origin, candidate.coords)
        if d < best_distance:
            best, best_distance = candidate, d

    return best, best_distance


def sort_by_distance(origin: Coordinates, points: Sequence[P]) -> list[tuple[P, float]]:
    """Points paired with their distance from origin, closest first."""
    return sorted(
        ((point, distance_km(origin, point.coords)) for point in points),
        key=lambda pair: pair[1],
    )
