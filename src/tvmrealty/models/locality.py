"""
Static geography: localities and points of interest.

Loaded once at import time and never mutated.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LocalityTier = Literal["Premium", "Tech", "City", "Suburb"]


class Coordinates(BaseModel):
    """A WGS84 point."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class PointOfInterest(BaseModel):
    """A named landmark, school or hospital used as a nearest-neighbor target."""

    model_config = ConfigDict(frozen=True)

    name: str
    coords: Coordinates


class LocalityProfile(BaseModel):
    """
    A locality of the city.

    The name is the key used by every persisted table
    (baselines, cache, observation history).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique locality name")
    coords: Coordinates = Field(..., description="Approximate locality center")
    tier: LocalityTier = Field(default="Suburb", description="Market tier")
    default_beach_km: float = Field(
        ..., ge=0, description="Approximate distance to the nearest beach (km)"
    )
