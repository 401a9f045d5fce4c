"""
Persisted rate state.

- RateObservation: append-only history (locality_search_history)
- LocalityBaseline: materialized rolling statistic (locality_baselines)
- CachedRate: last resolved rate per locality (search_cache)
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

RateSource = Literal["cache", "oracle", "baseline_guard", "baseline_fallback"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateObservation(BaseModel):
    """A land rate observed for a locality, written once per resolution."""

    locality: str = Field(..., description="Locality name")
    rate: float = Field(..., gt=0, description="Land rate in lakhs per cent")
    observed_at: datetime = Field(default_factory=utc_now)
    source: RateSource = Field("oracle", description="Where the rate came from")

    def to_db_dict(self) -> dict:
        """Convert to a dict for insertion in Supabase."""
        data = self.model_dump()
        data["observed_at"] = self.observed_at.isoformat()
        return data


class LocalityBaseline(BaseModel):
    """
    Rolling statistic of observed rates for one locality.

    Materialized by an external aggregation job; the core only reads it.
    """

    locality: str
    median_rate: float = Field(..., description="Median land rate in lakhs per cent")
    sample_size: int = Field(0, ge=0)
    std_deviation: float = Field(0.0, ge=0)
    confidence_score: Optional[float] = Field(
        None, ge=0, le=100, description="Score stored by the aggregation job"
    )
    last_updated: Optional[datetime] = None

    @property
    def variance_pct(self) -> float:
        """Coefficient of variation of the observed rates, in percent."""
        if self.median_rate <= 0:
            return 100.0
        return self.std_deviation / self.median_rate * 100

    @classmethod
    def from_db_row(cls, row: dict) -> "LocalityBaseline":
        """Build from a locality_baselines row, tolerating missing columns."""
        return cls(
            locality=row["locality"],
            median_rate=float(row.get("median_rate") or 0),
            sample_size=int(row.get("sample_size") or 0),
            std_deviation=float(row.get("std_deviation") or 0),
            confidence_score=row.get("confidence_score"),
            last_updated=row.get("last_updated"),
        )


class CachedRate(BaseModel):
    """The single cached rate row of a locality. Overwritten, never appended."""

    locality: str
    rate: float = Field(..., gt=0)
    cached_at: datetime = Field(default_factory=utc_now)

    def to_db_dict(self) -> dict:
        """Convert to a dict for upsert in Supabase."""
        return {
            "locality": self.locality,
            "rate": self.rate,
            "cached_at": self.cached_at.isoformat(),
        }
