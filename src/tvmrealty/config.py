"""
Centralized configuration.

Loads environment variables and defines global settings and the
city-wide constants every component shares.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py -> tvmrealty/ -> src/ -> project root (where .env lives)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: Optional[str] = Field(None, description="Supabase project URL")
    supabase_key: Optional[str] = Field(None, description="Supabase anon key")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key for admin operations"
    )

    # LLM Provider
    llm_provider: str = Field(
        "gemini",
        description="LLM provider for the rate oracle: 'gemini' or 'groq'"
    )

    # Gemini (oracle and grounded search)
    gemini_api_key: Optional[str] = Field(None, description="Google Gemini API key")
    gemini_model: str = Field("gemini-2.5-flash", description="Gemini model to use")

    # Groq
    groq_api_key: Optional[str] = Field(None, description="Groq API key")
    groq_model: str = Field(
        "llama-3.3-70b-versatile",
        description="Groq model to use (llama-3.1-8b-instant, llama-3.3-70b-versatile)"
    )

    # Oracle
    oracle_temperature: float = Field(
        0.1, ge=0.0, le=1.0, description="Sampling temperature for the rate oracle"
    )
    oracle_timeout_seconds: float = Field(
        45.0, gt=0, description="Timeout for a single oracle call (seconds)"
    )
    search_max_results: int = Field(
        10, ge=1, le=10, description="Maximum number of ranked search results kept"
    )

    # Valuation
    baseline_deviation_threshold: float = Field(
        0.30, gt=0, description="Max relative deviation from the baseline median"
    )
    rate_band_pct: float = Field(
        0.10, ge=0.0, lt=1.0, description="Band around the land rate for the displayed range"
    )
    construction_rate_standard: float = Field(
        2800.0, gt=0, description="Construction cost (INR/sqft) outside premium localities"
    )
    construction_rate_premium: float = Field(
        3500.0, gt=0, description="Construction cost (INR/sqft) in premium localities"
    )
    rate_sanity_multiple: float = Field(
        4.0, gt=1.0, description="Plausibility band multiple around the benchmark rates"
    )

    # Persistence
    persist_attempts: int = Field(
        2, ge=1, description="Attempts for one background persistence write"
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings."""
    return Settings()


# System constants
CITY = "Trivandrum"

CURRENCY = "INR"

# Reference land rates in lakhs per cent, by locality tier
BENCHMARK_RATES = {
    "Premium": 28.0,  # Kowdiar / Sasthamangalam
    "Tech": 15.0,  # Kazhakkoottam
    "City": 10.0,
    "Suburb": 6.0,  # Pothencode / Vattiyoorkavu
}

# Listing portals, highest priority first
PROPERTY_LISTING_DOMAINS = [
    "99acres.com",
    "magicbricks.com",
    "housing.com",
    "olx.in",
    "commonfloor.com",
    "nobroker.in",
    "makaan.com",
    "squareyards.com",
]

PROPERTY_KINDS = ["Plot", "House"]

AGE_BANDS = [
    "Brand New / Under Construction",
    "Resale (< 10 Years)",
    "Old (> 10 Years)",
]

ROAD_ACCESS_BANDS = [
    "Wide / Lorry Access",
    "Car Access",
    "Narrow / Bike Only",
]
