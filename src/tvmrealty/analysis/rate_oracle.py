"""
Land rate oracle.

Asks an LLM for the median asking land rate of a locality and decodes
its answer. The LLM is an untrusted source: the response is free text
that should contain one JSON object, and every field is decoded
leniently. Only a missing or non-positive land rate is an error.
"""

import asyncio
import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog

from tvmrealty.analysis.llm_providers import BaseLLMProvider, get_llm_provider
from tvmrealty.config import BENCHMARK_RATES, CITY, Settings, get_settings
from tvmrealty.errors import OracleError
from tvmrealty.models import (
    Comparable,
    GeospatialAnalysis,
    InvestmentMetrics,
    LocalityProfile,
    MicroMarket,
    SearchResult,
    ValuationInput,
)
from tvmrealty.units import normalize_to_lakhs

logger = structlog.get_logger()

ORACLE_SYSTEM_PROMPT = f"""You are a senior real estate surveyor and investment analyst for {CITY} (Thiruvananthapuram), Kerala.
Your job is to find the current MEDIAN asking land rate of a locality, in lakhs of rupees per cent, and to describe its market.

RULES FOR THE LAND RATE (R):
- Base R on the search snippets and on your knowledge of 2024-2025 asking prices.
- Use the MEDIAN asking rate, not the highest listing.
- Premium localities (Kowdiar, Sasthamangalam) are at least 25 lakhs/cent.
- Coastal localities under 1 km from the sea (St. Andrews, Veli) are at least 8 lakhs/cent.
- Ignore beach distance for inland localities (> 2 km from the sea).
- Round R to the nearest 0.25 lakhs.
- Express R in LAKHS per cent (e.g. 12.5), never in rupees.

Return ONLY a JSON object with this structure:

{{
    "landRatePerCent": number,
    "explanation": "Short summary of how R was found.",
    "recommendation": "One sentence of advice.",
    "investment": {{
        "rentalYield": "e.g. 3.5%",
        "appreciationForecast": "e.g. 8% Annually",
        "demandTrend": "High|Moderate|Low",
        "marketSentiment": "Brief reason for the trend"
    }},
    "geoSpatial": {{
        "terrain": "e.g. Elevated / Hilly",
        "neighborhoodVibe": "e.g. Quiet Residential",
        "priceGradient": "e.g. Prices higher near the main road",
        "growthDrivers": ["..."],
        "microMarkets": [{{"name": "...", "priceLevel": "High|Med|Low", "description": "..."}}],
        "marketDepth": [{{"id": 1, "size": number, "price": number, "type": "Premium|Mid-Range|Budget"}}]
    }}
}}"""

DEMAND_TRENDS = {"high": "High", "moderate": "Moderate", "medium": "Moderate", "low": "Low"}

COMPARABLE_TYPES = {"premium": "Premium", "mid-range": "Mid-Range", "midrange": "Mid-Range", "budget": "Budget"}


@dataclass
class OracleReport:
    """Decoded oracle answer. Amounts in lakhs."""

    land_rate: float
    explanation: str = ""
    recommendation: str = ""
    investment: Optional[InvestmentMetrics] = None
    geo_spatial: Optional[GeospatialAnalysis] = None
    raw_response: str = field(default="", repr=False)


# Lenient decoding helpers

def extract_json_block(text: str) -> Optional[str]:
    """
    First balanced {...} block of text, ignoring braces inside strings.

    A block cut off by truncation is returned from its opening brace
    to the end of the text.
    """
    start = text.find("{")
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return text[start:]


def fix_json(text: str) -> str:
    """
    Repair the usual LLM JSON mistakes.

    - // comments outside strings
    - Missing commas between properties
    - Trailing commas before a closing brace/bracket
    """
    cleaned_lines = []
    for line in text.split("\n"):
        if "//" in line:
            pos = line.find("//")
            before = line[:pos]
            quote_count = before.count('"') - before.count('\\"')
            if quote_count % 2 == 0:
                line = before.rstrip()
        cleaned_lines.append(line)
    text = "\n".join(cleaned_lines)

    # value followed by a new line and another property without a comma
    text = re.sub(r'(\d|"|true|false|null|\}|\])\s*\n(\s*")', r"\1,\n\2", text)
    text = re.sub(r",(\s*[}\]])", r"\1", text)
    return text


def fix_truncated_json(text: str) -> str:
    """Close an unterminated string and any open brackets/braces."""
    fixed = text
    if fixed.count('"') % 2 == 1:
        fixed += '"'
    fixed = fixed.rstrip().rstrip(",")
    fixed += "]" * max(0, fixed.count("[") - fixed.count("]"))
    fixed += "}" * max(0, fixed.count("{") - fixed.count("}"))
    return fixed


def parse_lenient(text: str) -> Optional[dict]:
    """Best-effort JSON object from free text, or None."""
    if not text:
        return None

    cleaned = text.strip()
    if cleaned.startswith("```"):
        parts = cleaned.split("```")
        if len(parts) >= 2:
            cleaned = parts[1]
            if cleaned.startswith("json"):
                cleaned = cleaned[4:]

    block = extract_json_block(cleaned)
    if block is None:
        return None

    for candidate in (block, fix_json(block), fix_truncated_json(fix_json(block))):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    return None


def to_number(value: Any, default: float = 0.0) -> float:
    """Number from an int/float or a string like '₹12.5 L', else default."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = re.search(r"-?\d+(?:\.\d+)?", value.replace(",", ""))
        if not match:
            return default
        number = float(match.group())
    else:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def to_text(value: Any, default: str = "") -> str:
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value).strip()


def _decode_investment(data: Any) -> Optional[InvestmentMetrics]:
    if not isinstance(data, dict):
        return None
    trend = DEMAND_TRENDS.get(to_text(data.get("demandTrend")).lower(), "Moderate")
    return InvestmentMetrics(
        rental_yield=to_text(data.get("rentalYield"), "N/A") or "N/A",
        appreciation_forecast=to_text(data.get("appreciationForecast"), "N/A") or "N/A",
        demand_trend=trend,
        market_sentiment=to_text(data.get("marketSentiment")),
    )


def _decode_geo_spatial(data: Any) -> Optional[GeospatialAnalysis]:
    if not isinstance(data, dict):
        return None

    drivers = data.get("growthDrivers")
    growth_drivers = [to_text(d) for d in drivers if to_text(d)] if isinstance(drivers, list) else []

    micro_markets = []
    for item in data.get("microMarkets") or []:
        if isinstance(item, dict) and to_text(item.get("name")):
            micro_markets.append(
                MicroMarket(
                    name=to_text(item.get("name")),
                    price_level=to_text(item.get("priceLevel")),
                    description=to_text(item.get("description")),
                )
            )

    market_depth = []
    for index, item in enumerate(data.get("marketDepth") or [], start=1):
        if not isinstance(item, dict):
            continue
        market_depth.append(
            Comparable(
                id=int(to_number(item.get("id"), index)),
                size=to_number(item.get("size")),
                price=normalize_to_lakhs(to_number(item.get("price"))),
                type=COMPARABLE_TYPES.get(to_text(item.get("type")).lower(), "Mid-Range"),
            )
        )

    return GeospatialAnalysis(
        terrain=to_text(data.get("terrain")),
        neighborhood_vibe=to_text(data.get("neighborhoodVibe")),
        price_gradient=to_text(data.get("priceGradient")),
        growth_drivers=growth_drivers,
        micro_markets=micro_markets,
        market_depth=market_depth,
    )


def decode_report(text: str) -> OracleReport:
    """
    Decode an oracle response.

    Absent or malformed fields default. The land rate is read from
    landRatePerCent (top level or under breakdown) and normalized to lakhs.

    Raises:
        OracleError: No JSON object, or no positive land rate
    """
    data = parse_lenient(text)
    if data is None:
        raise OracleError("Oracle response contains no JSON object")

    breakdown = data.get("breakdown") if isinstance(data.get("breakdown"), dict) else {}
    raw_rate = data.get("landRatePerCent", breakdown.get("landRatePerCent"))
    land_rate = normalize_to_lakhs(to_number(raw_rate))
    if land_rate <= 0:
        raise OracleError(f"Oracle response has no usable land rate: {raw_rate!r}")

    return OracleReport(
        land_rate=land_rate,
        explanation=to_text(data.get("explanation")),
        recommendation=to_text(data.get("recommendation")),
        investment=_decode_investment(data.get("investment")),
        geo_spatial=_decode_geo_spatial(data.get("geoSpatial")),
        raw_response=text,
    )


class RateOracle:
    """
    Land rate oracle over an LLM provider.

    One attempt per request: a failure is reported immediately so the
    caller can fall back on the baseline.
    """

    def __init__(
        self,
        provider: Optional[BaseLLMProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._provider = provider or get_llm_provider()
        logger.info(
            "RateOracle initialized",
            provider=self._provider.provider_name,
            model=getattr(self._provider, "model", "unknown"),
        )

    def _build_prompt(
        self,
        request: ValuationInput,
        profile: LocalityProfile,
        beach_km: float,
        snippets: list[SearchResult],
    ) -> str:
        """Build the user prompt for one locality."""
        specs = [f"Road access: {request.road_access or 'Car Access'}"]
        if request.is_house:
            specs.append(f"Built area: {request.built_area_sqft:g} sq ft")
            if request.bedrooms:
                specs.append(f"Bedrooms: {request.bedrooms}")
            specs.append(f"Age: {request.property_age or 'Not specified'}")

        benchmarks = "\n".join(
            f"- {tier}: {rate:g} lakhs/cent" for tier, rate in BENCHMARK_RATES.items()
        )
        sources = "\n".join(
            f"{i}. {s.title} ({s.url})" for i, s in enumerate(snippets, start=1)
        ) or "No search results available."

        return f"""PROPERTY TO VALUE:

TYPE: {request.property_kind}
LOCALITY: {profile.name} ({profile.tier} tier)
LAND SIZE: {request.plot_area_cents:g} cents
BEACH DISTANCE: {beach_km:g} km
SPECS: {', '.join(specs)}

CITY BENCHMARK RATES:
{benchmarks}

SEARCH RESULTS (most relevant first):
{sources}

---
Find the median land rate for {profile.name} and return the JSON."""

    async def fetch(
        self,
        request: ValuationInput,
        profile: LocalityProfile,
        beach_km: float,
        snippets: Optional[list[SearchResult]] = None,
    ) -> OracleReport:
        """
        Ask the oracle for the land rate of a locality.

        Raises:
            OracleError: Transport failure, timeout or unusable response
        """
        prompt = self._build_prompt(request, profile, beach_km, snippets or [])
        timeout = self._settings.oracle_timeout_seconds

        try:
            response = await asyncio.wait_for(
                self._provider.generate(
                    system_prompt=ORACLE_SYSTEM_PROMPT,
                    user_prompt=prompt,
                    temperature=self._settings.oracle_temperature,
                    max_tokens=4096,
                    json_output=True,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise OracleError(f"Oracle timed out after {timeout:g}s") from e
        except Exception as e:
            raise OracleError(f"Oracle call failed: {e}") from e

        logger.debug(f"Oracle response from {response.provider}: {response.text[:300]}...")

        report = decode_report(response.text)
        logger.info(
            "Oracle rate received",
            locality=profile.name,
            provider=response.provider,
            model=response.model,
            rate=report.land_rate,
        )
        return report
