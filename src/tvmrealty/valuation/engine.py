"""
Valuation engine.

Per request:
1. Validate the input (no I/O before this)
2. Read the locality baseline and check the rate cache
3. On a miss: search listings, ask the oracle, guard its rate
   against the baseline (or fall back on the baseline if it failed)
4. Persist the accepted rate in the background
5. Price deterministically and assemble the result
"""

import asyncio
import math
from typing import Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from tvmrealty.analysis.rate_oracle import OracleReport, RateOracle
from tvmrealty.config import CURRENCY, Settings, get_settings
from tvmrealty.database.ports import PersistencePort, SupabasePersistence
from tvmrealty.database.repositories import BaselineStore, RateCache
from tvmrealty.errors import EstimationUnavailable, OracleError, PersistenceError, ValidationError
from tvmrealty.geo.places import get_locality
from tvmrealty.listings.parser import ListingParser
from tvmrealty.listings.search import BaseSearchClient, get_search_client, rank_search_results
from tvmrealty.models import (
    LocalityBaseline,
    LocalityProfile,
    PropertyMarker,
    RateObservation,
    SearchResult,
    ValuationInput,
    ValuationResult,
)
from tvmrealty.scoring.confidence import rate_confidence
from tvmrealty.scoring.suitability import generate_suitability_metrics
from tvmrealty.valuation.developer import default_scenario
from tvmrealty.valuation.pricing import construction_rate_for, price_estimate

logger = structlog.get_logger()

NUMERIC_INPUTS = (
    "plot_area_cents",
    "built_area_sqft",
    "distance_to_beach_km",
    "construction_rate_per_sqft",
)


class ValuationEngine:
    """
    Orchestrates one estimate per call.

    Collaborators are injected; the defaults talk to Supabase and the
    configured LLM provider.
    """

    def __init__(
        self,
        oracle: Optional[RateOracle] = None,
        search_client: Optional[BaseSearchClient] = None,
        baselines: Optional[BaselineStore] = None,
        cache: Optional[RateCache] = None,
        parser: Optional[ListingParser] = None,
        port: Optional[PersistencePort] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        port = port or (baselines.port if baselines else None) or SupabasePersistence()

        self._baselines = baselines or BaselineStore(port=port, settings=self._settings)
        self._cache = cache or RateCache(
            port=port, baselines=self._baselines, settings=self._settings
        )
        self._oracle = oracle or RateOracle(settings=self._settings)
        self._search = search_client or get_search_client()
        self._parser = parser or ListingParser()
        self._pending: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def validate(request: Union[ValuationInput, dict]) -> tuple[ValuationInput, LocalityProfile]:
        """
        Check a request before any I/O.

        Raises:
            ValidationError: Malformed input or unknown locality
        """
        if isinstance(request, dict):
            try:
                request = ValuationInput(**request)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid valuation input: {e}") from e
        elif not isinstance(request, ValuationInput):
            raise ValidationError(f"Unsupported request type: {type(request).__name__}")

        for field in NUMERIC_INPUTS:
            value = getattr(request, field)
            if value is not None and not math.isfinite(value):
                raise ValidationError(f"{field} must be a finite number")

        if request.plot_area_cents <= 0:
            raise ValidationError("Plot area must be positive")
        if request.built_area_sqft < 0:
            raise ValidationError("Built area cannot be negative")
        if request.is_house and request.built_area_sqft <= 0:
            raise ValidationError("A House needs a positive built area")

        profile = get_locality(request.locality)
        if profile is None:
            raise ValidationError(f"Unknown locality: {request.locality}")

        return request, profile

    # ------------------------------------------------------------------
    # Rate resolution
    # ------------------------------------------------------------------

    async def _read_baseline(self, locality: str) -> Optional[LocalityBaseline]:
        try:
            return await asyncio.to_thread(self._baselines.get_baseline, locality)
        except PersistenceError as e:
            logger.warning("Baseline read failed, continuing without", locality=locality, error=str(e))
            return None

    def apply_baseline_guard(
        self, locality: str, oracle_rate: float, baseline: Optional[LocalityBaseline]
    ) -> tuple[float, str]:
        """
        Accept the oracle rate unless it strays too far from the baseline.

        Returns:
            (accepted_rate, rate_source)
        """
        if baseline is None or baseline.median_rate <= 0:
            return oracle_rate, "oracle"

        deviation = abs(oracle_rate - baseline.median_rate) / baseline.median_rate
        if deviation > self._settings.baseline_deviation_threshold:
            logger.warning(
                "Oracle rate rejected by baseline guard",
                locality=locality,
                oracle_rate=oracle_rate,
                baseline_rate=baseline.median_rate,
                deviation=round(deviation, 3),
            )
            return baseline.median_rate, "baseline_guard"

        return oracle_rate, "oracle"

    async def _resolve_rate(
        self,
        request: ValuationInput,
        profile: LocalityProfile,
        beach_km: float,
        baseline: Optional[LocalityBaseline],
    ) -> tuple[float, str, Optional[OracleReport], list[SearchResult], list[PropertyMarker]]:
        locality = profile.name

        cached = await asyncio.to_thread(self._cache.check_cache, locality, baseline)
        if cached is not None:
            return cached.rate, "cache", None, [], []

        sources = rank_search_results(
            await self._search.search(locality),
            limit=self._settings.search_max_results,
        )
        markers = self._parser.parse(sources)

        try:
            report = await self._oracle.fetch(request, profile, beach_km, sources)
        except OracleError as e:
            if baseline is None:
                logger.error("Oracle failed and no baseline exists", locality=locality, error=str(e))
                raise EstimationUnavailable(locality, str(e)) from e
            logger.warning(
                "Oracle failed, falling back on baseline",
                locality=locality,
                baseline_rate=baseline.median_rate,
                error=str(e),
            )
            rate, source, report = baseline.median_rate, "baseline_fallback", None
        else:
            rate, source = self.apply_baseline_guard(locality, report.land_rate, baseline)

        if rate > 0:
            self._schedule_persist(locality, rate, source)

        return rate, source, report, sources, markers

    # ------------------------------------------------------------------
    # Background persistence
    # ------------------------------------------------------------------

    def _schedule_persist(self, locality: str, rate: float, source: str) -> None:
        task = asyncio.create_task(self._persist(locality, rate, source))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _write(self, observation: RateObservation) -> None:
        # implausible rates are neither recorded nor cached
        if self._baselines.record_observation(observation):
            self._cache.update_cache(observation.locality, observation.rate)

    async def _persist(self, locality: str, rate: float, source: str) -> None:
        """Record the observation and refresh the cache. Never raises."""
        observation = RateObservation(locality=locality, rate=rate, source=source)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.persist_attempts),
                wait=wait_exponential(multiplier=0.5, max=4),
                retry=retry_if_exception_type(PersistenceError),
                reraise=True,
            ):
                with attempt:
                    await asyncio.to_thread(self._write, observation)
        except PersistenceError as e:
            logger.warning(
                "Rate persistence failed, estimate unaffected",
                locality=locality,
                rate=rate,
                error=str(e),
            )

    async def drain(self) -> None:
        """Wait for every pending background write."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def aclose(self) -> None:
        await self.drain()

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def estimate(self, request: Union[ValuationInput, dict]) -> ValuationResult:
        """
        Estimate the price of a property.

        Raises:
            ValidationError: Malformed input, before any I/O
            EstimationUnavailable: The oracle failed and no baseline exists
        """
        request, profile = self.validate(request)
        locality = profile.name
        beach_km = (
            request.distance_to_beach_km
            if request.distance_to_beach_km is not None
            else profile.default_beach_km
        )

        logger.info("Estimating", locality=locality, kind=request.property_kind, plot=request.plot_area_cents)

        baseline = await self._read_baseline(locality)
        rate, source, report, sources, markers = await self._resolve_rate(
            request, profile, beach_km, baseline
        )

        construction_rate = request.construction_rate_per_sqft or construction_rate_for(
            profile.tier, self._settings
        )
        price = price_estimate(
            land_rate=rate,
            plot_area_cents=request.plot_area_cents,
            built_area_sqft=request.built_area_sqft if request.is_house else 0.0,
            construction_rate_per_sqft=construction_rate,
            property_age=request.property_age,
            road_access=request.road_access,
            band_pct=self._settings.rate_band_pct,
        )

        result = ValuationResult(
            locality=locality,
            property_kind=request.property_kind,
            currency=CURRENCY,
            price_range_min=price.price_range_min,
            price_range_max=price.price_range_max,
            land_value=price.land_value,
            structure_value=price.structure_value,
            breakdown=price.breakdown,
            confidence=rate_confidence(baseline),
            rate_source=source,
            degraded=source == "baseline_fallback",
            suitability=generate_suitability_metrics(locality, request.plot_area_cents, beach_km),
            markers=markers,
            sources=sources,
            explanation=report.explanation if report else "",
            recommendation=report.recommendation if report else "",
            investment=report.investment if report else None,
            geo_spatial=report.geo_spatial if report else None,
            developer=default_scenario(
                land_value=price.land_value,
                plot_area_cents=request.plot_area_cents,
                tier=profile.tier,
                construction_rate=construction_rate,
            ),
        )

        logger.info(
            "Estimate ready",
            locality=locality,
            rate=rate,
            source=source,
            price_min=result.price_range_min,
            price_max=result.price_range_max,
            confidence=result.confidence.level,
        )
        return result
