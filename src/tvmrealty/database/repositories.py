"""
Repositories for the persisted rate state.

- BaselineStore: reads locality_baselines, appends locality_search_history
- RateCache: one cached rate per locality in search_cache, with a TTL
  recomputed from the current baseline at every read
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

from tvmrealty.config import BENCHMARK_RATES, Settings, get_settings
from tvmrealty.database.ports import (
    BASELINES_TABLE,
    CACHE_TABLE,
    HISTORY_TABLE,
    PersistencePort,
    SupabasePersistence,
)
from tvmrealty.errors import PersistenceError
from tvmrealty.models import CachedRate, LocalityBaseline, RateObservation
from tvmrealty.scoring.confidence import confidence_score

logger = structlog.get_logger()

TTL_HIGH_CONFIDENCE = timedelta(days=7)
TTL_MEDIUM_CONFIDENCE = timedelta(days=2)
TTL_DEFAULT = timedelta(hours=12)

# check_cache reads the baseline itself only when the caller passes none
_UNSET = object()


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class BaseRepository:
    """Base class for repositories."""

    def __init__(
        self,
        port: Optional[PersistencePort] = None,
        settings: Optional[Settings] = None,
    ):
        self._port = port or SupabasePersistence()
        self._settings = settings or get_settings()

    @property
    def port(self) -> PersistencePort:
        return self._port


class BaselineStore(BaseRepository):
    """
    Rolling rate statistics per locality.

    The aggregation that turns observations into baselines runs outside
    this process; the store only reads the latest materialized row and
    appends new observations.
    """

    def rate_band(self) -> tuple[float, float]:
        """Range of plausible land rates (lakhs/cent) around the city benchmarks."""
        multiple = self._settings.rate_sanity_multiple
        return (
            min(BENCHMARK_RATES.values()) / multiple,
            max(BENCHMARK_RATES.values()) * multiple,
        )

    def is_plausible_rate(self, rate: float) -> bool:
        low, high = self.rate_band()
        return low <= rate <= high

    def get_baseline(self, locality: str) -> Optional[LocalityBaseline]:
        """
        Current baseline of a locality, or None if it was never observed.

        A baseline whose median falls outside the plausible band is the
        trace of a parsing or oracle failure and is treated as absent.

        Raises:
            PersistenceError: If the read fails
        """
        row = self.port.get(BASELINES_TABLE, locality)
        if not row:
            return None

        try:
            baseline = LocalityBaseline.from_db_row(row)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Malformed baseline row ignored", locality=locality, error=str(e))
            return None

        if not self.is_plausible_rate(baseline.median_rate):
            logger.warning(
                "Implausible baseline ignored",
                locality=locality,
                median_rate=baseline.median_rate,
            )
            return None

        return baseline

    def record_observation(self, observation: RateObservation) -> bool:
        """
        Append an observation to the history.

        Returns:
            False if the rate is implausible and was not written

        Raises:
            PersistenceError: If the write fails
        """
        if not self.is_plausible_rate(observation.rate):
            logger.warning(
                "Implausible rate not recorded",
                locality=observation.locality,
                rate=observation.rate,
                band=self.rate_band(),
            )
            return False

        self.port.append(HISTORY_TABLE, observation.to_db_dict())
        logger.info(
            "Rate observation recorded",
            locality=observation.locality,
            rate=observation.rate,
            source=observation.source,
        )
        return True


class RateCache(BaseRepository):
    """
    Last resolved rate per locality.

    The TTL is never stored: it is derived from the baseline at read time,
    so the same entry can turn fresh again once the baseline improves.
    """

    def __init__(
        self,
        port: Optional[PersistencePort] = None,
        baselines: Optional[BaselineStore] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(port=port, settings=settings)
        self._baselines = baselines or BaselineStore(port=self.port, settings=self._settings)

    @staticmethod
    def ttl_for(baseline: Optional[LocalityBaseline]) -> timedelta:
        """
        TTL of a cache entry given the current baseline.

        - >=15 samples, variance <=10% and confidence >=85: 7 days
        - 5 to 14 samples: 2 days
        - anything else, including no baseline: 12 hours
        """
        if baseline is None:
            return TTL_DEFAULT

        n = baseline.sample_size
        variance = baseline.variance_pct
        score = baseline.confidence_score
        if score is None:
            score = confidence_score(n, variance)

        if n >= 15 and variance <= 10 and score >= 85:
            return TTL_HIGH_CONFIDENCE
        if 5 <= n < 15:
            return TTL_MEDIUM_CONFIDENCE
        return TTL_DEFAULT

    def check_cache(
        self,
        locality: str,
        baseline=_UNSET,
        now: Optional[datetime] = None,
    ) -> Optional[CachedRate]:
        """
        Fresh cached rate for a locality, or None on a miss.

        Stale entries are left in place. Read failures count as a miss.

        Args:
            locality: Locality name
            baseline: Baseline already read by the caller, None included
                (read from the store when omitted)
            now: Reference time (default: current UTC time)
        """
        try:
            row = self.port.get(CACHE_TABLE, locality)
            if baseline is _UNSET:
                baseline = self._baselines.get_baseline(locality)
        except PersistenceError as e:
            logger.warning("Cache read failed, treating as miss", locality=locality, error=str(e))
            return None

        if not row:
            logger.debug("Cache empty", locality=locality)
            return None

        try:
            cached = CachedRate(**row)
        except (TypeError, ValueError) as e:
            logger.warning("Malformed cache row ignored", locality=locality, error=str(e))
            return None

        now = _as_utc(now or datetime.now(timezone.utc))
        age = now - _as_utc(cached.cached_at)
        ttl = self.ttl_for(baseline)

        if age < ttl:
            logger.info("Cache hit", locality=locality, rate=cached.rate, age=str(age), ttl=str(ttl))
            return cached

        logger.info("Cache stale", locality=locality, age=str(age), ttl=str(ttl))
        return None

    def update_cache(self, locality: str, rate: float, now: Optional[datetime] = None) -> CachedRate:
        """
        Overwrite the cached rate of a locality.

        Raises:
            PersistenceError: If the write fails
        """
        cached = CachedRate(
            locality=locality,
            rate=rate,
            cached_at=_as_utc(now or datetime.now(timezone.utc)),
        )
        self.port.put(CACHE_TABLE, locality, cached.to_db_dict())
        logger.info("Cache updated", locality=locality, rate=rate)
        return cached
