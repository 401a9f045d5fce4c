"""
Script to warm the rate cache.

Estimates a 1-cent plot in each locality, which resolves and caches its
land rate when the cached one is stale.

Usage:
    python -m tvmrealty.scripts.run_refresh
    python -m tvmrealty.scripts.run_refresh --localities Kowdiar,Pattom
    python -m tvmrealty.scripts.run_refresh --limit 10
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

import structlog

from tvmrealty.config import get_settings
from tvmrealty.errors import TvmRealtyError
from tvmrealty.geo import LOCALITIES
from tvmrealty.models import ValuationInput
from tvmrealty.valuation import ValuationEngine

# Configure logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(message)s",
    force=True,
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


async def run_refresh(
    localities: list[str],
    engine: Optional[ValuationEngine] = None,
) -> dict[str, int]:
    """
    Resolve the land rate of each locality, one after the other.

    Args:
        localities: Locality names
        engine: Engine to use (default: one over Supabase)

    Returns:
        Counts of cache hits, fresh oracle rates, baseline fallbacks and failures
    """
    engine = engine or ValuationEngine()
    stats = {
        "processed": 0,
        "cache_hits": 0,
        "fresh": 0,
        "fallbacks": 0,
        "failures": 0,
    }

    logger.info("Starting cache refresh", localities=len(localities))

    try:
        for locality in localities:
            stats["processed"] += 1
            request = ValuationInput(property_kind="Plot", locality=locality, plot_area_cents=1)

            try:
                result = await engine.estimate(request)
            except TvmRealtyError as e:
                stats["failures"] += 1
                logger.error("Refresh failed", locality=locality, error=str(e))
                continue

            if result.rate_source == "cache":
                stats["cache_hits"] += 1
            elif result.degraded:
                stats["fallbacks"] += 1
            else:
                stats["fresh"] += 1
    finally:
        await engine.aclose()

    logger.info("Cache refresh completed", **stats)
    return stats


def select_localities(names: Optional[str], limit: Optional[int]) -> list[str]:
    """Comma-separated names (default: every known locality), truncated to limit."""
    if names:
        selected = [name.strip() for name in names.split(",") if name.strip()]
    else:
        selected = list(LOCALITIES)
    return selected[:limit] if limit else selected


def main():
    """Script entry point."""
    parser = argparse.ArgumentParser(description="Warm the land rate cache")
    parser.add_argument(
        "--localities",
        default=None,
        help="Comma-separated localities (default: all)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum localities to refresh",
    )

    args = parser.parse_args()

    try:
        stats = asyncio.run(run_refresh(select_localities(args.localities, args.limit)))
        sys.exit(0 if stats["failures"] == 0 else 1)
    except KeyboardInterrupt:
        logger.info("Refresh interrupted by user")
        sys.exit(130)
    except TvmRealtyError as e:
        logger.error("Fatal error in refresh", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
