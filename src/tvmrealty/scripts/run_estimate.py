"""
Script to estimate the price of one property.

Prints the ValuationResult as JSON on stdout.

Usage:
    python -m tvmrealty.scripts.run_estimate --locality Kowdiar --kind Plot --plot-area 5
    python -m tvmrealty.scripts.run_estimate --locality Pattom --kind House --plot-area 4 \
        --built-area 1800 --age "Resale (< 10 Years)" --road "Narrow / Bike Only" --in-memory
"""

import argparse
import asyncio
import logging
import sys

import structlog

from tvmrealty.config import AGE_BANDS, PROPERTY_KINDS, ROAD_ACCESS_BANDS, get_settings
from tvmrealty.database import InMemoryPersistence
from tvmrealty.errors import EstimationUnavailable, TvmRealtyError, ValidationError
from tvmrealty.models import ValuationInput, ValuationResult
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


async def run_estimate(request: ValuationInput, in_memory: bool = False) -> ValuationResult:
    """
    Run one estimate and wait for its background writes.

    Args:
        request: Property to value
        in_memory: Keep baselines and cache in memory instead of Supabase
    """
    port = InMemoryPersistence() if in_memory else None
    engine = ValuationEngine(port=port)
    try:
        return await engine.estimate(request)
    finally:
        await engine.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate a property price in Trivandrum")
    parser.add_argument("--locality", required=True, help="Locality name, e.g. Kowdiar")
    parser.add_argument("--kind", choices=PROPERTY_KINDS, default="Plot", help="Plot or House")
    parser.add_argument("--plot-area", type=float, required=True, help="Land area in cents")
    parser.add_argument("--built-area", type=float, default=0.0, help="Built-up area in sqft (House)")
    parser.add_argument("--bedrooms", type=int, default=None)
    parser.add_argument("--age", default=None, help=f"Age band, one of: {', '.join(AGE_BANDS)}")
    parser.add_argument(
        "--road",
        default="Car Access",
        help=f"Road access band, one of: {', '.join(ROAD_ACCESS_BANDS)}",
    )
    parser.add_argument("--beach-km", type=float, default=None, help="Distance to the beach in km")
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="Do not read or write Supabase",
    )
    return parser


def main():
    """Script entry point."""
    args = build_parser().parse_args()

    payload = {
        "property_kind": args.kind,
        "locality": args.locality,
        "plot_area_cents": args.plot_area,
        "built_area_sqft": args.built_area,
        "bedrooms": args.bedrooms,
        "property_age": args.age,
        "road_access": args.road,
        "distance_to_beach_km": args.beach_km,
    }

    try:
        request, _ = ValuationEngine.validate(payload)
        result = asyncio.run(run_estimate(request, in_memory=args.in_memory))
    except KeyboardInterrupt:
        logger.info("Estimate interrupted by user")
        sys.exit(130)
    except ValidationError as e:
        logger.error("Invalid input", error=str(e))
        sys.exit(2)
    except EstimationUnavailable as e:
        logger.error("Estimate unavailable", locality=e.locality, reason=e.reason)
        sys.exit(1)
    except TvmRealtyError as e:
        logger.error("Fatal error", error=str(e))
        sys.exit(1)

    print(result.model_dump_json(indent=2))
    sys.exit(0)


if __name__ == "__main__":
    main()
