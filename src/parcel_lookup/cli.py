"""
CLI helper to look up a single address and print the JSON result.

    python -m src.parcel_lookup.cli "50 N Duke St, Lancaster, PA 17602"
"""
import argparse
import json
import sys
from typing import List, Optional

from config.settings import settings
from src.parcel_lookup.exceptions import PropertyLookupError
from src.parcel_lookup.registry.county_registry import CountyRegistry
from src.parcel_lookup.services.property_lookup import PropertyLookupService
from src.parcel_lookup.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Look up Pennsylvania parcel data for a street address.")
    parser.add_argument("address", help="Free-text property address.")
    parser.add_argument("--counties-file", default=settings.counties_file, help="County registry JSON.")
    parser.add_argument(
        "--fallback",
        choices=["demo", "error"],
        default=settings.parcel_fallback_mode,
        help="Substitute tagged demo data or fail when no real source answers."
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()

    try:
        registry = CountyRegistry.from_file(args.counties_file)
        service = PropertyLookupService(registry=registry, fallback_mode=args.fallback)
        result = service.lookup(args.address)
    except PropertyLookupError as e:
        logger.error("cli_lookup_failed", error=e.message, details=e.details)
        print(json.dumps({"error": e.message, "details": e.details}, indent=2), file=sys.stderr)
        return 1

    print(json.dumps(result.to_response(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
