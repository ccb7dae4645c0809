"""Neighborhood Matcher: pipeline orchestrator.

Usage:
    python main.py --budget 40000                          # Rank the bundled seed listings
    python main.py --budget 40000 --age-group family       # Family weighting
    python main.py --budget 50000 --priority safety --priority commute \\
        --work-lat 12.97 --work-lng 77.59                  # With a work location
    python main.py --data my_listings.json --mock-geo      # Custom listings, offline geocoding
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from config.settings import Settings
from models.enums import AgeGroup
from models.neighborhood import Coordinates
from models.preferences import UserPreferences
from parsers.listing_loader import DEFAULT_DATA_PATH, load_listings
from services.recommendation_service import RecommendationService

logger = logging.getLogger("neighborhood_matcher")


def build_preferences(args: argparse.Namespace) -> UserPreferences:
    work_location = None
    if args.work_lat is not None and args.work_lng is not None:
        work_location = Coordinates(lat=args.work_lat, lng=args.work_lng)

    return UserPreferences(
        budget=args.budget,
        work_location=work_location,
        lifestyle=args.lifestyle or [],
        priorities=args.priority or [],
        family_size=args.family_size,
        age_group=AgeGroup(args.age_group),
    )


def main(args: argparse.Namespace) -> None:
    settings = Settings()
    if args.mock_geo:
        settings.use_mock_geo = True

    # Set up logging
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Phase 1: Load
    try:
        listings = load_listings(args.data)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load listings from {args.data}: {e}")
        sys.exit(1)

    # Phase 2: Ingest
    service = RecommendationService(settings)
    records = asyncio.run(service.ingest(listings))
    logger.info(f"Enriched {len(records)} neighborhoods")
    for record in records:
        if record.processing_errors:
            logger.warning(f"  {record.name}: {'; '.join(record.processing_errors)}")

    # Phase 3: Recommend
    preferences = build_preferences(args)
    matches = service.recommend(records, preferences, top_n=args.top)

    names = {record.id: record.name for record in records}
    for match in matches:
        logger.info(f"  {match.summary()} | {names.get(match.neighborhood_id, '')}")
        for reason in match.reasoning:
            logger.info(f"      - {reason}")

    logger.info(f"Run finished at {datetime.now().isoformat()}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Neighborhood Matcher")
    parser.add_argument(
        "--data",
        type=Path,
        default=DEFAULT_DATA_PATH,
        help="Path to a JSON file of listings (defaults to the bundled seed data)",
    )
    parser.add_argument("--budget", type=float, required=True, help="Monthly rent budget")
    parser.add_argument(
        "--age-group",
        choices=[group.value for group in AgeGroup],
        default=AgeGroup.YOUNG_PROFESSIONAL.value,
    )
    parser.add_argument(
        "--priority",
        action="append",
        help="Priority tag, repeatable (cost, safety, schools, transit, nightlife, commute)",
    )
    parser.add_argument(
        "--lifestyle",
        action="append",
        help="Lifestyle tag, repeatable (walkable, modern, affordable, nightlife, family-friendly)",
    )
    parser.add_argument("--family-size", type=int, default=None)
    parser.add_argument("--work-lat", type=float, default=None)
    parser.add_argument("--work-lng", type=float, default=None)
    parser.add_argument("--top", type=int, default=None, help="Number of matches to show")
    parser.add_argument(
        "--mock-geo",
        action="store_true",
        help="Use the offline place table instead of the GeoNames API",
    )
    main(parser.parse_args())
