"""Load seed listing records from the JSON fixture."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from models.neighborhood import ListingRecord

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "neighborhoods.json"


def parse_listings(entries: list[dict]) -> list[ListingRecord]:
    """Validate raw entries, skipping (and logging) any that don't fit the schema."""
    listings = []
    for index, entry in enumerate(entries):
        try:
            listings.append(ListingRecord.model_validate(entry))
        except ValidationError as e:
            name = entry.get("name", f"#{index}") if isinstance(entry, dict) else f"#{index}"
            logger.warning(f"Skipping invalid listing {name}: {e.error_count()} validation errors")
    return listings


def load_listings(path: Path | str = DEFAULT_DATA_PATH) -> list[ListingRecord]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of listings in {path}")

    listings = parse_listings(data)
    logger.info(f"Loaded {len(listings)} listings from {path}")
    return listings
