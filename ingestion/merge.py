"""Merging normalized external attributes into listing records."""

import math
from datetime import UTC, datetime
from typing import Optional

from config import defaults
from config.scoring_weights import COST_RATING_BUCKETS, COST_RATING_FLOOR
from models.enums import ProcessingState
from models.neighborhood import (
    DataQuality,
    Demographics,
    EnrichedNeighborhood,
    ExternalAttributes,
    ListingRecord,
    PriceRange,
)


class ProcessingError(Exception):
    """A listing that can't be merged with its external attributes."""


def cost_rating(average_rent: float, original_range: PriceRange) -> float:
    """Rate 0-5 how the external rent compares with the listing's price range.

    Cheaper than the listing suggested rates higher.
    """
    midpoint = original_range.midpoint
    if midpoint <= 0:
        raise ProcessingError(f"Price range {original_range.min}-{original_range.max} has no positive midpoint")

    difference = (average_rent - midpoint) / midpoint
    for upper, rating in COST_RATING_BUCKETS:
        if difference <= upper:
            return rating
    return COST_RATING_FLOOR


def merge(
    listing: ListingRecord,
    external: ExternalAttributes,
    quality: DataQuality,
    processing_errors: Optional[list[str]] = None,
    now: Optional[datetime] = None,
) -> EnrichedNeighborhood:
    """Recompute the listing's ratings, price range and demographics from external data."""
    ratings = listing.ratings.model_copy(
        update={
            "safety": external.crime.safety_score,
            "schools": external.schools.average_rating,
            "transit": external.transit.transit_score / 20,
            "cost": cost_rating(external.real_estate.average_rent, listing.price_range),
        }
    )
    ratings.overall = (
        ratings.safety + ratings.schools + ratings.transit + ratings.nightlife + ratings.cost
    ) / 5

    rent = external.real_estate.average_rent
    price_range = PriceRange(min=math.floor(rent * 0.8), max=math.floor(rent * 1.2))

    demographics = Demographics.model_validate(
        {
            **listing.demographics.model_dump(exclude_none=True),
            **external.demographics.model_dump(exclude_none=True),
        }
    )

    return EnrichedNeighborhood(
        **listing.model_dump(exclude={"ratings", "price_range", "demographics"}),
        ratings=ratings,
        price_range=price_range,
        demographics=demographics,
        external=external,
        data_quality=quality,
        last_processed=now or datetime.now(UTC),
        processing_errors=list(processing_errors or []),
        processing_state=ProcessingState.MERGED,
    )


def degraded(
    listing: ListingRecord,
    external: ExternalAttributes,
    error: str,
    now: Optional[datetime] = None,
) -> EnrichedNeighborhood:
    """Record built from the listing alone after processing kept failing."""
    return EnrichedNeighborhood(
        **listing.model_dump(),
        external=external,
        data_quality=DataQuality(**defaults.DEGRADED_QUALITY),
        last_processed=now or datetime.now(UTC),
        processing_errors=[error],
        processing_state=ProcessingState.DEGRADED_MERGED,
    )
