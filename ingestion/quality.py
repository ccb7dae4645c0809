"""Data quality assessment for normalized external attributes."""

from datetime import UTC, datetime
from typing import Optional

from ingestion.validator import KEY_FIELDS
from models.neighborhood import DataQuality, ExternalAttributes, ListingRecord, as_utc

BASE_ACCURACY = 0.8
CROSS_VALIDATION_BONUS = 0.1
CROSS_VALIDATION_TOLERANCE = 0.5

BASE_CONSISTENCY = 0.9
CONSISTENCY_PENALTY = 0.1


def assess(
    record: ExternalAttributes,
    listing: ListingRecord,
    now: Optional[datetime] = None,
) -> DataQuality:
    """Score completeness, accuracy, freshness and consistency of a record.

    Pure: neither input is modified.
    """
    completeness = score_completeness(record)
    accuracy = score_accuracy(record, listing)
    freshness = score_freshness(record.last_updated, now or datetime.now(UTC))
    consistency = score_consistency(record)
    overall = (completeness + accuracy + freshness + consistency) / 4

    return DataQuality(
        completeness=round(completeness, 2),
        accuracy=round(accuracy, 2),
        freshness=round(freshness, 2),
        consistency=round(consistency, 2),
        overall=round(overall, 2),
    )


def score_completeness(record: ExternalAttributes) -> float:
    """Share of key fields that came from the source rather than defaults."""
    values = {
        "average_rent": record.real_estate.average_rent,
        "safety_score": record.crime.safety_score,
        "walk_score": record.transit.walk_score,
        "school_rating": record.schools.average_rating,
        "population": record.demographics.population,
    }
    present = sum(
        1 for name in KEY_FIELDS
        if values[name] is not None and name not in record.imputed_fields
    )
    return present / len(KEY_FIELDS)


def score_accuracy(record: ExternalAttributes, listing: ListingRecord) -> float:
    """Base accuracy, with a bonus when the listing's overall rating agrees."""
    accuracy = BASE_ACCURACY
    if listing.ratings.overall:
        external_overall = (record.crime.safety_score + record.schools.average_rating) / 2
        if abs(listing.ratings.overall - external_overall) < CROSS_VALIDATION_TOLERANCE:
            accuracy += CROSS_VALIDATION_BONUS
    return min(1.0, accuracy)


def score_freshness(last_updated: datetime, now: datetime) -> float:
    days = (as_utc(now) - as_utc(last_updated)).total_seconds() / 86400
    if days <= 1:
        return 1.0
    if days <= 7:
        return 0.8
    if days <= 30:
        return 0.6
    return 0.4


def score_consistency(record: ExternalAttributes) -> float:
    """Penalize combinations of values that rarely occur together."""
    consistency = BASE_CONSISTENCY

    # Luxury rents with almost no restaurants around
    if record.real_estate.average_rent > 50000 and record.amenities.restaurants < 10:
        consistency -= CONSISTENCY_PENALTY

    # Top-rated schools in a very young neighborhood
    if record.schools.average_rating > 4.0 and record.demographics.median_age < 25:
        consistency -= CONSISTENCY_PENALTY

    return max(0.0, consistency)
