"""Synthetic external attributes derived from a listing's own fields."""

from datetime import UTC, datetime
from typing import Optional

from config import defaults
from models.neighborhood import ListingRecord


def default_listing() -> ListingRecord:
    """Listing used when there is nothing to derive a record from."""
    return ListingRecord.model_validate(defaults.DEFAULT_LISTING)


def synthesize_external(
    listing: Optional[ListingRecord], now: Optional[datetime] = None
) -> dict:
    """Build raw external attributes from the listing (or global defaults).

    Rent comes from the listing's price midpoint, safety/schools/transit from
    its ratings, everything else from fixed defaults. The result still goes
    through normalization like any fetched record.
    """
    listing = listing or default_listing()
    ratings = listing.ratings
    transit_rating = ratings.transit or defaults.DEFAULT_TRANSIT_RATING

    return {
        "id": listing.id,
        "name": listing.name,
        "city": listing.city,
        "state": listing.state,
        "coordinates": listing.coordinates.model_dump() if listing.coordinates else None,
        "real_estate": {
            "average_rent": listing.price_range.midpoint,
            "price_per_sq_ft": defaults.DEFAULT_PRICE_PER_SQ_FT,
            "market_trend": defaults.DEFAULT_MARKET_TREND,
            "availability": defaults.DEFAULT_AVAILABILITY,
        },
        "crime": {
            "crime_rate": defaults.DEFAULT_CRIME_RATE,
            "safety_score": ratings.safety or defaults.DEFAULT_SAFETY_SCORE,
            "recent_incidents": defaults.DEFAULT_RECENT_INCIDENTS,
        },
        "transit": {
            "walk_score": transit_rating * 20,
            "transit_score": transit_rating * 20,
            "bike_score": defaults.DEFAULT_BIKE_SCORE,
            "nearby_stations": list(defaults.DEFAULT_NEARBY_STATIONS),
        },
        "schools": {
            "average_rating": ratings.schools or defaults.DEFAULT_SCHOOL_RATING,
            "top_schools": list(defaults.DEFAULT_TOP_SCHOOLS),
            "student_teacher_ratio": defaults.DEFAULT_STUDENT_TEACHER_RATIO,
        },
        "demographics": {
            "population": listing.demographics.population,
            "median_age": listing.demographics.median_age,
            "median_income": listing.demographics.median_income,
            "diversity_index": (
                listing.demographics.diversity_index
                if listing.demographics.diversity_index is not None
                else defaults.DEFAULT_DIVERSITY_INDEX
            ),
        },
        "amenities": dict(defaults.DEFAULT_AMENITIES),
        "last_updated": now or datetime.now(UTC),
    }
