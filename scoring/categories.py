"""Category scorers: each maps a neighborhood and preferences to a 0.0-1.0 score."""

import functools
import logging
import math
from typing import Callable, Optional

from config.scoring_weights import (
    AFFORDABILITY_BUCKETS,
    AFFORDABILITY_FLOOR,
    AMENITY_NORMALIZER,
    COMMUTE_BUCKETS,
    COMMUTE_FLOOR,
    COMMUTE_TRANSIT_BONUS,
    COMMUTE_TRANSIT_BONUS_THRESHOLD,
    CONVENIENCE_AMENITY_WEIGHT,
    CONVENIENCE_SCHOOL_WEIGHT,
    CONVENIENCE_TRANSIT_WEIGHT,
    CONVENIENCE_WALKABLE_WEIGHT,
    NEUTRAL_COMMUTE_SCORE,
    NEUTRAL_SCORE,
)
from models.enums import AgeGroup
from models.neighborhood import Coordinates, EnrichedNeighborhood
from models.preferences import UserPreferences

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371

Scorer = Callable[[EnrichedNeighborhood, UserPreferences], float]


def _clamp(score: float) -> float:
    return min(1.0, max(0.0, score))


def with_fallback(neutral: float) -> Callable[[Scorer], Scorer]:
    """Return `neutral` instead of raising when a scorer hits bad data."""

    def decorator(scorer: Scorer) -> Scorer:
        @functools.wraps(scorer)
        def wrapper(record: EnrichedNeighborhood, preferences: UserPreferences) -> float:
            try:
                return scorer(record, preferences)
            except Exception as e:
                logger.warning(f"{scorer.__name__} failed for {record.id}: {e}")
                return neutral

        return wrapper

    return decorator


def haversine_distance(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points in km."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_to_work(record: EnrichedNeighborhood, preferences: UserPreferences) -> Optional[float]:
    if preferences.work_location is None or record.coordinates is None:
        return None
    return haversine_distance(record.coordinates, preferences.work_location)


@with_fallback(NEUTRAL_SCORE)
def score_affordability(record: EnrichedNeighborhood, preferences: UserPreferences) -> float:
    """Score rent against budget.

    rent/budget <= 0.6  -> 1.0
    <= 0.75 -> 0.9
    <= 0.9  -> 0.8
    <= 1.0  -> 0.6
    <= 1.15 -> 0.3 (slightly over budget)
    else    -> 0.1
    """
    ratio = record.external.real_estate.average_rent / preferences.budget
    for upper, score in AFFORDABILITY_BUCKETS:
        if ratio <= upper:
            return score
    return AFFORDABILITY_FLOOR


@with_fallback(NEUTRAL_SCORE)
def score_safety(record: EnrichedNeighborhood, preferences: UserPreferences) -> float:
    crime = record.external.crime
    score = crime.safety_score / 5

    if crime.crime_rate < 1.5:
        score += 0.1
    elif crime.crime_rate > 3.0:
        score -= 0.15

    if crime.recent_incidents > 15:
        score -= 0.1
    elif crime.recent_incidents < 5:
        score += 0.05

    # Families get an extra nudge towards areas that are already very safe
    if preferences.age_group == AgeGroup.FAMILY and score > 0.8:
        score += 0.05

    return _clamp(score)


@with_fallback(NEUTRAL_SCORE)
def score_convenience(record: EnrichedNeighborhood, preferences: UserPreferences) -> float:
    transit = record.external.transit
    amenities = record.external.amenities

    transit_component = (transit.walk_score + transit.transit_score) / 200
    amenity_component = (amenities.restaurants + amenities.shopping + amenities.healthcare) / AMENITY_NORMALIZER
    school_component = record.external.schools.average_rating / 5

    score = (
        transit_component * CONVENIENCE_TRANSIT_WEIGHT
        + amenity_component * CONVENIENCE_AMENITY_WEIGHT
        + school_component * CONVENIENCE_SCHOOL_WEIGHT
    )

    if "walkable" in preferences.lifestyle:
        score += (transit.walk_score / 100) * CONVENIENCE_WALKABLE_WEIGHT

    return _clamp(score)


@with_fallback(NEUTRAL_SCORE)
def score_lifestyle(record: EnrichedNeighborhood, preferences: UserPreferences) -> float:
    external = record.external
    median_age = external.demographics.median_age
    restaurants = external.amenities.restaurants
    school_rating = external.schools.average_rating
    score = 0.5

    if preferences.age_group == AgeGroup.YOUNG_PROFESSIONAL:
        if 25 <= median_age <= 35:
            score += 0.2
        if restaurants > 25:
            score += 0.15
    elif preferences.age_group == AgeGroup.FAMILY:
        if 30 <= median_age <= 45:
            score += 0.2
        if school_rating > 4.0:
            score += 0.15

    lifestyle = set(preferences.lifestyle)
    if "modern" in lifestyle and external.real_estate.price_per_sq_ft > 8000:
        score += 0.1
    if "affordable" in lifestyle and external.real_estate.average_rent < preferences.budget * 0.8:
        score += 0.15
    if "nightlife" in lifestyle and restaurants > 20:
        score += 0.1
    if "family-friendly" in lifestyle and school_rating > 3.8:
        score += 0.15

    return _clamp(score)


@with_fallback(NEUTRAL_COMMUTE_SCORE)
def score_commute(record: EnrichedNeighborhood, preferences: UserPreferences) -> float:
    """Score straight-line distance to work, with a bonus for good transit.

    Neutral 0.7 when there is no work location to measure against.
    """
    distance = distance_to_work(record, preferences)
    if distance is None:
        return NEUTRAL_COMMUTE_SCORE

    score = COMMUTE_FLOOR
    for upper, bucket_score in COMMUTE_BUCKETS:
        if distance <= upper:
            score = bucket_score
            break

    if record.external.transit.transit_score > COMMUTE_TRANSIT_BONUS_THRESHOLD:
        score += COMMUTE_TRANSIT_BONUS

    return _clamp(score)


# Evaluation order matches the category order of the weights
SCORERS: dict[str, Scorer] = {
    "affordability": score_affordability,
    "safety": score_safety,
    "convenience": score_convenience,
    "lifestyle": score_lifestyle,
    "commute": score_commute,
}
