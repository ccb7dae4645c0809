"""Match ranker: weighted totals, reasoning and confidence per neighborhood."""

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Optional

from config.scoring_weights import (
    MAX_REASONS,
    MIN_CONFIDENCE,
    REASONING_THRESHOLD,
    SCHOOL_HIGHLIGHT_RATING,
    STALE_DATA_DAYS,
    STALE_DATA_PENALTY,
)
from models.enums import MarketTrend
from models.match import CategoryScore, MatchScore
from models.neighborhood import EnrichedNeighborhood, as_utc
from models.preferences import UserPreferences
from scoring.categories import SCORERS, distance_to_work
from scoring.weights import calculate_weights

if TYPE_CHECKING:
    from feedback.ledger import InteractionLedger

logger = logging.getLogger(__name__)


def _unit(value: float) -> float:
    return min(1.0, max(0.0, value))


def sort_matches(matches: list[MatchScore]) -> list[MatchScore]:
    """Highest total first; equal totals ordered by neighborhood id."""
    return sorted(matches, key=lambda m: (-m.total_score, m.neighborhood_id))


def rank(
    records: list[EnrichedNeighborhood],
    preferences: UserPreferences,
    weights: Optional[dict[str, float]] = None,
    now: Optional[datetime] = None,
) -> list[MatchScore]:
    """Score every record against the preferences and sort best-first."""
    weights = weights or calculate_weights(preferences)
    now = as_utc(now) if now is not None else datetime.now(UTC)

    matches = []
    for record in records:
        if not record.id:
            logger.warning(f"Skipping neighborhood without id: {record.name or '<unnamed>'}")
            continue
        try:
            matches.append(score_record(record, preferences, weights, now))
        except Exception as e:
            logger.warning(f"Error scoring neighborhood {record.id}: {e}")

    return sort_matches(matches)


def score_record(
    record: EnrichedNeighborhood,
    preferences: UserPreferences,
    weights: dict[str, float],
    now: datetime,
) -> MatchScore:
    scores = {category: scorer(record, preferences) for category, scorer in SCORERS.items()}

    weighted_scores = {
        category: CategoryScore(
            score=_unit(score),
            weight=_unit(weights[category]),
            weighted=_unit(score * weights[category]),
        )
        for category, score in scores.items()
    }
    total = sum(entry.weighted for entry in weighted_scores.values())

    return MatchScore(
        neighborhood_id=record.id,
        weighted_scores=weighted_scores,
        total_score=_unit(total),
        reasoning=build_reasoning(record, scores, preferences),
        confidence=calculate_confidence(scores, record, now),
        data_quality=record.data_quality.overall,
    )


def build_reasoning(
    record: EnrichedNeighborhood,
    scores: dict[str, float],
    preferences: UserPreferences,
) -> list[str]:
    """Explain the strongest points of a match, most important first."""
    external = record.external
    reasons = []

    if scores["affordability"] > REASONING_THRESHOLD:
        rent = external.real_estate.average_rent
        savings = round((1 - rent / preferences.budget) * 100)
        reasons.append(f"Great value - {max(0, savings)}% under budget at ₹{rent:,.0f}/month")

    if scores["safety"] > REASONING_THRESHOLD:
        reasons.append(
            f"Very safe area with low crime rate ({external.crime.crime_rate:.1f} incidents per 1000)"
        )

    if scores["convenience"] > REASONING_THRESHOLD:
        reasons.append(
            f"Highly convenient with walk score {external.transit.walk_score:.0f} and great amenities"
        )

    if scores["commute"] > REASONING_THRESHOLD:
        distance = distance_to_work(record, preferences)
        if distance is not None:
            reasons.append(f"Short {distance:.1f}km commute with good transit connectivity")

    if scores["lifestyle"] > REASONING_THRESHOLD:
        tags = ", ".join(preferences.lifestyle) or "your preferences"
        reasons.append(f"Great lifestyle match for {tags}")

    if external.schools.average_rating > SCHOOL_HIGHLIGHT_RATING:
        reasons.append(
            f"Excellent schools with average rating of {external.schools.average_rating:.1f}/5"
        )

    if external.real_estate.market_trend == MarketTrend.FALLING:
        reasons.append("Good timing - property prices are currently falling in this area")

    return reasons[:MAX_REASONS]


def calculate_confidence(
    scores: dict[str, float],
    record: EnrichedNeighborhood,
    now: datetime,
) -> float:
    """Agreement across categories, penalized for stale source data.

    1 - variance of the category scores; -0.1 when the external data is
    older than a week. Never below 0.3.
    """
    values = list(scores.values())
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    confidence = 1 - variance

    if as_utc(now) - as_utc(record.external.last_updated) > timedelta(days=STALE_DATA_DAYS):
        confidence -= STALE_DATA_PENALTY

    return min(1.0, max(MIN_CONFIDENCE, confidence))


def recommend(
    records: list[EnrichedNeighborhood],
    preferences: UserPreferences,
    ledger: Optional["InteractionLedger"] = None,
    top_n: int = 10,
    now: Optional[datetime] = None,
) -> list[MatchScore]:
    """Rank, nudge by recorded interactions, and keep the best `top_n`."""
    if not records:
        return []

    matches = rank(records, preferences, now=now)
    if ledger is not None:
        matches = ledger.adjust(matches)

    return matches[:top_n]
