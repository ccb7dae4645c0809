"""Preference weights over the five scoring categories."""

import logging

from config.scoring_weights import AGE_GROUP_ADJUSTMENTS, BASE_WEIGHTS, PRIORITY_BOOSTS
from models.preferences import UserPreferences

logger = logging.getLogger(__name__)


def calculate_weights(preferences: UserPreferences) -> dict[str, float]:
    """Turn stated priorities and age group into weights that sum to 1.0.

    Each known priority tag boosts one or two categories, then the age group
    shifts weight between categories. Negative weights are clamped to 0
    before normalizing so no category can count against a neighborhood.
    """
    weights = dict(BASE_WEIGHTS)

    for priority in dict.fromkeys(preferences.priorities):
        for category, boost in PRIORITY_BOOSTS.get(priority, {}).items():
            weights[category] += boost

    for category, delta in AGE_GROUP_ADJUSTMENTS[preferences.age_group.value].items():
        weights[category] += delta

    weights = {category: max(0.0, weight) for category, weight in weights.items()}
    total = sum(weights.values())
    if total <= 0:
        logger.warning("All preference weights clamped to zero, using base weights")
        return dict(BASE_WEIGHTS)

    return {category: weight / total for category, weight in weights.items()}
