from enum import Enum


class MarketTrend(str, Enum):
    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"


class AgeGroup(str, Enum):
    YOUNG_PROFESSIONAL = "young-professional"
    FAMILY = "family"
    SENIOR = "senior"


class InteractionType(str, Enum):
    VIEW = "view"
    SAVE = "save"
    CONTACT = "contact"
    REJECT = "reject"


class ProcessingState(str, Enum):
    PENDING = "Pending"
    FETCHED = "Fetched"
    FALLBACK_SYNTHESIZED = "FallbackSynthesized"
    VALIDATED = "Validated"
    QUALITY_ASSESSED = "QualityAssessed"
    MERGED = "Merged"
    DEGRADED_MERGED = "DegradedMerged"
