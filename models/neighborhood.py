from __future__ import annotations

from datetime import UTC, datetime
from typing import Optional

from pydantic import Field, field_validator

from models.base import CamelModel
from models.enums import MarketTrend, ProcessingState


def _utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Coordinates(CamelModel):
    lat: float
    lng: float


class PriceRange(CamelModel):
    min: float
    max: float

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2


class Ratings(CamelModel):
    overall: float = Field(0.0, ge=0, le=5)
    safety: float = Field(0.0, ge=0, le=5)
    schools: float = Field(0.0, ge=0, le=5)
    transit: float = Field(0.0, ge=0, le=5)
    nightlife: float = Field(0.0, ge=0, le=5)
    cost: float = Field(0.0, ge=0, le=5)


class Demographics(CamelModel):
    population: int = 0
    median_age: float = 0.0
    median_income: float = 0.0
    diversity_index: Optional[float] = None


class Review(CamelModel):
    id: str = ""
    user_name: str = ""
    rating: float = Field(0.0, ge=0, le=5)
    title: str = ""
    content: str = ""
    date: str = ""
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class ListingRecord(CamelModel):
    """Baseline neighborhood entry from the seed data, before enrichment."""

    # Identity
    id: str = ""
    name: str = ""
    city: str = ""
    state: str = ""
    description: str = ""

    # Location
    coordinates: Optional[Coordinates] = None

    # Pricing and ratings
    price_range: PriceRange
    ratings: Ratings = Field(default_factory=Ratings)

    demographics: Demographics = Field(default_factory=Demographics)
    features: list[str] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)


# --- External attributes (third-party metrics) ---


class RealEstate(CamelModel):
    average_rent: float = Field(gt=0)
    price_per_sq_ft: float = Field(gt=0)
    market_trend: MarketTrend = MarketTrend.STABLE
    availability: float = Field(ge=0, le=100)


class Crime(CamelModel):
    crime_rate: float = Field(ge=0)
    safety_score: float = Field(ge=0, le=5)
    recent_incidents: int = Field(ge=0)


class Transit(CamelModel):
    walk_score: float = Field(ge=0, le=100)
    transit_score: float = Field(ge=0, le=100)
    bike_score: float = Field(ge=0, le=100)
    nearby_stations: list[str] = Field(default_factory=list)


class Schools(CamelModel):
    average_rating: float = Field(ge=0, le=5)
    top_schools: list[str] = Field(default_factory=list)
    student_teacher_ratio: float = Field(ge=0)


class ExternalDemographics(CamelModel):
    population: int = Field(gt=0)
    median_age: float = Field(gt=0, le=100)
    diversity_index: float = Field(ge=0, le=1)
    median_income: Optional[float] = None


class Amenities(CamelModel):
    restaurants: int = Field(ge=0)
    shopping: int = Field(ge=0)
    healthcare: int = Field(ge=0)
    recreation: int = Field(ge=0)


class ExternalAttributes(CamelModel):
    """Normalized third-party metrics for one neighborhood.

    Only ever constructed by the normalizer, so every bounded field is in range.
    """

    id: str = ""
    name: str = ""
    city: str = ""
    state: str = ""
    coordinates: Optional[Coordinates] = None

    real_estate: RealEstate
    crime: Crime
    transit: Transit
    schools: Schools
    demographics: ExternalDemographics
    amenities: Amenities

    last_updated: datetime = Field(default_factory=_utcnow)
    # Key fields missing at the source and filled with defaults
    imputed_fields: list[str] = Field(default_factory=list)

    last_updated_as_utc = field_validator("last_updated")(as_utc)


class DataQuality(CamelModel):
    completeness: float = Field(ge=0, le=1)
    accuracy: float = Field(ge=0, le=1)
    freshness: float = Field(ge=0, le=1)
    consistency: float = Field(ge=0, le=1)
    overall: float = Field(ge=0, le=1)

    @property
    def label(self) -> str:
        if self.overall >= 0.8:
            return "High Quality"
        if self.overall >= 0.6:
            return "Medium Quality"
        return "Low Quality"

    @property
    def is_low_confidence(self) -> bool:
        return self.overall < 0.6


class EnrichedNeighborhood(ListingRecord):
    """Listing merged with external attributes and their quality assessment."""

    external: ExternalAttributes
    data_quality: DataQuality
    last_processed: datetime = Field(default_factory=_utcnow)
    processing_errors: list[str] = Field(default_factory=list)
    processing_state: ProcessingState = ProcessingState.MERGED

    last_processed_as_utc = field_validator("last_processed")(as_utc)
