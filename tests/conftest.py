"""Shared builders for listings, external payloads and enriched records."""

from datetime import UTC, datetime

import pytest

from config.settings import Settings
from ingestion.merge import merge
from ingestion.quality import assess
from ingestion.validator import normalize
from models.neighborhood import EnrichedNeighborhood, ListingRecord
from models.preferences import UserPreferences

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def build_listing(**overrides) -> ListingRecord:
    data = {
        "id": "n1",
        "name": "Koramangala",
        "city": "Bangalore",
        "state": "Karnataka",
        "priceRange": {"min": 25000, "max": 45000},
        "ratings": {
            "overall": 4.3,
            "safety": 4.1,
            "schools": 4.2,
            "transit": 4.5,
            "nightlife": 4.6,
            "cost": 3.2,
        },
        "features": ["tech-hub", "nightlife"],
        "demographics": {"population": 85000, "medianAge": 28, "medianIncome": 850000},
        "coordinates": {"lat": 12.9352, "lng": 77.6245},
    }
    data.update(overrides)
    return ListingRecord.model_validate(data)


def build_payload(
    rent: float = 30000,
    price_per_sq_ft: float = 6000,
    market_trend: str = "stable",
    safety_score: float = 4.0,
    crime_rate: float = 2.0,
    recent_incidents: int = 10,
    walk_score: float = 70,
    transit_score: float = 65,
    school_rating: float = 3.8,
    median_age: float = 30,
    restaurants: int = 20,
    last_updated: datetime = NOW,
) -> dict:
    """A complete, in-range external payload (normalizes without corrections)."""
    return {
        "id": "n1",
        "name": "Koramangala",
        "city": "Bangalore",
        "state": "Karnataka",
        "coordinates": {"lat": 12.9352, "lng": 77.6245},
        "real_estate": {
            "average_rent": rent,
            "price_per_sq_ft": price_per_sq_ft,
            "market_trend": market_trend,
            "availability": 80,
        },
        "crime": {
            "crime_rate": crime_rate,
            "safety_score": safety_score,
            "recent_incidents": recent_incidents,
        },
        "transit": {
            "walk_score": walk_score,
            "transit_score": transit_score,
            "bike_score": 60,
            "nearby_stations": ["Central Metro Station"],
        },
        "schools": {
            "average_rating": school_rating,
            "top_schools": ["Delhi Public School"],
            "student_teacher_ratio": 18,
        },
        "demographics": {
            "population": 85000,
            "median_age": median_age,
            "diversity_index": 0.75,
            "median_income": 850000,
        },
        "amenities": {
            "restaurants": restaurants,
            "shopping": 15,
            "healthcare": 10,
            "recreation": 12,
        },
        "last_updated": last_updated,
    }


def build_record(
    neighborhood_id: str = "n1",
    listing_overrides: dict | None = None,
    **payload_overrides,
) -> EnrichedNeighborhood:
    listing = build_listing(id=neighborhood_id, **(listing_overrides or {}))
    external = normalize(build_payload(**payload_overrides), listing, NOW).record
    return merge(listing, external, assess(external, listing, NOW), now=NOW)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_listing():
    return build_listing


@pytest.fixture
def make_payload():
    return build_payload


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def preferences() -> UserPreferences:
    return UserPreferences(budget=30000)


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with every delay removed."""
    return Settings(
        batch_delay_seconds=0,
        retry_delay_seconds=0,
        simulated_delay_seconds=0,
        use_mock_geo=True,
        data_seed=42,
    )
