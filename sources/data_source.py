"""Simulated third-party data source for neighborhood metrics.

Stands in for real rent, crime, transit and school APIs. Figures are derived
from per-city base tables with bounded random variation; the four sections
are fetched concurrently and any section that fails is replaced with its
fallback values. Results are cached per location for the configured TTL.
"""

import asyncio
import logging
import random
from datetime import UTC, datetime
from typing import Optional

from config import defaults
from config.settings import Settings
from models.neighborhood import Coordinates, ListingRecord
from sources.base import ExternalDataSource
from sources.cache import TTLCache

logger = logging.getLogger(__name__)


class SimulatedDataSource(ExternalDataSource):
    def __init__(self, settings: Settings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random(settings.data_seed)
        self.cache = TTLCache(settings.cache_ttl_seconds)

    @property
    def source_name(self) -> str:
        return "Simulated"

    async def fetch_external_attributes(self, listing: ListingRecord) -> dict:
        location = f"{listing.city}, {listing.state}"
        coordinates = listing.coordinates or Coordinates(lat=0.0, lng=0.0)

        real_estate, crime, transit, schools = await asyncio.gather(
            self.fetch_real_estate(location),
            self.fetch_crime(location),
            self.fetch_transit(coordinates),
            self.fetch_schools(location),
            return_exceptions=True,
        )

        sections = {
            "real_estate": (real_estate, lambda: self._fallback_real_estate(location)),
            "crime": (crime, self._fallback_crime),
            "transit": (transit, self._fallback_transit),
            "schools": (schools, self._fallback_schools),
        }
        payload: dict = {}
        for name, (result, fallback) in sections.items():
            if isinstance(result, Exception):
                logger.warning(f"{name} fetch failed for {listing.name}: {result}")
                payload[name] = fallback()
            else:
                payload[name] = result

        return {
            "id": listing.id,
            "name": listing.name,
            "city": listing.city,
            "state": listing.state,
            "coordinates": listing.coordinates.model_dump() if listing.coordinates else None,
            **payload,
            "demographics": {
                **listing.demographics.model_dump(exclude_none=True),
                "diversity_index": self.rng.random() * 0.4 + 0.6,
            },
            "amenities": self._amenities(),
            "last_updated": datetime.now(UTC).isoformat(),
        }

    # --- section fetchers ---

    async def fetch_real_estate(self, location: str) -> dict:
        key = f"realestate_{location}"
        cached = self.cache.get(key)
        if cached:
            return cached
        await self._simulate_delay()
        data = {
            "average_rent": self._rent(location),
            "price_per_sq_ft": self._price_per_sq_ft(location),
            "market_trend": self._market_trend(),
            "availability": self.rng.randint(50, 100),
        }
        self.cache.set(key, data)
        return data

    async def fetch_crime(self, location: str) -> dict:
        key = f"crime_{location}"
        cached = self.cache.get(key)
        if cached:
            return cached
        await self._simulate_delay()
        crime_rate = self._crime_rate(location)
        data = {
            "crime_rate": crime_rate,
            # Lower crime means a higher safety score
            "safety_score": min(5.0, max(1.0, 5 - (crime_rate - 1))),
            "recent_incidents": self.rng.randint(0, 19),
        }
        self.cache.set(key, data)
        return data

    async def fetch_transit(self, coordinates: Coordinates) -> dict:
        key = f"transit_{coordinates.lat}_{coordinates.lng}"
        cached = self.cache.get(key)
        if cached:
            return cached
        await self._simulate_delay()
        data = {
            "walk_score": self.rng.randint(60, 99),
            "transit_score": self.rng.randint(50, 99),
            "bike_score": self.rng.randint(40, 99),
            "nearby_stations": self._stations(),
        }
        self.cache.set(key, data)
        return data

    async def fetch_schools(self, location: str) -> dict:
        key = f"schools_{location}"
        cached = self.cache.get(key)
        if cached:
            return cached
        await self._simulate_delay()
        data = {
            "average_rating": self._school_rating(location),
            "top_schools": self._top_schools(),
            "student_teacher_ratio": self.rng.randint(15, 24),
        }
        self.cache.set(key, data)
        return data

    # --- generators ---

    @staticmethod
    def _city(location: str) -> str:
        return location.split(",")[0].strip()

    def _rent(self, location: str) -> int:
        base = defaults.CITY_BASE_RENT.get(self._city(location), defaults.DEFAULT_RENT)
        variation = (self.rng.random() - 0.5) * 0.4  # +/-20%
        return int(base * (1 + variation))

    def _price_per_sq_ft(self, location: str) -> int:
        base = defaults.CITY_BASE_PRICE_PER_SQ_FT.get(self._city(location), defaults.DEFAULT_PRICE_PER_SQ_FT)
        variation = (self.rng.random() - 0.5) * 0.3
        return int(base * (1 + variation))

    def _market_trend(self) -> str:
        roll = self.rng.random()
        for trend, cumulative in defaults.MARKET_TREND_ODDS:
            if roll <= cumulative:
                return trend
        return defaults.DEFAULT_MARKET_TREND

    def _crime_rate(self, location: str) -> float:
        base = defaults.CITY_BASE_CRIME_RATE.get(self._city(location), defaults.DEFAULT_CRIME_RATE)
        variation = (self.rng.random() - 0.5) * 0.5
        return max(0.5, base + variation)

    def _school_rating(self, location: str) -> float:
        base = defaults.CITY_BASE_SCHOOL_RATING.get(self._city(location), 4.0)
        variation = (self.rng.random() - 0.5) * 0.6
        return min(5.0, max(2.0, base + variation))

    def _stations(self) -> list[str]:
        return [
            f"{self.rng.choice(defaults.STATION_NAMES)} {self.rng.choice(defaults.STATION_TYPES)} Station"
            for _ in range(self.rng.randint(2, 6))
        ]

    def _top_schools(self) -> list[str]:
        return [
            f"{self.rng.choice(defaults.SCHOOL_NAMES)} {self.rng.choice(defaults.SCHOOL_TYPES)}"
            for _ in range(self.rng.randint(2, 4))
        ]

    def _amenities(self) -> dict:
        return {
            "restaurants": self.rng.randint(20, 69),
            "shopping": self.rng.randint(10, 39),
            "healthcare": self.rng.randint(5, 24),
            "recreation": self.rng.randint(10, 34),
        }

    async def _simulate_delay(self) -> None:
        if self.settings.simulated_delay_seconds > 0:
            await asyncio.sleep(self.settings.simulated_delay_seconds * (0.5 + self.rng.random()))

    # --- per-section fallbacks ---

    def _fallback_real_estate(self, location: str) -> dict:
        return {
            "average_rent": self._rent(location),
            "price_per_sq_ft": self._price_per_sq_ft(location),
            "market_trend": defaults.DEFAULT_MARKET_TREND,
            "availability": defaults.DEFAULT_AVAILABILITY,
        }

    @staticmethod
    def _fallback_crime() -> dict:
        return {"crime_rate": defaults.DEFAULT_CRIME_RATE, "safety_score": defaults.DEFAULT_SAFETY_SCORE, "recent_incidents": 5}

    @staticmethod
    def _fallback_transit() -> dict:
        return {
            "walk_score": defaults.DEFAULT_WALK_SCORE,
            "transit_score": defaults.DEFAULT_TRANSIT_SCORE,
            "bike_score": defaults.DEFAULT_BIKE_SCORE,
            "nearby_stations": list(defaults.DEFAULT_NEARBY_STATIONS),
        }

    @staticmethod
    def _fallback_schools() -> dict:
        return {
            "average_rating": defaults.DEFAULT_SCHOOL_RATING,
            "top_schools": ["Local Public School", "Community School"],
            "student_teacher_ratio": defaults.DEFAULT_STUDENT_TEACHER_RATIO,
        }
