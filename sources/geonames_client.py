"""GeoNames search client used to fill in missing listing coordinates."""

import logging
from typing import Optional

import httpx
from thefuzz import fuzz, process

from config import defaults
from config.settings import Settings
from models.geo import GeoLocation
from sources.base import Geocoder
from sources.cache import TTLCache

logger = logging.getLogger(__name__)

# Minimum fuzzy match score for the offline place table
FALLBACK_MATCH_CUTOFF = 80


class GeoNamesClient(Geocoder):
    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.base_url = settings.geonames_base_url.rstrip("/")
        self.username = settings.geonames_username
        self._client = client
        self.cache = TTLCache(settings.cache_ttl_seconds)

    async def geocode(self, name: str) -> Optional[GeoLocation]:
        """Return the best match for a place name, or None if nothing is known."""
        places = await self.search_places(name)
        return places[0] if places else None

    async def search_places(self, query: str, country: Optional[str] = None) -> list[GeoLocation]:
        """Search GeoNames, falling back to the offline table when the API is unavailable."""
        country = country or self.settings.geonames_country
        cache_key = f"search_{query}_{country}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        if self.settings.use_mock_geo:
            return fallback_places(query)

        try:
            locations = await self._search(query, country)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"GeoNames lookup failed for {query!r}, using fallback data: {e}")
            return fallback_places(query)

        self.cache.set(cache_key, locations)
        return locations

    async def _search(self, query: str, country: str) -> list[GeoLocation]:
        params = {
            "q": query,
            "country": country,
            "maxRows": 10,
            "username": self.username,
        }
        try:
            if self._client is not None:
                response = await self._client.get(
                    f"{self.base_url}/searchJSON",
                    params=params,
                    timeout=self.settings.geonames_timeout_seconds,
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(
                        f"{self.base_url}/searchJSON",
                        params=params,
                        timeout=self.settings.geonames_timeout_seconds,
                    )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"GeoNames HTTP error for {query!r}: {e.response.status_code}")
            raise
        except httpx.RequestError as e:
            logger.error(f"GeoNames request error for {query!r}: {e}")
            raise

        data = response.json()
        entries = data.get("geonames") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ValueError("Invalid response format from GeoNames API")

        locations = []
        for item in entries:
            location = _parse_place(item)
            if location is not None:
                locations.append(location)
        return locations


def _parse_place(item: dict) -> Optional[GeoLocation]:
    """Convert a GeoNames entry, dropping entries without usable coordinates."""
    try:
        lat = float(item.get("lat") or 0)
        lng = float(item.get("lng") or 0)
    except (TypeError, ValueError):
        return None
    if lat == 0 and lng == 0:
        return None
    return GeoLocation(
        lat=lat,
        lng=lng,
        name=item.get("name") or "Unknown",
        country_name=item.get("countryName") or "Unknown",
        admin_name=item.get("adminName1") or "Unknown",
        population=int(item.get("population") or 0),
    )


def fallback_places(query: str) -> list[GeoLocation]:
    """Look a place up in the offline table, tolerating partial names and typos."""
    key = query.lower().strip()
    if not key:
        return []
    place = defaults.FALLBACK_PLACES.get(key)
    if place is None and len(key) >= 3:
        match = process.extractOne(
            key,
            list(defaults.FALLBACK_PLACES),
            scorer=fuzz.partial_ratio,
            score_cutoff=FALLBACK_MATCH_CUTOFF,
        )
        if match is not None:
            place = defaults.FALLBACK_PLACES[match[0]]
    if place is None:
        return []
    return [GeoLocation.model_validate(place)]
