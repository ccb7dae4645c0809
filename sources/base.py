"""Abstract interfaces for the collaborators the ingestion pipeline depends on."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from models.geo import GeoLocation
from models.neighborhood import ListingRecord


class ExternalDataSource(ABC):
    """Provider of third-party metrics (rent, crime, transit, schools) for a listing."""

    @abstractmethod
    async def fetch_external_attributes(self, listing: ListingRecord) -> Any:
        """Return raw external attributes for the listing.

        The payload may be a dict (snake_case or camelCase keys) or an
        ExternalAttributes. Any exception is treated by the pipeline as the
        source being unavailable.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name of this source."""
        ...


class Geocoder(ABC):
    """Resolves a place name to coordinates and population."""

    @abstractmethod
    async def geocode(self, name: str) -> Optional[GeoLocation]:
        ...
