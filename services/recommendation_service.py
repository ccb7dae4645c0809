"""Entry points for callers: ingest listings, recommend, record interactions."""

import logging
from typing import Optional

from config.settings import Settings
from feedback.ledger import InteractionLedger
from ingestion.pipeline import IngestionPipeline
from models.enums import InteractionType
from models.match import MatchScore
from models.neighborhood import EnrichedNeighborhood, ListingRecord
from models.preferences import UserPreferences
from scoring.ranker import recommend
from sources.base import ExternalDataSource, Geocoder
from sources.data_source import SimulatedDataSource
from sources.geonames_client import GeoNamesClient

logger = logging.getLogger(__name__)


class RecommendationService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        source: Optional[ExternalDataSource] = None,
        geocoder: Optional[Geocoder] = None,
        ledger: Optional[InteractionLedger] = None,
    ):
        self.settings = settings or Settings()
        self.source = source or SimulatedDataSource(self.settings)
        self.geocoder = geocoder or GeoNamesClient(self.settings)
        self.ledger = ledger if ledger is not None else InteractionLedger()
        self.pipeline = IngestionPipeline(self.source, self.settings, geocoder=self.geocoder)

    async def ingest(self, listings: list[ListingRecord]) -> list[EnrichedNeighborhood]:
        records = await self.pipeline.ingest(listings)
        low_quality = [r.name or r.id for r in records if r.data_quality.is_low_confidence]
        if low_quality:
            logger.warning(f"Low data quality for: {', '.join(low_quality)}")
        return records

    def recommend(
        self,
        records: list[EnrichedNeighborhood],
        preferences: UserPreferences,
        top_n: Optional[int] = None,
    ) -> list[MatchScore]:
        top_n = self.settings.top_n if top_n is None else top_n
        matches = recommend(records, preferences, ledger=self.ledger, top_n=top_n)
        logger.info(f"Recommended {len(matches)} of {len(records)} neighborhoods")
        return matches

    def record_interaction(self, neighborhood_id: str, interaction_type: InteractionType | str) -> None:
        self.ledger.record(neighborhood_id, interaction_type)
