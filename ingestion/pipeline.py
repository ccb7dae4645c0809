"""Neighborhood ingestion pipeline.

Enriches listing records with external attributes in fixed-size batches:

  1. Fetch external attributes (or synthesize them from the listing)
  2. Validate and normalize
  3. Assess data quality
  4. Merge into the listing

Each record moves through an explicit state machine:

  Pending -> Fetched | FallbackSynthesized -> Validated -> QualityAssessed
          -> Merged | DegradedMerged

A record that fails is retried a bounded number of times, then emitted as a
degraded record carrying the error. One record never fails its batch.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable, Optional

from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt, wait_fixed

from config.settings import Settings
from ingestion.fallback import synthesize_external
from ingestion.merge import degraded, merge
from ingestion.quality import assess
from ingestion.validator import normalize
from models.enums import ProcessingState
from models.neighborhood import (
    Coordinates,
    DataQuality,
    EnrichedNeighborhood,
    ExternalAttributes,
    ListingRecord,
)
from sources.base import ExternalDataSource, Geocoder

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class IngestionStats:
    total: int = 0
    merged: int = 0
    fallback: int = 0  # Source unavailable, synthesized from listing
    retried: int = 0
    degraded: int = 0
    dropped: int = 0


@dataclass
class RecordJob:
    """Per-record processing state."""

    listing: ListingRecord
    state: ProcessingState = ProcessingState.PENDING
    raw: Any = None
    external: Optional[ExternalAttributes] = None
    quality: Optional[DataQuality] = None
    errors: list[str] = field(default_factory=list)

    def advance(self, state: ProcessingState) -> None:
        logger.debug(f"{self.listing.name or self.listing.id}: {self.state.value} -> {state.value}")
        self.state = state


class IngestionPipeline:
    def __init__(
        self,
        source: ExternalDataSource,
        settings: Optional[Settings] = None,
        geocoder: Optional[Geocoder] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.source = source
        self.settings = settings or Settings()
        self.geocoder = geocoder
        self.clock = clock
        # Counters of the most recently started run
        self.stats = IngestionStats()

    async def ingest(
        self,
        listings: list[ListingRecord],
        stats: Optional[IngestionStats] = None,
    ) -> list[EnrichedNeighborhood]:
        """Enrich all listings, batch by batch.

        Each run counts into its own stats object: the one passed in, or a
        fresh one. Concurrent runs never share counters.
        """
        if stats is None:
            stats = IngestionStats()
        stats.total = len(listings)
        self.stats = stats
        if not listings:
            return []

        batch_size = max(1, self.settings.batch_size)
        logger.info(f"Starting ingestion for {len(listings)} neighborhoods")

        enriched: list[EnrichedNeighborhood] = []
        for start in range(0, len(listings), batch_size):
            batch = listings[start:start + batch_size]
            enriched.extend(await self._process_batch(batch, stats))

            # Rate-limit courtesy towards the data source
            if start + batch_size < len(listings):
                await asyncio.sleep(self.settings.batch_delay_seconds)

        logger.info(
            f"Ingestion complete: {len(enriched)}/{len(listings)} processed "
            f"({stats.fallback} fallback, {stats.degraded} degraded, "
            f"{stats.dropped} dropped)"
        )
        return enriched

    async def _process_batch(
        self, batch: list[ListingRecord], stats: IngestionStats
    ) -> list[EnrichedNeighborhood]:
        results = await asyncio.gather(
            *(self.process_listing(listing, stats) for listing in batch),
            return_exceptions=True,
        )

        processed = []
        for listing, result in zip(batch, results):
            if isinstance(result, BaseException):
                logger.error(f"Dropping {listing.name or listing.id}: {type(result).__name__}: {result}")
                stats.dropped += 1
                continue
            processed.append(result)
        return processed

    async def process_listing(
        self, listing: ListingRecord, stats: Optional[IngestionStats] = None
    ) -> EnrichedNeighborhood:
        """Process one listing, retrying on failure and degrading after the last attempt."""
        if stats is None:
            stats = IngestionStats(total=1)
        listing = await self._locate(listing)
        max_attempts = self.settings.max_retries + 1

        def before_sleep(retry_state: RetryCallState) -> None:
            stats.retried += 1
            logger.error(
                f"Error processing {listing.name} "
                f"(attempt {retry_state.attempt_number}/{max_attempts}): {retry_state.outcome.exception()}"
            )
            logger.info(f"Retrying {listing.name} in {self.settings.retry_delay_seconds}s")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_fixed(self.settings.retry_delay_seconds),
            sleep=asyncio.sleep,
            before_sleep=before_sleep,
            reraise=True,
        )
        try:
            record = await retrying(self._process_once, listing)
        except Exception as e:
            logger.error(f"Error processing {listing.name} (attempt {max_attempts}/{max_attempts}): {e}")
            logger.warning(f"Max retries reached for {listing.name}, using fallback data")
            stats.degraded += 1
            now = self.clock()
            external = normalize(None, listing, now).record
            return degraded(listing, external, str(e) or type(e).__name__, now)

        if record.processing_errors:
            stats.fallback += 1
        stats.merged += 1
        return record

    async def _process_once(self, listing: ListingRecord) -> EnrichedNeighborhood:
        job = RecordJob(listing=listing)
        now = self.clock()

        await self._fetch(job, now)

        result = normalize(job.raw, listing, now)
        if result.corrections:
            logger.warning(f"Data validation issues for {listing.name}: {result.corrections}")
        job.external = result.record
        job.advance(ProcessingState.VALIDATED)

        job.quality = assess(job.external, listing, now)
        job.advance(ProcessingState.QUALITY_ASSESSED)

        record = merge(listing, job.external, job.quality, job.errors, now)
        job.advance(ProcessingState.MERGED)
        return record

    async def _fetch(self, job: RecordJob, now: datetime) -> None:
        try:
            job.raw = await self.source.fetch_external_attributes(job.listing)
            job.advance(ProcessingState.FETCHED)
        except Exception as e:
            logger.warning(
                f"External data fetch failed for {job.listing.name}, using fallback: {e}"
            )
            job.errors.append(
                f"External data unavailable from {self.source.source_name}: {str(e) or type(e).__name__}"
            )
            job.raw = synthesize_external(job.listing, now)
            job.advance(ProcessingState.FALLBACK_SYNTHESIZED)

    async def _locate(self, listing: ListingRecord) -> ListingRecord:
        """Fill missing coordinates (and population) from the geocoder, if any."""
        if self.geocoder is None or listing.coordinates is not None:
            return listing
        try:
            place = await self.geocoder.geocode(listing.name)
        except Exception as e:
            logger.warning(f"Geocoding failed for {listing.name}: {e}")
            return listing
        if place is None:
            return listing

        update: dict = {"coordinates": Coordinates(lat=place.lat, lng=place.lng)}
        if not listing.demographics.population and place.population:
            update["demographics"] = listing.demographics.model_copy(
                update={"population": place.population}
            )
        return listing.model_copy(update=update)
