"""In-memory store of user interactions that nudges match rankings."""

import logging
import threading
from typing import Optional

from config.scoring_weights import (
    INTERACTION_DELTAS,
    INTERACTION_SCALE,
    MAX_INTERACTION_ADJUSTMENT,
)
from models.enums import InteractionType
from models.match import MatchScore
from scoring.ranker import sort_matches

logger = logging.getLogger(__name__)


class InteractionLedger:
    """Accumulated interaction score per neighborhood id.

    Each interaction adds a fixed delta (view +1, save +3, contact +5,
    reject -2). Totals live for the lifetime of the ledger: no decay, no
    persistence.
    """

    def __init__(self, initial: Optional[dict[str, int]] = None):
        self._values: dict[str, int] = dict(initial or {})
        self._lock = threading.Lock()

    def record(self, neighborhood_id: str, interaction_type: InteractionType | str) -> None:
        if not neighborhood_id:
            logger.warning("Ignoring interaction without a neighborhood id")
            return
        try:
            interaction = InteractionType(interaction_type)
        except ValueError:
            logger.warning(f"Ignoring unknown interaction type {interaction_type!r} for {neighborhood_id}")
            return

        delta = INTERACTION_DELTAS[interaction.value]
        with self._lock:
            self._values[neighborhood_id] = self._values.get(neighborhood_id, 0) + delta
        logger.debug(f"Recorded {interaction.value} for {neighborhood_id} ({delta:+d})")

    def value(self, neighborhood_id: str) -> int:
        with self._lock:
            return self._values.get(neighborhood_id, 0)

    def adjustment(self, neighborhood_id: str) -> float:
        """Total-score nudge for a neighborhood, capped at +/-0.2."""
        raw = self.value(neighborhood_id) * INTERACTION_SCALE
        return min(MAX_INTERACTION_ADJUSTMENT, max(-MAX_INTERACTION_ADJUSTMENT, raw))

    def adjust(self, matches: list[MatchScore]) -> list[MatchScore]:
        """Return re-sorted copies of `matches` with interaction nudges applied."""
        adjusted = []
        for match in matches:
            total = match.total_score + self.adjustment(match.neighborhood_id)
            adjusted.append(
                match.model_copy(update={"total_score": min(1.0, max(0.0, total))})
            )
        return sort_matches(adjusted)

    def reset(self) -> None:
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
