"""Top-N leaderboard persisted as one JSON array under a single key."""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, List, Mapping, Union

from pydantic import ValidationError

from ..core.config import LEADERBOARD_KEY, LEADERBOARD_LIMIT
from ..core.errors import MalformedStoredData, StorageUnavailable
from ..models import ScoreEntry
from ..storage import KeyValueStore

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Reads and updates the shared leaderboard.

    The collection is kept sorted ascending by ``captcha_seconds`` and cut to
    ``limit`` entries at write time, so reads return the stored order as is.
    Reads fail soft to an empty list unless ``strict_reads`` is set.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = LEADERBOARD_KEY,
        limit: int = LEADERBOARD_LIMIT,
        strict_reads: bool = False,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.store = store
        self.key = key
        self.limit = limit
        self.strict_reads = strict_reads
        # Serializes read-modify-write within this process only; separate
        # processes sharing the key still overwrite each other.
        self._write_lock = threading.Lock()

    def list(self) -> List[ScoreEntry]:
        """Return the stored leaderboard, fastest first."""

        try:
            raw = self.store.get(self.key)
            if raw is None:
                return []
            return self._decode(raw)[: self.limit]
        except (StorageUnavailable, MalformedStoredData) as exc:
            if self.strict_reads:
                raise
            logger.warning("Serving empty leaderboard for %r: %s", self.key, exc)
            return []

    def submit(self, entry: Union[ScoreEntry, Mapping[str, Any]]) -> List[ScoreEntry]:
        """Add one entry, re-rank, truncate and persist the whole collection.

        Returns the collection exactly as written. Raises
        ``ScoreValidationError`` for a bad submission and
        ``StorageUnavailable`` when the store cannot be read or written; in
        both cases nothing is persisted.
        """

        if not isinstance(entry, ScoreEntry):
            entry = ScoreEntry.from_payload(entry)

        with self._write_lock:
            entries = self._read_for_update()
            entries.append(entry)
            # sorted() is stable: equal times keep their submission order.
            ranked = sorted(entries, key=lambda e: e.captcha_seconds)[: self.limit]
            try:
                self.store.put(self.key, self._encode(ranked))
            except StorageUnavailable:
                logger.error("Failed to persist leaderboard %r", self.key)
                raise

        logger.info(
            "Recorded %.2fs for %s (%s); leaderboard holds %d entries",
            entry.captcha_seconds,
            entry.name,
            "ranked" if any(e is entry for e in ranked) else "outside top",
            len(ranked),
        )
        return ranked

    def _read_for_update(self) -> List[ScoreEntry]:
        raw = self.store.get(self.key)
        if raw is None:
            return []
        try:
            return self._decode(raw)
        except MalformedStoredData as exc:
            if self.strict_reads:
                raise
            logger.warning("Discarding unreadable leaderboard %r: %s", self.key, exc)
            return []

    def _decode(self, raw: str) -> List[ScoreEntry]:
        try:
            items = json.loads(raw)
        except ValueError as exc:
            raise MalformedStoredData(f"Stored leaderboard is not valid JSON: {exc}") from exc
        if not isinstance(items, list):
            raise MalformedStoredData("Stored leaderboard is not a JSON array")

        entries: List[ScoreEntry] = []
        for index, item in enumerate(items):
            try:
                entries.append(ScoreEntry.from_stored(item))
            except ValidationError as exc:
                logger.warning("Skipping stored entry #%d: %s", index, exc)
        return entries

    @staticmethod
    def _encode(entries: List[ScoreEntry]) -> str:
        return json.dumps([entry.to_wire() for entry in entries])


__all__ = ["LeaderboardService"]
