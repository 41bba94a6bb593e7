"""
History Service - ordered, capped, persistent log of conversions.

The newest record is always first. The log never holds more than `cap`
records; inserting past the cap drops the oldest. Every mutation is
written to storage immediately, already truncated to the cap.

Pure Python, no Streamlit dependencies.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from models.conversion import ConversionRecord
from services.errors import PersistenceError
from services.storage_service import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "linguaflow_history"
DEFAULT_HISTORY_CAP = 15


class HistoryService:
    """Conversion history synchronized with durable storage."""

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_HISTORY_KEY,
        cap: int = DEFAULT_HISTORY_CAP,
    ):
        if cap < 1:
            raise ValueError(f"History cap must be at least 1, got {cap}")
        self.storage = storage
        self.key = key
        self.cap = cap
        self._records: list[ConversionRecord] = []

    @property
    def records(self) -> list[ConversionRecord]:
        """Snapshot of the history, newest first."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> list[ConversionRecord]:
        """
        Replace the in-memory history with the persisted one.

        Unreadable or corrupt storage yields an empty history rather
        than an error. Individual entries that fail validation are
        skipped.
        """
        try:
            raw = self.storage.get_item(self.key)
        except PersistenceError as e:
            logger.warning(f"History unavailable, starting empty: {e}")
            self._records = []
            return self.records

        self._records = self._parse(raw)[: self.cap]
        logger.debug(f"Loaded {len(self._records)} history records")
        return self.records

    def append(self, record: ConversionRecord) -> list[ConversionRecord]:
        """
        Insert a record at the front and persist.

        Raises:
            PersistenceError: if saving fails; the in-memory history
                keeps the new record regardless
        """
        self._records = [record, *(r for r in self._records if r.id != record.id)]
        del self._records[self.cap:]
        self._persist()
        return self.records

    def clear(self):
        """Empty the history and persist the empty state."""
        self._records = []
        self._persist()

    def restore(self, record_id: str) -> Optional[ConversionRecord]:
        """Look up a record by id without changing the order."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def _persist(self):
        payload = json.dumps(
            [r.model_dump(mode="json") for r in self._records[: self.cap]],
            ensure_ascii=False,
        )
        self.storage.set_item(self.key, payload)

    def _parse(self, raw: Optional[str]) -> list[ConversionRecord]:
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse history, starting empty: {e}")
            return []
        if not isinstance(data, list):
            logger.warning("Persisted history is not a list, starting empty")
            return []

        records = []
        seen = set()
        for item in data:
            try:
                record = ConversionRecord.model_validate(item)
            except ValidationError as e:
                logger.warning(f"Skipping invalid history entry: {e}")
                continue
            if record.id in seen:
                continue
            seen.add(record.id)
            records.append(record)
        return records
