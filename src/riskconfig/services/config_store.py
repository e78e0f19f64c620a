"""In-memory configuration store.

Records live in a plain dict for the lifetime of the process. Nothing is
persisted; a restart starts from an empty store.
"""

import copy
import dataclasses
import logging
import threading
from datetime import timedelta
from typing import Any, Optional

from ..interfaces import Clock, ConfigRecord, IConfigStore, utc_now

logger = logging.getLogger(__name__)

# Smallest step datetime can represent
_TICK = timedelta(microseconds=1)


def _snapshot(record: ConfigRecord) -> ConfigRecord:
    """Copy handed to callers; the stored record is never exposed."""
    return dataclasses.replace(record, config=copy.deepcopy(record.config))


class ConfigStore(IConfigStore):
    """Keyed configuration store with create/update timestamps.

    Usage:
        store = ConfigStore()
        record = store.save("portfolio-123", {"riskThreshold": 0.15})
        record.is_update  # False
        store.save("portfolio-123", {"riskThreshold": 0.12}).is_update  # True

    Every operation runs under one lock, so a concurrent save and delete on
    the same key cannot interleave when handlers run on a thread pool.
    Records returned to callers are copies; mutating them does not change
    what is stored.
    """

    def __init__(self, clock: Clock = utc_now):
        """Initialize an empty store.

        Args:
            clock: Returns the current time. Defaults to UTC wall clock.
        """
        self._clock = clock
        self._records: dict[str, ConfigRecord] = {}
        self._lock = threading.RLock()

    def save(self, resource_id: str, config: dict[str, Any]) -> ConfigRecord:
        """Create or replace the configuration for ``resource_id``.

        The payload replaces any previous one wholesale; nothing is merged.
        ``created_at`` is kept from the existing record. ``updated_at`` always
        moves strictly forward, even if the clock does not, so callers can
        tell a first save from a later one by comparing the two.

        Returns:
            The stored record.
        """
        with self._lock:
            existing = self._records.get(resource_id)
            now = self._clock()

            if existing is None:
                record = ConfigRecord(
                    resource_id=resource_id,
                    config=copy.deepcopy(config),
                    created_at=now,
                    updated_at=now,
                )
                logger.debug(f"Created config for {resource_id!r}")
            else:
                if now <= existing.updated_at:
                    now = existing.updated_at + _TICK
                record = ConfigRecord(
                    resource_id=resource_id,
                    config=copy.deepcopy(config),
                    created_at=existing.created_at,
                    updated_at=now,
                )
                logger.debug(f"Replaced config for {resource_id!r}")

            # Re-assigning an existing key keeps its dict position
            self._records[resource_id] = record
            return _snapshot(record)

    def get(self, resource_id: str) -> Optional[ConfigRecord]:
        with self._lock:
            record = self._records.get(resource_id)
            return _snapshot(record) if record is not None else None

    def get_all(self) -> list[ConfigRecord]:
        with self._lock:
            return [_snapshot(r) for r in self._records.values()]

    def delete(self, resource_id: str) -> Optional[ConfigRecord]:
        """Remove the record for ``resource_id``.

        Returns:
            The record as it was just before deletion, or None if absent
            (the store is left untouched).
        """
        with self._lock:
            record = self._records.pop(resource_id, None)
            if record is not None:
                logger.debug(f"Deleted config for {resource_id!r}")
            return record

    def exists(self, resource_id: str) -> bool:
        with self._lock:
            return resource_id in self._records

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, resource_id: object) -> bool:
        return isinstance(resource_id, str) and self.exists(resource_id)
