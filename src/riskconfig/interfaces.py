"""Core interfaces for the Risk Configuration service.

The HTTP layer only talks to the store through ``IConfigStore``, so tests
can swap in an isolated instance per case.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

# Wall-clock source. Injected so tests can control time.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ConfigRecord:
    """A stored configuration with its timestamps.

    Attributes:
        resource_id: Opaque key the configuration is stored under.
        config: Caller-supplied payload. Stored as-is, never interpreted.
        created_at: Set once, on the first save for ``resource_id``.
        updated_at: Set on every save, including the first.
    """
    resource_id: str
    config: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @property
    def is_update(self) -> bool:
        """True once the record has been saved more than once."""
        return self.created_at != self.updated_at

    def __repr__(self) -> str:
        return (
            f"ConfigRecord(resource_id={self.resource_id!r}, "
            f"keys={sorted(self.config)}, updated_at={self.updated_at.isoformat()})"
        )


class IConfigStore(ABC):
    """Interface for keyed configuration storage."""

    @abstractmethod
    def save(self, resource_id: str, config: dict[str, Any]) -> ConfigRecord:
        """Create or wholesale-replace the configuration for ``resource_id``."""
        pass

    @abstractmethod
    def get(self, resource_id: str) -> Optional[ConfigRecord]:
        """Get the record for ``resource_id``, or None."""
        pass

    @abstractmethod
    def get_all(self) -> list[ConfigRecord]:
        """List every stored record in first-save order."""
        pass

    @abstractmethod
    def delete(self, resource_id: str) -> Optional[ConfigRecord]:
        """Remove and return the record, or None if it was not stored."""
        pass

    @abstractmethod
    def exists(self, resource_id: str) -> bool:
        """Check whether a record is stored for ``resource_id``."""
        pass

    def count(self) -> int:
        """Number of stored records."""
        return len(self.get_all())
