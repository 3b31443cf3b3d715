"""Sequence store port - interface for durable document counters."""

from abc import ABC, abstractmethod


class SequenceStorePort(ABC):
    """Interface for a key -> last-issued-integer counter store."""

    @abstractmethod
    def get(self, key: str) -> int:
        """Return the last issued value for key (0 if never issued)."""
        pass

    @abstractmethod
    def increment(self, key: str) -> int:
        """Advance the counter for key, persist it, and return the new value."""
        pass
