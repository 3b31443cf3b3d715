"""In-memory sequence store."""

from ...ports.sequence import SequenceStorePort


class InMemorySequenceStore(SequenceStorePort):
    """Counter store that lives for the lifetime of the object."""

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self.counters: dict[str, int] = dict(initial or {})

    def get(self, key: str) -> int:
        return self.counters.get(key, 0)

    def increment(self, key: str) -> int:
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]
