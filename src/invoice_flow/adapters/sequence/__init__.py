"""Sequence store adapters."""

from .json_file import DEFAULT_STATE_PATH, JsonFileSequenceStore
from .memory import InMemorySequenceStore

__all__ = ["DEFAULT_STATE_PATH", "InMemorySequenceStore", "JsonFileSequenceStore"]
