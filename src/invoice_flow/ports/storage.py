"""Storage port - interface for writing output artifacts."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class ArtifactStoragePort(ABC):
    """Interface for artifact storage."""

    @abstractmethod
    def path_for(self, name: str) -> Path:
        """Return the destination path for an artifact, creating parents."""
        pass

    @abstractmethod
    def write_json(self, name: str, payload: Any) -> Path:
        """Write a JSON artifact.

        Returns path to the written file.
        """
        pass
