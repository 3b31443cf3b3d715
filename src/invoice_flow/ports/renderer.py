"""Renderer port - interface for turning a normalized document into an artifact."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import BusinessProfile, InvoiceNormalized


class RendererPort(ABC):
    """Interface for document rendering."""

    suffix: str

    @abstractmethod
    def render(
        self, profile: "BusinessProfile", normalized: "InvoiceNormalized", path: Path
    ) -> Path:
        """Render the document to path.

        Returns path to the written artifact.
        """
        pass
