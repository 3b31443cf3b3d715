"""Ports - interfaces for external dependencies."""

from .renderer import RendererPort
from .sequence import SequenceStorePort
from .storage import ArtifactStoragePort

__all__ = ["ArtifactStoragePort", "RendererPort", "SequenceStorePort"]
