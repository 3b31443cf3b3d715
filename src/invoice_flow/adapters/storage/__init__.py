"""Storage adapters."""

from .filesystem import (
    FilesystemArtifactStorage,
    is_likely_path,
    read_file_or_literal,
    write_json,
)

__all__ = ["FilesystemArtifactStorage", "is_likely_path", "read_file_or_literal", "write_json"]
