"""Storage adapter using local filesystem."""

import json
import logging
from pathlib import Path
from typing import Any

from ...ports.storage import ArtifactStoragePort

logger = logging.getLogger(__name__)


def is_likely_path(arg: str) -> bool:
    """Check if a CLI argument names an existing file rather than inline content."""
    if not arg.strip():
        return False
    if "\n" in arg:
        return False
    if arg.strip().startswith("{"):
        return False
    try:
        return Path(arg).expanduser().is_file()
    except OSError:
        # Inline text too long to be a file name
        return False


def read_file_or_literal(arg: str) -> str:
    """Return file contents if arg is a path, otherwise arg itself."""
    if is_likely_path(arg):
        path = Path(arg).expanduser()
        logger.debug(f"Reading input from {path}")
        return path.read_text(encoding="utf-8")
    return arg


def write_json(path: Path, payload: Any) -> Path:
    """Write pretty-printed JSON with a trailing newline."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


class FilesystemArtifactStorage(ArtifactStoragePort):
    """Artifact storage in a single output directory."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path

    def path_for(self, name: str) -> Path:
        self.base_path.mkdir(parents=True, exist_ok=True)
        return (self.base_path / name).resolve()

    def write_json(self, name: str, payload: Any) -> Path:
        dest = write_json(self.path_for(name), payload)
        logger.info(f"Wrote: {dest.name}")
        return dest
