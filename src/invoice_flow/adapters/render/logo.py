"""Business logo lookup shared by the renderers."""

import base64
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

LOGO_MIME_TYPES = {".svg": "image/svg+xml", ".png": "image/png", ".webp": "image/webp"}


def resolve_logo(logo_path: str | None) -> Path | None:
    """Absolute logo path, or None when unset or missing (relative to cwd)."""
    if not logo_path:
        return None
    path = Path(logo_path).expanduser().resolve()
    if not path.is_file():
        logger.warning(f"Logo not found, skipping: {path}")
        return None
    return path


def logo_data_uri(logo_path: str | None) -> str | None:
    """Inline data: URI for the logo; unknown extensions are sent as JPEG."""
    path = resolve_logo(logo_path)
    if path is None:
        return None
    mime = LOGO_MIME_TYPES.get(path.suffix.lower(), "image/jpeg")
    data = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{data}"
