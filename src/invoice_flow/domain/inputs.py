"""Loading of invoice input as JSON or free text."""

import json
import logging
from datetime import date

from .models import LoadedInput
from .text_parser import parse_text_invoice

logger = logging.getLogger(__name__)


def load_invoice_input(content: str, today: date | None = None) -> LoadedInput:
    """Parse content as JSON, falling back to the free-text format."""
    try:
        data = json.loads(content.strip())
    except ValueError:
        logger.debug("Input is not JSON, parsing as text")
        return LoadedInput(data=parse_text_invoice(content, today), raw=content, source="text")
    return LoadedInput(data=data, raw=content, source="json")
