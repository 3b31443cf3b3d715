"""Sequential invoice and quote numbering."""

import logging
from pathlib import Path

from ..ports.sequence import SequenceStorePort
from .models import DocumentType

logger = logging.getLogger(__name__)

PREFIXES = {"invoice": "INV", "quote": "QTE"}
DEFAULT_STATE_PATH = Path(".state/invoice-sequence.json")


def year_month(issue_date: str) -> str:
    """YYYYMM from an ISO date; other strings give a consistent but odd key."""
    return issue_date.replace("-", "")[:6]


def sequence_key(issue_date: str, document_type: DocumentType) -> str:
    return f"{document_type}-{year_month(issue_date)}"


def format_document_number(document_type: DocumentType, yyyymm: str, seq: int) -> str:
    prefix = PREFIXES.get(document_type, "INV")
    return f"{prefix}-{yyyymm}-{seq:03d}"


class DocumentNumberAllocator:
    """Hands out numbers like INV-202603-001, one counter per type and month.

    Every call consumes a value, even if the document is later rejected.
    """

    def __init__(self, store: SequenceStorePort) -> None:
        self.store = store

    def allocate(self, issue_date: str, document_type: DocumentType) -> str:
        seq = self.store.increment(sequence_key(issue_date, document_type))
        number = format_document_number(document_type, year_month(issue_date), seq)
        logger.info(f"Allocated document number {number}")
        return number
