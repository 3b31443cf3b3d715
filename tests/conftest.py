"""Shared test fixtures."""

from datetime import date
from pathlib import Path
from typing import Any

import pytest

from invoice_flow.adapters.sequence import InMemorySequenceStore
from invoice_flow.domain.models import BusinessProfile, InvoiceInput
from invoice_flow.domain.numbering import DocumentNumberAllocator
from invoice_flow.domain.schema import parse_document
from invoice_flow.domain.services import InvoiceService

VALID_ABN = "51 824 753 556"
VALID_CLIENT_ABN = "53 004 085 616"
TODAY = date(2026, 3, 5)


@pytest.fixture
def profile_data() -> dict[str, Any]:
    """Raw business profile as read from disk."""
    return {
        "businessName": "Lens & Light Photography",
        "legalName": "Jordan Example",
        "abn": VALID_ABN,
        "email": "hello@lensandlight.example",
        "phone": "0400 000 000",
        "address": "12 Harbour St, Sydney NSW 2000",
        "defaultTermsDays": 14,
        "payment": {
            "bankName": "Example Bank",
            "accountName": "Jordan Example",
            "bsb": "062-000",
            "accountNumber": "12345678",
            "payId": "hello@lensandlight.example",
        },
        "notesFooter": "Thank you for your business.",
    }


@pytest.fixture
def profile(profile_data: dict[str, Any]) -> BusinessProfile:
    return parse_document(BusinessProfile, profile_data)


@pytest.fixture
def invoice_data() -> dict[str, Any]:
    """Valid GST-free invoice input."""
    return {
        "issueDate": "2026-03-05",
        "dueDate": "2026-03-19",
        "client": {"name": "Sam Client", "email": "sam@client.example"},
        "lineItems": [
            {"description": "Photography session", "quantity": 2, "unitPrice": 250},
            {"description": "Prints", "quantity": 3, "unitPrice": 19.99, "taxable": False},
        ],
    }


@pytest.fixture
def invoice(invoice_data: dict[str, Any]) -> InvoiceInput:
    return parse_document(InvoiceInput, invoice_data)


@pytest.fixture
def memory_store() -> InMemorySequenceStore:
    return InMemorySequenceStore()


@pytest.fixture
def allocator(memory_store: InMemorySequenceStore) -> DocumentNumberAllocator:
    return DocumentNumberAllocator(memory_store)


@pytest.fixture
def service(memory_store: InMemorySequenceStore) -> InvoiceService:
    """Service wired to an in-memory counter and a fixed date."""
    return InvoiceService(
        store_factory=lambda path: memory_store,
        state_path=Path("unused.json"),
        today=lambda: TODAY,
    )
