"""Unit tests for the normalizer / money engine."""

import json
from typing import Any

import pytest

from invoice_flow.adapters.sequence import InMemorySequenceStore
from invoice_flow.domain.models import BusinessProfile, InvoiceInput, InvoiceNormalized
from invoice_flow.domain.normalizer import invoice_label, normalize_invoice
from invoice_flow.domain.numbering import DocumentNumberAllocator
from invoice_flow.domain.schema import parse_document


def normalize(
    profile: BusinessProfile,
    data: dict[str, Any],
    allocator: DocumentNumberAllocator,
    forced: str | None = None,
) -> InvoiceNormalized:
    return normalize_invoice(profile, parse_document(InvoiceInput, data), allocator, forced)


class TestLineItems:
    """Tests for per-line money values."""

    def test_line_totals(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        doc = normalize_invoice(profile, invoice, allocator)
        assert [i.line_total for i in doc.line_items] == [500.0, 59.97]

    def test_no_gst_when_disabled(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        doc = normalize_invoice(profile, invoice, allocator)
        assert [i.gst_amount for i in doc.line_items] == [0.0, 0.0]
        assert doc.gst_total == 0.0

    def test_gst_only_on_taxable_lines(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["gstEnabled"] = True
        doc = normalize(profile, invoice_data, allocator)

        assert [i.gst_amount for i in doc.line_items] == [45.45, 0.0]
        assert [i.taxable for i in doc.line_items] == [True, False]
        assert doc.gst_total == 45.45

    def test_taxable_defaults_true(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        assert invoice.line_items[0].taxable is None
        doc = normalize_invoice(profile, invoice, allocator)
        assert doc.line_items[0].taxable is True


class TestTotals:
    """Tests for aggregate values."""

    def test_subtotal_and_total(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        doc = normalize_invoice(profile, invoice, allocator)
        assert doc.subtotal == 559.97
        assert doc.total == doc.subtotal

    def test_total_excludes_gst(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["gstEnabled"] = True
        doc = normalize(profile, invoice_data, allocator)
        assert doc.total == 559.97
        assert doc.gst_total == 45.45

    def test_lines_rounded_before_summing(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["lineItems"] = [
            {"description": f"Item {n}", "quantity": 1, "unitPrice": 0.005} for n in range(3)
        ]
        doc = normalize(profile, invoice_data, allocator)
        assert [i.line_total for i in doc.line_items] == [0.01, 0.01, 0.01]
        assert doc.subtotal == 0.03

    def test_gst_rounded_per_line(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["gstEnabled"] = True
        invoice_data["lineItems"] = [
            {"description": f"Item {n}", "quantity": 1, "unitPrice": 5} for n in range(3)
        ]
        doc = normalize(profile, invoice_data, allocator)
        # 3 x round(5/11) rather than round(15/11) = 1.36
        assert doc.gst_total == 1.35

    def test_sums_match_lines(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["gstEnabled"] = True
        invoice_data["lineItems"] = [
            {"description": "A", "quantity": 1.5, "unitPrice": 33.33},
            {"description": "B", "quantity": 7, "unitPrice": 12.49},
            {"description": "C", "quantity": 2, "unitPrice": 0.99, "taxable": False},
        ]
        doc = normalize(profile, invoice_data, allocator)
        assert doc.subtotal == pytest.approx(sum(i.line_total for i in doc.line_items))
        assert doc.gst_total == pytest.approx(sum(i.gst_amount for i in doc.line_items))


class TestLabels:
    """Tests for label and date derivation."""

    @pytest.mark.parametrize(
        ("document_type", "gst", "expected"),
        [
            ("invoice", True, "Tax Invoice"),
            ("invoice", False, "Invoice"),
            ("quote", True, "Quote"),
            ("quote", False, "Quote"),
        ],
    )
    def test_invoice_label(self, document_type: str, gst: bool, expected: str) -> None:
        assert invoice_label(document_type, gst) == expected

    def test_invoice_due_date(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        doc = normalize_invoice(profile, invoice, allocator)
        assert (doc.date_label, doc.date_value) == ("Due Date", "2026-03-19")

    def test_quote_valid_until(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["documentType"] = "quote"
        invoice_data["validUntil"] = "2026-04-30"
        doc = normalize(profile, invoice_data, allocator)
        assert doc.invoice_label == "Quote"
        assert (doc.date_label, doc.date_value) == ("Valid Until", "2026-04-30")

    def test_quote_falls_back_to_due_date(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["documentType"] = "quote"
        doc = normalize(profile, invoice_data, allocator)
        assert (doc.date_label, doc.date_value) == ("Valid Until", "2026-03-19")


class TestDefaults:
    """Tests for default resolution."""

    def test_currency_fallback(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        assert normalize_invoice(profile, invoice, allocator).currency == "AUD"

    def test_currency_from_profile(
        self,
        profile_data: dict[str, Any],
        invoice: InvoiceInput,
        allocator: DocumentNumberAllocator,
    ) -> None:
        profile_data["currency"] = "NZD"
        profile = parse_document(BusinessProfile, profile_data)
        assert normalize_invoice(profile, invoice, allocator).currency == "NZD"

    def test_currency_from_input(
        self,
        profile_data: dict[str, Any],
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        profile_data["currency"] = "NZD"
        invoice_data["currency"] = "USD"
        profile = parse_document(BusinessProfile, profile_data)
        assert normalize(profile, invoice_data, allocator).currency == "USD"

    def test_payment_defaults(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        doc = normalize_invoice(profile, invoice, allocator)
        assert doc.payment_reference == doc.invoice_number == "INV-202603-001"
        assert doc.terms_days == 14

    def test_payment_overrides(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["payment"] = {"reference": "SAM-WEDDING", "termsDays": 0}
        doc = normalize(profile, invoice_data, allocator)
        assert doc.payment_reference == "SAM-WEDDING"
        assert doc.terms_days == 0

    def test_gst_flag_defaults_false(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        assert normalize_invoice(profile, invoice, allocator).gst_enabled is False


class TestNumbering:
    """Tests for invoice number resolution."""

    def test_consecutive_allocation(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        first = normalize_invoice(profile, invoice, allocator)
        second = normalize_invoice(profile, invoice, allocator)
        assert first.invoice_number == "INV-202603-001"
        assert second.invoice_number == "INV-202603-002"

    def test_explicit_number_does_not_allocate(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
        memory_store: InMemorySequenceStore,
    ) -> None:
        invoice_data["invoiceNumber"] = "INV-CUSTOM-7"
        doc = normalize(profile, invoice_data, allocator)
        assert doc.invoice_number == "INV-CUSTOM-7"
        assert memory_store.counters == {}

    def test_forced_quote(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        doc = normalize_invoice(profile, invoice, allocator, "quote")
        assert doc.document_type == "quote"
        assert doc.invoice_number == "QTE-202603-001"


class TestOutputDocument:
    """Tests for the serialized normalized document."""

    def test_json_shape(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["session"] = {"type": "Wedding", "photographer": "Jordan"}
        data = normalize(profile, invoice_data, allocator).to_json_dict()

        assert data["schemaVersion"] == "invoice-normalized-v1"
        assert data["invoiceLabel"] == "Invoice"
        assert data["lineItems"][0]["lineTotal"] == 500.0
        assert data["session"] == {"type": "Wedding", "photographer": "Jordan"}
        assert data["client"] == {"name": "Sam Client", "email": "sam@client.example"}
        assert "validUntil" not in data
        assert "notes" not in data

    def test_whole_numbers_written_as_integers(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        data = normalize_invoice(profile, invoice, allocator).to_json_dict()
        first, second = data["lineItems"]

        assert [first["quantity"], first["unitPrice"], first["lineTotal"]] == [2, 250, 500]
        assert all(type(first[k]) is int for k in ("quantity", "unitPrice", "lineTotal"))
        assert (second["unitPrice"], second["lineTotal"]) == (19.99, 59.97)
        assert json.dumps(data["gstTotal"]) == "0"

    def test_deterministic_with_explicit_number(
        self,
        profile: BusinessProfile,
        invoice_data: dict[str, Any],
        allocator: DocumentNumberAllocator,
    ) -> None:
        invoice_data["invoiceNumber"] = "INV-202603-042"
        invoice_data["gstEnabled"] = True
        first = json.dumps(normalize(profile, invoice_data, allocator).to_json_dict())
        second = json.dumps(normalize(profile, invoice_data, allocator).to_json_dict())
        assert first == second

    def test_immutable(
        self, profile: BusinessProfile, invoice: InvoiceInput, allocator: DocumentNumberAllocator
    ) -> None:
        doc = normalize_invoice(profile, invoice, allocator)
        with pytest.raises(Exception):
            doc.total = 0
