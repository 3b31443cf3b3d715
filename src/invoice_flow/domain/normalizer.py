"""Normalizer - computes money values and resolves defaults."""

from .models import (
    BusinessProfile,
    DocumentType,
    InvoiceInput,
    InvoiceLineItem,
    InvoiceNormalized,
    NormalizedLineItem,
)
from .money import gst_component, round_money
from .numbering import DocumentNumberAllocator

FALLBACK_CURRENCY = "AUD"


def normalize_line_item(item: InvoiceLineItem, gst_enabled: bool) -> NormalizedLineItem:
    taxable = True if item.taxable is None else item.taxable
    line_total = round_money(item.quantity * item.unit_price)
    gst_amount = gst_component(line_total) if gst_enabled and taxable else 0.0

    return NormalizedLineItem(
        description=item.description,
        quantity=item.quantity,
        unit_price=item.unit_price,
        taxable=taxable,
        line_total=line_total,
        gst_amount=gst_amount,
    )


def invoice_label(document_type: DocumentType, gst_enabled: bool) -> str:
    if document_type == "quote":
        return "Quote"
    return "Tax Invoice" if gst_enabled else "Invoice"


def normalize_invoice(
    profile: BusinessProfile,
    invoice: InvoiceInput,
    allocator: DocumentNumberAllocator,
    forced_document_type: DocumentType | None = None,
) -> InvoiceNormalized:
    """Build the canonical document.

    Prices are GST-inclusive: gstTotal discloses the GST already contained in
    the line totals, and total equals subtotal. Lines are rounded before they
    are summed. Allocates a number only when the input has none.
    """
    document_type: DocumentType = forced_document_type or invoice.document_type or "invoice"
    gst_enabled = bool(invoice.gst_enabled)
    currency = invoice.currency or profile.currency or FALLBACK_CURRENCY
    invoice_number = invoice.invoice_number or allocator.allocate(
        invoice.issue_date, document_type
    )

    line_items = [normalize_line_item(item, gst_enabled) for item in invoice.line_items]
    subtotal = round_money(sum(item.line_total for item in line_items))
    gst_total = round_money(sum(item.gst_amount for item in line_items))

    payment = invoice.payment
    reference = payment.reference if payment and payment.reference else invoice_number
    terms_days = (
        payment.terms_days
        if payment and payment.terms_days is not None
        else profile.default_terms_days
    )

    if document_type == "quote":
        date_label, date_value = "Valid Until", invoice.valid_until or invoice.due_date
    else:
        date_label, date_value = "Due Date", invoice.due_date

    return InvoiceNormalized(
        document_type=document_type,
        invoice_label=invoice_label(document_type, gst_enabled),
        date_label=date_label,
        date_value=date_value,
        invoice_number=invoice_number,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        valid_until=invoice.valid_until,
        currency=currency,
        gst_enabled=gst_enabled,
        client=invoice.client,
        session=invoice.session,
        line_items=line_items,
        subtotal=subtotal,
        gst_total=gst_total,
        total=subtotal,
        payment_reference=reference,
        terms_days=terms_days,
        notes=invoice.notes,
    )
