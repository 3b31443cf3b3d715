"""Australian invoicing rules applied to structurally valid documents."""

from .abn import is_valid_abn
from .models import DocumentType, InvoiceInput, ValidationMessage

# Above this GST-inclusive amount a tax invoice must identify the buyer.
BUYER_DETAILS_THRESHOLD = 1000

GST_ENABLED_FLAG = "GST_OPTION_ENABLED"
GST_DISABLED_FLAG = "GST_OPTION_DISABLED"
QUOTE_RULES_FLAG = "AU_QUOTE_RULES_V1"
INVOICE_RULES_FLAG = "AU_INVOICE_RULES_V1"


def gross_estimate(invoice: InvoiceInput) -> float:
    """Unrounded sum of quantity x unit price over every line."""
    return sum(item.quantity * item.unit_price for item in invoice.line_items)


def compliance_checks(seller_abn: str | None, invoice: InvoiceInput) -> list[ValidationMessage]:
    """Evaluate every rule; each one reports independently of the others."""
    checks: list[ValidationMessage] = []
    document_type: DocumentType = invoice.document_type or "invoice"
    client = invoice.client

    if seller_abn and not is_valid_abn(seller_abn):
        checks.append(
            ValidationMessage(
                code="INVALID_SELLER_ABN_FORMAT",
                severity="warning",
                message="Business profile ABN does not pass checksum validation.",
                path="/abn",
            )
        )

    if client.abn and not is_valid_abn(client.abn):
        checks.append(
            ValidationMessage(
                code="INVALID_CLIENT_ABN_FORMAT",
                severity="warning",
                message="Client ABN does not pass checksum validation.",
                path="/client/abn",
            )
        )

    if document_type == "invoice" and invoice.gst_enabled:
        if not seller_abn:
            checks.append(
                ValidationMessage(
                    code="MISSING_SELLER_ABN",
                    severity="error",
                    message="GST-enabled invoices should include seller ABN.",
                    path="/abn",
                )
            )

        if gross_estimate(invoice) >= BUYER_DETAILS_THRESHOLD:
            has_identity = bool(client.name.strip())
            has_address_or_abn = bool(client.address or client.abn)
            if not (has_identity and has_address_or_abn):
                checks.append(
                    ValidationMessage(
                        code="MISSING_BUYER_DETAILS_FOR_1000_PLUS",
                        severity="error",
                        message=(
                            "GST-enabled tax invoices for totals >= AUD 1,000 must "
                            "include recipient identity and address or ABN."
                        ),
                        path="/client",
                    )
                )

    return checks


def compliance_flags(gst_enabled: bool, document_type: DocumentType) -> tuple[str, str]:
    return (
        GST_ENABLED_FLAG if gst_enabled else GST_DISABLED_FLAG,
        QUOTE_RULES_FLAG if document_type == "quote" else INVOICE_RULES_FLAG,
    )
