"""Profile and invoice validation: schema first, then compliance rules."""

import logging
from collections.abc import Mapping
from typing import Any

from .compliance import compliance_checks, compliance_flags
from .models import BusinessProfile, InvoiceInput, ValidationResult
from .schema import check_schema

logger = logging.getLogger(__name__)


def _seller_abn(profile: Any) -> str | None:
    if isinstance(profile, BusinessProfile):
        return profile.abn
    if not isinstance(profile, Mapping):
        return None
    abn = profile.get("abn")
    return abn if isinstance(abn, str) else None


def validate_profile(candidate: Any) -> ValidationResult:
    _, errors = check_schema(BusinessProfile, candidate)
    return ValidationResult(errors=tuple(errors))


def validate_invoice(profile: Any, candidate: Any) -> ValidationResult:
    """Validate an invoice or quote against the schema and AU rules.

    Compliance rules only run on structurally valid documents. The profile may
    be raw, even malformed, profile data so a report is produced regardless.
    """
    invoice, errors = check_schema(InvoiceInput, candidate)
    warnings = []

    if invoice is not None:
        for msg in compliance_checks(_seller_abn(profile), invoice):
            if msg.severity == "error":
                errors.append(msg)
            else:
                warnings.append(msg)

    raw = candidate if isinstance(candidate, Mapping) else {}
    document_type = "quote" if raw.get("documentType") == "quote" else "invoice"
    flags = compliance_flags(bool(raw.get("gstEnabled")), document_type)

    if errors:
        logger.info(f"Document rejected with {len(errors)} error(s)")
    return ValidationResult(
        errors=tuple(errors), warnings=tuple(warnings), compliance_flags=flags
    )
