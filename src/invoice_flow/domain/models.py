"""Domain models."""

import re
from dataclasses import asdict, dataclass
from datetime import date
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

DocumentType = Literal["invoice", "quote"]
Severity = Literal["error", "warning"]

NORMALIZED_SCHEMA_VERSION = "invoice-normalized-v1"
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _check_iso_date(value: str) -> str:
    if not ISO_DATE_PATTERN.match(value):
        raise PydanticCustomError("format", 'must match format "date"')
    try:
        date.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("format", 'must match format "date"') from None
    return value


IsoDate = Annotated[str, AfterValidator(_check_iso_date)]
Text = Annotated[str, Field(min_length=1)]


def _json_number(value: float) -> int | float:
    return int(value) if value.is_integer() else value


# Whole amounts are written as 500 rather than 500.0.
Amount = Annotated[
    float, PlainSerializer(_json_number, return_type=int | float, when_used="json")
]


class _Document(BaseModel):
    """Base for JSON documents exchanged with users (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PaymentDetails(_Document):
    bank_name: Text
    account_name: Text
    bsb: Text
    account_number: Text
    pay_id: Text
    payment_reference_label: str | None = None


class BusinessProfile(_Document):
    """Issuer identity and payment details (profile-v1)."""

    model_config = ConfigDict(title="profile-v1")

    business_name: str | None = None
    legal_name: Text
    abn: str | None = None
    email: Text
    phone: Text
    website: str | None = None
    address: Text
    logo_path: str | None = None
    currency: str | None = None
    default_terms_days: int = Field(ge=0)
    payment: PaymentDetails
    notes_footer: str | None = None
    sequence_state_path: str | None = None

    @property
    def display_name(self) -> str:
        return self.business_name or self.legal_name


class InvoiceClient(_Document):
    name: Text
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    abn: str | None = None


class InvoiceSession(_Document):
    """Free-form session metadata, passed through unmodified."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    shoot_date: str | None = None
    location: str | None = None


class InvoiceLineItem(_Document):
    description: Text
    quantity: float = Field(gt=0, allow_inf_nan=False)
    unit_price: float = Field(allow_inf_nan=False)
    taxable: bool | None = None


class PaymentOverride(_Document):
    terms_days: int | None = Field(default=None, ge=0)
    reference: str | None = None


class InvoiceInput(_Document):
    """User-supplied invoice or quote (invoice-input-v1)."""

    model_config = ConfigDict(title="invoice-input-v1")

    document_type: DocumentType | None = None
    invoice_number: str | None = None
    issue_date: IsoDate
    due_date: IsoDate
    valid_until: IsoDate | None = None
    currency: str | None = None
    gst_enabled: bool | None = None
    session: InvoiceSession | None = None
    client: InvoiceClient
    line_items: list[InvoiceLineItem] = Field(min_length=1)
    notes: str | None = None
    payment: PaymentOverride | None = None


class NormalizedLineItem(_Document):
    description: str
    quantity: Amount
    unit_price: Amount
    taxable: bool
    line_total: Amount
    gst_amount: Amount


class InvoiceNormalized(_Document):
    """Canonical computed document, the input to rendering."""

    model_config = ConfigDict(title=NORMALIZED_SCHEMA_VERSION)

    schema_version: Literal["invoice-normalized-v1"] = NORMALIZED_SCHEMA_VERSION
    document_type: DocumentType
    invoice_label: Literal["Invoice", "Tax Invoice", "Quote"]
    date_label: Literal["Due Date", "Valid Until"]
    date_value: str
    invoice_number: str
    issue_date: str
    due_date: str
    valid_until: str | None = None
    currency: str
    gst_enabled: bool
    client: InvoiceClient
    session: InvoiceSession | None = None
    line_items: list[NormalizedLineItem]
    subtotal: Amount
    gst_total: Amount
    total: Amount
    payment_reference: str
    terms_days: int
    notes: str | None = None


@dataclass(frozen=True)
class ValidationMessage:
    """Single validation finding."""

    code: str
    message: str
    severity: Severity
    path: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        if self.path is None:
            del data["path"]
        return data


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one document."""

    errors: tuple[ValidationMessage, ...] = ()
    warnings: tuple[ValidationMessage, ...] = ()
    compliance_flags: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [m.to_dict() for m in self.errors],
            "warnings": [m.to_dict() for m in self.warnings],
            "compliance_flags": list(self.compliance_flags),
        }


@dataclass(frozen=True)
class ValidationReport:
    """Combined profile and invoice results from the validate entry point."""

    profile: ValidationResult
    invoice: ValidationResult

    @property
    def valid(self) -> bool:
        return self.profile.valid and self.invoice.valid

    def to_dict(self) -> dict[str, Any]:
        return {"profile": self.profile.to_dict(), "invoice": self.invoice.to_dict()}


@dataclass
class LoadedInput:
    """Raw document content together with its parsed form."""

    data: Any
    raw: str
    source: Literal["json", "text"]


@dataclass
class ProcessedInvoice:
    """Result of the generate/preview pipeline."""

    profile: BusinessProfile
    normalized: InvoiceNormalized
    validation: ValidationResult


@dataclass
class GenerationResult:
    """Artifacts written for one generated document."""

    processed: ProcessedInvoice
    document_path: Path
    normalized_path: Path | None = None
    validation_path: Path | None = None

    @property
    def paths(self) -> list[Path]:
        return [
            p
            for p in (self.document_path, self.normalized_path, self.validation_path)
            if p is not None
        ]
