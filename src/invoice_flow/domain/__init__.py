"""Domain layer - core business logic."""

from .errors import (
    DocumentValidationError,
    InputParseError,
    InvoiceFlowError,
    ProfileValidationError,
)
from .models import (
    BusinessProfile,
    InvoiceInput,
    InvoiceNormalized,
    ValidationMessage,
    ValidationReport,
    ValidationResult,
)
from .services import InvoiceService

__all__ = [
    "BusinessProfile",
    "DocumentValidationError",
    "InputParseError",
    "InvoiceFlowError",
    "InvoiceInput",
    "InvoiceNormalized",
    "InvoiceService",
    "ProfileValidationError",
    "ValidationMessage",
    "ValidationReport",
    "ValidationResult",
]
