"""Domain errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ValidationResult


class InvoiceFlowError(ValueError):
    """Base class for errors reported to the user as a single line."""


class InputParseError(InvoiceFlowError):
    """Free-text input contained nothing recognizable."""


class DocumentRejectedError(InvoiceFlowError):
    """A document failed validation; carries the full result."""

    prefix = "Invalid document"

    def __init__(self, result: "ValidationResult") -> None:
        self.result = result
        first = result.errors[0]
        super().__init__(f"{self.prefix}: {first.code} {first.message}")


class ProfileValidationError(DocumentRejectedError):
    prefix = "Invalid profile"


class DocumentValidationError(DocumentRejectedError):
    prefix = "Invalid document input"


class ProfileLoadError(InvoiceFlowError):
    """Profile file could not be parsed."""
