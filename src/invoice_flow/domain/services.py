"""Domain services - orchestrate business logic."""

import logging
from collections.abc import Callable, Mapping
from datetime import date
from pathlib import Path
from typing import Any

from ..ports.renderer import RendererPort
from ..ports.sequence import SequenceStorePort
from ..ports.storage import ArtifactStoragePort
from .errors import DocumentValidationError, ProfileValidationError
from .inputs import load_invoice_input
from .models import (
    BusinessProfile,
    DocumentType,
    GenerationResult,
    InvoiceInput,
    ProcessedInvoice,
    ValidationReport,
)
from .normalizer import normalize_invoice
from .numbering import DEFAULT_STATE_PATH, DocumentNumberAllocator
from .schema import parse_document
from .validation import validate_invoice, validate_profile

logger = logging.getLogger(__name__)


def _with_type(data: Any, document_type: DocumentType | None) -> Any:
    if document_type and isinstance(data, Mapping) and data.get("documentType") != document_type:
        return {**data, "documentType": document_type}
    return data


class InvoiceService:
    """Orchestrates the profile -> input -> validation -> normalization pipeline."""

    def __init__(
        self,
        store_factory: Callable[[Path], SequenceStorePort],
        state_path: Path = DEFAULT_STATE_PATH,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store_factory = store_factory
        self.state_path = state_path
        self.today = today

    def allocator_for(self, profile: BusinessProfile) -> DocumentNumberAllocator:
        """Profile sequenceStatePath wins over the configured state file."""
        if profile.sequence_state_path:
            path = Path(profile.sequence_state_path)
        else:
            path = self.state_path
        return DocumentNumberAllocator(self.store_factory(path))

    def load_profile(self, profile_data: Mapping[str, Any]) -> BusinessProfile:
        result = validate_profile(profile_data)
        if not result.valid:
            raise ProfileValidationError(result)
        return parse_document(BusinessProfile, profile_data)

    def process(
        self,
        content: str,
        profile_data: Mapping[str, Any],
        document_type: DocumentType | None = None,
    ) -> ProcessedInvoice:
        """Validate and normalize one document, stopping at the first failure.

        Pipeline:
            1. Validate profile
            2. Parse input (JSON or free text), apply forced type
            3. Validate input (schema + compliance)
            4. Normalize (may allocate a document number)
        """
        profile = self.load_profile(profile_data)

        loaded = load_invoice_input(content, self.today())
        data = _with_type(loaded.data, document_type)
        logger.info(f"Loaded {loaded.source} input")

        validation = validate_invoice(profile, data)
        if not validation.valid:
            raise DocumentValidationError(validation)
        for warning in validation.warnings:
            logger.warning(f"{warning.code}: {warning.message}")

        invoice = parse_document(InvoiceInput, data)
        normalized = normalize_invoice(
            profile, invoice, self.allocator_for(profile), document_type
        )
        return ProcessedInvoice(profile=profile, normalized=normalized, validation=validation)

    def validate(
        self,
        content: str,
        profile_data: Any,
        document_type: DocumentType | None = None,
    ) -> ValidationReport:
        """Full report for both documents; never stops early."""
        profile_result = validate_profile(profile_data)
        loaded = load_invoice_input(content, self.today())
        data = _with_type(loaded.data, document_type)
        return ValidationReport(
            profile=profile_result,
            invoice=validate_invoice(profile_data, data),
        )

    def generate(
        self,
        content: str,
        profile_data: Mapping[str, Any],
        storage: ArtifactStoragePort,
        renderer: RendererPort,
        document_type: DocumentType | None = None,
        write_json: bool = True,
    ) -> GenerationResult:
        """Process a document and write the rendered artifact.

        With write_json the normalized document and validation report are
        written next to it as <type>.normalized.json and <type>.validation.json.
        """
        processed = self.process(content, profile_data, document_type)
        base_name = processed.normalized.document_type

        document_path = renderer.render(
            processed.profile,
            processed.normalized,
            storage.path_for(f"{base_name}{renderer.suffix}"),
        )
        result = GenerationResult(processed=processed, document_path=document_path)

        if write_json:
            result.normalized_path = storage.write_json(
                f"{base_name}.normalized.json", processed.normalized.to_json_dict()
            )
            result.validation_path = storage.write_json(
                f"{base_name}.validation.json", processed.validation.to_dict()
            )

        logger.info(f"Generated {processed.normalized.invoice_number}")
        return result
