"""Structural validation of profile and invoice documents.

Documents are checked as JSON instances against the pydantic models in
``models``, in strict mode so nothing is coerced. Every violation is reported
with a code named after the equivalent JSON Schema keyword
(``SCHEMA_REQUIRED``, ``SCHEMA_TYPE``, ``SCHEMA_MINITEMS``...) and a JSON
pointer to the offending value.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import ErrorDetails

from .models import BusinessProfile, InvoiceInput, InvoiceNormalized, ValidationMessage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SCHEMAS: dict[str, type[BaseModel]] = {
    "profile": BusinessProfile,
    "invoice": InvoiceInput,
    "normalized": InvoiceNormalized,
}

# pydantic error type -> JSON Schema keyword
KEYWORDS = {
    "missing": "required",
    "extra_forbidden": "additionalProperties",
    "too_short": "minItems",
    "too_long": "maxItems",
    "string_too_short": "minLength",
    "string_too_long": "maxLength",
    "string_pattern_mismatch": "pattern",
    "greater_than": "exclusiveMinimum",
    "greater_than_equal": "minimum",
    "less_than": "exclusiveMaximum",
    "less_than_equal": "maximum",
    "literal_error": "enum",
    "enum": "enum",
    "format": "format",
    "int_from_float": "type",
    "finite_number": "type",
}


def _keyword(error_type: str) -> str:
    if error_type in KEYWORDS:
        return KEYWORDS[error_type]
    if error_type.endswith(("_type", "_parsing")) or error_type.startswith("json_"):
        return "type"
    return error_type


def to_pointer(loc: tuple[int | str, ...]) -> str:
    """JSON pointer for a pydantic error location, "/" for the root."""
    if not loc:
        return "/"
    parts = [str(p).replace("~", "~0").replace("/", "~1") for p in loc]
    return "/" + "/".join(parts)


def _to_message(error: ErrorDetails) -> ValidationMessage:
    keyword = _keyword(error["type"])
    loc = tuple(error["loc"])
    message = error["msg"]

    # Object-level constraints point at the owning object, not the member.
    if keyword == "required" and loc:
        message = f"must have required property '{loc[-1]}'"
        loc = loc[:-1]
    elif keyword == "additionalProperties" and loc:
        message = f"must NOT have additional property '{loc[-1]}'"
        loc = loc[:-1]

    return ValidationMessage(
        code=f"SCHEMA_{keyword.upper()}",
        message=message,
        severity="error",
        path=to_pointer(loc),
    )


def check_schema(
    model: type[ModelT], candidate: Any
) -> tuple[ModelT | None, list[ValidationMessage]]:
    """Validate candidate against model.

    Returns the parsed document (None when invalid) and the schema messages.
    """
    try:
        payload = json.dumps(candidate)
    except (TypeError, ValueError) as e:
        return None, [
            ValidationMessage(
                code="SCHEMA_TYPE",
                message=f"document is not JSON serializable: {e}",
                severity="error",
                path="/",
            )
        ]

    try:
        document = model.model_validate_json(payload, strict=True)
    except ValidationError as e:
        messages = [_to_message(error) for error in e.errors()]
        logger.debug(f"{model.__name__}: {len(messages)} schema violation(s)")
        return None, messages
    return document, []


def parse_document(model: type[ModelT], candidate: Any) -> ModelT:
    """Parse a candidate already known to be valid."""
    document, messages = check_schema(model, candidate)
    if document is None:
        first = messages[0]
        raise ValueError(f"{first.code} {first.path}: {first.message}")
    return document


def json_schema(name: str) -> dict[str, Any]:
    """Draft 2020-12 JSON Schema for one of the document kinds."""
    try:
        model = SCHEMAS[name]
    except KeyError:
        raise ValueError(f"Unknown schema: {name}") from None
    schema = model.model_json_schema(by_alias=True)
    return {"$schema": "https://json-schema.org/draft/2020-12/schema", **schema}
