"""Parser for the free-text invoice format.

Line items are written one per line as::

    - Description | quantity | unit price | taxable

and every other ``key: value`` line sets a field. Field lines may appear in any
order; line items keep the order they were written in.
"""

import re
from datetime import date
from typing import Any

from .errors import InputParseError

TRUE_WORDS = frozenset({"true", "yes", "y", "on"})
FALSE_WORDS = frozenset({"false", "no", "n", "off"})

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_LINE_SPLIT = re.compile(r"\r?\n")

NO_ITEMS_MESSAGE = (
    "Could not parse line items from text. Use JSON input or text lines like "
    "'- Description | 1 | 500 | true'."
)


def parse_bool(value: str | None) -> bool | None:
    """Tri-state boolean: True, False, or None when the word is not recognized."""
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    return None


def parse_number(value: str) -> int | float | str:
    """Parse a numeric field, returning the raw text when it is not a number.

    Leaving the text in place lets schema validation report the field.
    """
    text = value.strip()
    if _INT_PATTERN.match(text):
        return int(text)
    try:
        number = float(text)
    except ValueError:
        return value
    if number != number or number in (float("inf"), float("-inf")):
        return value
    return number


def _parse_line_item(line: str) -> dict[str, Any] | None:
    parts = [p.strip() for p in line[1:].split("|")]
    if len(parts) < 3:
        return None
    description, quantity, unit_price = parts[:3]
    taxable = parse_bool(parts[3]) if len(parts) > 3 and parts[3] else None
    return {
        "description": description,
        "quantity": parse_number(quantity),
        "unitPrice": parse_number(unit_price),
        "taxable": True if taxable is None else taxable,
    }


def _compact(mapping: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if v is not None}


def parse_text_invoice(raw: str, today: date | None = None) -> dict[str, Any]:
    """Turn free text into a mapping shaped like JSON invoice input."""
    lines = [line.strip() for line in _LINE_SPLIT.split(raw)]
    line_items: list[dict[str, Any]] = []
    fields: dict[str, str] = {}

    for line in lines:
        if not line:
            continue
        if line.startswith("-") and "|" in line:
            item = _parse_line_item(line)
            if item is not None:
                line_items.append(item)
            continue

        idx = line.find(":")
        if idx > 0:
            fields[line[:idx].strip().lower()] = line[idx + 1 :].strip()

    if not line_items:
        raise InputParseError(NO_ITEMS_MESSAGE)

    issue_date = fields.get("issue date", fields.get("issued"))
    if issue_date is None:
        issue_date = (today or date.today()).isoformat()

    terms = fields.get("terms days")
    gst_enabled = parse_bool(fields.get("gst", "false"))

    result: dict[str, Any] = {
        "documentType": "quote" if fields.get("type") == "quote" else "invoice",
        "invoiceNumber": fields.get("invoice number"),
        "issueDate": issue_date,
        "dueDate": fields.get("due date", issue_date),
        "validUntil": fields.get("valid until"),
        "currency": fields.get("currency", "AUD"),
        "gstEnabled": False if gst_enabled is None else gst_enabled,
        "session": _compact(
            {
                "type": fields.get("session type"),
                "shootDate": fields.get("shoot date"),
                "location": fields.get("location"),
            }
        ),
        "client": _compact(
            {
                "name": fields.get("client", fields.get("client name", "Client")),
                "email": fields.get("client email"),
                "phone": fields.get("client phone"),
                "address": fields.get("client address"),
                "abn": fields.get("client abn"),
            }
        ),
        "lineItems": line_items,
        "notes": fields.get("notes"),
        "payment": _compact(
            {
                "reference": fields.get("payment reference"),
                "termsDays": parse_number(terms) if terms is not None else None,
            }
        ),
    }
    return _compact(result)
