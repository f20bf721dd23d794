"""Validates raw completion output into a ParsedDocument.

Nothing here raises: malformed replies degrade to an empty item list, and a
single bad element is dropped without discarding the rest of the batch.
"""

import json
import re
from typing import Any

from pydantic import ValidationError

from restock_parser.extraction.models import ParsedDocument, ParsedItem
from restock_parser.logging.logger import Log

_LEADING_ASTERISKS_RE = re.compile(r"^\*+\s*")
_LEADING_SKU_RE = re.compile(r"^\d{5}\s+")
_NUMERIC_ONLY_RE = re.compile(r"^\d+$")
_SUPPLIER_SUFFIX_RES = (
    re.compile(r" - S EMail$", re.IGNORECASE),
    re.compile(r" - Box of \d+ EMail$", re.IGNORECASE),
    re.compile(r" - \d+ box min$", re.IGNORECASE),
    re.compile(r" - Box EMail$", re.IGNORECASE),
    re.compile(r" EMail$", re.IGNORECASE),
)
# Report furniture the model sometimes returns as if it were a product row.
_METADATA_ROWS = (
    "total",
    "subtotal",
    "tax",
    "discount",
    "page",
    "printed",
    "location",
    "sales report",
    "stock item",
    "unit price",
    "quantity",
    "nett",
    "gross",
    "gst",
)


def validate(raw: object) -> ParsedDocument:
    """Validate a completion reply (JSON string or decoded value)."""
    data = _parse_json(raw) if isinstance(raw, (str, bytes, bytearray)) else raw
    if not isinstance(data, dict):
        Log.warning(f"Completion reply is not a JSON object: {type(data).__name__}")
        return ParsedDocument()

    raw_items = data.get("items")
    if not isinstance(raw_items, list):
        Log.warning("Completion reply has no 'items' list")
        return ParsedDocument()

    items = [item for item in (validate_item(element) for element in raw_items) if item is not None]
    Log.info(f"Validated {len(items)} items (dropped {len(raw_items) - len(items)})")
    return ParsedDocument(items=items)


def validate_item(raw: object) -> ParsedItem | None:
    """Validate and sanitize a single item; None when it must be dropped."""
    try:
        item = ParsedItem.model_validate(raw)
    except ValidationError as exc:
        Log.debug(f"Dropped invalid item {raw!r}: {exc.error_count()} error(s)")
        return None

    product = _sanitize_product(item.product)
    if not product:
        Log.debug(f"Dropped item with empty product after cleanup: {item.product!r}")
        return None
    if _NUMERIC_ONLY_RE.match(product):
        Log.debug(f"Dropped numeric-only product: {product!r}")
        return None
    if _is_metadata_row(product):
        Log.debug(f"Dropped metadata row: {product!r}")
        return None

    return item.model_copy(
        update={"product": product, "supplier": _sanitize_supplier(item.supplier)}
    )


def _parse_json(raw: str | bytes | bytearray) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None

    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as exc:
        Log.warning(f"Completion reply is not valid JSON: {exc}")
        return None


def _sanitize_product(product: str) -> str:
    cleaned = _LEADING_ASTERISKS_RE.sub("", product.strip())
    return _LEADING_SKU_RE.sub("", cleaned).strip()


def _sanitize_supplier(supplier: str | None) -> str | None:
    if supplier is None:
        return None
    cleaned = supplier.strip()
    for pattern in _SUPPLIER_SUFFIX_RES:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip() or None


def _is_metadata_row(product: str) -> bool:
    lowered = product.lower()
    return any(lowered == row or lowered.startswith(f"{row} ") for row in _METADATA_ROWS)
