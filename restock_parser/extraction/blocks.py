"""Heuristic segmentation of report text into supplier-scoped blocks."""

import re

from restock_parser.extraction.models import SupplierBlock

_LABEL_RE = re.compile(r"^(SUPPLIER|VENDOR|FROM|ORDER\s+FROM)\b:?\s*", re.IGNORECASE)
_MAX_CAPS_HEADER_LEN = 50
_MIN_CAPS_HEADER_LEN = 3


def segment(text: str) -> list[SupplierBlock]:
    """Split text into blocks, one per detected supplier header.

    Lines before the first header are dropped; the completion sees them
    through the fallback block when no header is found at all.
    """
    if not text or not isinstance(text, str):
        return []

    blocks: list[SupplierBlock] = []
    current: SupplierBlock | None = None
    for line in _content_lines(text):
        if is_supplier_header(line):
            if current is not None and current.lines:
                blocks.append(current)
            current = SupplierBlock(supplier_name=_strip_label(line))
        elif current is not None:
            current.lines.append(line)

    if current is not None and current.lines:
        blocks.append(current)
    return blocks


def fallback_block(text: str) -> SupplierBlock:
    """Wrap every non-empty line in a single block with no supplier."""
    if not text or not isinstance(text, str):
        return SupplierBlock()
    return SupplierBlock(supplier_name="", lines=_content_lines(text))


def segment_or_fallback(text: str) -> list[SupplierBlock]:
    blocks = segment(text)
    if blocks:
        return blocks
    fallback = fallback_block(text)
    return [fallback] if fallback.lines else []


def is_supplier_header(line: str) -> bool:
    if _LABEL_RE.match(line):
        return True
    # Short all-caps lines are section titles, not product rows
    return _MIN_CAPS_HEADER_LEN < len(line) < _MAX_CAPS_HEADER_LEN and line.isupper()


def _strip_label(header: str) -> str:
    return _LABEL_RE.sub("", header, count=1).strip()


def _content_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]
