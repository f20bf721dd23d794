"""Case, whitespace and punctuation normalization of supplier/product names."""

import re

_REPEATED_PUNCTUATION_RE = re.compile(r"[.!?]{2,}")
_WHITESPACE_RE = re.compile(r"\s+")
_LEGAL_SUFFIX_RE = re.compile(
    r"\s+(ltd|limited|inc|incorporated|corp|corporation)\.?$", re.IGNORECASE
)


def normalize_text(text: str) -> str:
    """Trim, lowercase, collapse punctuation runs to "." and whitespace runs to " "."""
    if not text or not isinstance(text, str):
        return ""
    normalized = text.strip().lower()
    normalized = _REPEATED_PUNCTUATION_RE.sub(".", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def normalize_supplier(name: str) -> str:
    """Normalize a supplier name and drop trailing legal-entity suffixes.

    Suffixes are stripped until none is left ("acme ltd inc" -> "acme") so
    that normalizing twice gives the same result as normalizing once.
    """
    normalized = normalize_text(name)
    while True:
        stripped = _LEGAL_SUFFIX_RE.sub("", normalized).strip()
        if stripped == normalized:
            return normalized
        normalized = stripped


def normalize_product(name: str) -> str:
    # Size and unit tokens ("5kg") distinguish products; keep them.
    return normalize_text(name)
