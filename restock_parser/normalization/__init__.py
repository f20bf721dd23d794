from restock_parser.normalization.normalizer import (
    normalize_product,
    normalize_supplier,
    normalize_text,
)

__all__ = ["normalize_product", "normalize_supplier", "normalize_text"]
