from restock_parser.completion.completer import (
    Completer,
    CompletionKind,
    CompletionResult,
    to_data_url,
)
from restock_parser.completion.factory import CompletionClientFactory

__all__ = [
    "CompletionClientFactory",
    "CompletionKind",
    "CompletionResult",
    "Completer",
    "to_data_url",
]
