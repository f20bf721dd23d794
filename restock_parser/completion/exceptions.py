class CompletionError(Exception):
    """Raised by a provider adapter when a completion cannot be produced."""


class CompletionNetworkError(CompletionError):
    """Raised when the provider call fails due to network/infrastructure issues."""
