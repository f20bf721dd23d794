class ExtractionError(Exception):
    """Base exception for the extraction package."""


class PromptLoadError(ExtractionError):
    """Raised when a bundled prompt template cannot be read."""
