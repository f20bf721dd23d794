class ProcessorError(Exception):
    """Base exception for all processor-related errors.

    Carries the code-like ``code`` and the HTTP-like ``status`` reported to
    the caller in the failure shape.
    """

    default_code = "PROCESSING_ERROR"
    default_status = 500

    def __init__(self, message: str, *, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status = status or self.default_status


class DocumentRejectedError(ProcessorError):
    """Raised before any stage runs when the submission is not acceptable."""

    default_code = "CLIENT_ERROR"
    default_status = 400


class ExtractionFailedError(ProcessorError):
    """Raised when every extraction tier has been tried without a result."""

    default_code = "EXTRACTION_FAILED"
    default_status = 500
