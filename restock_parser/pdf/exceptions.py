class PdfExtractionError(Exception):
    """Raised inside a PDF adapter when the text layer cannot be read."""
