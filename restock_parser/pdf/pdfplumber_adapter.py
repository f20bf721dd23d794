import io

import pdfplumber

from restock_parser.pdf.base import BasePdfExtractor
from restock_parser.pdf.exceptions import PdfExtractionError
from restock_parser.pdf.models import TextRun


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads positioned words from a PDF using pdfplumber."""

    def _read_pages(self, pdf_bytes: bytes) -> list[list[TextRun]]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [
                    [TextRun(text=word["text"], y=float(word["top"])) for word in page.extract_words()]
                    for page in pdf.pages
                ]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
