import pymupdf

from restock_parser.pdf.base import BasePdfExtractor
from restock_parser.pdf.exceptions import PdfExtractionError
from restock_parser.pdf.models import TextRun


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads positioned words from a PDF using PyMuPDF."""

    def _read_pages(self, pdf_bytes: bytes) -> list[list[TextRun]]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                # word tuples: (x0, y0, x1, y1, text, block_no, line_no, word_no)
                return [
                    [TextRun(text=word[4], y=float(word[1])) for word in page.get_text("words", sort=True)]
                    for page in doc
                ]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
