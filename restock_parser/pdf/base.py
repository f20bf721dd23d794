from abc import ABC, abstractmethod

from restock_parser.logging.logger import Log
from restock_parser.pdf.exceptions import PdfExtractionError
from restock_parser.pdf.models import ExtractedText, TextRun

DEFAULT_LINE_BREAK_THRESHOLD = 5.0


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters only read positioned text runs; line assembly and the
    "no text layer" outcome are shared here.
    """

    def __init__(self, line_break_threshold: float = DEFAULT_LINE_BREAK_THRESHOLD) -> None:
        self._line_break_threshold = line_break_threshold

    def extract(self, pdf_bytes: bytes) -> ExtractedText | None:
        """Extract the text layer from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            ExtractedText with pages separated by a blank line, or None when
            the document has no readable text layer (scans, corrupt files).
        """
        try:
            pages = self._read_pages(pdf_bytes)
        except PdfExtractionError as exc:
            Log.warning(f"Text layer unavailable: {exc}")
            return None

        page_texts = [self._assemble_lines(runs) for runs in pages]
        text = "\n\n".join(t for t in page_texts if t).strip()
        if not text:
            Log.info(f"No text layer found in {len(pages)} page(s)")
            return None
        return ExtractedText(text=text)

    def has_text_layer(self, pdf_bytes: bytes) -> bool:
        return self.extract(pdf_bytes) is not None

    @abstractmethod
    def _read_pages(self, pdf_bytes: bytes) -> list[list[TextRun]]:
        """Return the positioned text runs of every page, in reading order.

        Raises:
            PdfExtractionError: if the document cannot be read for any reason.
        """

    def _assemble_lines(self, runs: list[TextRun]) -> str:
        lines: list[str] = []
        current: list[str] = []
        last_y: float | None = None
        for run in runs:
            text = run.text.strip()
            if not text:
                continue
            if last_y is not None and abs(run.y - last_y) > self._line_break_threshold:
                lines.append(" ".join(current))
                current = []
            current.append(text)
            last_y = run.y
        if current:
            lines.append(" ".join(current))
        return "\n".join(lines).strip()
