from restock_parser.pdf.pdfplumber_adapter import PdfPlumberAdapter


class TestPdfPlumberAdapter:
    def test_extract_returns_text_lines(self, report_pdf_bytes: bytes) -> None:
        result = PdfPlumberAdapter().extract(report_pdf_bytes)
        assert result is not None
        lines = result.text.splitlines()
        assert lines[0] == "SUPPLIER: Acme"
        assert "Widget A" in lines[1]
        assert "Widget B" in lines[2]

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        result = PdfPlumberAdapter().extract(multi_page_pdf_bytes)
        assert result is not None
        assert result.text == "Page one content\n\nPage two content"

    def test_extract_empty_pdf_returns_none(self, empty_pdf_bytes: bytes) -> None:
        assert PdfPlumberAdapter().extract(empty_pdf_bytes) is None

    def test_extract_invalid_bytes_returns_none(self) -> None:
        assert PdfPlumberAdapter().extract(b"not a pdf") is None

    def test_extract_result_is_stripped(self, report_pdf_bytes: bytes) -> None:
        result = PdfPlumberAdapter().extract(report_pdf_bytes)
        assert result is not None
        assert result.text == result.text.strip()
