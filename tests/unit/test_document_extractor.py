"""Unit tests for the document extractor module."""

import pytest
import pytest_check as check

from gemini_relay.errors import ClientInputError, ExtractionError
from gemini_relay.extraction.document_extractor import (
    DOCX_MIME_TYPE,
    MAX_TEXT_LENGTH,
    TRUNCATION_MARKER,
    DocumentKind,
    detect_document_kind,
    encode_media,
    extract_document,
    truncate_text,
)
from gemini_relay.models.schemas import Upload


class TestDetectDocumentKind:
    """Tests for MIME/extension classification."""

    @pytest.mark.parametrize(
        ("content_type", "filename", "expected"),
        [
            (DOCX_MIME_TYPE, "report", DocumentKind.DOCX),
            ("application/octet-stream", "Report.DOCX", DocumentKind.DOCX),
            ("application/pdf", "scan", DocumentKind.PDF),
            ("", "paper.pdf", DocumentKind.PDF),
            ("text/markdown", "notes.md", DocumentKind.TEXT),
            ("application/octet-stream", "notes.txt", DocumentKind.TEXT),
        ],
    )
    def test_supported_documents(
        self, content_type: str, filename: str, expected: DocumentKind
    ) -> None:
        """Documents are recognized by MIME type or by extension."""
        assert detect_document_kind(content_type, filename) is expected

    def test_unsupported_returns_none(self) -> None:
        """Images and unknown binaries are not documents."""
        check.is_none(detect_document_kind("image/png", "photo.png"))
        check.is_none(detect_document_kind("application/zip", "archive.zip"))
        check.is_none(detect_document_kind("", ""))


class TestExtractDocument:
    """Tests for successful extraction."""

    def test_plain_text_decoded_as_utf8(self) -> None:
        """Plain text bytes are decoded directly."""
        upload = Upload(data="héllo wörld".encode(), content_type="text/plain", filename="a.txt")

        result = extract_document(upload)

        check.equal(result.kind, DocumentKind.TEXT)
        check.equal(result.text, "héllo wörld")
        check.is_false(result.truncated)

    def test_invalid_utf8_is_replaced(self) -> None:
        """Undecodable bytes do not fail the request."""
        upload = Upload(data=b"abc\xffdef", content_type="text/plain", filename="a.txt")

        result = extract_document(upload)

        assert result.text == "abc�def"

    def test_docx_paragraphs_and_tables(self, docx_bytes: bytes) -> None:
        """DOCX extraction includes paragraphs and table cells."""
        upload = Upload(data=docx_bytes, content_type=DOCX_MIME_TYPE, filename="report.docx")

        result = extract_document(upload)

        check.equal(result.kind, DocumentKind.DOCX)
        check.is_in("Quarterly report", result.text)
        check.is_in("Revenue grew in every region.", result.text)
        check.is_in("North", result.text)

    def test_pdf_text(self, pdf_bytes: bytes) -> None:
        """PDF extraction returns page text."""
        upload = Upload(data=pdf_bytes, content_type="application/pdf", filename="hello.pdf")

        result = extract_document(upload)

        check.equal(result.kind, DocumentKind.PDF)
        check.is_in("Hello", result.text)

    def test_long_text_is_truncated(self) -> None:
        """Text over the cap is cut and marked."""
        data = b"a" * (MAX_TEXT_LENGTH + 50)
        upload = Upload(data=data, content_type="text/plain", filename="big.txt")

        result = extract_document(upload)

        check.is_true(result.truncated)
        check.equal(len(result.text), MAX_TEXT_LENGTH + len(TRUNCATION_MARKER))
        check.is_true(result.text.endswith(TRUNCATION_MARKER))


class TestExtractDocumentRejection:
    """Tests for client errors and parser failures."""

    def test_unsupported_type(self) -> None:
        upload = Upload(data=b"\x89PNG", content_type="image/png", filename="a.png")

        with pytest.raises(ClientInputError, match="Unsupported file type"):
            extract_document(upload)

    @pytest.mark.parametrize("data", [b"", b"   \n\t  "])
    def test_empty_text_is_client_error(self, data: bytes) -> None:
        """Empty or whitespace-only text is a 400, not a parser failure."""
        upload = Upload(data=data, content_type="text/plain", filename="blank.txt")

        with pytest.raises(ClientInputError, match="No text could be extracted") as exc_info:
            extract_document(upload)

        assert exc_info.value.status_code == 400

    def test_pdf_without_text_is_client_error(self, blank_pdf_bytes: bytes) -> None:
        """A valid PDF with no text layer is reported as empty."""
        upload = Upload(data=blank_pdf_bytes, content_type="application/pdf", filename="scan.pdf")

        with pytest.raises(ClientInputError, match="No text could be extracted"):
            extract_document(upload)

    def test_fake_pdf_is_extraction_error(self) -> None:
        """Bytes without a PDF header fail extraction with a 500."""
        upload = Upload(data=b"just text", content_type="application/pdf", filename="fake.pdf")

        with pytest.raises(ExtractionError, match="Failed to extract PDF") as exc_info:
            extract_document(upload)

        check.equal(exc_info.value.status_code, 500)
        check.equal(exc_info.value.kind, "pdf")

    def test_truncated_pdf_is_extraction_error(self) -> None:
        upload = Upload(
            data=b"%PDF-1.4\n1 0 obj\n<<",
            content_type="application/pdf",
            filename="broken.pdf",
        )

        with pytest.raises(ExtractionError, match="Failed to extract PDF"):
            extract_document(upload)

    def test_corrupt_docx_is_extraction_error(self) -> None:
        upload = Upload(data=b"not a zip archive", content_type=DOCX_MIME_TYPE, filename="x.docx")

        with pytest.raises(ExtractionError, match="Failed to extract DOCX") as exc_info:
            extract_document(upload)

        assert exc_info.value.kind == "docx"


class TestTruncateText:
    def test_short_text_unchanged(self) -> None:
        assert truncate_text("short", max_length=10) == "short"

    def test_exact_length_unchanged(self) -> None:
        assert truncate_text("x" * 10, max_length=10) == "x" * 10

    def test_long_text_cut_with_marker(self) -> None:
        assert truncate_text("abcdefghijkl", max_length=5) == "abcde" + TRUNCATION_MARKER


def test_encode_media_keeps_bytes_and_type() -> None:
    """Image/audio uploads become inline media with their declared MIME type."""
    media = encode_media(Upload(data=b"RIFF", content_type="audio/wav", filename="a.wav"))

    check.equal(media.data, b"RIFF")
    check.equal(media.mime_type, "audio/wav")
