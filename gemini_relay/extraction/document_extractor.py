"""Document text extraction using pypdf and python-docx.

Turns uploaded DOCX, PDF, and plain-text bytes into a single string, and
wraps image/audio bytes as inline media for the model gateway.
"""

import io
import logging
from enum import Enum

from docx import Document
from pydantic import BaseModel
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from gemini_relay.errors import ClientInputError, ExtractionError
from gemini_relay.models.schemas import InlineMedia, Upload

logger = logging.getLogger(__name__)

# Constants
MAX_TEXT_LENGTH = 200_000  # characters sent onward to the model
TRUNCATION_MARKER = "\n\n...[truncated]"
PDF_MAGIC_BYTES = b"%PDF"

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME_TYPE = "application/pdf"


class DocumentKind(str, Enum):
    DOCX = "docx"
    PDF = "pdf"
    TEXT = "text"


class DocumentText(BaseModel):
    """Extracted content from a document upload.

    Attributes:
        kind: Format the text was extracted from.
        text: Extracted text, already truncated to MAX_TEXT_LENGTH.
        truncated: Whether the text was cut.
    """

    kind: DocumentKind
    text: str
    truncated: bool = False


def detect_document_kind(content_type: str, filename: str) -> DocumentKind | None:
    """Classify a document by declared MIME type or filename extension.

    DOCX is checked first, then PDF, then plain text.

    Returns:
        The document kind, or None if the upload is not a supported document.
    """
    mime = (content_type or "").lower()
    name = (filename or "").lower()

    if mime == DOCX_MIME_TYPE or name.endswith(".docx"):
        return DocumentKind.DOCX
    if mime == PDF_MIME_TYPE or name.endswith(".pdf"):
        return DocumentKind.PDF
    if mime.startswith("text/") or name.endswith(".txt"):
        return DocumentKind.TEXT
    return None


def truncate_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Cut text to max_length characters and append a visible marker."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_MARKER


def _extract_docx(file_content: bytes) -> str:
    """Extract raw text from a DOCX file.

    Body paragraphs come first, then the text of each table cell.

    Raises:
        ExtractionError: If python-docx cannot open the file.
    """
    try:
        document = Document(io.BytesIO(file_content))
    except Exception as e:
        logger.error(f"DOCX parse error: {e}")
        raise ExtractionError("Failed to extract DOCX", kind=DocumentKind.DOCX.value) from e

    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells)
    return "\n".join(lines)


def _extract_pdf(file_content: bytes) -> str:
    """Extract text from all pages of a PDF.

    Pages that fail to extract are logged and skipped.

    Raises:
        ExtractionError: If the bytes are not a readable PDF.
    """
    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        logger.error("PDF parse error: file does not start with PDF header")
        raise ExtractionError("Failed to extract PDF", kind=DocumentKind.PDF.value)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = list(reader.pages)
    except PdfReadError as e:
        logger.error(f"PDF parse error (corrupt or invalid): {e}")
        raise ExtractionError("Failed to extract PDF", kind=DocumentKind.PDF.value) from e
    except Exception as e:
        logger.error(f"PDF parse error: {e}")
        raise ExtractionError("Failed to extract PDF", kind=DocumentKind.PDF.value) from e

    text_parts: list[str] = []
    for i, page in enumerate(pages):
        try:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue

    return "\n\n".join(text_parts)


def _decode_text(file_content: bytes) -> str:
    return file_content.decode("utf-8", errors="replace")


_EXTRACTORS = {
    DocumentKind.DOCX: _extract_docx,
    DocumentKind.PDF: _extract_pdf,
    DocumentKind.TEXT: _decode_text,
}


def extract_document(upload: Upload) -> DocumentText:
    """Extract text from a document upload.

    Args:
        upload: The uploaded file.

    Returns:
        DocumentText with the (possibly truncated) text.

    Raises:
        ClientInputError: If the file is not a supported document, or if no
            text could be extracted from it.
        ExtractionError: If the parser fails on the file.
    """
    kind = detect_document_kind(upload.content_type, upload.filename)
    if kind is None:
        raise ClientInputError(
            "Unsupported file type. Please upload a .docx, .pdf, or .txt file."
        )

    text = _EXTRACTORS[kind](upload.data)

    if not text.strip():
        logger.warning(f"No extractable text in {kind.value} upload: {upload.filename}")
        raise ClientInputError("No text could be extracted from the document.")

    truncated = len(text) > MAX_TEXT_LENGTH
    if truncated:
        logger.info(f"Truncated {upload.filename} from {len(text)} to {MAX_TEXT_LENGTH} characters")

    return DocumentText(kind=kind, text=truncate_text(text), truncated=truncated)


def encode_media(upload: Upload) -> InlineMedia:
    """Wrap image or audio bytes as inline media.

    The gateway's SDK base64-encodes the bytes on the wire.
    """
    return InlineMedia(data=upload.data, mime_type=upload.content_type)
