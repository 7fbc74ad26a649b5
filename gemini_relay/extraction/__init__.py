"""Content extraction for uploaded files.

Turns documents into plain text and media into inline payloads.

Responsibilities:
    - DOCX text extraction with python-docx
    - PDF text extraction with pypdf
    - UTF-8 decoding of plain-text files
    - Truncation of long documents before they are sent to the model
    - Wrapping image/audio bytes as inline media
"""

from gemini_relay.extraction.document_extractor import (
    MAX_TEXT_LENGTH,
    TRUNCATION_MARKER,
    DocumentKind,
    DocumentText,
    detect_document_kind,
    encode_media,
    extract_document,
    truncate_text,
)

__all__ = [
    "MAX_TEXT_LENGTH",
    "TRUNCATION_MARKER",
    "DocumentKind",
    "DocumentText",
    "detect_document_kind",
    "encode_media",
    "extract_document",
    "truncate_text",
]
