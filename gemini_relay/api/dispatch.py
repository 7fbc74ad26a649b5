"""Upload routing and per-modality request handlers.

Classifies an incoming request as text-only, document, image, or audio,
turns it into a GenerationRequest, and returns the model's answer text.
"""

import logging

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from gemini_relay.errors import ClientInputError, PayloadTooLargeError
from gemini_relay.extraction import detect_document_kind, encode_media, extract_document
from gemini_relay.gateway.model_gateway import ModelGateway
from gemini_relay.models.schemas import (
    AUDIO_MIME_TYPES,
    IMAGE_MIME_TYPES,
    GenerationRequest,
    Upload,
    UploadKind,
)

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE = 25 * 1024 * 1024  # 25MB

DEFAULT_DOCUMENT_PROMPT = "Please summarize the following document."
DEFAULT_IMAGE_PROMPT = "Analyze the following image:"
DEFAULT_AUDIO_PROMPT = "Transcribe the following audio:"
NO_DOCUMENT_OUTPUT = "No output from the model."


def _too_large(size: int) -> PayloadTooLargeError:
    size_mb = size / (1024 * 1024)
    return PayloadTooLargeError(
        f"File size ({size_mb:.1f}MB) exceeds maximum allowed "
        f"({MAX_UPLOAD_SIZE // (1024 * 1024)}MB)"
    )


async def read_upload(file: UploadFile | None, label: str = "File") -> Upload:
    """Read an uploaded file into memory, enforcing the size limit.

    Args:
        file: The multipart ``file`` field, if present.
        label: Noun used in the missing-file message.

    Returns:
        The upload's bytes, declared MIME type, and filename.

    Raises:
        ClientInputError: If no file was sent.
        PayloadTooLargeError: If the file exceeds MAX_UPLOAD_SIZE.
    """
    if file is None:
        raise ClientInputError(f'{label} not found (field name must be "file")')

    if file.size is not None and file.size > MAX_UPLOAD_SIZE:
        raise _too_large(file.size)

    content = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(content) > MAX_UPLOAD_SIZE:
        raise _too_large(len(content))

    return Upload(
        data=content,
        content_type=file.content_type or "",
        filename=file.filename or "",
    )


def classify_upload(upload: Upload | None) -> UploadKind:
    """Pick the handling path for a request.

    Documents are recognized by MIME type or extension; images and audio
    by declared MIME type only.

    Raises:
        ClientInputError: If the file matches no supported type.
    """
    if upload is None:
        return UploadKind.TEXT
    if detect_document_kind(upload.content_type, upload.filename) is not None:
        return UploadKind.DOCUMENT
    if upload.content_type in IMAGE_MIME_TYPES:
        return UploadKind.IMAGE
    if upload.content_type in AUDIO_MIME_TYPES:
        return UploadKind.AUDIO

    declared = upload.content_type or upload.filename or "unknown"
    raise ClientInputError(f"Unsupported file type: {declared}")


async def handle_chat(prompt: str, gateway: ModelGateway) -> str:
    result = await gateway.generate(GenerationRequest(prompt=prompt))
    return result.text


async def handle_document(upload: Upload, prompt: str | None, gateway: ModelGateway) -> str:
    """Extract the document's text, append it to the prompt, and ask the model."""
    document = await run_in_threadpool(extract_document, upload)
    logger.info(
        f"Extracted {len(document.text)} characters from {document.kind.value} "
        f"document {upload.filename!r}"
    )

    text_to_send = (prompt or DEFAULT_DOCUMENT_PROMPT) + "\n\n" + document.text
    result = await gateway.generate(GenerationRequest(prompt=text_to_send))
    return result.text or NO_DOCUMENT_OUTPUT


async def handle_image(upload: Upload, prompt: str | None, gateway: ModelGateway) -> str:
    if upload.content_type not in IMAGE_MIME_TYPES:
        raise ClientInputError(
            f"Mime type {upload.content_type} is not supported for inline images. "
            "Use PNG/JPEG/WEBP."
        )

    request = GenerationRequest(
        prompt=prompt or DEFAULT_IMAGE_PROMPT,
        media=encode_media(upload),
    )
    result = await gateway.generate(request)
    return result.text


async def handle_audio(upload: Upload, prompt: str | None, gateway: ModelGateway) -> str:
    if upload.content_type not in AUDIO_MIME_TYPES:
        raise ClientInputError(
            f"Mime type {upload.content_type} is not supported. Use WAV or MP3."
        )

    request = GenerationRequest(
        prompt=prompt or DEFAULT_AUDIO_PROMPT,
        media=encode_media(upload),
    )
    result = await gateway.generate(request)
    return result.text


async def dispatch(upload: Upload | None, prompt: str | None, gateway: ModelGateway) -> str:
    """Route a request with an optional file to the matching handler."""
    kind = classify_upload(upload)
    logger.info(f"Dispatching request as {kind.value}")

    if kind is UploadKind.TEXT:
        return await handle_chat(prompt or "", gateway)
    if kind is UploadKind.DOCUMENT:
        return await handle_document(upload, prompt, gateway)
    if kind is UploadKind.IMAGE:
        return await handle_image(upload, prompt, gateway)
    return await handle_audio(upload, prompt, gateway)
