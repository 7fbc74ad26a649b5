"""Pydantic models for API requests, responses, and model calls.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatRequest: JSON body of the text-only chat endpoint
    - ResultResponse / ErrorResponse: the two response envelopes
    - Upload: a file received in a multipart request
    - GenerationRequest / GenerationResult: one model round-trip
    - ResponseEnvelope: typed view of the model's response
"""

from gemini_relay.models.schemas import (
    AUDIO_MIME_TYPES,
    IMAGE_MIME_TYPES,
    INLINE_MIME_TYPES,
    ChatRequest,
    ErrorResponse,
    GenerationRequest,
    GenerationResult,
    InlineMedia,
    ResponseEnvelope,
    ResultResponse,
    Upload,
    UploadKind,
)

__all__ = [
    "AUDIO_MIME_TYPES",
    "IMAGE_MIME_TYPES",
    "INLINE_MIME_TYPES",
    "ChatRequest",
    "ErrorResponse",
    "GenerationRequest",
    "GenerationResult",
    "InlineMedia",
    "ResponseEnvelope",
    "ResultResponse",
    "Upload",
    "UploadKind",
]
