from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

IMAGE_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/webp"})
AUDIO_MIME_TYPES = frozenset({"audio/wav", "audio/mpeg", "audio/mp3"})
INLINE_MIME_TYPES = IMAGE_MIME_TYPES | AUDIO_MIME_TYPES


class UploadKind(str, Enum):
    """Handling path chosen for an incoming request."""

    TEXT = "text"
    DOCUMENT = "document"
    IMAGE = "image"
    AUDIO = "audio"


class ChatRequest(BaseModel):
    """Request payload for the text-only chat endpoint.

    Attributes:
        prompt: The user's message. Missing prompts are sent as an empty string.
    """

    prompt: str = ""

    @field_validator("prompt", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        """Treat an explicit null prompt like a missing one."""
        return "" if v is None else v


class ResultResponse(BaseModel):
    """Successful response carrying the model's answer."""

    result: str


class ErrorResponse(BaseModel):
    """Error response body shared by every endpoint."""

    error: str


class Upload(BaseModel):
    """A file received in a multipart request. Lives for one request only.

    Attributes:
        data: Raw file bytes.
        content_type: Declared media type (may be empty).
        filename: Original filename (may be empty).
    """

    data: bytes
    content_type: str = ""
    filename: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


class InlineMedia(BaseModel):
    """Binary content embedded directly in a generation request."""

    data: bytes
    mime_type: str


class GenerationRequest(BaseModel):
    """Prompt plus optional inline media for a single model call.

    Attributes:
        prompt: Text prompt, already combined with any extracted document text.
        media: Image or audio bytes; the MIME type must be allow-listed.
    """

    prompt: str
    media: InlineMedia | None = None

    @field_validator("media")
    @classmethod
    def check_media_type(cls, v: InlineMedia | None) -> InlineMedia | None:
        """Reject inline media outside the image/audio allow-lists."""
        if v is not None and v.mime_type not in INLINE_MIME_TYPES:
            raise ValueError(f"Unsupported inline media type: {v.mime_type}")
        return v


class GenerationResult(BaseModel):
    """Text answer extracted from the model response."""

    text: str = ""


class ResponsePart(BaseModel):
    """One content part of a candidate. Non-text parts have no text."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = None


class CandidateContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parts: list[ResponsePart] = Field(default_factory=list)


class Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: CandidateContent | None = None


class ResponseEnvelope(BaseModel):
    """The subset of a generate-content response this service reads.

    Every level defaults to empty so a sparse response still validates.
    """

    model_config = ConfigDict(extra="ignore")

    candidates: list[Candidate] = Field(default_factory=list)

    @field_validator("candidates", mode="before")
    @classmethod
    def none_to_list(cls, v: list | None) -> list:
        return [] if v is None else v

    def first_candidate_text(self) -> str:
        """Concatenate the text parts of the first candidate, or return ""."""
        if not self.candidates:
            return ""
        content = self.candidates[0].content
        if content is None:
            return ""
        return "".join(part.text or "" for part in content.parts)
