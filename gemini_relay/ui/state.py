"""Immutable per-turn state for the chat page.

The page holds one PreviewState and replaces it wholesale on every
transition; nothing mutates a state in place.
"""

import base64
import io
import wave
from contextlib import closing
from enum import Enum

from pydantic import BaseModel, ConfigDict


class TurnPhase(str, Enum):
    IDLE = "idle"
    COMPOSING = "composing"
    SENDING = "sending"
    SETTLED = "settled"


class AttachmentKind(str, Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    AUDIO = "audio"


# Endpoint per attachment kind, in send precedence order.
ENDPOINTS: dict[AttachmentKind | None, str] = {
    AttachmentKind.IMAGE: "/api/image",
    AttachmentKind.DOCUMENT: "/api/document",
    AttachmentKind.AUDIO: "/api/audio",
    None: "/api/chat",
}


class Attachment(BaseModel):
    """A file picked in the browser and waiting to be sent.

    Attributes:
        kind: Which picker the file came from.
        name: Original filename.
        content_type: MIME type reported by the browser.
        data: Raw bytes.
        duration: Audio length in whole seconds, when known.
        data_url: Inline data URL used to preview images.
    """

    model_config = ConfigDict(frozen=True)

    kind: AttachmentKind
    name: str
    content_type: str
    data: bytes
    duration: int | None = None
    data_url: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


def wav_duration(data: bytes) -> int | None:
    """Length of a WAV clip in whole seconds, or None if it cannot be read."""
    try:
        with closing(wave.open(io.BytesIO(data), "rb")) as clip:
            rate = clip.getframerate()
            return int(clip.getnframes() / rate) if rate else None
    except (wave.Error, EOFError):
        return None


def image_attachment(name: str, content_type: str, data: bytes) -> Attachment:
    encoded = base64.b64encode(data).decode("ascii")
    return Attachment(
        kind=AttachmentKind.IMAGE,
        name=name,
        content_type=content_type,
        data=data,
        data_url=f"data:{content_type};base64,{encoded}",
    )


def document_attachment(name: str, content_type: str, data: bytes) -> Attachment:
    return Attachment(
        kind=AttachmentKind.DOCUMENT,
        name=name,
        content_type=content_type,
        data=data,
    )


def audio_attachment(name: str, content_type: str, data: bytes) -> Attachment:
    return Attachment(
        kind=AttachmentKind.AUDIO,
        name=name,
        content_type=content_type,
        data=data,
        duration=wav_duration(data),
    )


class PreviewState(BaseModel):
    """What the composer currently holds.

    Only one attachment slot exists: attaching a file of any kind replaces
    whatever was attached before. The slot is locked while a send is in
    flight, so attach and remove are no-ops in the SENDING phase.
    """

    model_config = ConfigDict(frozen=True)

    attachment: Attachment | None = None
    phase: TurnPhase = TurnPhase.IDLE

    def attach(self, attachment: Attachment) -> "PreviewState":
        if self.phase is TurnPhase.SENDING:
            return self
        return PreviewState(attachment=attachment, phase=TurnPhase.COMPOSING)

    def remove(self) -> "PreviewState":
        if self.phase is TurnPhase.SENDING:
            return self
        return PreviewState(phase=TurnPhase.COMPOSING)

    def sending(self) -> "PreviewState":
        return PreviewState(attachment=self.attachment, phase=TurnPhase.SENDING)

    def settled(self) -> "PreviewState":
        return PreviewState(phase=TurnPhase.SETTLED)

    def clear(self) -> "PreviewState":
        return PreviewState()

    @property
    def kind(self) -> AttachmentKind | None:
        return self.attachment.kind if self.attachment else None


def select_endpoint(state: PreviewState) -> str:
    """Pick the API endpoint for a send.

    Precedence is image, then document, then audio, then text-only chat.
    """
    for kind in (AttachmentKind.IMAGE, AttachmentKind.DOCUMENT, AttachmentKind.AUDIO):
        if state.kind is kind:
            return ENDPOINTS[kind]
    return ENDPOINTS[None]
