"""HTML rendering for chat bubbles."""

import html
import re

from gemini_relay.ui.state import Attachment, AttachmentKind


def format_bot_message(text: str) -> str:
    """Convert a model answer to bubble HTML.

    Escapes HTML, then turns **bold** into <strong> and newlines into <br>.
    """
    if not text:
        return ""
    text = html.escape(text, quote=False)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    return text.replace("\n", "<br>")


def format_user_message(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")


def attachment_bubble(attachment: Attachment) -> str:
    """Bubble HTML shown for a sent attachment."""
    name = html.escape(attachment.name)
    if attachment.kind is AttachmentKind.IMAGE:
        return (
            f'<img src="{attachment.data_url}" alt="{name}" '
            'style="max-width:180px;border-radius:12px;object-fit:cover;" />'
        )
    if attachment.kind is AttachmentKind.DOCUMENT:
        return f"📄 <strong>{name}</strong>"

    duration = f" ({attachment.duration}s)" if attachment.duration is not None else ""
    return f"🎵 <strong>{name}</strong>{duration}"


def preview_label(attachment: Attachment) -> str:
    """Plain-text label for the composer's preview chip."""
    if attachment.kind is AttachmentKind.DOCUMENT:
        return f"📄 {attachment.name} ({attachment.size / 1024:.1f} KB)"
    if attachment.kind is AttachmentKind.AUDIO:
        duration = f" ({attachment.duration}s)" if attachment.duration is not None else ""
        return f"🎵 {attachment.name}{duration}"
    return attachment.name
