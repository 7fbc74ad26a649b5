"""NiceGUI chat interface for the Gemini relay."""

import logging
import os
from datetime import datetime

import httpx
from fastapi.responses import RedirectResponse
from nicegui import events, ui

from gemini_relay.ui.formatting import (
    attachment_bubble,
    format_bot_message,
    format_user_message,
    preview_label,
)
from gemini_relay.ui.state import (
    Attachment,
    AttachmentKind,
    PreviewState,
    TurnPhase,
    audio_attachment,
    document_attachment,
    image_attachment,
    select_endpoint,
)

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", f"http://localhost:{os.getenv('PORT', '3000')}")

GREETING = (
    "Hi! I'm an AI assistant. I can answer questions, analyze images, "
    "extract text from documents, and transcribe audio. Send a message or "
    "upload a file to get started."
)
SERVER_ERROR_MESSAGE = "The server returned an error."
CONNECTION_ERROR_MESSAGE = "Could not reach the server."
NO_OUTPUT_MESSAGE = "No output."

ACCEPT = {
    AttachmentKind.IMAGE: "image/png,image/jpeg,image/webp",
    AttachmentKind.DOCUMENT: ".docx,.pdf,.txt",
    AttachmentKind.AUDIO: "audio/wav,audio/mpeg,audio/mp3,.wav,.mp3",
}

ATTACHMENT_FACTORIES = {
    AttachmentKind.IMAGE: image_attachment,
    AttachmentKind.DOCUMENT: document_attachment,
    AttachmentKind.AUDIO: audio_attachment,
}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #1a73e8 0%, #8e44ad 100%); }

    .user-bubble {
        background: linear-gradient(135deg, #1a73e8 0%, #8e44ad 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .bot-bubble {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #1a73e8;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #1a73e8; }

    .preview-box {
        background: #eef2ff;
        border-radius: 10px;
    }

    .send-btn { background: linear-gradient(135deg, #1a73e8 0%, #8e44ad 100%) !important; }

    .bot-bubble strong { font-weight: 600; }
</style>
"""


async def send_turn(client: httpx.AsyncClient, state: PreviewState, message: str) -> str:
    """Post one turn to the API and return the text for the bot bubble.

    Text-only turns go to /api/chat as JSON; turns with an attachment go to
    the attachment's endpoint as multipart with the message as ``prompt``.
    Error details are logged but never shown to the user.
    """
    endpoint = select_endpoint(state)
    attachment = state.attachment

    try:
        if attachment is None:
            response = await client.post(endpoint, json={"prompt": message})
        else:
            response = await client.post(
                endpoint,
                files={"file": (attachment.name, attachment.data, attachment.content_type)},
                data={"prompt": message},
            )
        response.raise_for_status()
        body = response.json()
    except httpx.HTTPStatusError as e:
        logger.warning(f"{endpoint} returned HTTP {e.response.status_code}")
        return SERVER_ERROR_MESSAGE
    except httpx.RequestError as e:
        logger.warning(f"Request to {endpoint} failed: {e}")
        return CONNECTION_ERROR_MESSAGE
    except ValueError:
        logger.warning(f"{endpoint} returned a non-JSON body")
        return SERVER_ERROR_MESSAGE

    if not isinstance(body, dict):
        logger.warning(f"{endpoint} returned a non-object JSON body")
        return SERVER_ERROR_MESSAGE

    return body.get("result") or NO_OUTPUT_MESSAGE


class ChatSession:
    """Bubbles shown on the page plus the composer's preview state."""

    def __init__(self) -> None:
        self.messages: list[dict] = []
        self.preview = PreviewState()

    def add_message(self, role: str, content_html: str) -> None:
        self.messages.append({
            "role": role,
            "html": content_html,
            "time": datetime.now().strftime("%I:%M %p"),
        })


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    session.add_message("assistant", format_bot_message(GREETING))

    messages_container: ui.column
    preview_row: ui.row
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(msg: dict) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "user-bubble" if is_user else "bot-bubble"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    ui.html(msg["html"], sanitize=False).classes("text-sm leading-relaxed")
                ui.label(msg["time"]).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for msg in session.messages:
                render_message(msg)

    def render_loading() -> ui.row:
        with messages_container, ui.row().classes("w-full justify-start") as row:
            with ui.element("div").classes("bot-bubble px-4 py-3"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
        return row

    def refresh_preview() -> None:
        preview_row.clear()
        attachment = session.preview.attachment
        preview_row.set_visibility(attachment is not None)
        if attachment is None:
            return
        with preview_row, ui.row().classes("preview-box px-3 py-2 items-center gap-2"):
            if attachment.kind is AttachmentKind.IMAGE:
                ui.image(attachment.data_url).classes("w-12 h-12 rounded")
            ui.label(preview_label(attachment)).classes("text-sm text-gray-700")
            ui.button(icon="close", on_click=remove_attachment).props("flat round dense size=sm")

    def set_attachment(attachment: Attachment) -> None:
        session.preview = session.preview.attach(attachment)
        refresh_preview()

    def remove_attachment() -> None:
        session.preview = session.preview.remove()
        refresh_preview()

    def make_upload_handler(kind: AttachmentKind):
        async def handle_upload(e: events.UploadEventArguments) -> None:
            data = await e.file.read()
            set_attachment(ATTACHMENT_FACTORIES[kind](e.file.name, e.file.content_type, data))
            e.sender.reset()

        return handle_upload

    async def send_message() -> None:
        text = input_field.value.strip()
        attachment = session.preview.attachment
        if (not text and attachment is None) or session.preview.phase is TurnPhase.SENDING:
            return

        session.preview = session.preview.sending()
        send_btn.disable()

        if attachment is not None:
            session.add_message("user", attachment_bubble(attachment))
        if text:
            session.add_message("user", format_user_message(text))
        refresh_messages()
        loading_row = render_loading()

        answer = SERVER_ERROR_MESSAGE
        try:
            async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=120.0) as client:
                answer = await send_turn(client, session.preview, text)
        finally:
            loading_row.delete()
            session.add_message("assistant", format_bot_message(answer))
            session.preview = session.preview.settled()
            input_field.value = ""
            send_btn.enable()
            refresh_messages()
            refresh_preview()
            session.preview = session.preview.clear()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center"):
            ui.icon("smart_toy").classes("text-white text-3xl")
            ui.label("Gemini Assistant").classes("text-lg font-semibold text-white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        # Preview
        preview_row = ui.row().classes("w-full px-4 pt-3")
        refresh_preview()

        # Input
        with ui.row().classes("w-full p-4 gap-2 items-end bg-white border-t"):
            for kind, icon in (
                (AttachmentKind.IMAGE, "image"),
                (AttachmentKind.DOCUMENT, "description"),
                (AttachmentKind.AUDIO, "mic"),
            ):
                picker = (
                    ui.upload(on_upload=make_upload_handler(kind), auto_upload=True, max_files=1)
                    .props(f'accept="{ACCEPT[kind]}"')
                    .classes("hidden")
                )
                ui.button(
                    icon=icon, on_click=lambda p=picker: p.run_method("pickFiles")
                ).props("flat round dense")

            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                    .on("keydown.enter.prevent", send_message)
                )
            send_btn = (
                ui.button(icon="send", on_click=send_message)
                .props("round unelevated")
                .classes("send-btn")
            )


@ui.page("/{path:path}")
def deep_link(path: str) -> RedirectResponse:
    """Send any other GET path to the chat page."""
    return RedirectResponse("/")
