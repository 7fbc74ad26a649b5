"""Relay endpoints for chat, document, image, and audio requests.

Each endpoint reads its input, hands it to the matching dispatch handler,
and wraps the model's answer in a ``{"result": ...}`` envelope. Errors are
raised as RelayError subclasses and rendered by the app's exception handlers.
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from gemini_relay.api.dispatch import (
    dispatch,
    handle_audio,
    handle_chat,
    handle_document,
    handle_image,
    read_upload,
)
from gemini_relay.gateway.model_gateway import ModelGateway, get_model_gateway
from gemini_relay.models.schemas import ChatRequest, ResultResponse

router = APIRouter(prefix="/api", tags=["relay"])


@router.post("/chat", response_model=ResultResponse)
async def chat(
    request: ChatRequest,
    gateway: ModelGateway = Depends(get_model_gateway),
) -> ResultResponse:
    """Send a text-only prompt to the model.

    Raises:
        500: The model call failed.
    """
    return ResultResponse(result=await handle_chat(request.prompt, gateway))


@router.post("/document", response_model=ResultResponse)
async def upload_document(
    file: UploadFile | None = File(None),
    prompt: str | None = Form(None),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> ResultResponse:
    """Extract text from a DOCX, PDF, or plain-text file and ask the model about it.

    Raises:
        400: Missing file, unsupported type, or no extractable text.
        413: File exceeds 25MB.
        500: Parser failure or model call failure.
    """
    upload = await read_upload(file)
    return ResultResponse(result=await handle_document(upload, prompt, gateway))


@router.post("/image", response_model=ResultResponse)
async def upload_image(
    file: UploadFile | None = File(None),
    prompt: str | None = Form(None),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> ResultResponse:
    """Send a PNG, JPEG, or WEBP image inline with a prompt.

    Raises:
        400: Missing file or unsupported MIME type.
        413: File exceeds 25MB.
        500: Model call failure.
    """
    upload = await read_upload(file, label="Image")
    return ResultResponse(result=await handle_image(upload, prompt, gateway))


@router.post("/audio", response_model=ResultResponse)
async def upload_audio(
    file: UploadFile | None = File(None),
    prompt: str | None = Form(None),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> ResultResponse:
    """Send a WAV or MP3 clip inline with a prompt.

    Raises:
        400: Missing file or unsupported MIME type.
        413: File exceeds 25MB.
        500: Model call failure.
    """
    upload = await read_upload(file, label="Audio")
    return ResultResponse(result=await handle_audio(upload, prompt, gateway))


@router.post("/message", response_model=ResultResponse)
async def send_message(
    file: UploadFile | None = File(None),
    prompt: str | None = Form(None),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> ResultResponse:
    """Route a prompt with an optional file by the file's type.

    No file goes to chat; documents, images, and audio go to their handlers.
    """
    upload = await read_upload(file) if file is not None else None
    return ResultResponse(result=await dispatch(upload, prompt, gateway))
