"""FastAPI endpoints for the Gemini relay.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Text-only prompt
    - POST /api/document: DOCX/PDF/TXT upload with optional prompt
    - POST /api/image: PNG/JPEG/WEBP upload with optional prompt
    - POST /api/audio: WAV/MP3 upload with optional prompt
    - POST /api/message: Optional upload, routed by file type
"""

from gemini_relay.api.app import app, create_app

__all__ = ["app", "create_app"]
