"""Gemini Relay Chat - a thin relay between a browser chat UI and Google Gemini.

Receives text, documents, images, or audio, forwards them to the Gemini
generative-language API and relays the answer back as a chat bubble.

Components:
    - api: HTTP endpoints and upload routing
    - extraction: DOCX/PDF/plain-text extraction and inline media encoding
    - gateway: Gemini request shaping and response parsing
    - models: Request/response schemas
    - ui: NiceGUI chat interface
"""

__version__ = "0.1.0"
