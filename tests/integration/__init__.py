"""Integration tests for the HTTP surface.

Requests go through the real FastAPI app, multipart parsing, extraction, and
gateway; only the Gemini SDK call is mocked. Tests marked requires_api_key
call the live API and are skipped without GEMINI_API_KEY.
"""
