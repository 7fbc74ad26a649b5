"""Unit tests for individual components in isolation.

Coverage:
    - extraction/: Document text extraction and truncation
    - gateway/: Configuration, content shaping, response parsing
    - api/dispatch: Upload classification and per-modality handlers
    - ui/: Preview state, endpoint selection, formatting, send turn

Uses mocks for the Gemini client.
"""
