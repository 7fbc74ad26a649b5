"""Test package for Gemini Relay Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint tests through the ASGI app

The Gemini SDK client is mocked everywhere except tests marked as requiring
an API key. Sample documents are generated in fixtures.
Leverages pytest with pytest-check for soft assertions.
"""
