"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat bubble display with bold/newline formatting
    - One attachment slot (image, document, or audio) with preview
    - Endpoint selection per turn and error bubbles

Contains minimal business logic. Delegates all model work to the API.
"""
