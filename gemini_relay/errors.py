"""Error taxonomy shared by the extractor, gateway and HTTP layer.

Every error carries the HTTP status it maps to and a category tag used
when logging.
"""


class RelayError(Exception):
    """Base class for errors rendered as ``{"error": message}`` responses."""

    status_code: int = 500
    category: str = "SERVER"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(RelayError):
    """Missing or unsupported file, or a document with no extractable text."""

    status_code = 400
    category = "CLIENT"


class PayloadTooLargeError(ClientInputError):
    """Upload exceeds the configured size limit."""

    status_code = 413


class ExtractionError(RelayError):
    """A document parser failed on the uploaded bytes."""

    category = "EXTRACTION"

    def __init__(self, message: str, kind: str) -> None:
        super().__init__(message)
        self.kind = kind


class UpstreamError(RelayError):
    """The call to the generative API failed. The message is forwarded as-is."""

    category = "UPSTREAM"
