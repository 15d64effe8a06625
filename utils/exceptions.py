"""
Error types raised by the chat and image search pipelines.
Each error carries the HTTP status and error code used when it is reported to the client.
"""


class BridgeError(Exception):
    """Base error for failures in the proxy layer."""

    status_code: int = 502
    error_code: str = "upstream_error"

    def __init__(self, message: str, *, status_code: int | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code

    def to_payload(self) -> dict:
        return {"detail": self.message, "error": self.error_code}


class ContextFetchError(BridgeError):
    """The context service was unreachable or answered with a non-success status."""

    error_code = "context_fetch_failed"

    def __init__(self, message: str, status_text: str | None = None):
        super().__init__(message)
        self.status_text = status_text


class UpstreamStreamError(BridgeError):
    """The completion provider failed while opening or relaying the stream."""

    error_code = "upstream_stream_failed"


class MalformedAttachmentError(BridgeError):
    """An image payload or the context result it produced cannot be used."""

    error_code = "context_unavailable"


class ImageSearchError(BridgeError):
    """The image similarity service was unreachable or answered with an error."""

    error_code = "image_search_failed"
